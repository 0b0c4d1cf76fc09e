"""
Dashboard Routes

GET /dashboard - Counts plus the three most recent jobs, goals and applications
"""

from fastapi import APIRouter, Depends

from careertrack.api.dependencies import (
    get_application_guard, get_database, get_goal_guard, get_job_guard
)
from careertrack.core.auth import require_identity
from careertrack.db.database import Database
from careertrack.services.ownership import JobTargetGuard, OwnershipGuard
from careertrack.schemas.schemas import (
    DashboardResponse, DashboardCounts, JobTargetResponse, GoalResponse, ApplicationResponse
)

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])

RECENT_LIMIT = 3


@router.get("", response_model=DashboardResponse)
def get_dashboard(
    identity_id: str = Depends(require_identity),
    database: Database = Depends(get_database),
    jobs: JobTargetGuard = Depends(get_job_guard),
    goals: OwnershipGuard = Depends(get_goal_guard),
    applications: OwnershipGuard = Depends(get_application_guard),
):
    """Summary for the signed-in user. Open goals are those not DONE."""
    counts = database.execute_raw_sql("""
        SELECT
            (SELECT COUNT(*) FROM skills WHERE owner_id = :uid) AS skills,
            (SELECT COUNT(*) FROM job_targets WHERE owner_id = :uid) AS jobs,
            (SELECT COUNT(*) FROM learning_goals WHERE owner_id = :uid AND status <> 'DONE') AS open_goals,
            (SELECT COUNT(*) FROM job_applications WHERE owner_id = :uid) AS applications
    """, {"uid": identity_id})[0]

    return DashboardResponse(
        counts=DashboardCounts(**counts),
        recent_jobs=[JobTargetResponse(**r) for r in jobs.scoped_list(identity_id, limit=RECENT_LIMIT)],
        recent_goals=[GoalResponse(**r) for r in goals.scoped_list(identity_id, limit=RECENT_LIMIT)],
        recent_applications=[
            ApplicationResponse(**r) for r in applications.scoped_list(identity_id, limit=RECENT_LIMIT)
        ],
    )
