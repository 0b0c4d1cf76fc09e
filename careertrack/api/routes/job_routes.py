"""
Job Target Routes

GET /jobs - List my job targets (newest first)
POST /jobs - Create a job target
GET /jobs/{job_id} - Job target with required skills and gap analysis
DELETE /jobs - Delete a job target and its required skills { id }
"""

from fastapi import APIRouter, Depends
from typing import List

from careertrack.api.dependencies import get_job_guard, get_skill_guard
from careertrack.core.auth import require_identity
from careertrack.services.gap_scoring import score
from careertrack.services.ownership import JobTargetGuard, OwnershipGuard
from careertrack.schemas.schemas import (
    JobTargetCreate, JobTargetResponse, JobTargetDetailResponse, RequiredSkillResponse,
    DeleteRequest, OkResponse
)

router = APIRouter(prefix="/jobs", tags=["Job Targets"])


@router.get("", response_model=List[JobTargetResponse])
def list_jobs(identity_id: str = Depends(require_identity), guard: JobTargetGuard = Depends(get_job_guard)):
    return [JobTargetResponse(**row) for row in guard.scoped_list(identity_id)]


@router.post("", response_model=JobTargetResponse, status_code=201)
def create_job(
    job: JobTargetCreate,
    identity_id: str = Depends(require_identity),
    guard: JobTargetGuard = Depends(get_job_guard),
):
    return JobTargetResponse(**guard.scoped_create(identity_id, job.model_dump()))


@router.get("/{job_id}", response_model=JobTargetDetailResponse)
def get_job(
    job_id: str,
    identity_id: str = Depends(require_identity),
    guard: JobTargetGuard = Depends(get_job_guard),
    skill_guard: OwnershipGuard = Depends(get_skill_guard),
):
    """
    Job target detail.

    The gap analysis compares each required skill with the caller's own
    skill of the same name (case-insensitive); it is recomputed on every
    request and never stored.
    """
    job = guard.scoped_find(job_id, identity_id)
    # job already resolved for the caller above
    required = guard.required_skills.list_for_job(job["id"])
    observed = skill_guard.scoped_list(identity_id)

    return JobTargetDetailResponse(
        **job,
        required_skills=[RequiredSkillResponse(**row) for row in required],
        gaps=score(required, observed),
    )


@router.delete("", response_model=OkResponse)
def delete_job(
    request: DeleteRequest,
    identity_id: str = Depends(require_identity),
    guard: JobTargetGuard = Depends(get_job_guard),
):
    """Delete a job target. Its required skills go in the same transaction."""
    guard.scoped_delete(request.id, identity_id)
    return OkResponse()
