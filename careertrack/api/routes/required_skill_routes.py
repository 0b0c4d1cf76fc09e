"""
Required Skill Routes

POST /job-required-skills - Add a required skill to one of my job targets { jobId, name, importance }
DELETE /job-required-skills - Remove a required skill { id }
"""

from fastapi import APIRouter, Depends

from careertrack.api.dependencies import get_job_guard
from careertrack.core.auth import require_identity
from careertrack.services.ownership import JobTargetGuard
from careertrack.schemas.schemas import (
    RequiredSkillCreate, RequiredSkillResponse, DeleteRequest, OkResponse
)

router = APIRouter(prefix="/job-required-skills", tags=["Job Targets"])


@router.post("", response_model=RequiredSkillResponse, status_code=201)
def create_required_skill(
    data: RequiredSkillCreate,
    identity_id: str = Depends(require_identity),
    guard: JobTargetGuard = Depends(get_job_guard),
):
    """404 when the job target does not exist or belongs to someone else."""
    payload = data.model_dump(exclude={"job_id"})
    return RequiredSkillResponse(**guard.scoped_create_child(data.job_id, identity_id, payload))


@router.delete("", response_model=OkResponse)
def delete_required_skill(
    request: DeleteRequest,
    identity_id: str = Depends(require_identity),
    guard: JobTargetGuard = Depends(get_job_guard),
):
    guard.scoped_delete_child(request.id, identity_id)
    return OkResponse()
