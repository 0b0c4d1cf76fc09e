"""
Skill Routes

GET /skills - List my skills (by name)
POST /skills - Add a skill
DELETE /skills - Remove a skill { id }
"""

from fastapi import APIRouter, Depends
from typing import List

from careertrack.api.dependencies import get_skill_guard
from careertrack.core.auth import require_identity
from careertrack.services.ownership import OwnershipGuard
from careertrack.schemas.schemas import SkillCreate, SkillResponse, DeleteRequest, OkResponse

router = APIRouter(prefix="/skills", tags=["Skills"])


@router.get("", response_model=List[SkillResponse])
def list_skills(identity_id: str = Depends(require_identity), guard: OwnershipGuard = Depends(get_skill_guard)):
    """List the current user's skills."""
    return [SkillResponse(**row) for row in guard.scoped_list(identity_id)]


@router.post("", response_model=SkillResponse, status_code=201)
def create_skill(
    skill: SkillCreate,
    identity_id: str = Depends(require_identity),
    guard: OwnershipGuard = Depends(get_skill_guard),
):
    """Add a skill with a self-assessed level from 1 to 5."""
    return SkillResponse(**guard.scoped_create(identity_id, skill.model_dump()))


@router.delete("", response_model=OkResponse)
def delete_skill(
    request: DeleteRequest,
    identity_id: str = Depends(require_identity),
    guard: OwnershipGuard = Depends(get_skill_guard),
):
    guard.scoped_delete(request.id, identity_id)
    return OkResponse()
