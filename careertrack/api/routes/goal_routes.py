"""
Learning Goal Routes

GET /goals - List my goals (newest first)
POST /goals - Create a goal
PATCH /goals - Change a goal's status { id, status }
DELETE /goals - Delete a goal { id }
"""

from fastapi import APIRouter, Depends
from typing import List

from careertrack.api.dependencies import get_goal_guard
from careertrack.core.auth import require_identity
from careertrack.services.ownership import OwnershipGuard
from careertrack.schemas.schemas import (
    GoalCreate, GoalStatusUpdate, GoalResponse, DeleteRequest, OkResponse
)

router = APIRouter(prefix="/goals", tags=["Learning Goals"])


@router.get("", response_model=List[GoalResponse])
def list_goals(identity_id: str = Depends(require_identity), guard: OwnershipGuard = Depends(get_goal_guard)):
    return [GoalResponse(**row) for row in guard.scoped_list(identity_id)]


@router.post("", response_model=GoalResponse, status_code=201)
def create_goal(
    goal: GoalCreate,
    identity_id: str = Depends(require_identity),
    guard: OwnershipGuard = Depends(get_goal_guard),
):
    """Create a learning goal. Status defaults to PLANNED."""
    return GoalResponse(**guard.scoped_create(identity_id, goal.model_dump(mode="json")))


@router.patch("", response_model=GoalResponse)
def update_goal_status(
    update: GoalStatusUpdate,
    identity_id: str = Depends(require_identity),
    guard: OwnershipGuard = Depends(get_goal_guard),
):
    """Move a goal between PLANNED, IN_PROGRESS and DONE. Nothing else can change here."""
    row = guard.scoped_update(update.id, identity_id, {"status": update.status.value})
    return GoalResponse(**row)


@router.delete("", response_model=OkResponse)
def delete_goal(
    request: DeleteRequest,
    identity_id: str = Depends(require_identity),
    guard: OwnershipGuard = Depends(get_goal_guard),
):
    guard.scoped_delete(request.id, identity_id)
    return OkResponse()
