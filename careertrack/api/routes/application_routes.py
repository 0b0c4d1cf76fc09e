"""
Job Application Routes

GET /applications - List my applications (most recent first)
POST /applications - Record an application
PATCH /applications - Change an application's status { id, status }
DELETE /applications - Delete an application { id }
"""

from fastapi import APIRouter, Depends
from typing import List

from careertrack.api.dependencies import get_application_guard
from careertrack.core.auth import require_identity
from careertrack.services.ownership import OwnershipGuard
from careertrack.schemas.schemas import (
    ApplicationCreate, ApplicationStatusUpdate, ApplicationResponse, DeleteRequest, OkResponse
)

router = APIRouter(prefix="/applications", tags=["Applications"])


@router.get("", response_model=List[ApplicationResponse])
def list_applications(
    identity_id: str = Depends(require_identity),
    guard: OwnershipGuard = Depends(get_application_guard),
):
    return [ApplicationResponse(**row) for row in guard.scoped_list(identity_id)]


@router.post("", response_model=ApplicationResponse, status_code=201)
def create_application(
    application: ApplicationCreate,
    identity_id: str = Depends(require_identity),
    guard: OwnershipGuard = Depends(get_application_guard),
):
    """
    Record a job application. Status defaults to APPLIED.

    If a link is given it must be a full URL like https://example.com;
    an empty string is treated as no link.
    """
    row = guard.scoped_create(identity_id, application.model_dump(mode="json"))
    return ApplicationResponse(**row)


@router.patch("", response_model=ApplicationResponse)
def update_application_status(
    update: ApplicationStatusUpdate,
    identity_id: str = Depends(require_identity),
    guard: OwnershipGuard = Depends(get_application_guard),
):
    row = guard.scoped_update(update.id, identity_id, {"status": update.status.value})
    return ApplicationResponse(**row)


@router.delete("", response_model=OkResponse)
def delete_application(
    request: DeleteRequest,
    identity_id: str = Depends(require_identity),
    guard: OwnershipGuard = Depends(get_application_guard),
):
    guard.scoped_delete(request.id, identity_id)
    return OkResponse()
