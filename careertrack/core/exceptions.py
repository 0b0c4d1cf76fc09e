"""
Error taxonomy shared by services and routes.

Every error carries the HTTP status it maps to. Handlers registered in
careertrack.main render them as {"detail": message}.

NotFound is used both for rows that do not exist and for rows owned by
another identity. Callers must not try to tell the two apart.
"""

from fastapi import status


class CareerTrackError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(CareerTrackError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "unauthorized"


class ValidationFailure(CareerTrackError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid data"


class NotFound(CareerTrackError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "not found"


class Conflict(CareerTrackError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Conflict"


class Internal(CareerTrackError):
    pass
