"""
FastAPI dependencies that hand out the objects built by create_app().

Nothing here is global: everything lives on app.state and is reached
through the request.
"""

from fastapi import Request

from careertrack.core.config import Settings
from careertrack.db.database import Database
from careertrack.services.credential_service import CredentialVerifier
from careertrack.services.ownership import JobTargetGuard, OwnershipGuard


def get_settings_dep(request: Request) -> Settings:
    return request.app.state.settings


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_credentials(request: Request) -> CredentialVerifier:
    return request.app.state.credentials


def get_skill_guard(request: Request) -> OwnershipGuard:
    return request.app.state.guards["skill"]


def get_job_guard(request: Request) -> JobTargetGuard:
    return request.app.state.guards["job"]


def get_goal_guard(request: Request) -> OwnershipGuard:
    return request.app.state.guards["goal"]


def get_application_guard(request: Request) -> OwnershipGuard:
    return request.app.state.guards["application"]
