"""
CareerTrack - Main Application

FastAPI backend with:
- PostgreSQL for all per-user resources
- JWT session cookie (or bearer token) authentication
- Ownership guard scoping every read/write to the caller

Run: uvicorn careertrack.main:app --reload
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from careertrack import __version__
from careertrack.api.routes import api_router
from careertrack.core.auth import SessionTokenService
from careertrack.core.config import Settings, get_settings
from careertrack.core.exceptions import CareerTrackError, Internal, ValidationFailure
from careertrack.core.logger import setup_logging
from careertrack.db.database import Database
from careertrack.db.repositories import (
    UserRepository, SkillRepository, JobTargetRepository, RequiredSkillRepository,
    LearningGoalRepository, JobApplicationRepository
)
from careertrack.services.credential_service import CredentialVerifier, build_password_context
from careertrack.services.ownership import JobTargetGuard, OwnershipGuard


# ============================================================
# ERROR HANDLERS
# ============================================================

async def careertrack_error_handler(request: Request, exc: CareerTrackError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def validation_error_handler(request: Request, exc: RequestValidationError):
    # field locations and messages only, never the submitted values
    errors = [{"loc": list(e.get("loc", ())), "msg": e.get("msg")} for e in exc.errors()]
    return JSONResponse(
        status_code=ValidationFailure.status_code,
        content={"detail": ValidationFailure.default_message, "errors": errors},
    )


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.opt(exception=exc).error("Unhandled error on {} {}", request.method, request.url.path)
    return JSONResponse(status_code=Internal.status_code, content={"detail": Internal.default_message})


# ============================================================
# APPLICATION FACTORY
# ============================================================

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application and everything it depends on.

    The database, repositories, token service and guards are created here
    once and stored on app.state; handlers reach them through
    careertrack.api.dependencies.
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    database = Database(settings.sqlalchemy_database_url, echo=settings.debug)
    users = UserRepository(database)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        try:
            database.create_tables()
            logger.info("Database tables ready")
        except Exception as e:
            logger.error("Database initialization failed: {}", e)
        yield
        database.dispose()

    app = FastAPI(
        title="CareerTrack",
        description="""
        Personal career tracking API.

        ## Features
        - **Authentication**: email/password sign-in, signed session cookie
        - **Skills**: self-assessed levels 1-5
        - **Job targets**: required skills and gap analysis against your skills
        - **Learning goals** and **job applications** with status tracking

        Every resource is visible only to the user who created it.
        """,
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.database = database
    app.state.token_service = SessionTokenService.from_settings(settings)
    app.state.credentials = CredentialVerifier(users, build_password_context(settings.bcrypt_rounds))
    app.state.guards = {
        "skill": OwnershipGuard(SkillRepository(database), "skill"),
        "job": JobTargetGuard(JobTargetRepository(database), RequiredSkillRepository(database)),
        "goal": OwnershipGuard(LearningGoalRepository(database), "goal"),
        "application": OwnershipGuard(JobApplicationRepository(database), "application"),
    }

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(CareerTrackError, careertrack_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(api_router)

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Detailed health check."""
        return {
            "status": "healthy",
            "database": "connected" if database.ping() else "disconnected",
        }

    return app


app = create_app()
