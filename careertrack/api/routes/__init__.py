"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from careertrack.api.routes.auth_routes import router as auth_router
from careertrack.api.routes.skill_routes import router as skill_router
from careertrack.api.routes.job_routes import router as job_router
from careertrack.api.routes.required_skill_routes import router as required_skill_router
from careertrack.api.routes.goal_routes import router as goal_router
from careertrack.api.routes.application_routes import router as application_router
from careertrack.api.routes.dashboard_routes import router as dashboard_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(auth_router)
api_router.include_router(skill_router)
api_router.include_router(job_router)
api_router.include_router(required_skill_router)
api_router.include_router(goal_router)
api_router.include_router(application_router)
api_router.include_router(dashboard_router)
