"""
API module - FastAPI routers, one per resource kind, plus the
dependencies that hand services to the handlers.

Usage:
    from careertrack.api.routes import api_router
    app.include_router(api_router)
"""
