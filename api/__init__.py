"""
API Module
FastAPI routers for the DoseKeeper application
"""

from api.medications import router as medications_router
from api.adherence import router as adherence_router
from api.suggestions import router as suggestions_router

from api.deps import (
    get_session_id,
    get_state,
    get_now,
    session_store,
    services,
)


__all__ = [
    # Routers
    "medications_router",
    "adherence_router",
    "suggestions_router",
    # Dependencies
    "get_session_id",
    "get_state",
    "get_now",
    "session_store",
    "services",
]


def include_routers(app, prefix: str = "/api/v1"):
    """
    Include all API routers in the FastAPI app

    Usage:
        from api import include_routers
        include_routers(app)
    """
    app.include_router(medications_router, prefix=prefix)
    app.include_router(adherence_router, prefix=prefix)
    app.include_router(suggestions_router, prefix=prefix)
