"""Register all route modules on the FastAPI app."""

from fastapi import FastAPI

from .root import router as root_router
from .quests import router as quests_router
from .users import router as users_router
from .dashboard import router as dashboard_router
from .sessions import router as sessions_router
from .generate import router as generate_router


def register_routes(app: FastAPI) -> None:
    """Attach all API routers to the app."""
    app.include_router(root_router)
    app.include_router(quests_router, prefix="/api/quests", tags=["quests"])
    app.include_router(users_router, prefix="/api/users", tags=["users"])
    app.include_router(dashboard_router, prefix="/api/users", tags=["dashboard"])
    app.include_router(sessions_router, prefix="/api/sessions", tags=["sessions"])
    app.include_router(generate_router, prefix="/api/generate", tags=["generate"])
