"""
Side Quest API: FastAPI app factory.

Use: uvicorn sidequest.app:app
Or:  from sidequest import app
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .routes import register_routes
from .state import get_state


def create_app() -> FastAPI:
    """Build FastAPI app with CORS, routes, and startup."""
    app = FastAPI(
        title="Side Quest API",
        description="Swipeable AI-generated travel quests",
        version="1.0.0",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_routes(app)

    @app.on_event("startup")
    async def _startup_logging():
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
        state = get_state()
        config = state.config
        ok, errors = config.validate()
        for err in errors:
            print(f"[startup] WARNING: {err}")
        print("Side Quest API starting...")
        print(f"Data source: {state.backend} ({config.data_dir if state.backend == 'json' else config.firebase_project_id})")
        print(f"Quests in catalogue: {state.quest_store.count()}")
        print(f"LLM provider: {config.llm_provider}")
        print(f"Swipe threshold: {state.gesture_config.threshold:.0f}px, exit {state.gesture_config.exit_duration:.2f}s")

    @app.on_event("shutdown")
    async def _close_sessions():
        closed = get_state().close_sessions()
        if closed:
            print(f"[shutdown] Closed {closed} swipe sessions")

    return app


app = create_app()
