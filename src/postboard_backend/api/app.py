"""Factory for constructing the FastAPI application."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from postboard_backend.api.errors import install_exception_handlers
from postboard_backend.api.routers import auth_router, posts_router, users_router
from postboard_backend.settings import get_settings
from postboard_backend.shared import configure_logging


def create_api() -> FastAPI:
    """Instantiate and configure the FastAPI application."""
    config = get_settings()
    configure_logging(config.log_level)
    app = FastAPI(title="Postboard API")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    install_exception_handlers(app)
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(posts_router)
    return app
