"""Route definitions for public HTTP endpoints."""

from postboard_backend.api.routers.auth import router as auth_router
from postboard_backend.api.routers.posts import router as posts_router
from postboard_backend.api.routers.users import router as users_router

__all__ = ["auth_router", "posts_router", "users_router"]
