"""Database connectivity helpers and configuration objects."""

from postboard_backend.database.base import BaseSchema
from postboard_backend.database.dependencies import get_database, get_session
from postboard_backend.database.repositories import PostRepository, UserRepository
from postboard_backend.database.schemas import (
    Address,
    Company,
    PostSchema,
    UserSchema,
)
from postboard_backend.database.service import DatabaseService
from postboard_backend.settings import BackendSettings, get_settings, settings

__all__ = [
    "Address",
    "BaseSchema",
    "BackendSettings",
    "Company",
    "DatabaseService",
    "PostRepository",
    "PostSchema",
    "UserRepository",
    "UserSchema",
    "get_database",
    "get_session",
    "get_settings",
    "settings",
]
