"""Persistence repositories for the backend entities."""

from postboard_backend.database.repositories.base import SqlAlchemyRepository
from postboard_backend.database.repositories.post import PostRepository
from postboard_backend.database.repositories.user import UserRepository

__all__ = ["PostRepository", "SqlAlchemyRepository", "UserRepository"]
