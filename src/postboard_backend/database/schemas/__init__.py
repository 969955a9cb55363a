"""SQLAlchemy schemas for persisted entities."""

from postboard_backend.database.schemas.embedded import Address, Company
from postboard_backend.database.schemas.post import PostSchema
from postboard_backend.database.schemas.user import UserSchema

__all__ = ["Address", "Company", "PostSchema", "UserSchema"]
