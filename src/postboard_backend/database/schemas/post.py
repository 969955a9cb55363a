"""Post database schema."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from postboard_backend.database.base import BaseSchema

if TYPE_CHECKING:
    from postboard_backend.database.schemas.user import UserSchema


class PostSchema(BaseSchema):
    """SQLAlchemy model for posts; every persisted post has one owner."""

    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    title: Mapped[str | None] = mapped_column(String(255))
    content: Mapped[str | None] = mapped_column(Text)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    user: Mapped[UserSchema] = relationship("UserSchema", back_populates="posts")
