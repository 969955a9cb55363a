"""Pydantic models for post endpoints."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from postboard_backend.database.schemas import PostSchema


class PostResponse(BaseModel):
    """Public representation of a post."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str | None = None
    content: str | None = None
    user_id: int


class PostPayload(BaseModel):
    """Body of create and full-update requests."""

    title: str | None = None
    content: str | None = None
    user_id: int

    def to_schema(self) -> PostSchema:
        return PostSchema(title=self.title, content=self.content, user_id=self.user_id)


class PostPatchRequest(BaseModel):
    """Partial post; only ``title`` and ``content`` are ever applied."""

    title: str | None = None
    content: str | None = None
    user_id: int | None = None
