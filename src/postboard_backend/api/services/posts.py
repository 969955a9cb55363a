"""Post use cases: CRUD pass-through, title/content filtering and patches."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from postboard_backend.api.services.errors import EntityNotFoundError
from postboard_backend.api.services.filters import POST_FILTERS
from postboard_backend.api.services.patching import (
    POST_PATCHABLE_FIELDS,
    merge_non_null,
)
from postboard_backend.database import PostRepository, UserRepository

if TYPE_CHECKING:
    from collections.abc import Mapping

    from sqlalchemy.orm import Session

    from postboard_backend.api.models import PostPatchRequest
    from postboard_backend.database import PostSchema, UserSchema

logger = logging.getLogger(__name__)


class PostService:
    """Operations on posts within one unit of work."""

    def __init__(self, session: Session) -> None:
        self._posts = PostRepository(session)
        self._users = UserRepository(session)

    def list_posts(self) -> list[PostSchema]:
        return self._posts.list_all()

    def get_post(self, post_id: int) -> PostSchema:
        """Return the post or raise :class:`EntityNotFoundError`."""
        post = self._posts.get_by_id(post_id)
        if post is None:
            logger.warning("Post %s not found", post_id)
            raise EntityNotFoundError("Post", post_id)
        return post

    def create_post(self, post: PostSchema) -> PostSchema:
        owner = self._require_owner(post.user_id)
        post.id = None
        post.user = owner
        created = self._posts.add(post)
        logger.info("Created post %s for user %s", created.id, created.user_id)
        return created

    def update_post(self, post: PostSchema, post_id: int) -> PostSchema:
        """Replace every field of the post stored under *post_id*.

        When *post_id* is absent the post is inserted under a store-assigned
        identifier.
        """
        owner = self._require_owner(post.user_id)
        existing = self._posts.get_by_id(post_id)
        if existing is None:
            post.id = None
            post.user = owner
            created = self._posts.add(post)
            logger.info("Inserted post %s for missing id %s", created.id, post_id)
            return created
        existing.title = post.title
        existing.content = post.content
        existing.user = owner
        updated = self._posts.save(existing)
        logger.info("Replaced post %s", post_id)
        return updated

    def patch_post(self, partial: PostPatchRequest, post_id: int) -> PostSchema:
        """Copy non-null ``title`` and ``content`` from *partial*; nothing else."""
        post = self.get_post(post_id)
        merge_non_null(post, partial, POST_PATCHABLE_FIELDS)
        patched = self._posts.save(post)
        logger.info("Patched post %s", post_id)
        return patched

    def delete_post(self, post_id: int) -> None:
        post = self.get_post(post_id)
        self._posts.delete(post)
        logger.info("Deleted post %s", post_id)

    def filter_posts(self, params: Mapping[str, str | None]) -> list[PostSchema]:
        """Return posts whose title and/or content contain the given values."""
        active = POST_FILTERS.active_values(params)
        logger.debug("Filtering posts by %s", active)
        title = active.get("title")
        content = active.get("content")
        if title is not None and content is not None:
            return self._posts.find_by_title_and_content_containing(title, content)
        if title is not None:
            return self._posts.find_by_title_containing(title)
        if content is not None:
            return self._posts.find_by_content_containing(content)
        return self.list_posts()

    def list_posts_by_user(self, user_id: int) -> list[PostSchema]:
        return self._posts.find_by_user_id(user_id)

    def _require_owner(self, user_id: int) -> UserSchema:
        owner = self._users.get_by_id(user_id)
        if owner is None:
            logger.warning("Owner %s of post not found", user_id)
            raise EntityNotFoundError("User", user_id)
        return owner


__all__ = ["PostService"]
