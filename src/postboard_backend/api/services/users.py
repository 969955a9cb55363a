"""User use cases: CRUD pass-through, dynamic filtering and field patches."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from postboard_backend.api.services.errors import (
    EntityNotFoundError,
    InvalidFieldReferenceError,
)
from postboard_backend.api.services.filters import USER_FILTERS
from postboard_backend.api.services.patching import USER_PATCHER
from postboard_backend.database import PostRepository, UserRepository, UserSchema

if TYPE_CHECKING:
    from collections.abc import Mapping

    from sqlalchemy.orm import Session

    from postboard_backend.database import PostSchema

logger = logging.getLogger(__name__)


class UserService:
    """Operations on users within one unit of work."""

    def __init__(self, session: Session) -> None:
        self._users = UserRepository(session)
        self._posts = PostRepository(session)

    def list_users(self) -> list[UserSchema]:
        return self._users.list_all()

    def get_user(self, user_id: int) -> UserSchema:
        """Return the user or raise :class:`EntityNotFoundError`."""
        user = self._users.get_by_id(user_id)
        if user is None:
            logger.warning("User %s not found", user_id)
            raise EntityNotFoundError("User", user_id)
        return user

    def create_user(self, user: UserSchema) -> UserSchema:
        user.id = None
        created = self._users.add(user)
        logger.info("Created user %s", created.id)
        return created

    def update_user(self, fields: Mapping[str, Any], user_id: int) -> UserSchema:
        """Replace every field of the user stored under *user_id*.

        Fields missing from *fields* are cleared. When *user_id* is absent the
        record is inserted under a store-assigned identifier.
        """
        values = {name: fields.get(name) for name in USER_PATCHER.field_names}
        user = self._users.get_by_id(user_id)
        if user is None:
            user = self._users.add(USER_PATCHER.apply(UserSchema(), values))
            logger.info("Inserted user %s for missing id %s", user.id, user_id)
            return user
        USER_PATCHER.apply(user, values)
        updated = self._users.save(user)
        logger.info("Replaced user %s", user_id)
        return updated

    def patch_user(self, updates: Mapping[str, Any], user_id: int) -> UserSchema:
        """Overwrite the named fields of a stored user.

        Unknown, immutable, or malformed keys abort the patch before any field
        is written.
        """
        user = self.get_user(user_id)
        try:
            USER_PATCHER.apply(user, updates)
        except InvalidFieldReferenceError as exc:
            logger.warning("Rejected patch of user %s: %s", user_id, exc)
            raise
        patched = self._users.save(user)
        logger.info("Patched user %s fields %s", user_id, sorted(updates))
        return patched

    def delete_user(self, user_id: int) -> None:
        """Delete the user together with the posts it owns."""
        user = self.get_user(user_id)
        self._users.delete(user)
        logger.info("Deleted user %s", user_id)

    def filter_users(self, params: Mapping[str, str | None]) -> list[UserSchema]:
        """Return users matching every recognized, non-empty filter parameter."""
        logger.debug("Filtering users by %s", USER_FILTERS.active_values(params))
        return self._users.find_where(USER_FILTERS.conditions(params))

    def list_user_posts(self, user_id: int) -> list[PostSchema]:
        return self._posts.find_by_user_id(user_id)


__all__ = ["UserService"]
