"""Repository helpers for working with users."""

from postboard_backend.database.repositories.base import SqlAlchemyRepository
from postboard_backend.database.schemas import UserSchema


class UserRepository(SqlAlchemyRepository[UserSchema]):
    """Encapsulates persistence operations for :class:`UserSchema`."""

    schema = UserSchema
