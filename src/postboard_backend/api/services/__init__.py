"""Service layer for API-specific business logic."""

from postboard_backend.api.services.auth import (
    AuthenticationError,
    AuthService,
    TokenPayload,
)
from postboard_backend.api.services.errors import (
    EntityNotFoundError,
    FilterConfigurationError,
    ImmutableFieldError,
    InvalidFieldReferenceError,
    InvalidFieldValueError,
    ServiceError,
)
from postboard_backend.api.services.posts import PostService
from postboard_backend.api.services.users import UserService

__all__ = [
    "AuthService",
    "AuthenticationError",
    "EntityNotFoundError",
    "FilterConfigurationError",
    "ImmutableFieldError",
    "InvalidFieldReferenceError",
    "InvalidFieldValueError",
    "PostService",
    "ServiceError",
    "TokenPayload",
    "UserService",
]
