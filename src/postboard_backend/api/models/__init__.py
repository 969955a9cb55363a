"""Models used for API request and response payloads."""

from postboard_backend.api.models.auth import PrincipalResponse
from postboard_backend.api.models.post import (
    PostPatchRequest,
    PostPayload,
    PostResponse,
)
from postboard_backend.api.models.user import (
    AddressModel,
    CompanyModel,
    UserPayload,
    UserResponse,
)

__all__ = [
    "AddressModel",
    "CompanyModel",
    "PostPatchRequest",
    "PostPayload",
    "PostResponse",
    "PrincipalResponse",
    "UserPayload",
    "UserResponse",
]
