"""User endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Request, Response, status

from postboard_backend.api.dependencies import get_current_principal, get_user_service
from postboard_backend.api.models import PostResponse, UserPayload, UserResponse
from postboard_backend.api.services import UserService

router = APIRouter(
    prefix="/users",
    tags=["users"],
    dependencies=[Depends(get_current_principal)],
)


@router.get("", response_model=list[UserResponse])
def list_users(
    service: UserService = Depends(get_user_service),
) -> list[UserResponse]:
    """Return every user."""

    return [UserResponse.model_validate(user) for user in service.list_users()]


@router.get("/filter", response_model=list[UserResponse])
def filter_users(
    request: Request,
    service: UserService = Depends(get_user_service),
) -> list[UserResponse]:
    """Return users whose fields contain every given query parameter value."""

    users = service.filter_users(dict(request.query_params))
    return [UserResponse.model_validate(user) for user in users]


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: int,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    return UserResponse.model_validate(service.get_user(user_id))


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    payload: UserPayload,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    user = service.create_user(payload.to_schema())
    return UserResponse.model_validate(user)


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int,
    payload: UserPayload,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Replace all fields of the user stored under ``user_id``."""

    user = service.update_user(payload.model_dump(), user_id)
    return UserResponse.model_validate(user)


@router.patch("/{user_id}", response_model=UserResponse)
def patch_user(
    user_id: int,
    updates: dict[str, Any] = Body(...),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Overwrite only the fields named in the request body."""

    user = service.patch_user(updates, user_id)
    return UserResponse.model_validate(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    service: UserService = Depends(get_user_service),
) -> Response:
    service.delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{user_id}/posts", response_model=list[PostResponse])
def list_user_posts(
    user_id: int,
    service: UserService = Depends(get_user_service),
) -> list[PostResponse]:
    posts = service.list_user_posts(user_id)
    return [PostResponse.model_validate(post) for post in posts]
