"""Post endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response, status

from postboard_backend.api.dependencies import get_current_principal, get_post_service
from postboard_backend.api.models import PostPatchRequest, PostPayload, PostResponse
from postboard_backend.api.services import PostService

router = APIRouter(
    prefix="/posts",
    tags=["posts"],
    dependencies=[Depends(get_current_principal)],
)


@router.get("", response_model=list[PostResponse])
def list_posts(
    service: PostService = Depends(get_post_service),
) -> list[PostResponse]:
    """Return every post."""

    return [PostResponse.model_validate(post) for post in service.list_posts()]


@router.get("/filter", response_model=list[PostResponse])
def filter_posts(
    request: Request,
    service: PostService = Depends(get_post_service),
) -> list[PostResponse]:
    """Return posts matching the ``title`` and/or ``content`` query parameters."""

    posts = service.filter_posts(dict(request.query_params))
    return [PostResponse.model_validate(post) for post in posts]


@router.get("/user/{user_id}", response_model=list[PostResponse])
def list_posts_by_user(
    user_id: int,
    service: PostService = Depends(get_post_service),
) -> list[PostResponse]:
    posts = service.list_posts_by_user(user_id)
    return [PostResponse.model_validate(post) for post in posts]


@router.get("/{post_id}", response_model=PostResponse)
def get_post(
    post_id: int,
    service: PostService = Depends(get_post_service),
) -> PostResponse:
    return PostResponse.model_validate(service.get_post(post_id))


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
def create_post(
    payload: PostPayload,
    service: PostService = Depends(get_post_service),
) -> PostResponse:
    return PostResponse.model_validate(service.create_post(payload.to_schema()))


@router.put("/{post_id}", response_model=PostResponse)
def update_post(
    post_id: int,
    payload: PostPayload,
    service: PostService = Depends(get_post_service),
) -> PostResponse:
    """Replace all fields of the post stored under ``post_id``."""

    post = service.update_post(payload.to_schema(), post_id)
    return PostResponse.model_validate(post)


@router.patch("/{post_id}", response_model=PostResponse)
def patch_post(
    post_id: int,
    payload: PostPatchRequest,
    service: PostService = Depends(get_post_service),
) -> PostResponse:
    """Overwrite ``title`` and ``content`` when the body carries them."""

    return PostResponse.model_validate(service.patch_post(payload, post_id))


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_post(
    post_id: int,
    service: PostService = Depends(get_post_service),
) -> Response:
    service.delete_post(post_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
