# src/game_media/api/v1/endpoints/media.py
"""Media feed endpoints: fetch, feed, like, upload and delete."""

from typing import Annotated

from fastapi import APIRouter, File, Form, Header, Query, UploadFile

from game_media.core.errors import InvalidInputError, NotFoundError
from game_media.core.settings import settings
from game_media.schemas.post import (
    DeleteRequest,
    DeleteResponse,
    FeedResponse,
    LikeRequest,
    LikeResponse,
    PostView,
    UploadResponse,
)
from game_media.services import (
    ImageUpload,
    UploadSubmission,
    build_feed,
    create_post,
    delete_post,
    serialize_post,
    toggle_like,
)
from game_media.services.images import read_upload_file

from ..dependencies import CurrentUserDep, OptionalUserDep, StoresDep

router = APIRouter(prefix="/media", tags=["media"])


@router.get("/post", response_model=PostView, response_model_exclude_none=True)
async def get_post(
    stores: StoresDep,
    viewer: OptionalUserDep,
    post_id: Annotated[str | None, Query(alias="postID")] = None,
) -> PostView:
    """Get a single post as seen by the viewer.

    Raises:
        InvalidInputError: If the id is missing or names no post
        NotFoundError: If the post is hidden from this viewer or unusable
    """
    post = stores.posts.get_by_id(post_id) if post_id else None
    if post is None:
        raise InvalidInputError("Invalid post id")

    view = serialize_post(stores, post, viewer)
    if view is None:
        raise NotFoundError("Invalid post")
    return view


@router.get("/", response_model=FeedResponse, response_model_exclude_none=True)
async def get_feed(
    stores: StoresDep,
    viewer: OptionalUserDep,
    search: Annotated[str | None, Header()] = None,
    sort: Annotated[str | None, Header()] = None,
) -> FeedResponse:
    """List posts matching the ``search`` header, grouped by type.

    Args:
        search: Case-insensitive pattern matched against titles and tags
        sort: One of title-ascending, title-descending, likes-ascending,
            likes-descending (default)
    """
    return build_feed(stores, viewer, search=search, sort=sort)


@router.post("/like", response_model=LikeResponse)
async def update_likes(
    payload: LikeRequest,
    stores: StoresDep,
    current_user: CurrentUserDep,
) -> LikeResponse:
    """Toggle the current user's like on a post."""
    try:
        state = toggle_like(stores, payload.post_id, current_user)
        stores.session.commit()
    except Exception:
        stores.session.rollback()
        raise
    return LikeResponse(has_liked=state.has_liked, likes=state.likes)


@router.post("/upload", response_model=UploadResponse)
async def upload_media(
    stores: StoresDep,
    current_user: CurrentUserDep,
    title: Annotated[str | None, Form()] = None,
    game_id: Annotated[str | None, Form(alias="gameID")] = None,
    tags: Annotated[str | None, Form()] = None,
    post_type: Annotated[str | None, Form(alias="type")] = None,
    video: Annotated[str | None, Form()] = None,
    text: Annotated[str | None, Form()] = None,
    screenshot: Annotated[UploadFile | None, File()] = None,
) -> UploadResponse:
    """Create a screenshot, video or text post for the current user."""
    image: ImageUpload | None = None
    if screenshot is not None:
        image = ImageUpload(
            data=await read_upload_file(screenshot, settings.max_upload_bytes),
            content_type=screenshot.content_type,
        )

    submission = UploadSubmission(
        title=title,
        game_id=game_id,
        tags=tags,
        type=post_type,
        image=image,
        video=video,
        text=text,
    )
    try:
        post = create_post(stores, submission, current_user)
        stores.session.commit()
    except Exception:
        stores.session.rollback()
        raise
    return UploadResponse(media_id=post.id)


@router.post("/delete", response_model=DeleteResponse)
async def delete_media(
    payload: DeleteRequest,
    stores: StoresDep,
    current_user: CurrentUserDep,
) -> DeleteResponse:
    """Delete one of the current user's posts."""
    try:
        deleted = delete_post(stores, payload.media_id, payload.game_id, current_user)
        stores.session.commit()
    except Exception:
        stores.session.rollback()
        raise
    return DeleteResponse(deleted=deleted)
