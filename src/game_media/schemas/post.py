"""Post-related Pydantic schemas.

Field aliases keep the camelCase keys the web client expects.
"""

from pydantic import BaseModel, ConfigDict, Field


class PostView(BaseModel):
    """Client-safe view of a post with exactly one payload field set."""

    id: str
    title: str
    author_id: str = Field(alias="authorID")
    author_name: str = Field(alias="authorName")
    game_id: str = Field(alias="gameID")
    game_name: str = Field(alias="gameName")
    created: str
    type: str
    tags: list[str]
    likes: int
    has_liked: bool = Field(alias="hasLiked")
    screenshot: str | None = Field(None, description="data: URI of the image")
    video: str | None = Field(None, description="YouTube embed URL")
    text: str | None = None

    model_config = ConfigDict(populate_by_name=True)


class FeedResponse(BaseModel):
    """Serialized posts grouped by type."""

    screenshots: list[PostView] = Field(default_factory=list)
    videos: list[PostView] = Field(default_factory=list)
    texts: list[PostView] = Field(default_factory=list)


class LikeRequest(BaseModel):
    """Schema for toggling a like."""

    post_id: str = Field(..., alias="postID", min_length=1)

    model_config = ConfigDict(populate_by_name=True)


class LikeResponse(BaseModel):
    """Like state after a toggle."""

    has_liked: bool = Field(alias="hasLiked")
    likes: int

    model_config = ConfigDict(populate_by_name=True)


class UploadResponse(BaseModel):
    """Identifier of a newly created post."""

    media_id: str = Field(alias="mediaID")

    model_config = ConfigDict(populate_by_name=True)


class DeleteRequest(BaseModel):
    """Schema for deleting one of the requester's posts."""

    media_id: str = Field(..., alias="mediaID", min_length=1)
    game_id: str | None = Field(None, alias="gameID")

    model_config = ConfigDict(populate_by_name=True)


class DeleteResponse(BaseModel):
    """Identifier of the deleted post."""

    deleted: str
