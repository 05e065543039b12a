"""Business logic services."""

from .deletion import delete_post
from .feed import FeedSort, build_feed
from .likes import LikeState, toggle_like
from .post_views import serialize_post
from .uploads import ImageUpload, UploadSubmission, create_post

__all__ = [
    "FeedSort",
    "ImageUpload",
    "LikeState",
    "UploadSubmission",
    "build_feed",
    "create_post",
    "delete_post",
    "serialize_post",
    "toggle_like",
]
