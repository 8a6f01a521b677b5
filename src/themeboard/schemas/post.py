"""Post, comment and theme Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field, StrictBool

from .common import CamelModel


class NewPost(CamelModel):
    """Schema for creating or replacing a post."""

    message: str = Field(..., min_length=1, max_length=5000, description="Post text")
    images: list[str] = Field(default_factory=list, max_length=10, description="Image URLs")
    anonymous: bool = Field(False, description="Hide the author from other readers")
    theme_id: str = Field(..., min_length=1, description="Theme the post is filed under")


class NewComment(CamelModel):
    """Schema for creating or replacing a comment."""

    message: str = Field(..., min_length=1, max_length=2000)
    images: list[str] = Field(default_factory=list, max_length=10)
    anonymous: bool = False


class LikeRequest(CamelModel):
    """Like (``true``) or unlike (``false``) a post or comment."""

    # Strict so the flag reaches the service exactly as sent.
    like: StrictBool


class AllPostsQuery(CamelModel):
    """Query string for the home feed."""

    offset: int = Field(0, ge=0, description="Number of posts to skip")


class ThemeResponse(CamelModel):
    id: str
    name: str


class CommentResponse(CamelModel):
    id: str
    post_id: str
    message: str
    images: list[str]
    anonymous: bool
    author_id: str | None
    likes: int
    created_at: datetime


class PostResponse(CamelModel):
    """Post as returned by the API.

    ``author_id`` is ``None`` for anonymous posts unless the viewer wrote them;
    ``liked`` is only set on personalised feeds.
    """

    id: str
    message: str
    images: list[str]
    anonymous: bool
    theme_id: str
    author_id: str | None
    likes: int
    comments: list[CommentResponse] = Field(default_factory=list)
    liked: bool | None = None
    created_at: datetime


class PostsResponse(CamelModel):
    posts: list[PostResponse]
