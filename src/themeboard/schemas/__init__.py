"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .common import EmptyResponse
from .post import (
    AllPostsQuery,
    CommentResponse,
    LikeRequest,
    NewComment,
    NewPost,
    PostResponse,
    PostsResponse,
    ThemeResponse,
)
from .user import AuthResponse, UserLogin, UserRegister

__all__ = [
    "EmptyResponse",
    "AllPostsQuery", "LikeRequest", "NewComment", "NewPost",
    "CommentResponse", "PostResponse", "PostsResponse", "ThemeResponse",
    "AuthResponse", "UserLogin", "UserRegister",
]
