"""SQLAlchemy models for the Themeboard application."""

from .post import Comment, CommentLike, Post, PostLike
from .theme import Theme
from .user import AuthSession, User

__all__ = [
    "AuthSession", "User",
    "Comment", "CommentLike",
    "Post", "PostLike",
    "Theme",
]
