"""Comment CRUD and like toggling."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from themeboard.core.errors import AuthorizationError, NotFoundError
from themeboard.models import Comment, CommentLike, Post
from themeboard.schemas.post import CommentResponse
from themeboard.services.likes import toggle_like
from themeboard.services.post_service import to_comment_response

__all__ = [
    "create_new_comment",
    "edit_comment",
    "delete_comment",
    "like_comment",
]

logger = logging.getLogger(__name__)


def _get_comment_or_404(db: Session, comment_id: str) -> Comment:
    comment = db.get(Comment, comment_id)
    if comment is None:
        raise NotFoundError("Comment not found")
    return comment


def _get_owned_comment(db: Session, user_id: str, comment_id: str) -> Comment:
    comment = _get_comment_or_404(db, comment_id)
    if comment.author_id != user_id:
        raise AuthorizationError("You can only modify your own comments")
    return comment


def create_new_comment(
    db: Session,
    user_id: str,
    post_id: str,
    message: str,
    images: list[str],
    anonymous: bool,
) -> CommentResponse:
    """Add a comment by ``user_id`` to an existing post.

    Raises:
        NotFoundError: If the post does not exist.
    """
    if db.get(Post, post_id) is None:
        raise NotFoundError("Post not found")
    comment = Comment(
        post_id=post_id,
        author_id=user_id,
        message=message,
        images=list(images),
        anonymous=anonymous,
        likes=0,
    )
    db.add(comment)
    db.commit()
    db.refresh(comment)
    logger.info("User %s commented %s on post %s", user_id, comment.id, post_id)
    return to_comment_response(comment, user_id)


def edit_comment(
    db: Session,
    user_id: str,
    comment_id: str,
    message: str,
    images: list[str],
    anonymous: bool,
) -> CommentResponse:
    """Replace the editable fields of a comment owned by ``user_id``."""
    comment = _get_owned_comment(db, user_id, comment_id)
    comment.message = message
    comment.images = list(images)
    comment.anonymous = anonymous
    db.commit()
    db.refresh(comment)
    return to_comment_response(comment, user_id)


def delete_comment(db: Session, user_id: str, comment_id: str) -> None:
    """Delete a comment owned by ``user_id``."""
    comment = _get_owned_comment(db, user_id, comment_id)
    db.delete(comment)
    db.commit()
    logger.info("User %s deleted comment %s", user_id, comment_id)


def like_comment(db: Session, user_id: str, comment_id: str, like: bool) -> None:
    """Set whether ``user_id`` likes the comment. Repeating the same value is a no-op."""
    comment = _get_comment_or_404(db, comment_id)
    toggle_like(
        db,
        target=comment,
        model=CommentLike,
        key={"comment_id": comment_id, "user_id": user_id},
        like=like,
    )
