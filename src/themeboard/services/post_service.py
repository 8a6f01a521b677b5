"""Post feed, CRUD and like toggling."""
from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from themeboard.core.errors import AuthorizationError, NotFoundError
from themeboard.db.time import as_utc
from themeboard.models import Comment, Post, PostLike, Theme
from themeboard.schemas.post import CommentResponse, PostResponse, PostsResponse
from themeboard.services.likes import toggle_like

__all__ = [
    "get_all_posts",
    "create_new_post",
    "get_post",
    "update_post",
    "delete_post",
    "like_post",
    "to_post_response",
    "to_comment_response",
]

logger = logging.getLogger(__name__)


def _visible_author(author_id: str, anonymous: bool, viewer_id: str | None) -> str | None:
    if anonymous and author_id != viewer_id:
        return None
    return author_id


def to_comment_response(comment: Comment, viewer_id: str | None = None) -> CommentResponse:
    """Convert a Comment ORM instance to an API schema."""
    return CommentResponse(
        id=comment.id,
        post_id=comment.post_id,
        message=comment.message,
        images=list(comment.images),
        anonymous=comment.anonymous,
        author_id=_visible_author(comment.author_id, comment.anonymous, viewer_id),
        likes=comment.likes,
        created_at=as_utc(comment.created_at),
    )


def to_post_response(
    post: Post,
    viewer_id: str | None = None,
    liked: bool | None = None,
) -> PostResponse:
    """Convert a Post ORM instance to an API schema for ``viewer_id``."""
    return PostResponse(
        id=post.id,
        message=post.message,
        images=list(post.images),
        anonymous=post.anonymous,
        theme_id=post.theme_id,
        author_id=_visible_author(post.author_id, post.anonymous, viewer_id),
        likes=post.likes,
        comments=[to_comment_response(c, viewer_id) for c in post.comments],
        liked=liked,
        created_at=as_utc(post.created_at),
    )


def _get_post_or_404(db: Session, post_id: str) -> Post:
    post = db.get(Post, post_id)
    if post is None:
        raise NotFoundError("Post not found")
    return post


def _get_owned_post(db: Session, user_id: str, post_id: str) -> Post:
    post = _get_post_or_404(db, post_id)
    if post.author_id != user_id:
        raise AuthorizationError("You can only modify your own posts")
    return post


def _ensure_theme(db: Session, theme_id: str) -> None:
    if db.get(Theme, theme_id) is None:
        raise NotFoundError("Theme not found")


def get_all_posts(
    db: Session,
    offset: int,
    user_id: str | None = None,
    *,
    page_size: int = 10,
) -> PostsResponse:
    """Return one page of the home feed, newest first.

    With a confirmed ``user_id`` the page is personalised: each post carries
    ``liked`` for that user and the user's own anonymous posts keep their
    author id.
    """
    posts = (
        db.query(Post)
        .options(selectinload(Post.comments))
        .order_by(Post.created_at.desc(), Post.id)
        .offset(offset)
        .limit(page_size)
        .all()
    )
    if user_id is None:
        return PostsResponse(posts=[to_post_response(p) for p in posts])

    liked_ids: set[str] = set()
    if posts:
        liked_ids = set(
            db.scalars(
                select(PostLike.post_id).where(
                    PostLike.user_id == user_id,
                    PostLike.post_id.in_([p.id for p in posts]),
                )
            )
        )
    return PostsResponse(
        posts=[to_post_response(p, user_id, liked=p.id in liked_ids) for p in posts]
    )


def create_new_post(
    db: Session,
    user_id: str,
    message: str,
    images: list[str],
    anonymous: bool,
    theme_id: str,
) -> PostResponse:
    """Create a post authored by ``user_id``.

    Raises:
        NotFoundError: If the theme does not exist.
    """
    _ensure_theme(db, theme_id)
    post = Post(
        author_id=user_id,
        theme_id=theme_id,
        message=message,
        images=list(images),
        anonymous=anonymous,
        likes=0,
    )
    db.add(post)
    db.commit()
    db.refresh(post)
    logger.info("User %s created post %s", user_id, post.id)
    return to_post_response(post, user_id)


def get_post(db: Session, post_id: str) -> PostResponse:
    """Return a single post with its comments.

    Raises:
        NotFoundError: If the post does not exist.
    """
    return to_post_response(_get_post_or_404(db, post_id))


def update_post(
    db: Session,
    user_id: str,
    post_id: str,
    message: str,
    images: list[str],
    anonymous: bool,
    theme_id: str,
) -> PostResponse:
    """Replace the editable fields of a post owned by ``user_id``."""
    post = _get_owned_post(db, user_id, post_id)
    _ensure_theme(db, theme_id)
    post.message = message
    post.images = list(images)
    post.anonymous = anonymous
    post.theme_id = theme_id
    db.commit()
    db.refresh(post)
    return to_post_response(post, user_id)


def delete_post(db: Session, user_id: str, post_id: str) -> None:
    """Delete a post owned by ``user_id`` along with its comments and likes."""
    post = _get_owned_post(db, user_id, post_id)
    db.delete(post)
    db.commit()
    logger.info("User %s deleted post %s", user_id, post_id)


def like_post(db: Session, user_id: str, post_id: str, like: bool) -> None:
    """Set whether ``user_id`` likes the post. Repeating the same value is a no-op."""
    post = _get_post_or_404(db, post_id)
    toggle_like(
        db,
        target=post,
        model=PostLike,
        key={"post_id": post_id, "user_id": user_id},
        like=like,
    )
