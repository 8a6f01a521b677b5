"""SQLAlchemy models for posts and comments."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from themeboard.db.session import Base
from themeboard.db.time import utcnow
from themeboard.models.user import new_id


class Post(Base):
    """Primary content entity, filed under a theme.

    ``anonymous`` only hides the author from other readers; ownership checks
    always use ``author_id``.
    """

    __tablename__ = "post"
    __table_args__ = (Index("ix_post_created_at", "created_at"),)

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    author_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("user_account.id", ondelete="CASCADE"),
        nullable=False,
    )
    theme_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("theme.id"),
        nullable=False,
    )
    message: Mapped[str] = mapped_column(Text, nullable=False)
    # Image URLs, stored in submission order.
    images: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    anonymous: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    # Denormalised count of rows in post_like, recomputed on every toggle.
    likes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )

    comments: Mapped[list[Comment]] = relationship(
        "Comment",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="Comment.created_at",
    )
    like_rows: Mapped[list[PostLike]] = relationship(
        "PostLike",
        cascade="all, delete-orphan",
    )


class Comment(Base):
    """A comment on a post. Same ownership rule as posts."""

    __tablename__ = "comment"
    __table_args__ = (Index("ix_comment_post_id", "post_id"),)

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    post_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("post.id", ondelete="CASCADE"),
        nullable=False,
    )
    author_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("user_account.id", ondelete="CASCADE"),
        nullable=False,
    )
    message: Mapped[str] = mapped_column(Text, nullable=False)
    images: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    anonymous: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    likes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )

    post: Mapped[Post] = relationship("Post", back_populates="comments")
    like_rows: Mapped[list[CommentLike]] = relationship(
        "CommentLike",
        cascade="all, delete-orphan",
    )


class PostLike(Base):
    """Per-user like on a post."""

    __tablename__ = "post_like"

    # Composite primary key prevents duplicate likes from the same user.
    post_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("post.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("user_account.id", ondelete="CASCADE"),
        primary_key=True,
    )


class CommentLike(Base):
    """Per-user like on a comment."""

    __tablename__ = "comment_like"

    comment_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("comment.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("user_account.id", ondelete="CASCADE"),
        primary_key=True,
    )
