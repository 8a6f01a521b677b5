"""Comment endpoints for the Themeboard API."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from themeboard.api.dependencies import (
    SessionDep,
    VerifiedIdentityDep,
    openapi_for,
    validate_request,
)
from themeboard.schemas.common import EmptyResponse
from themeboard.schemas.post import CommentResponse, LikeRequest, NewComment
from themeboard.services.comment_service import (
    create_new_comment,
    delete_comment,
    edit_comment,
    like_comment,
)

router = APIRouter(prefix="/comment", tags=["comments"])
logger = logging.getLogger(__name__)

CommentBody = Annotated[NewComment, Depends(validate_request(NewComment, "body"))]
LikeBody = Annotated[LikeRequest, Depends(validate_request(LikeRequest, "body"))]


# Registered before "/{post_id}" routes so "like" is never read as an id.
@router.post(
    "/like/{comment_id}",
    response_model=EmptyResponse,
    openapi_extra=openapi_for(LikeRequest, "body"),
)
def toggle_comment_like(
    comment_id: str,
    identity: VerifiedIdentityDep,
    payload: LikeBody,
    db: SessionDep,
) -> EmptyResponse:
    """Like or unlike a comment."""
    logger.info("Responding to POST /comment/like/:commentId")
    like_comment(db, identity.user_id, comment_id, payload.like)
    return EmptyResponse()


@router.post(
    "/{post_id}",
    response_model=CommentResponse,
    openapi_extra=openapi_for(NewComment, "body"),
)
def add_comment(
    post_id: str,
    identity: VerifiedIdentityDep,
    payload: CommentBody,
    db: SessionDep,
) -> CommentResponse:
    """Comment on a post."""
    logger.info("Responding to POST /comment/:postId")
    return create_new_comment(
        db,
        identity.user_id,
        post_id,
        payload.message,
        payload.images,
        payload.anonymous,
    )


@router.put(
    "/{comment_id}",
    response_model=CommentResponse,
    openapi_extra=openapi_for(NewComment, "body"),
)
def update_comment(
    comment_id: str,
    identity: VerifiedIdentityDep,
    payload: CommentBody,
    db: SessionDep,
) -> CommentResponse:
    """Replace a comment's content. Only its author may do this."""
    logger.info("Responding to PUT /comment/:commentId")
    return edit_comment(
        db,
        identity.user_id,
        comment_id,
        payload.message,
        payload.images,
        payload.anonymous,
    )


@router.delete("/{comment_id}", response_model=EmptyResponse)
def remove_comment(comment_id: str, identity: VerifiedIdentityDep, db: SessionDep) -> EmptyResponse:
    """Delete a comment. Only its author may do this."""
    logger.info("Responding to DELETE /comment/:commentId")
    delete_comment(db, identity.user_id, comment_id)
    return EmptyResponse()
