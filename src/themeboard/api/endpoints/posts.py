"""Post-related endpoints for the Themeboard API."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from themeboard.api.dependencies import (
    OptionalIdentityDep,
    SessionDep,
    SettingsDep,
    VerifiedIdentityDep,
    openapi_for,
    validate_request,
)
from themeboard.schemas.common import EmptyResponse
from themeboard.schemas.post import (
    AllPostsQuery,
    LikeRequest,
    NewPost,
    PostResponse,
    PostsResponse,
)
from themeboard.services.post_service import (
    create_new_post,
    delete_post,
    get_all_posts,
    get_post,
    like_post,
    update_post,
)

router = APIRouter(tags=["posts"])
logger = logging.getLogger(__name__)

FeedQuery = Annotated[AllPostsQuery, Depends(validate_request(AllPostsQuery, "query"))]
PostBody = Annotated[NewPost, Depends(validate_request(NewPost, "body"))]
LikeBody = Annotated[LikeRequest, Depends(validate_request(LikeRequest, "body"))]


@router.get(
    "/posts",
    response_model=PostsResponse,
    openapi_extra=openapi_for(AllPostsQuery, "query"),
)
def list_posts(
    query: FeedQuery,
    viewer_id: OptionalIdentityDep,
    db: SessionDep,
    settings: SettingsDep,
) -> PostsResponse:
    """Return a page of the home feed.

    Callers whose token and ``id`` header check out get a personalised page;
    everyone else gets the generic feed.
    """
    logger.info("Responding to GET /posts")
    return get_all_posts(db, query.offset, viewer_id, page_size=settings.posts_page_size)


@router.post(
    "/post",
    response_model=PostResponse,
    openapi_extra=openapi_for(NewPost, "body"),
)
def create_post(identity: VerifiedIdentityDep, payload: PostBody, db: SessionDep) -> PostResponse:
    """Create a post authored by the caller."""
    logger.info("Responding to POST /post")
    return create_new_post(
        db,
        identity.user_id,
        payload.message,
        payload.images,
        payload.anonymous,
        payload.theme_id,
    )


@router.get("/post/{post_id}", response_model=PostResponse)
def read_post(post_id: str, db: SessionDep) -> PostResponse:
    """Return a single post. Publicly readable."""
    logger.info("Responding to GET /post/:postId")
    return get_post(db, post_id)


@router.put(
    "/post/{post_id}",
    response_model=PostResponse,
    openapi_extra=openapi_for(NewPost, "body"),
)
def edit_post(
    post_id: str,
    identity: VerifiedIdentityDep,
    payload: PostBody,
    db: SessionDep,
) -> PostResponse:
    """Replace a post's content. Only its author may do this."""
    logger.info("Responding to PUT /post/:postId")
    return update_post(
        db,
        identity.user_id,
        post_id,
        payload.message,
        payload.images,
        payload.anonymous,
        payload.theme_id,
    )


@router.delete("/post/{post_id}", response_model=EmptyResponse)
def remove_post(post_id: str, identity: VerifiedIdentityDep, db: SessionDep) -> EmptyResponse:
    """Delete a post. Only its author may do this."""
    logger.info("Responding to DELETE /post/:postId")
    delete_post(db, identity.user_id, post_id)
    return EmptyResponse()


@router.post(
    "/post/like/{post_id}",
    response_model=EmptyResponse,
    openapi_extra=openapi_for(LikeRequest, "body"),
)
def toggle_post_like(
    post_id: str,
    identity: VerifiedIdentityDep,
    payload: LikeBody,
    db: SessionDep,
) -> EmptyResponse:
    """Like (``like: true``) or unlike (``like: false``) a post."""
    logger.info("Responding to POST /post/like/:postId")
    like_post(db, identity.user_id, post_id, payload.like)
    return EmptyResponse()
