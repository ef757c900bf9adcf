# src/pulse_feed/api/endpoints/posts.py
"""Post-related endpoints for the Pulse Feed API."""

from fastapi import APIRouter, status

from pulse_feed.api.dependencies import CurrentUserIdDep, FeedServiceDep
from pulse_feed.schemas.common import ErrorResponse
from pulse_feed.schemas.post import LikeResponse, PostCreate, ResolvedPost

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("", response_model=list[ResolvedPost])
async def list_posts(feed: FeedServiceDep) -> list[ResolvedPost]:
    """List every post, newest first, with authors and reposted originals resolved."""
    return feed.list_feed()


@router.post(
    "",
    response_model=ResolvedPost,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse},
        status.HTTP_403_FORBIDDEN: {"model": ErrorResponse},
    },
)
async def create_post(
    post_data: PostCreate,
    user_id: CurrentUserIdDep,
    feed: FeedServiceDep,
) -> ResolvedPost:
    """Publish a post as the authenticated user and announce it to live viewers."""
    return await feed.create_post(user_id, post_data.content)


@router.post(
    "/{post_id}/like",
    response_model=LikeResponse,
    responses={status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)
async def like_post(post_id: int, feed: FeedServiceDep) -> LikeResponse:
    """Add a like to a post. Open to anonymous callers; repeated likes all count."""
    likes = await feed.like_post(post_id)
    return LikeResponse(likes=likes)


@router.post(
    "/{post_id}/repost",
    response_model=ResolvedPost,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse},
        status.HTTP_403_FORBIDDEN: {"model": ErrorResponse},
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    },
)
async def repost_post(
    post_id: int,
    user_id: CurrentUserIdDep,
    feed: FeedServiceDep,
) -> ResolvedPost:
    """Repost an existing post as the authenticated user."""
    return await feed.create_repost(user_id, post_id)
