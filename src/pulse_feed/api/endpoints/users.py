# src/pulse_feed/api/endpoints/users.py
"""User profile endpoints."""

from __future__ import annotations

from fastapi import APIRouter, File, UploadFile, status

from pulse_feed.api.dependencies import AvatarStorageDep, CurrentUserIdDep, FeedServiceDep
from pulse_feed.schemas.common import ErrorResponse
from pulse_feed.schemas.post import UserProfileResponse
from pulse_feed.schemas.user import PublicUser

router = APIRouter(prefix="/users", tags=["users"])


@router.get(
    "/me",
    response_model=PublicUser,
    responses={
        status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse},
        status.HTTP_403_FORBIDDEN: {"model": ErrorResponse},
    },
)
async def get_my_profile(user_id: CurrentUserIdDep, feed: FeedServiceDep) -> PublicUser:
    """Return the authenticated user's public record."""
    return feed.get_own_profile(user_id)


@router.post(
    "/picture",
    response_model=PublicUser,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse},
        status.HTTP_403_FORBIDDEN: {"model": ErrorResponse},
    },
)
async def upload_profile_picture(
    user_id: CurrentUserIdDep,
    feed: FeedServiceDep,
    storage: AvatarStorageDep,
    profile_picture: UploadFile = File(..., alias="profilePicture"),
) -> PublicUser:
    """Replace the authenticated user's profile picture with an uploaded image."""
    return feed.set_avatar(user_id, profile_picture, storage)


@router.get(
    "/{username}",
    response_model=UserProfileResponse,
    responses={status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)
async def get_user_profile(username: str, feed: FeedServiceDep) -> UserProfileResponse:
    """Return a user's public record and the posts they authored, newest first."""
    return feed.get_user_profile(username)
