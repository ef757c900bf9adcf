# src/pulse_feed/api/endpoints/auth.py
"""Authentication endpoints for the Pulse Feed API."""

from __future__ import annotations

from fastapi import APIRouter, status

from pulse_feed.api.dependencies import AuthServiceDep
from pulse_feed.schemas.common import ErrorResponse
from pulse_feed.schemas.user import AuthResponse, LoginRequest, RegisterRequest

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post(
    "/register",
    summary="Register a new account",
    status_code=status.HTTP_201_CREATED,
    response_model=AuthResponse,
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}},
)
def register_user(payload: RegisterRequest, auth_service: AuthServiceDep) -> AuthResponse:
    """Create an account and return a bearer token with the public user record."""
    return auth_service.register(payload)


@router.post(
    "/login",
    summary="Exchange username and password for a bearer token",
    status_code=status.HTTP_200_OK,
    response_model=AuthResponse,
    responses={status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse}},
)
def login_user(payload: LoginRequest, auth_service: AuthServiceDep) -> AuthResponse:
    """Authenticate with username and password."""
    return auth_service.login(payload)
