# src/blog_stage/api/endpoints/auth.py
"""Authentication endpoints: e-mail/password sign-up, verification and sign-in."""

from __future__ import annotations

from fastapi import APIRouter, Query, status

from blog_stage.api.dependencies import CurrentUserDep, UserServiceDep
from blog_stage.models import User
from blog_stage.schemas.common import ErrorResponse
from blog_stage.schemas.user import (
    SignInRequest,
    SignUpRequest,
    TokenResponse,
    UserResponse,
)

router = APIRouter(
    prefix="/api/auth",
    tags=["authentication"],
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}},
)


@router.post(
    "/sign-up/email",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Sign up with email and password",
)
def sign_up(payload: SignUpRequest, service: UserServiceDep) -> User:
    """Register an account; a verification link is mailed when required."""
    return service.register(payload)


@router.get(
    "/verify-email",
    response_model=TokenResponse,
    summary="Confirm an email address",
)
async def verify_email(
    service: UserServiceDep,
    token: str = Query(..., min_length=1),
) -> TokenResponse:
    """Mark the address verified and sign the user in."""
    user, access_token = service.verify_email(token)
    return TokenResponse(token=access_token, user=UserResponse.model_validate(user))


@router.post(
    "/sign-in/email",
    response_model=TokenResponse,
    summary="Sign in with email and password",
)
def sign_in(payload: SignInRequest, service: UserServiceDep) -> TokenResponse:
    user, access_token = service.authenticate(payload)
    return TokenResponse(token=access_token, user=UserResponse.model_validate(user))


@router.get("/get-session", response_model=UserResponse)
async def get_session(current_user: CurrentUserDep) -> User:
    """Return the account behind the bearer token."""
    return current_user
