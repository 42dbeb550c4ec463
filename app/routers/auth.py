"""
EarthSafe API - Users Router

Registration, login, token refresh, profile and password reset.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_async_session
from app.dependencies import get_current_user
from app.models.user import User
from app.schemas.auth import (
    AuthResponse,
    ForgotPasswordRequest,
    MessageResponse,
    ProfileUpdate,
    RefreshTokenRequest,
    ResetPasswordRequest,
    TokenResponse,
    UserLogin,
    UserRegister,
    UserResponse,
)
from app.services.auth_service import AuthService


router = APIRouter(prefix="/users", tags=["Users"])


def _auth_response(user: User, access_token: str, refresh_token: str) -> AuthResponse:
    return AuthResponse(
        user=UserResponse.model_validate(user),
        access_token=access_token,
        refresh_token=refresh_token,
        expires_in=AuthService.token_expires_in(),
    )


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
async def register(
    request: UserRegister,
    db: AsyncSession = Depends(get_async_session),
):
    user, access_token, refresh_token = await AuthService(db).register_user(request)
    return _auth_response(user, access_token, refresh_token)


@router.post("/login", response_model=AuthResponse, summary="Log in with email and password")
async def login(
    request: UserLogin,
    db: AsyncSession = Depends(get_async_session),
):
    user, access_token, refresh_token = await AuthService(db).login(request.email, request.password)
    return _auth_response(user, access_token, refresh_token)


@router.post("/refresh-token", response_model=TokenResponse, summary="Rotate the token pair")
async def refresh_token(
    request: RefreshTokenRequest,
    db: AsyncSession = Depends(get_async_session),
):
    _, access_token, new_refresh_token = await AuthService(db).refresh(request.refresh_token)
    return TokenResponse(
        access_token=access_token,
        refresh_token=new_refresh_token,
        expires_in=AuthService.token_expires_in(),
    )


@router.post("/logout", response_model=MessageResponse)
async def logout(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    await AuthService(db).logout(current_user)
    return MessageResponse(message="Logged out successfully")


@router.get("/profile", response_model=UserResponse)
async def get_profile(current_user: User = Depends(get_current_user)):
    return current_user


@router.put("/profile", response_model=UserResponse)
async def update_profile(
    request: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
):
    return await AuthService(db).update_profile(current_user, request)


@router.post(
    "/forgot-password",
    response_model=MessageResponse,
    description="Always returns the same message so account existence is not revealed.",
)
async def forgot_password(
    request: ForgotPasswordRequest,
    db: AsyncSession = Depends(get_async_session),
):
    await AuthService(db).request_password_reset(request.email)
    return MessageResponse(
        message="If an account exists for this email, password reset instructions have been sent"
    )


@router.post("/reset-password", response_model=MessageResponse)
async def reset_password(
    request: ResetPasswordRequest,
    db: AsyncSession = Depends(get_async_session),
):
    await AuthService(db).reset_password(request.token, request.new_password)
    return MessageResponse(message="Password has been reset successfully")
