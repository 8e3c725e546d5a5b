"""
Account API endpoints.

Signup takes a multipart form with the profile image; every other endpoint
takes JSON. Errors are raised as module exceptions and rendered by the
application's error handlers.
"""

import asyncio
import os
import shutil
import tempfile
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from api.dependencies import get_auth_service

from .interfaces import IAuthService
from .models import (
    AuthResponse,
    ForgotPasswordRequest,
    LoginRequest,
    MessageResponse,
    ResetPasswordRequest,
    SendOTPRequest,
    SignupRequest,
    StatusMessageResponse,
    VerifyOTPRequest,
)

router = APIRouter()


@asynccontextmanager
async def spooled_upload(upload: Optional[UploadFile]) -> AsyncIterator[Optional[str]]:
    """Write an upload to a temporary file and yield its path; the file is removed on exit."""
    if upload is None or not upload.filename:
        yield None
        return

    suffix = Path(upload.filename).suffix
    fd, path = tempfile.mkstemp(suffix=suffix)
    try:
        with os.fdopen(fd, "wb") as tmp:
            await asyncio.to_thread(shutil.copyfileobj, upload.file, tmp)
        yield path
    finally:
        os.unlink(path)


@router.post("/signup", response_model=AuthResponse)
async def signup(
    first_name: str = Form(..., alias="firstName"),
    last_name: str = Form(..., alias="lastName"),
    user_bio: str = Form("", alias="userBio"),
    user_email: str = Form(..., alias="userEmail"),
    user_name: str = Form(..., alias="userName"),
    user_password: str = Form(..., alias="userPassword"),
    profile_image: Optional[UploadFile] = File(None, alias="profileImage"),
    service: IAuthService = Depends(get_auth_service),
) -> AuthResponse:
    """
    Create an account.

    Expects a multipart form with the profile fields and a ``profileImage``
    file. Returns the new user and an access token valid for one hour.
    """
    request = SignupRequest(
        first_name=first_name,
        last_name=last_name,
        user_bio=user_bio,
        user_email=user_email,
        user_name=user_name,
        user_password=user_password,
    )
    async with spooled_upload(profile_image) as image_path:
        image_name = profile_image.filename if profile_image else None
        return await service.signup(request, image_path, image_name)


@router.post("/login", response_model=AuthResponse)
async def login(
    request: LoginRequest,
    service: IAuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Exchange email and password for an access token."""
    return await service.login(request)


@router.post("/forgot-password", response_model=StatusMessageResponse)
async def forgot_password(
    request: ForgotPasswordRequest,
    service: IAuthService = Depends(get_auth_service),
) -> StatusMessageResponse:
    """Email a password reset link."""
    return await service.forgot_password(request.email)


@router.post("/reset-password/{token}", response_model=MessageResponse)
async def reset_password(
    token: str,
    request: ResetPasswordRequest,
    service: IAuthService = Depends(get_auth_service),
) -> MessageResponse:
    """Set a new password using the token from a reset link."""
    return await service.reset_password(token, request.new_password)


@router.post("/send-otp", response_model=StatusMessageResponse)
async def send_otp(
    request: SendOTPRequest,
    service: IAuthService = Depends(get_auth_service),
) -> StatusMessageResponse:
    """Email a six digit verification code."""
    return await service.send_otp(request.user_email)


@router.post("/verify-otp", response_model=StatusMessageResponse)
async def verify_otp(
    request: VerifyOTPRequest,
    service: IAuthService = Depends(get_auth_service),
) -> StatusMessageResponse:
    """Check a verification code. A code can be used once."""
    return await service.verify_otp(request.user_email, request.otp)
