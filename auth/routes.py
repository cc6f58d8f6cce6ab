"""
Auth API routes — login.

Route prefix: /api/v1/auth
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from api.dependencies import get_user_service
from auth.jwt import create_token
from core.user_service import UserService
from utils.schemas import ApiResponse, LoginRequest, TokenResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/login", response_model=ApiResponse[TokenResponse])
async def login(
    req: LoginRequest,
    service: UserService = Depends(get_user_service),
) -> ApiResponse[TokenResponse]:
    """Login with email + password."""
    user = await service.authenticate(req.email, req.password)
    token = create_token(str(user.id), username=user.username, email=user.email)
    logger.info("Login: %s (%s)", user.username, user.id)
    return ApiResponse(
        data=TokenResponse(access_token=token, user=user),
        message="Login successful",
    )
