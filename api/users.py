"""
User API routes.

Route prefix: /api/v1/users
"""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, status

from api.dependencies import get_user_service
from auth.dependencies import get_current_identity
from core.user_service import UserService
from utils.schemas import (
    ApiResponse,
    DeleteResult,
    Identity,
    UserCreate,
    UserPatch,
    UserResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["users"])


@router.get("/me", response_model=ApiResponse[UserResponse])
async def get_my_info(
    identity: Identity = Depends(get_current_identity),
    service: UserService = Depends(get_user_service),
) -> ApiResponse[UserResponse]:
    user = await service.get_current_user(identity)
    return ApiResponse(data=user, message="Fetched current user")


@router.post(
    "",
    response_model=ApiResponse[UserResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_user(
    req: UserCreate,
    service: UserService = Depends(get_user_service),
) -> ApiResponse[UserResponse]:
    """Register a new user (no token required)."""
    user = await service.create(req)
    return ApiResponse(data=user, message="User created")


@router.get("", response_model=ApiResponse[List[UserResponse]])
async def list_users(
    _identity: Identity = Depends(get_current_identity),
    service: UserService = Depends(get_user_service),
) -> ApiResponse[List[UserResponse]]:
    users = await service.find_all()
    return ApiResponse(data=users, message="Fetched users")


@router.get("/{user_id}", response_model=ApiResponse[UserResponse])
async def get_user(
    user_id: str,
    _identity: Identity = Depends(get_current_identity),
    service: UserService = Depends(get_user_service),
) -> ApiResponse[UserResponse]:
    user = await service.find_by_id(user_id)
    return ApiResponse(data=user, message="Fetched user")


@router.patch("/{user_id}", response_model=ApiResponse[UserResponse])
async def update_user(
    user_id: str,
    patch: UserPatch,
    identity: Identity = Depends(get_current_identity),
    service: UserService = Depends(get_user_service),
) -> ApiResponse[UserResponse]:
    logger.debug("User %s updating %s", identity.user_id, user_id)
    user = await service.update(user_id, patch)
    return ApiResponse(data=user, message="User updated")


@router.delete("/{user_id}", response_model=ApiResponse[DeleteResult])
async def delete_user(
    user_id: str,
    identity: Identity = Depends(get_current_identity),
    service: UserService = Depends(get_user_service),
) -> ApiResponse[DeleteResult]:
    logger.debug("User %s deleting %s", identity.user_id, user_id)
    result = await service.remove(user_id)
    return ApiResponse(data=result, message="User deleted")
