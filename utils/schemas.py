"""
Pydantic schemas for requests, responses and the authenticated identity.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Annotated, Any, Dict, Generic, Optional, TypeVar

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator

T = TypeVar("T")


# ═══════════════════════════════════════════════════════════════════════════════
# Envelope
# ═══════════════════════════════════════════════════════════════════════════════


class ApiResponse(BaseModel, Generic[T]):
    success: bool = True
    message: str = ""
    data: Optional[T] = None


# ═══════════════════════════════════════════════════════════════════════════════
# Identity
# ═══════════════════════════════════════════════════════════════════════════════


class Identity(BaseModel):
    """Caller identity decoded from a verified bearer token."""

    user_id: str
    username: Optional[str] = None
    email: Optional[str] = None
    iat: Optional[int] = None
    exp: Optional[int] = None


# ═══════════════════════════════════════════════════════════════════════════════
# Users
# ═══════════════════════════════════════════════════════════════════════════════


def _strip(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


# trimmed before the length limits apply
Trimmed = BeforeValidator(_strip)


class UserCreate(BaseModel):
    username: Annotated[str, Trimmed] = Field(..., min_length=2, max_length=64)
    email: Annotated[str, Trimmed] = Field(..., min_length=5, max_length=255)
    password: str = Field(..., min_length=4, max_length=128)
    full_name: Optional[str] = Field(None, max_length=128)
    phone_number: Optional[str] = Field(None, max_length=32)
    avatar_url: Optional[str] = Field(None, max_length=512)


class UserPatch(BaseModel):
    """
    Partial update.

    Only fields present in the request body are applied; ``supplied()``
    tells an omitted field apart from one explicitly set to ``null``.
    Identifying fields and the password cannot be cleared.
    """

    username: Annotated[Optional[str], Trimmed] = Field(None, min_length=2, max_length=64)
    email: Annotated[Optional[str], Trimmed] = Field(None, min_length=5, max_length=255)
    password: Optional[str] = Field(None, min_length=4, max_length=128)
    full_name: Optional[str] = Field(None, max_length=128)
    phone_number: Optional[str] = Field(None, max_length=32)
    avatar_url: Optional[str] = Field(None, max_length=512)

    @field_validator("username", "email", "password")
    @classmethod
    def _not_null(cls, value: Optional[str]) -> str:
        if value is None:
            raise ValueError("field cannot be null")
        return value

    def supplied(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    username: str
    email: str
    full_name: Optional[str] = None
    phone_number: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class DeleteResult(BaseModel):
    deleted: bool


# ═══════════════════════════════════════════════════════════════════════════════
# Auth
# ═══════════════════════════════════════════════════════════════════════════════


class LoginRequest(BaseModel):
    email: str
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
