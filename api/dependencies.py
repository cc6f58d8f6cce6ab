"""
FastAPI dependencies (shared across routes).
"""

from __future__ import annotations

from functools import lru_cache

from core.user_service import UserService


@lru_cache()
def get_user_service() -> UserService:
    """One stateless service per process; override in tests."""
    return UserService()
