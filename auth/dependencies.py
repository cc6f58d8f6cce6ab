"""
FastAPI dependencies for authentication.

``get_current_identity`` is the request guard: it runs before the route
handler and yields the verified ``Identity``, which handlers pass on
explicitly to the service layer.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from auth.jwt import verify_token
from core.exceptions import UnauthorizedError
from utils.schemas import Identity

# auto_error=False so a missing header raises our own 401 envelope
_bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
) -> Identity:
    """
    Extract and verify the Bearer token, returning the caller's identity.

    A missing header, a non-Bearer scheme and an invalid token all raise
    ``UnauthorizedError``.
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Missing Bearer token")
    return verify_token(credentials.credentials)
