"""
Bearer token creation and verification.

Tokens are HS256 JWTs signed with ``config.jwt_secret``
(env var: ``JWT_SECRET``) and carry ``sub``, ``iat`` and ``exp``.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional

import jwt
from pydantic import ValidationError

from config.settings import config
from core.exceptions import UnauthorizedError
from utils.schemas import Identity

logger = logging.getLogger(__name__)

INVALID_TOKEN_MESSAGE = "Invalid or expired token"


def create_token(
    subject: str,
    *,
    expires_in: Optional[int] = None,
    secret: Optional[str] = None,
    **claims: Any,
) -> str:
    """Create a signed token for ``subject`` with extra ``claims``."""
    now = int(time.time())
    lifetime = config.jwt_expiry_seconds if expires_in is None else expires_in
    payload: Dict[str, Any] = {
        **claims,
        "sub": subject,
        "iat": now,
        "exp": now + lifetime,
    }
    return jwt.encode(
        payload,
        secret or config.jwt_secret,
        algorithm=config.jwt_algorithm,
    )


def verify_token(token: str, *, secret: Optional[str] = None) -> Identity:
    """
    Verify signature and expiry, returning the decoded ``Identity``.

    Every failure raises the same ``UnauthorizedError`` so callers cannot
    tell which check rejected the token.
    """
    try:
        payload = jwt.decode(
            token,
            secret or config.jwt_secret,
            algorithms=[config.jwt_algorithm],
            options={"require": ["exp"]},
        )
    except jwt.PyJWTError as exc:
        logger.debug("Token rejected: %s", exc)
        raise UnauthorizedError(INVALID_TOKEN_MESSAGE) from None

    subject = payload.get("sub") or payload.get("id")
    if not subject:
        logger.debug("Token rejected: no subject claim")
        raise UnauthorizedError(INVALID_TOKEN_MESSAGE)

    try:
        return Identity(
            user_id=str(subject),
            username=payload.get("username"),
            email=payload.get("email"),
            iat=payload.get("iat"),
            exp=payload.get("exp"),
        )
    except ValidationError as exc:
        logger.debug("Token rejected: malformed payload (%s)", exc)
        raise UnauthorizedError(INVALID_TOKEN_MESSAGE) from None
