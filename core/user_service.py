"""
User service — uniqueness-checked CRUD over the ``users`` table.

Identifying fields (``email``, ``username``) arrive trimmed from the
request schemas and must be unique.  The pre-checks run as two concurrent
reads; the store's unique constraints remain the final authority, and a
violation raised at write time is reported as the same ``ConflictError``.
"""

from __future__ import annotations

import asyncio
import logging
import re
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError

from auth.password import hash_password, verify_password
from config.settings import config
from core.exceptions import ConflictError, NotFoundError, UnauthorizedError
from database.models import User
from database.user_repository import UserRepository
from utils.schemas import DeleteResult, Identity, UserCreate, UserPatch, UserResponse

logger = logging.getLogger(__name__)


def _to_uuid(value: str | uuid.UUID) -> uuid.UUID:
    return uuid.UUID(value) if isinstance(value, str) else value


def _sanitize(user: User) -> UserResponse:
    return UserResponse.model_validate(user)


# matched in order: PostgreSQL DETAIL column, constraint name, SQLite column
_CONFLICT_PATTERNS = (
    re.compile(r"key \((email|username)\)="),
    re.compile(r"\busers_(email|username)_key\b"),
    re.compile(r"unique constraint failed: users\.(email|username)\b"),
)


def _conflict_from_integrity(exc: IntegrityError) -> ConflictError:
    """Map a unique-constraint violation to the field that collided."""
    detail = str(exc.orig).lower()
    for pattern in _CONFLICT_PATTERNS:
        match = pattern.search(detail)
        if match:
            return ConflictError(match.group(1))
    return ConflictError()


class UserService:
    def __init__(
        self,
        repository: Optional[UserRepository] = None,
        bcrypt_rounds: Optional[int] = None,
    ) -> None:
        self._repo = repository or UserRepository()
        self._rounds = bcrypt_rounds or config.bcrypt_rounds

    # ── Queries ──────────────────────────────────────────────────────────

    async def get_current_user(self, identity: Optional[Identity]) -> UserResponse:
        """Return the user the verified ``identity`` refers to."""
        if identity is None or not identity.user_id:
            raise NotFoundError("Current user information not found")
        logger.debug("Getting current user %s", identity.user_id)
        return _sanitize(await self._get_user(identity.user_id))

    async def find_all(self) -> List[UserResponse]:
        users = await self._repo.list_all()
        return [_sanitize(u) for u in users]

    async def find_by_id(self, user_id: str | uuid.UUID) -> UserResponse:
        return _sanitize(await self._get_user(user_id))

    async def find_by_email(self, email: str) -> Optional[User]:
        return await self._repo.find_by_email(email)

    async def find_by_username(self, username: str) -> Optional[User]:
        return await self._repo.find_by_username(username)

    # ── Mutations ────────────────────────────────────────────────────────

    async def create(self, data: UserCreate) -> UserResponse:
        fields = data.model_dump()
        logger.debug("Creating user with username: %s", fields["username"])
        await self._ensure_unique(email=fields["email"], username=fields["username"])

        fields["password"] = await self._hash(fields["password"])
        now = datetime.now(timezone.utc)
        user = User(id=uuid.uuid4(), created_at=now, updated_at=now, **fields)

        try:
            saved = await self._repo.add(user)
        except IntegrityError as exc:
            conflict = _conflict_from_integrity(exc)
            logger.info("Create rejected at write time: %s", conflict.message)
            raise conflict from None

        logger.info("Created user %s (%s)", saved.username, saved.id)
        return _sanitize(saved)

    async def update(self, user_id: str | uuid.UUID, patch: UserPatch) -> UserResponse:
        user = await self._get_user(user_id)
        changes: Dict[str, Any] = patch.supplied()

        # only values that actually change need a uniqueness check
        new_email = changes.get("email")
        new_username = changes.get("username")
        await self._ensure_unique(
            email=new_email if new_email != user.email else None,
            username=new_username if new_username != user.username else None,
        )

        if "password" in changes:
            changes["password"] = await self._hash(changes["password"])

        for name, value in changes.items():
            setattr(user, name, value)
        user.updated_at = datetime.now(timezone.utc)

        try:
            saved = await self._repo.update(user)
        except IntegrityError as exc:
            conflict = _conflict_from_integrity(exc)
            logger.info("Update of %s rejected at write time: %s", user.id, conflict.message)
            raise conflict from None

        logger.info("Updated user %s (fields: %s)", saved.id, ", ".join(sorted(changes)))
        return _sanitize(saved)

    async def remove(self, user_id: str | uuid.UUID) -> DeleteResult:
        user = await self._get_user(user_id)
        await self._repo.delete(user)
        logger.info("Deleted user %s", user.id)
        return DeleteResult(deleted=True)

    # ── Login ────────────────────────────────────────────────────────────

    async def authenticate(self, email: str, password: str) -> UserResponse:
        """Check credentials; any mismatch raises one generic error."""
        user = await self._repo.find_by_email(email.strip())
        if user is None or not await asyncio.to_thread(
            verify_password, password, user.password
        ):
            raise UnauthorizedError("Invalid email or password")
        return _sanitize(user)

    # ── Internals ────────────────────────────────────────────────────────

    async def _get_user(self, user_id: str | uuid.UUID) -> User:
        try:
            uid = _to_uuid(user_id)
        except ValueError:
            raise NotFoundError() from None
        user = await self._repo.find_by_id(uid)
        if user is None:
            raise NotFoundError()
        return user

    async def _ensure_unique(
        self,
        email: Optional[str] = None,
        username: Optional[str] = None,
    ) -> None:
        """Concurrently look up the given values; raise on the first collision."""
        by_email, by_username = await asyncio.gather(
            self._repo.find_by_email(email) if email is not None else _none(),
            self._repo.find_by_username(username) if username is not None else _none(),
        )
        if by_email is not None:
            logger.info("Email conflict for %s", email)
            raise ConflictError("email")
        if by_username is not None:
            logger.info("Username conflict for %s", username)
            raise ConflictError("username")

    async def _hash(self, password: str) -> str:
        return await asyncio.to_thread(hash_password, password, self._rounds)


async def _none() -> None:
    return None
