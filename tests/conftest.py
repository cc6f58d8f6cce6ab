"""
Shared fixtures: an in-memory ``users`` store and a wired-up service.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional

import pytest
from sqlalchemy.exc import IntegrityError

from core.user_service import UserService
from database.models import User


def _copy(user: Optional[User]) -> Optional[User]:
    if user is None:
        return None
    return User(**{col.key: getattr(user, col.key) for col in User.__table__.columns})


class InMemoryUserRepository:
    """Stand-in for ``UserRepository`` enforcing the same unique constraints.

    Rows are stored and handed out as copies, so a rejected write leaves the
    stored row untouched, as a rolled-back transaction would.
    """

    def __init__(self) -> None:
        self.rows: Dict[uuid.UUID, User] = {}

    def _check_unique(self, user: User) -> None:
        for other in self.rows.values():
            if other.id == user.id:
                continue
            if other.email == user.email:
                raise IntegrityError(
                    "INSERT INTO users", {},
                    Exception(
                        'duplicate key value violates unique constraint "users_email_key"\n'
                        f"DETAIL:  Key (email)=({user.email}) already exists."
                    ),
                )
            if other.username == user.username:
                raise IntegrityError(
                    "INSERT INTO users", {},
                    Exception(
                        'duplicate key value violates unique constraint "users_username_key"\n'
                        f"DETAIL:  Key (username)=({user.username}) already exists."
                    ),
                )

    async def find_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        return _copy(self.rows.get(user_id))

    async def find_by_email(self, email: str) -> Optional[User]:
        return _copy(next((u for u in self.rows.values() if u.email == email), None))

    async def find_by_username(self, username: str) -> Optional[User]:
        return _copy(next((u for u in self.rows.values() if u.username == username), None))

    async def list_all(self) -> List[User]:
        return [_copy(u) for u in sorted(self.rows.values(), key=lambda u: u.created_at)]

    async def add(self, user: User) -> User:
        self._check_unique(user)
        if user.created_at is None:
            user.created_at = datetime.now(timezone.utc)
        self.rows[user.id] = _copy(user)
        return user

    async def update(self, user: User) -> User:
        self._check_unique(user)
        self.rows[user.id] = _copy(user)
        return user

    async def delete(self, user: User) -> None:
        self.rows.pop(user.id, None)


@pytest.fixture
def repo() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def service(repo) -> UserService:
    # lowest bcrypt cost keeps the suite fast
    return UserService(repository=repo, bcrypt_rounds=4)
