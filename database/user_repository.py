"""
Repository-style CRUD access to the ``users`` table.

Every call opens its own short-lived session from the factory, so
independent reads can be awaited concurrently (e.g. the email and
username uniqueness checks).  Writes commit before returning.
"""

from __future__ import annotations

import logging
import uuid
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from database.models import User
from database.session import async_session_factory, session_scope

logger = logging.getLogger(__name__)


class UserRepository:
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession] = async_session_factory,
    ) -> None:
        self._session_factory = session_factory

    async def find_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        async with session_scope(self._session_factory) as session:
            return await session.get(User, user_id)

    async def find_by_email(self, email: str) -> Optional[User]:
        async with session_scope(self._session_factory) as session:
            result = await session.execute(select(User).where(User.email == email))
            return result.scalar_one_or_none()

    async def find_by_username(self, username: str) -> Optional[User]:
        async with session_scope(self._session_factory) as session:
            result = await session.execute(
                select(User).where(User.username == username)
            )
            return result.scalar_one_or_none()

    async def list_all(self) -> List[User]:
        async with session_scope(self._session_factory) as session:
            result = await session.execute(select(User).order_by(User.created_at.asc()))
            return list(result.scalars().all())

    async def add(self, user: User) -> User:
        """Insert a new row.  Raises ``IntegrityError`` on a unique violation."""
        async with session_scope(self._session_factory) as session:
            session.add(user)
            await session.flush()
            await session.refresh(user)
        return user

    async def update(self, user: User) -> User:
        """Persist changes made to a detached ``User``."""
        async with session_scope(self._session_factory) as session:
            merged = await session.merge(user)
            await session.flush()
            await session.refresh(merged)
        return merged

    async def delete(self, user: User) -> None:
        async with session_scope(self._session_factory) as session:
            await session.execute(delete(User).where(User.id == user.id))
        logger.debug("Deleted users row %s", user.id)
