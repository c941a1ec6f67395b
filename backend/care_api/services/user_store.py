from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from care_api.exceptions import DuplicateEmail
from care_api.models.user import User


class CredentialStore:
    """Persistence for user accounts, as consumed by the auth flows.

    Each call runs in its own short-lived session so a slow hash or token step
    never holds a pooled connection.
    """

    def __init__(self, sessions: async_sessionmaker[AsyncSession]):
        self._sessions = sessions

    async def find_by_email(self, email: str) -> Optional[User]:
        async with self._sessions() as session:
            result = await session.execute(
                select(User).where(func.lower(User.email) == email.strip().lower())
            )
            return result.scalar_one_or_none()

    async def get(self, user_id: int) -> Optional[User]:
        async with self._sessions() as session:
            return await session.get(User, user_id)

    async def create(self, email: str, password_hash: str, name: Optional[str] = None) -> User:
        """Insert a new account. Raises DuplicateEmail if the email is taken (any case)."""
        user = User(email=email.strip(), password=password_hash, name=name)
        async with self._sessions() as session:
            session.add(user)
            try:
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                raise DuplicateEmail() from e
            await session.refresh(user)
            return user

    async def touch_last_login(self, user_id: int) -> None:
        async with self._sessions() as session:
            await session.execute(
                update(User).where(User.id == user_id).values(last_login=datetime.now(timezone.utc))
            )
            await session.commit()

    async def set_active(self, user_id: int, is_active: bool) -> None:
        """Toggle an account's active flag (administrative use)."""
        async with self._sessions() as session:
            await session.execute(update(User).where(User.id == user_id).values(is_active=is_active))
            await session.commit()
