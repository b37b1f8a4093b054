from __future__ import annotations

import secrets
from typing import List, Optional

from loguru import logger

from carbooking.fixtures import SeedData, default_seed
from carbooking.identity.enums import UserRole
from carbooking.identity.models import AuthSession, User
from carbooking.storage.adapter import Storage
from carbooking.storage.repository import CollectionRepository
from carbooking.utils import (
    AccountDeactivated,
    DuplicateEmail,
    InvalidCredentials,
    generate_id,
    utcnow,
)


def issue_token(user_id: str) -> str:
    """Opaque bearer token. Tokens never expire."""
    return f"token_{user_id}_{secrets.token_urlsafe(16)}"


class IdentityRepository(CollectionRepository[User]):
    """User records plus the single "current session" slot."""

    model = User

    def __init__(self, storage: Storage, seed: Optional[SeedData] = None) -> None:
        super().__init__(
            storage,
            storage.keys.users,
            lambda: (seed if seed is not None else default_seed()).users,
        )

    # ---- Users ----
    async def list_users(self) -> List[User]:
        return await self._load()

    async def get_user_by_email(self, email: str) -> Optional[User]:
        users = await self._load()
        return next((u for u in users if u.email == email), None)

    # ---- Authentication ----
    async def register(
        self,
        name: str,
        email: str,
        password: str,
        phone: Optional[str] = None,
    ) -> AuthSession:
        """Create a regular user and log them in."""
        users = await self._load()
        if any(u.email == email for u in users):
            raise DuplicateEmail("Email already registered")

        now = utcnow()
        user = User(
            id=generate_id("user"),
            name=name,
            email=email,
            password=password,
            phone=phone,
            role=UserRole.USER,
            is_active=True,
            created_at=now,
            updated_at=now,
        )
        users.append(user)
        await self._save(users)
        logger.info("Registered user {}", user.id)
        return await self._start_session(user)

    async def login(self, email: str, password: str) -> AuthSession:
        users = await self._load()
        user = next(
            (u for u in users if u.email == email and u.password == password),
            None,
        )
        if user is None:
            raise InvalidCredentials("Invalid email or password")
        if not user.is_active:
            raise AccountDeactivated("Account is deactivated. Please contact support.")
        return await self._start_session(user)

    async def logout(self) -> None:
        await self.storage.remove(self.storage.keys.auth_user)
        await self.storage.remove(self.storage.keys.auth_token)

    async def get_current_session(self) -> Optional[AuthSession]:
        return await self.storage.get(self.storage.keys.auth_user, AuthSession)

    async def get_current_token(self) -> Optional[str]:
        return await self.storage.get(self.storage.keys.auth_token, str)

    async def is_authenticated(self) -> bool:
        return bool(await self.get_current_token())

    async def has_role(self, role: UserRole) -> bool:
        session = await self.get_current_session()
        return session is not None and session.role == role

    async def _start_session(self, user: User) -> AuthSession:
        # last login wins: the previous session is overwritten
        session = AuthSession.for_user(user, issue_token(user.id))
        await self.storage.set(self.storage.keys.auth_user, session)
        await self.storage.set(self.storage.keys.auth_token, session.token)
        logger.info("Started session for user {}", user.id)
        return session
