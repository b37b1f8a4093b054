from __future__ import annotations

from typing import Optional

from carbooking.identity.models import AuthSession
from carbooking.identity.repository import IdentityRepository
from carbooking.identity.schemas import LoginForm, RegisterForm
from carbooking.viewmodels.base import ViewModel, tracks_state


class SessionViewModel(ViewModel):
    def __init__(self, repository: IdentityRepository) -> None:
        super().__init__()
        self.repository = repository
        self.user: Optional[AuthSession] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def is_admin(self) -> bool:
        return self.user is not None and self.user.is_admin

    @property
    def is_user(self) -> bool:
        return self.user is not None and self.user.is_user

    @tracks_state("Failed to load session")
    async def load(self) -> Optional[AuthSession]:
        """Pick up the session stored by an earlier login."""
        self.user = await self.repository.get_current_session()
        return self.user

    @tracks_state("Login failed")
    async def login(self, form: LoginForm) -> AuthSession:
        self.user = await self.repository.login(str(form.email), form.password)
        return self.user

    @tracks_state("Registration failed")
    async def register(self, form: RegisterForm) -> AuthSession:
        self.user = await self.repository.register(
            form.name, str(form.email), form.password, form.phone,
        )
        return self.user

    @tracks_state("Logout failed")
    async def logout(self) -> None:
        await self.repository.logout()
        self.user = None
