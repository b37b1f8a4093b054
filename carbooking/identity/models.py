from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from carbooking.identity.enums import UserRole


class UserBase(BaseModel):
    id: str
    name: str
    email: str
    phone: Optional[str] = None
    role: UserRole = UserRole.USER
    is_active: bool = True
    created_at: datetime
    updated_at: datetime


class User(UserBase):
    # stored and compared in plaintext
    password: str


class AuthSession(UserBase):
    """Point-in-time copy of a user, minus the password, plus a bearer token."""

    token: str

    @classmethod
    def for_user(cls, user: User, token: str) -> "AuthSession":
        return cls(**user.model_dump(exclude={"password"}), token=token)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def is_user(self) -> bool:
        return self.role == UserRole.USER
