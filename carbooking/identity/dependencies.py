from __future__ import annotations

from typing import Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer

from carbooking.identity.models import AuthSession
from carbooking.identity.repository import IdentityRepository
from carbooking.web.dependencies import get_identity_repository

# --- OAuth2 Scheme ---
# Missing tokens are handled by the route guards, not by the scheme
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


async def get_current_session(
    token: Optional[str] = Depends(oauth2_scheme),
    repository: IdentityRepository = Depends(get_identity_repository),
) -> Optional[AuthSession]:
    """
    The stored session, if the bearer token is the one issued by the last login.

    Only one session exists at a time, so an older token no longer resolves.
    """
    if not token:
        return None
    if token != await repository.get_current_token():
        return None
    session = await repository.get_current_session()
    if session is None or session.token != token:
        return None
    return session
