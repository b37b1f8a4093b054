from __future__ import annotations

from typing import Optional

from fastapi import Depends, HTTPException, status

from carbooking.identity.dependencies import get_current_session
from carbooking.identity.models import AuthSession

LOGIN_PATH = "/login"
HOME_PATH = "/"
ADMIN_PATH = "/admin"


def route_redirect(
    session: Optional[AuthSession],
    require_admin: bool = False,
    require_user: bool = False,
) -> Optional[str]:
    """
    Where a guarded route sends the visitor, or None when access is allowed.

    Anonymous visitors go to the login view. Non-admins on admin routes go
    home, admins on user routes go to the admin view.
    """
    if session is None:
        return LOGIN_PATH
    if require_admin and not session.is_admin:
        return HOME_PATH
    if require_user and not session.is_user:
        return ADMIN_PATH
    return None


def _guard(
    session: Optional[AuthSession],
    require_admin: bool = False,
    require_user: bool = False,
) -> AuthSession:
    target = route_redirect(session, require_admin, require_user)
    if target is None:
        return session  # type: ignore[return-value]
    if target == LOGIN_PATH:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer", "Location": target},
        )
    raise HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="Admin privileges required" if require_admin else "User account required",
        headers={"Location": target},
    )


def require_session(
    session: Optional[AuthSession] = Depends(get_current_session),
) -> AuthSession:
    """Dependency to require any logged-in account"""
    return _guard(session)


def require_user(
    session: Optional[AuthSession] = Depends(get_current_session),
) -> AuthSession:
    """Dependency to require a customer account"""
    return _guard(session, require_user=True)


def require_admin(
    session: Optional[AuthSession] = Depends(get_current_session),
) -> AuthSession:
    """Dependency to require an admin account"""
    return _guard(session, require_admin=True)
