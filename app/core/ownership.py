"""Ownership guard: a flat owner-equality check, no role hierarchy."""

from app.core.exceptions import ForbiddenException
from app.models.auth_session import AuthSession


def authorize(session: AuthSession | None, owner_id: int) -> bool:
    """Allow iff a session is present and its user owns the entity."""
    return session is not None and session.owns(owner_id)


def require_session(session: AuthSession | None) -> AuthSession:
    """
    Ensure an authenticated session is present.

    Raises:
        ForbiddenException: If no session is attached
    """
    if session is None:
        raise ForbiddenException("Authentication required")
    return session


def require_owner(session: AuthSession | None, owner_id: int, resource: str = "Resource") -> None:
    """
    Ensure the session's user owns the entity.

    Raises:
        ForbiddenException: If session is absent or owner differs
    """
    if not authorize(session, owner_id):
        raise ForbiddenException(f"{resource} belongs to another user")
