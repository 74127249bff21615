"""Authenticated session identity passed into every service call."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AuthSession:
    """
    Authenticated principal for one request.

    Produced by the auth service from a verified bearer token and passed
    explicitly into every service operation. Services never look up the
    current user from ambient state.

    Attributes:
        user_id: Internal id of the authenticated User
    """

    user_id: int

    def owns(self, owner_id: int) -> bool:
        """Check whether this session's user is the given owner."""
        return self.user_id == owner_id

    def __repr__(self) -> str:
        return f"<AuthSession(user_id={self.user_id})>"
