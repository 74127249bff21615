import logging
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundException, UnauthorizedException, ValidationException
from app.core.ownership import require_session
from app.core.security import (
    create_access_token,
    extract_user_id,
    hash_password,
    verify_password,
)
from app.models.auth_session import AuthSession
from app.models.user import User
from app.repositories.user_repository import UserRepository
from app.schemas.auth_schemas import LoginRequest, RegisterRequest, UserUpdate
from app.services.cascade_service import CascadeService

logger = logging.getLogger(__name__)


class AuthService:
    """
    Authentication provider and user account operations.

    Turns credentials or bearer tokens into an AuthSession; everything
    downstream only ever sees the session's user_id.
    """

    def __init__(self, db: Session):
        self.db = db
        self.user_repo = UserRepository(db)

    def register(self, data: RegisterRequest) -> User:
        """
        Create a new user with a hashed password.

        Raises:
            ValidationException: If the email is already registered
        """
        email = data.email.lower()
        if self.user_repo.get_by_email(email):
            raise ValidationException("Email already registered", field="email")

        user = User(
            email=email,
            password_hash=hash_password(data.password),
            username=data.username,
        )
        user = self.user_repo.create(user)
        logger.info("Registered user user_id=%d", user.id)
        return user

    def authenticate(self, data: LoginRequest) -> AuthSession:
        """
        Verify credentials and open a session.

        Raises:
            UnauthorizedException: If email unknown or password wrong
        """
        user = self.user_repo.get_by_email(data.email)
        if not user or not verify_password(data.password, user.password_hash):
            logger.info("Authentication failed for email=%s", data.email)
            raise UnauthorizedException("Incorrect email or password")
        return AuthSession(user_id=user.id)

    def issue_token(self, session: AuthSession) -> str:
        return create_access_token(session.user_id)

    def current_session(self, token: str) -> AuthSession | None:
        """
        Resolve a bearer token to a session.

        Returns None when the token is invalid or its user no longer exists.
        """
        try:
            user_id = extract_user_id(token)
        except UnauthorizedException as e:
            logger.debug("Rejected token: %s", e)
            return None

        if self.user_repo.get_by_id(user_id) is None:
            return None
        return AuthSession(user_id=user_id)

    def get_user(self, session: AuthSession | None) -> User:
        session = require_session(session)
        user = self.user_repo.get_by_id(session.user_id)
        if not user:
            raise NotFoundException("User not found")
        return user

    def update_user(self, data: UserUpdate, session: AuthSession | None) -> User:
        """Update username and/or password of the session's user"""
        user = self.get_user(session)

        if data.username is not None:
            user.username = data.username
        if data.password is not None:
            user.password_hash = hash_password(data.password)

        return self.user_repo.update(user)

    def delete_user(self, session: AuthSession | None) -> None:
        """Delete the session's user and every record the user owns"""
        user = self.get_user(session)
        CascadeService(self.db).delete_user(user)
