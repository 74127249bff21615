from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from app.database import get_db
from app.models.auth_session import AuthSession
from app.services.auth_service import AuthService

security = HTTPBearer()


async def get_current_session(
    credentials: HTTPAuthorizationCredentials = Depends(security), db: Session = Depends(get_db)
) -> AuthSession:
    """
    FastAPI dependency to validate JWT and build the request's session.

    Flow:
    1. Extract token from Authorization: Bearer <token>
    2. Validate JWT using SECRET_KEY
    3. Extract user id from 'sub' claim
    4. Confirm the user still exists
    5. Return AuthSession for use in endpoints

    Raises:
        HTTPException 401: If token invalid, expired, or its user was deleted
    """
    session = AuthService(db).current_session(credentials.credentials)
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return session
