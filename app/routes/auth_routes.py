from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_session
from app.models.auth_session import AuthSession
from app.services.auth_service import AuthService
from app.schemas.auth_schemas import (
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    UserResponse,
    UserUpdate,
)

router = APIRouter()
users_router = APIRouter()


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(data: RegisterRequest, db: Session = Depends(get_db)):
    """Register a new user"""
    service = AuthService(db)
    return service.register(data)


@router.post("/login", response_model=TokenResponse)
async def login(data: LoginRequest, db: Session = Depends(get_db)):
    """Exchange email and password for a bearer token"""
    service = AuthService(db)
    session = service.authenticate(data)
    return TokenResponse(access_token=service.issue_token(session), user_id=session.user_id)


@users_router.get("/me", response_model=UserResponse)
async def get_me(
    session: AuthSession = Depends(get_current_session), db: Session = Depends(get_db)
):
    """Get the authenticated user's profile"""
    return AuthService(db).get_user(session)


@users_router.patch("/me", response_model=UserResponse)
async def update_me(
    data: UserUpdate,
    session: AuthSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Update username and/or password"""
    return AuthService(db).update_user(data, session)


@users_router.delete("/me", status_code=status.HTTP_204_NO_CONTENT)
async def delete_me(
    session: AuthSession = Depends(get_current_session), db: Session = Depends(get_db)
):
    """
    Delete the authenticated user and everything they own.

    - Ledgers, transactions, budgets, categories and cards are removed in order
    - Returns 500 with the remaining ids if the cascade could not finish
    """
    AuthService(db).delete_user(session)
    return None
