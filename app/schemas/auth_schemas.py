from datetime import datetime
from pydantic import BaseModel, EmailStr, Field


class RegisterRequest(BaseModel):
    """Schema for registering a new user"""

    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    username: str = Field(..., min_length=1, max_length=255)


class LoginRequest(BaseModel):
    """Schema for exchanging credentials for a token"""

    email: EmailStr
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: int


class UserUpdate(BaseModel):
    """Schema for updating the authenticated user"""

    username: str | None = Field(None, min_length=1, max_length=255)
    password: str | None = Field(None, min_length=8, max_length=128)


class UserResponse(BaseModel):
    """Schema for user response (never includes the credential)"""

    model_config = {"from_attributes": True}

    id: int
    email: str
    username: str
    created_at: datetime
    updated_at: datetime
