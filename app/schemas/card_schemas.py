from datetime import datetime
from pydantic import BaseModel, Field


class CardCreate(BaseModel):
    """Schema for creating a new card"""

    name: str = Field(..., min_length=1, max_length=255)


class CardUpdate(BaseModel):
    """Schema for updating a card (balance is derived, never written)"""

    name: str | None = Field(None, min_length=1, max_length=255)


class CardResponse(BaseModel):
    """Schema for card response"""

    id: int
    user_id: int
    name: str
    balance: float
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class CardDetailResponse(CardResponse):
    transaction_count: int


class CardListResponse(BaseModel):
    """Schema for list of cards"""

    cards: list[CardResponse]
    total: int
