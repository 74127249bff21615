import datetime
from pydantic import BaseModel, Field
from typing import Optional

from app.models.transaction import TransactionType
from app.schemas.common_schemas import BudgetSummary, CardSummary, CategorySummary


class TransactionCreate(BaseModel):
    """Schema for creating a new transaction"""

    card_id: int = Field(..., gt=0)
    budget_id: Optional[int] = Field(None, gt=0)
    category_id: Optional[int] = Field(None, gt=0)
    amount: float = Field(..., gt=0, description="Positive magnitude; sign comes from type")
    transaction_type: TransactionType
    date: Optional[datetime.date] = Field(None, description="Defaults to today")
    description: Optional[str] = Field(None, max_length=1000)


class TransactionUpdate(BaseModel):
    """
    Schema for updating a transaction.

    Omitted fields are left unchanged. budget_id and category_id accept an
    explicit null to detach the reference.
    """

    card_id: Optional[int] = Field(None, gt=0)
    budget_id: Optional[int] = Field(None, gt=0)
    category_id: Optional[int] = Field(None, gt=0)
    amount: Optional[float] = Field(None, gt=0)
    transaction_type: Optional[TransactionType] = None
    date: Optional[datetime.date] = None
    description: Optional[str] = Field(None, max_length=1000)


class TransactionResponse(BaseModel):
    """Schema for transaction response"""

    model_config = {"from_attributes": True}

    id: int
    user_id: int
    card_id: int
    budget_id: Optional[int]
    category_id: Optional[int]
    amount: float
    transaction_type: TransactionType
    date: datetime.date
    description: Optional[str]
    created_at: datetime.datetime
    updated_at: datetime.datetime


class TransactionDetailResponse(TransactionResponse):
    """Transaction with resolved reference summaries"""

    card: CardSummary
    budget: Optional[BudgetSummary]
    category: Optional[CategorySummary]


class TransactionListResponse(BaseModel):
    """Schema for list of transactions"""

    transactions: list[TransactionResponse]
    total: int
