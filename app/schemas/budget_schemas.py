import datetime
from typing import Optional
from pydantic import BaseModel, Field

from app.schemas.common_schemas import CardSummary, CategorySummary


class BudgetCreate(BaseModel):
    """Schema for creating a new budget"""

    name: str = Field(..., min_length=1, max_length=255)
    start_date: datetime.date
    end_date: datetime.date
    amount: float = Field(..., ge=0)
    description: Optional[str] = Field(None, max_length=1000)
    card_id: int = Field(..., gt=0)
    category_ids: list[int] = Field(default_factory=list)


class BudgetUpdate(BaseModel):
    """Schema for updating a budget (only provided fields change)"""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    start_date: Optional[datetime.date] = None
    end_date: Optional[datetime.date] = None
    amount: Optional[float] = Field(None, ge=0)
    description: Optional[str] = Field(None, max_length=1000)
    card_id: Optional[int] = Field(None, gt=0)
    category_ids: Optional[list[int]] = None


class BudgetResponse(BaseModel):
    """Schema for budget response"""

    model_config = {"from_attributes": True}

    id: int
    user_id: int
    name: str
    start_date: datetime.date
    end_date: datetime.date
    amount: float
    description: Optional[str]
    card_id: int
    category_ids: list[int]
    created_at: datetime.datetime
    updated_at: datetime.datetime


class BudgetDetailResponse(BudgetResponse):
    """Budget with resolved references and derived totals"""

    card: CardSummary
    categories: list[CategorySummary]
    spent: float
    remaining: float


class BudgetListResponse(BaseModel):
    """Schema for list of budgets"""

    budgets: list[BudgetResponse]
    total: int
