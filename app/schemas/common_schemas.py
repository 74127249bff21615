"""Reference summaries embedded in detail responses."""

import datetime
from pydantic import BaseModel

from app.models.transaction import TransactionType


class CardSummary(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    name: str


class CategorySummary(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    name: str


class BudgetSummary(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    name: str


class TransactionSummary(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    amount: float
    transaction_type: TransactionType
    date: datetime.date
    description: str | None
