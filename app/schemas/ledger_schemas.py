import datetime
from typing import Optional
from pydantic import BaseModel, Field

from app.schemas.common_schemas import TransactionSummary


class LedgerCreate(BaseModel):
    """Schema for creating a new ledger"""

    name: str = Field(..., min_length=1, max_length=255)
    start_date: datetime.date
    end_date: datetime.date
    transaction_ids: list[int] = Field(default_factory=list)


class LedgerUpdate(BaseModel):
    """Schema for updating a ledger; transaction_ids replaces the sequence"""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    start_date: Optional[datetime.date] = None
    end_date: Optional[datetime.date] = None
    transaction_ids: Optional[list[int]] = None


class LedgerResponse(BaseModel):
    """Schema for ledger response"""

    model_config = {"from_attributes": True}

    id: int
    user_id: int
    name: str
    start_date: datetime.date
    end_date: datetime.date
    transaction_ids: list[int]
    created_at: datetime.datetime
    updated_at: datetime.datetime


class LedgerDetailResponse(LedgerResponse):
    """Ledger with its transactions resolved in order"""

    transactions: list[TransactionSummary]
    net_total: float


class LedgerListResponse(BaseModel):
    """Schema for list of ledgers"""

    ledgers: list[LedgerResponse]
    total: int
