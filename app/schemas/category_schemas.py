from datetime import datetime
from pydantic import BaseModel, Field


class CategoryCreate(BaseModel):
    """Schema for creating a new category"""

    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = Field(None, max_length=1000)
    budgeted_amount: float = Field(default=0.00, ge=0)


class CategoryUpdate(BaseModel):
    """Schema for updating a category"""

    name: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = Field(None, max_length=1000)
    budgeted_amount: float | None = Field(None, ge=0)


class CategoryResponse(BaseModel):
    """Schema for category response"""

    model_config = {"from_attributes": True}

    id: int
    user_id: int
    name: str
    description: str | None
    budgeted_amount: float
    created_at: datetime
    updated_at: datetime


class CategoryListResponse(BaseModel):
    """Schema for list of categories"""

    categories: list[CategoryResponse]
    total: int
