from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_session
from app.models.auth_session import AuthSession
from app.services.budget_service import BudgetService
from app.schemas.budget_schemas import (
    BudgetCreate,
    BudgetUpdate,
    BudgetResponse,
    BudgetDetailResponse,
    BudgetListResponse,
)

router = APIRouter()


@router.post("", response_model=BudgetResponse, status_code=status.HTTP_201_CREATED)
async def create_budget(
    data: BudgetCreate,
    session: AuthSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """
    Create a budget.

    - card_id and every category_ids entry must belong to the authenticated user
    - start_date must not be after end_date
    """
    service = BudgetService(db)
    return service.create_budget(data, session)


@router.get("", response_model=BudgetListResponse)
async def list_budgets(
    session: AuthSession = Depends(get_current_session), db: Session = Depends(get_db)
):
    service = BudgetService(db)
    budgets = service.get_user_budgets(session)
    return BudgetListResponse(budgets=budgets, total=len(budgets))


@router.get("/{budget_id}", response_model=BudgetDetailResponse)
async def get_budget(
    budget_id: int,
    session: AuthSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Budget with card and categories resolved, plus spent and remaining"""
    service = BudgetService(db)
    return service.get_budget_detail(budget_id, session)


@router.patch("/{budget_id}", response_model=BudgetResponse)
async def update_budget(
    budget_id: int,
    data: BudgetUpdate,
    session: AuthSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Partial update; category_ids replaces the whole category set"""
    service = BudgetService(db)
    return service.update_budget(budget_id, data, session)


@router.delete("/{budget_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_budget(
    budget_id: int,
    session: AuthSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Delete a budget; referencing transactions keep existing with budget set to null"""
    service = BudgetService(db)
    service.delete_budget(budget_id, session)
    return None
