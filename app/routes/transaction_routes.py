from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, status, Query
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_session
from app.models.auth_session import AuthSession
from app.models.transaction import TransactionType
from app.services.transaction_service import TransactionService
from app.schemas.transaction_schemas import (
    TransactionCreate,
    TransactionUpdate,
    TransactionResponse,
    TransactionDetailResponse,
    TransactionListResponse,
)

router = APIRouter()


@router.post("", response_model=TransactionResponse, status_code=status.HTTP_201_CREATED)
def create_transaction(
    transaction_data: TransactionCreate,
    session: AuthSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """
    Create a new transaction.

    - Recomputes the card balance automatically
    - card_id, budget_id and category_id must belong to the authenticated user
    - Amount is a positive magnitude; income adds, expense and transfer subtract
    - Date defaults to today
    """
    service = TransactionService(db)
    return service.create_transaction(transaction_data, session)


@router.get("", response_model=TransactionListResponse)
def list_transactions(
    card_id: Optional[int] = Query(None, description="Filter by card ID"),
    budget_id: Optional[int] = Query(None, description="Filter by budget ID"),
    category_id: Optional[int] = Query(None, description="Filter by category ID"),
    transaction_type: Optional[TransactionType] = Query(None, description="Filter by type"),
    start_date: Optional[date] = Query(None, description="Start date (inclusive)"),
    end_date: Optional[date] = Query(None, description="End date (inclusive)"),
    limit: int = Query(100, ge=1, le=1000, description="Max results"),
    offset: int = Query(0, ge=0, description="Pagination offset"),
    session: AuthSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """
    List transactions with optional filters.

    - Returns only the authenticated user's transactions
    - Results sorted by date (newest first)
    """
    service = TransactionService(db)

    transactions, total = service.get_transactions(
        session=session,
        card_id=card_id,
        budget_id=budget_id,
        category_id=category_id,
        transaction_type=transaction_type,
        start_date=start_date,
        end_date=end_date,
        limit=limit,
        offset=offset,
    )

    return TransactionListResponse(transactions=transactions, total=total)


@router.get("/{transaction_id}", response_model=TransactionDetailResponse)
def get_transaction(
    transaction_id: int,
    session: AuthSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """
    Get a specific transaction by ID with card, budget and category resolved.

    - Returns 404 if transaction doesn't exist, 403 if it belongs to another user
    """
    service = TransactionService(db)
    return service.get_transaction_detail(transaction_id, session)


@router.patch("/{transaction_id}", response_model=TransactionResponse)
def update_transaction(
    transaction_id: int,
    transaction_data: TransactionUpdate,
    session: AuthSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """
    Update a transaction.

    - Recomputes the balance of the old and new card
    - Only provided fields are updated (partial update)
    - Send budget_id or category_id as null to detach
    """
    service = TransactionService(db)
    return service.update_transaction(transaction_id, transaction_data, session)


@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_transaction(
    transaction_id: int,
    session: AuthSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """
    Delete a transaction.

    - Removes it from any ledger and recomputes the card balance
    - Returns 404 if transaction doesn't exist or was already deleted
    """
    service = TransactionService(db)
    service.delete_transaction(transaction_id, session)
