from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_session
from app.models.auth_session import AuthSession
from app.services.ledger_service import LedgerService
from app.schemas.ledger_schemas import (
    LedgerCreate,
    LedgerUpdate,
    LedgerResponse,
    LedgerDetailResponse,
    LedgerListResponse,
)

router = APIRouter()


@router.post("", response_model=LedgerResponse, status_code=status.HTTP_201_CREATED)
async def create_ledger(
    data: LedgerCreate,
    session: AuthSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Create a ledger grouping the given transactions in order"""
    service = LedgerService(db)
    return service.create_ledger(data, session)


@router.get("", response_model=LedgerListResponse)
async def list_ledgers(
    session: AuthSession = Depends(get_current_session), db: Session = Depends(get_db)
):
    service = LedgerService(db)
    ledgers = service.get_user_ledgers(session)
    return LedgerListResponse(ledgers=ledgers, total=len(ledgers))


@router.get("/{ledger_id}", response_model=LedgerDetailResponse)
async def get_ledger(
    ledger_id: int,
    session: AuthSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Ledger with transactions resolved in order and their net total"""
    service = LedgerService(db)
    return service.get_ledger_detail(ledger_id, session)


@router.patch("/{ledger_id}", response_model=LedgerResponse)
async def update_ledger(
    ledger_id: int,
    data: LedgerUpdate,
    session: AuthSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Partial update; transaction_ids replaces the whole sequence"""
    service = LedgerService(db)
    return service.update_ledger(ledger_id, data, session)


@router.post("/{ledger_id}/transactions/{transaction_id}", response_model=LedgerResponse)
async def add_ledger_transaction(
    ledger_id: int,
    transaction_id: int,
    session: AuthSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Append a transaction to the ledger"""
    service = LedgerService(db)
    return service.add_transaction(ledger_id, transaction_id, session)


@router.delete("/{ledger_id}/transactions/{transaction_id}", response_model=LedgerResponse)
async def remove_ledger_transaction(
    ledger_id: int,
    transaction_id: int,
    session: AuthSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Remove a transaction from the ledger without deleting it"""
    service = LedgerService(db)
    return service.remove_transaction(ledger_id, transaction_id, session)


@router.delete("/{ledger_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_ledger(
    ledger_id: int,
    session: AuthSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Delete a ledger; its transactions are not deleted"""
    service = LedgerService(db)
    service.delete_ledger(ledger_id, session)
    return None
