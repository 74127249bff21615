from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_session
from app.models.auth_session import AuthSession
from app.services.card_service import CardService
from app.schemas.card_schemas import (
    CardCreate,
    CardUpdate,
    CardResponse,
    CardDetailResponse,
    CardListResponse,
)

router = APIRouter()


@router.post("", response_model=CardResponse, status_code=status.HTTP_201_CREATED)
async def create_card(
    data: CardCreate,
    session: AuthSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Create a new card for the authenticated user"""
    service = CardService(db)
    return service.create_card(data, session)


@router.get("", response_model=CardListResponse)
async def list_cards(
    session: AuthSession = Depends(get_current_session), db: Session = Depends(get_db)
):
    """Get all cards for the authenticated user"""
    service = CardService(db)
    cards = service.get_user_cards(session)
    return CardListResponse(cards=cards, total=len(cards))


@router.get("/{card_id}", response_model=CardDetailResponse)
async def get_card(
    card_id: int,
    session: AuthSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Get specific card details"""
    service = CardService(db)
    return service.get_card_detail(card_id, session)


@router.patch("/{card_id}", response_model=CardResponse)
async def update_card(
    card_id: int,
    data: CardUpdate,
    session: AuthSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Update card details"""
    service = CardService(db)
    return service.update_card(card_id, data, session)


@router.delete("/{card_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_card(
    card_id: int,
    session: AuthSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Delete a card; returns 409 while transactions or budgets still use it"""
    service = CardService(db)
    service.delete_card(card_id, session)
    return None
