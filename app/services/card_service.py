from sqlalchemy.orm import Session
from app.core.exceptions import NotFoundException
from app.core.ownership import require_owner, require_session
from app.models.auth_session import AuthSession
from app.models.card import Card
from app.repositories.card_repository import CardRepository
from app.repositories.transaction_repository import TransactionRepository
from app.schemas.card_schemas import (
    CardCreate,
    CardDetailResponse,
    CardResponse,
    CardUpdate,
)
from app.services.cascade_service import CascadeService


class CardService:
    """Service for card business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = CardRepository(db)
        self.transaction_repo = TransactionRepository(db)

    def create_card(self, data: CardCreate, session: AuthSession | None) -> Card:
        """Create new card for the session's user; balance starts at zero"""
        session = require_session(session)
        card = Card(user_id=session.user_id, name=data.name, balance=0.00)
        return self.repo.create(card)

    def get_user_cards(self, session: AuthSession | None) -> list[Card]:
        """Get all cards for the session's user"""
        session = require_session(session)
        return self.repo.get_by_user(session.user_id)

    def get_card(self, card_id: int, session: AuthSession | None) -> Card:
        """
        Get specific card ensuring ownership.

        Raises:
            NotFoundException: If card not found
            ForbiddenException: If card belongs to another user
        """
        card = self.repo.get_by_id(card_id)
        if not card:
            raise NotFoundException(f"Card {card_id} not found")
        require_owner(session, card.user_id, "Card")
        return card

    def get_card_detail(self, card_id: int, session: AuthSession | None) -> CardDetailResponse:
        card = self.get_card(card_id, session)
        return CardDetailResponse(
            **CardResponse.model_validate(card).model_dump(),
            transaction_count=self.transaction_repo.count_by_card(card.id),
        )

    def update_card(self, card_id: int, data: CardUpdate, session: AuthSession | None) -> Card:
        """Update card details"""
        card = self.get_card(card_id, session)

        if data.name is not None:
            card.name = data.name

        return self.repo.update(card)

    def delete_card(self, card_id: int, session: AuthSession | None) -> None:
        """Delete card; refused while transactions or budgets reference it"""
        card = self.get_card(card_id, session)
        CascadeService(self.db).delete_card(card)
