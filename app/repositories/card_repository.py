from sqlalchemy.orm import Session
from app.models.card import Card


class CardRepository:
    """Repository for Card model operations with owner scoping"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, card_id: int) -> Card | None:
        """Get card by ID regardless of owner (existence check)"""
        return self.db.query(Card).filter(Card.id == card_id).first()

    def get_by_user(self, user_id: int) -> list[Card]:
        """Get all cards for a user"""
        return self.db.query(Card).filter(Card.user_id == user_id).order_by(Card.id).all()

    def get_ids_by_user(self, user_id: int) -> list[int]:
        return [row.id for row in self.db.query(Card.id).filter(Card.user_id == user_id).all()]

    def create(self, card: Card) -> Card:
        """Create new card"""
        self.db.add(card)
        self.db.commit()
        self.db.refresh(card)
        return card

    def update(self, card: Card) -> Card:
        """Update existing card"""
        self.db.commit()
        self.db.refresh(card)
        return card

    def delete_no_commit(self, card: Card) -> None:
        """Delete card without committing (caller owns the unit of work)"""
        self.db.delete(card)
        self.db.flush()

    def delete_by_ids_no_commit(self, card_ids: list[int]) -> int:
        return (
            self.db.query(Card)
            .filter(Card.id.in_(card_ids))
            .delete(synchronize_session=False)
        )
