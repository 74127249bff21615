from sqlalchemy.orm import Session
from app.models.budget import Budget, budget_categories


class BudgetRepository:
    """Repository for Budget model operations with owner scoping"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, budget_id: int) -> Budget | None:
        """Get budget by ID regardless of owner (existence check)"""
        return self.db.query(Budget).filter(Budget.id == budget_id).first()

    def get_by_user(self, user_id: int) -> list[Budget]:
        """Get all budgets for a user"""
        return self.db.query(Budget).filter(Budget.user_id == user_id).order_by(Budget.id).all()

    def get_ids_by_user(self, user_id: int) -> list[int]:
        return [row.id for row in self.db.query(Budget.id).filter(Budget.user_id == user_id).all()]

    def get_ids_by_card(self, card_id: int) -> list[int]:
        """Budgets that still reference a card"""
        return [row.id for row in self.db.query(Budget.id).filter(Budget.card_id == card_id).all()]

    def create(self, budget: Budget) -> Budget:
        """Create new budget"""
        self.db.add(budget)
        self.db.commit()
        self.db.refresh(budget)
        return budget

    def update(self, budget: Budget) -> Budget:
        """Update existing budget"""
        self.db.commit()
        self.db.refresh(budget)
        return budget

    def delete_no_commit(self, budget: Budget) -> None:
        """Delete budget and its category links without committing"""
        self.db.delete(budget)
        self.db.flush()

    def delete_by_ids_no_commit(self, budget_ids: list[int]) -> int:
        self.db.execute(
            budget_categories.delete().where(budget_categories.c.budget_id.in_(budget_ids))
        )
        return (
            self.db.query(Budget)
            .filter(Budget.id.in_(budget_ids))
            .delete(synchronize_session=False)
        )
