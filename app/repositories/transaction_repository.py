from datetime import date
from typing import Optional
from sqlalchemy.orm import Session

from app.models.transaction import Transaction, TransactionType


class TransactionRepository:
    """Repository for Transaction data access"""

    def __init__(self, db: Session):
        self.db = db

    def create_no_commit(self, transaction: Transaction) -> Transaction:
        """Create single transaction without committing (for atomic ops)"""
        self.db.add(transaction)
        self.db.flush()
        return transaction

    def get_by_id(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID regardless of owner (existence check)"""
        return self.db.query(Transaction).filter(Transaction.id == transaction_id).first()

    def get_by_ids(self, transaction_ids: list[int]) -> list[Transaction]:
        if not transaction_ids:
            return []
        return self.db.query(Transaction).filter(Transaction.id.in_(transaction_ids)).all()

    def get_by_card(self, card_id: int) -> list[Transaction]:
        """Every transaction currently charged to a card"""
        return self.db.query(Transaction).filter(Transaction.card_id == card_id).all()

    def get_by_budget(self, budget_id: int) -> list[Transaction]:
        """Every transaction currently tied to a budget"""
        return self.db.query(Transaction).filter(Transaction.budget_id == budget_id).all()

    def get_ids_by_card(self, card_id: int) -> list[int]:
        return [
            row.id
            for row in self.db.query(Transaction.id).filter(Transaction.card_id == card_id).all()
        ]

    def get_ids_by_user(self, user_id: int) -> list[int]:
        return [
            row.id
            for row in self.db.query(Transaction.id).filter(Transaction.user_id == user_id).all()
        ]

    def count_by_card(self, card_id: int) -> int:
        return self.db.query(Transaction).filter(Transaction.card_id == card_id).count()

    def get_with_filters(
        self,
        user_id: int,
        card_id: Optional[int] = None,
        budget_id: Optional[int] = None,
        category_id: Optional[int] = None,
        transaction_type: Optional[TransactionType] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> tuple[list[Transaction], int]:
        """
        Get transactions with filters, scoped to one owner.

        Args:
            user_id: Owner ID for isolation
            card_id: Optional card filter
            budget_id: Optional budget filter
            category_id: Optional category filter
            transaction_type: Optional type filter
            start_date: Optional start date filter
            end_date: Optional end date filter
            limit: Maximum number of results
            offset: Pagination offset

        Returns:
            Tuple of (transactions list, total count)
        """
        query = self.db.query(Transaction).filter(Transaction.user_id == user_id)

        # Apply filters
        if card_id is not None:
            query = query.filter(Transaction.card_id == card_id)

        if budget_id is not None:
            query = query.filter(Transaction.budget_id == budget_id)

        if category_id is not None:
            query = query.filter(Transaction.category_id == category_id)

        if transaction_type is not None:
            query = query.filter(Transaction.transaction_type == transaction_type)

        if start_date is not None:
            query = query.filter(Transaction.date >= start_date)

        if end_date is not None:
            query = query.filter(Transaction.date <= end_date)

        # Get total count before pagination
        total = query.count()

        # Apply sorting and pagination
        transactions = (
            query.order_by(Transaction.date.desc(), Transaction.id.desc())
            .limit(limit)
            .offset(offset)
            .all()
        )

        return transactions, total

    def detach_category_no_commit(self, category_id: int) -> int:
        """Set category to NULL on every transaction referencing it"""
        return (
            self.db.query(Transaction)
            .filter(Transaction.category_id == category_id)
            .update({Transaction.category_id: None}, synchronize_session="fetch")
        )

    def detach_budget_no_commit(self, budget_id: int) -> int:
        """Set budget to NULL on every transaction referencing it"""
        return (
            self.db.query(Transaction)
            .filter(Transaction.budget_id == budget_id)
            .update({Transaction.budget_id: None}, synchronize_session="fetch")
        )

    def delete_no_commit(self, transaction: Transaction) -> None:
        """Delete a transaction without committing"""
        self.db.delete(transaction)
        self.db.flush()

    def delete_by_ids_no_commit(self, transaction_ids: list[int]) -> int:
        return (
            self.db.query(Transaction)
            .filter(Transaction.id.in_(transaction_ids))
            .delete(synchronize_session=False)
        )
