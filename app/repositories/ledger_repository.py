from sqlalchemy.orm import Session
from app.models.ledger import Ledger, LedgerEntry


class LedgerRepository:
    """Repository for Ledger model operations with owner scoping"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, ledger_id: int) -> Ledger | None:
        """Get ledger by ID regardless of owner (existence check)"""
        return self.db.query(Ledger).filter(Ledger.id == ledger_id).first()

    def get_by_user(self, user_id: int) -> list[Ledger]:
        """Get all ledgers for a user"""
        return self.db.query(Ledger).filter(Ledger.user_id == user_id).order_by(Ledger.id).all()

    def get_ids_by_user(self, user_id: int) -> list[int]:
        return [row.id for row in self.db.query(Ledger.id).filter(Ledger.user_id == user_id).all()]

    def create(self, ledger: Ledger) -> Ledger:
        """Create new ledger"""
        self.db.add(ledger)
        self.db.commit()
        self.db.refresh(ledger)
        return ledger

    def update(self, ledger: Ledger) -> Ledger:
        """Update existing ledger"""
        self.db.commit()
        self.db.refresh(ledger)
        return ledger

    def remove_transactions_no_commit(self, transaction_ids: list[int]) -> int:
        """
        Drop ledger entries pointing at the given transactions.

        Remaining entries keep their relative order; positions may have gaps.
        """
        return (
            self.db.query(LedgerEntry)
            .filter(LedgerEntry.transaction_id.in_(transaction_ids))
            .delete(synchronize_session=False)
        )

    def delete_no_commit(self, ledger: Ledger) -> None:
        """Delete ledger record and its entries, never the transactions"""
        self.db.delete(ledger)
        self.db.flush()

    def delete_by_ids_no_commit(self, ledger_ids: list[int]) -> int:
        self.db.query(LedgerEntry).filter(LedgerEntry.ledger_id.in_(ledger_ids)).delete(
            synchronize_session=False
        )
        return (
            self.db.query(Ledger)
            .filter(Ledger.id.in_(ledger_ids))
            .delete(synchronize_session=False)
        )
