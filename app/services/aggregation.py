"""
Derived values computed from the transaction set.

Card balances are always recomputed from scratch over the card's current
transactions, never patched incrementally, so a corrected or interrupted
write converges on the next recomputation.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Iterable
from sqlalchemy.orm import Session

from app.models.budget import Budget
from app.models.transaction import Transaction, TransactionType
from app.repositories.card_repository import CardRepository
from app.repositories.transaction_repository import TransactionRepository

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")


def _to_decimal(value) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


def signed_amount(transaction: Transaction) -> Decimal:
    """
    Amount as it moves the card balance.

    Income adds to the card. Expense and transfer subtract: a transaction
    has a single card, so a transfer is the outgoing leg on that card.
    """
    amount = _to_decimal(transaction.amount)
    if transaction.transaction_type == TransactionType.INCOME:
        return amount
    return -amount


def card_balance(transactions: Iterable[Transaction]) -> Decimal:
    return sum((signed_amount(txn) for txn in transactions), ZERO)


def in_range(day: date, start_date: date, end_date: date) -> bool:
    return start_date <= day <= end_date


def budget_spent(budget: Budget, transactions: Iterable[Transaction]) -> Decimal:
    """Sum of amounts tied to the budget and dated inside its range"""
    return sum(
        (
            _to_decimal(txn.amount)
            for txn in transactions
            if txn.budget_id == budget.id and in_range(txn.date, budget.start_date, budget.end_date)
        ),
        ZERO,
    )


def budget_remaining(budget: Budget, transactions: Iterable[Transaction]) -> Decimal:
    return _to_decimal(budget.amount) - budget_spent(budget, transactions)


def ledger_net_total(transactions: Iterable[Transaction]) -> Decimal:
    return card_balance(transactions)


class AggregationService:
    """Recomputes stored card balances from the store's transaction set"""

    def __init__(self, db: Session):
        self.db = db
        self.card_repo = CardRepository(db)
        self.transaction_repo = TransactionRepository(db)

    def recompute_card_balances_no_commit(self, card_ids: Iterable[int | None]) -> None:
        """
        Recompute balance for every card a mutation touched.

        Caller commits; ids that no longer resolve are skipped.
        """
        for card_id in sorted({card_id for card_id in card_ids if card_id is not None}):
            card = self.card_repo.get_by_id(card_id)
            if card is None:
                continue
            card.balance = card_balance(self.transaction_repo.get_by_card(card_id))
            logger.debug("Recomputed balance card_id=%d balance=%s", card_id, card.balance)
        self.db.flush()

    def get_budget_spent(self, budget: Budget) -> Decimal:
        return budget_spent(budget, self.transaction_repo.get_by_budget(budget.id))
