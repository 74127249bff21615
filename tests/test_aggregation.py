from datetime import date
from decimal import Decimal

from app.models.budget import Budget
from app.models.transaction import Transaction, TransactionType
from app.services.aggregation import (
    budget_remaining,
    budget_spent,
    card_balance,
    ledger_net_total,
    signed_amount,
)


def make_txn(amount, transaction_type, day=date(2024, 1, 15), budget_id=None, card_id=1):
    return Transaction(
        card_id=card_id,
        budget_id=budget_id,
        amount=amount,
        transaction_type=transaction_type,
        date=day,
    )


class TestSignedAmount:
    def test_income_is_positive(self):
        assert signed_amount(make_txn(100, TransactionType.INCOME)) == Decimal("100")

    def test_expense_is_negative(self):
        assert signed_amount(make_txn(40, TransactionType.EXPENSE)) == Decimal("-40")

    def test_transfer_is_outgoing_on_its_card(self):
        assert signed_amount(make_txn(25.5, TransactionType.TRANSFER)) == Decimal("-25.5")


class TestCardBalance:
    def test_empty_card_is_zero(self):
        assert card_balance([]) == Decimal("0")

    def test_mixed_transactions(self):
        """+100 income, -40 expense, -10 expense -> 50; dropping the -10 -> 60"""
        income = make_txn(100, TransactionType.INCOME)
        groceries = make_txn(40, TransactionType.EXPENSE)
        coffee = make_txn(10, TransactionType.EXPENSE)

        assert card_balance([income, groceries, coffee]) == Decimal("50")
        assert card_balance([income, groceries]) == Decimal("60")

    def test_recomputation_is_order_independent(self):
        txns = [
            make_txn(Decimal("19.99"), TransactionType.EXPENSE),
            make_txn(Decimal("250.00"), TransactionType.INCOME),
            make_txn(Decimal("0.01"), TransactionType.TRANSFER),
        ]
        assert card_balance(txns) == card_balance(list(reversed(txns))) == Decimal("230.00")


class TestBudgetRemaining:
    def make_budget(self):
        return Budget(
            id=7,
            amount=Decimal("500"),
            start_date=date(2024, 1, 1),
            end_date=date(2024, 1, 31),
        )

    def test_out_of_range_transactions_are_excluded(self):
        budget = self.make_budget()
        txns = [
            make_txn(120, TransactionType.EXPENSE, date(2024, 1, 5), budget_id=7),
            make_txn(80, TransactionType.EXPENSE, date(2024, 1, 20), budget_id=7),
            make_txn(1000, TransactionType.EXPENSE, date(2024, 2, 1), budget_id=7),
        ]

        assert budget_spent(budget, txns) == Decimal("200")
        assert budget_remaining(budget, txns) == Decimal("300")

    def test_range_bounds_are_inclusive(self):
        budget = self.make_budget()
        txns = [
            make_txn(10, TransactionType.EXPENSE, date(2024, 1, 1), budget_id=7),
            make_txn(20, TransactionType.EXPENSE, date(2024, 1, 31), budget_id=7),
        ]

        assert budget_remaining(budget, txns) == Decimal("470")

    def test_other_budgets_are_ignored(self):
        budget = self.make_budget()
        txns = [make_txn(99, TransactionType.EXPENSE, budget_id=8)]

        assert budget_remaining(budget, txns) == Decimal("500")


def test_ledger_net_total_uses_signed_amounts():
    txns = [
        make_txn(300, TransactionType.INCOME),
        make_txn(75, TransactionType.EXPENSE),
    ]
    assert ledger_net_total(txns) == Decimal("225")
