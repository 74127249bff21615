from sqlalchemy.orm import Session

from app.core.exceptions import ReferenceViolationException, ValidationException
from app.models.budget import Budget
from app.models.card import Card
from app.models.category import Category
from app.models.transaction import Transaction
from app.repositories.budget_repository import BudgetRepository
from app.repositories.card_repository import CardRepository
from app.repositories.category_repository import CategoryRepository
from app.repositories.transaction_repository import TransactionRepository


class ReferenceValidator:
    """
    Resolves reference ids for create/update operations.

    A reference is valid only if it resolves in the store AND the target is
    owned by the same user as the referring entity. Every method raises
    ReferenceViolationException before anything is written.
    """

    def __init__(self, db: Session):
        self.card_repo = CardRepository(db)
        self.budget_repo = BudgetRepository(db)
        self.category_repo = CategoryRepository(db)
        self.transaction_repo = TransactionRepository(db)

    def card(self, card_id: int, owner_id: int) -> Card:
        card = self.card_repo.get_by_id(card_id)
        if card is None or card.user_id != owner_id:
            raise ReferenceViolationException("card_id", card_id)
        return card

    def budget(self, budget_id: int | None, owner_id: int) -> Budget | None:
        if budget_id is None:
            return None
        budget = self.budget_repo.get_by_id(budget_id)
        if budget is None or budget.user_id != owner_id:
            raise ReferenceViolationException("budget_id", budget_id)
        return budget

    def category(self, category_id: int | None, owner_id: int) -> Category | None:
        if category_id is None:
            return None
        category = self.category_repo.get_by_id(category_id)
        if category is None or category.user_id != owner_id:
            raise ReferenceViolationException("category_id", category_id)
        return category

    def categories(self, category_ids: list[int], owner_id: int) -> list[Category]:
        """Resolve a category set, preserving request order and dropping repeats"""
        unique_ids = list(dict.fromkeys(category_ids))
        found = {category.id: category for category in self.category_repo.get_by_ids(unique_ids)}
        for category_id in unique_ids:
            category = found.get(category_id)
            if category is None or category.user_id != owner_id:
                raise ReferenceViolationException("category_ids", category_id)
        return [found[category_id] for category_id in unique_ids]

    def transactions(self, transaction_ids: list[int], owner_id: int) -> list[Transaction]:
        """Resolve an ordered transaction sequence; repeats are rejected"""
        if len(set(transaction_ids)) != len(transaction_ids):
            raise ValidationException("Duplicate transaction in sequence", field="transaction_ids")
        found = {txn.id: txn for txn in self.transaction_repo.get_by_ids(transaction_ids)}
        for transaction_id in transaction_ids:
            txn = found.get(transaction_id)
            if txn is None or txn.user_id != owner_id:
                raise ReferenceViolationException("transaction_ids", transaction_id)
        return [found[transaction_id] for transaction_id in transaction_ids]
