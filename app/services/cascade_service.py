"""
Cascade engine.

Every delete path goes through this service so that what happens to
dependents is explicit:

- User: delete every owned record set (ledgers, transactions, budgets,
  categories, cards), then the user row.
- Card: refused while any transaction or budget references it.
- Category: detached from transactions and budget category sets.
- Budget: detached from transactions.
- Ledger: only the ledger and its entries; transactions are kept.
- Transaction: removed from ledgers, then the card balance is recomputed.
"""

import logging
from contextlib import contextmanager
from typing import Callable
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session
from tenacity import (
    RetryCallState,
    RetryError,
    Retrying,
    retry_if_exception_type,
    retry_if_result,
    stop_after_attempt,
    wait_exponential,
)

from app.config import settings
from app.core.exceptions import DependencyExistsException, PartialCascadeFailureException
from app.models.budget import Budget
from app.models.card import Card
from app.models.category import Category
from app.models.ledger import Ledger
from app.models.transaction import Transaction
from app.models.user import User
from app.repositories.budget_repository import BudgetRepository
from app.repositories.card_repository import CardRepository
from app.repositories.category_repository import CategoryRepository
from app.repositories.ledger_repository import LedgerRepository
from app.repositories.transaction_repository import TransactionRepository
from app.repositories.user_repository import UserRepository
from app.services.aggregation import AggregationService

logger = logging.getLogger(__name__)

RecordSet = tuple[str, Callable[[int], list[int]], Callable[[list[int]], int]]


class CascadeService:
    """Service layer executing deletes together with their dependents"""

    def __init__(self, db: Session):
        self.db = db
        self.user_repo = UserRepository(db)
        self.card_repo = CardRepository(db)
        self.category_repo = CategoryRepository(db)
        self.budget_repo = BudgetRepository(db)
        self.ledger_repo = LedgerRepository(db)
        self.transaction_repo = TransactionRepository(db)
        self.aggregation = AggregationService(db)

    @contextmanager
    def _unit_of_work(self):
        """Commit everything done inside the block at once, or nothing"""
        try:
            yield
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def delete_card(self, card: Card) -> None:
        """
        Delete a card that nothing references any more.

        Raises:
            DependencyExistsException: If transactions or budgets still use it.
                Nothing is modified in that case.
        """
        dependents = {
            "transactions": self.transaction_repo.get_ids_by_card(card.id),
            "budgets": self.budget_repo.get_ids_by_card(card.id),
        }
        dependents = {name: ids for name, ids in dependents.items() if ids}
        if dependents:
            raise DependencyExistsException(
                f"Card {card.id} is still referenced; reassign or delete dependents first",
                dependents,
            )

        card_id = card.id
        with self._unit_of_work():
            self.card_repo.delete_no_commit(card)
        logger.info("Deleted card card_id=%d", card_id)

    def delete_category(self, category: Category) -> None:
        """Detach the category everywhere it is referenced, then delete it"""
        category_id = category.id
        with self._unit_of_work():
            detached = self.transaction_repo.detach_category_no_commit(category_id)
            unlinked = self.category_repo.unlink_from_budgets_no_commit([category_id])
            self.category_repo.delete_no_commit(category)
        logger.info(
            "Deleted category category_id=%d detached_transactions=%d unlinked_budgets=%d",
            category_id,
            detached,
            unlinked,
        )

    def delete_budget(self, budget: Budget) -> None:
        """Detach the budget from its transactions, then delete it"""
        budget_id = budget.id
        with self._unit_of_work():
            detached = self.transaction_repo.detach_budget_no_commit(budget_id)
            self.budget_repo.delete_no_commit(budget)
        logger.info("Deleted budget budget_id=%d detached_transactions=%d", budget_id, detached)

    def delete_ledger(self, ledger: Ledger) -> None:
        """Delete the ledger grouping; its transactions are left alone"""
        ledger_id = ledger.id
        with self._unit_of_work():
            self.ledger_repo.delete_no_commit(ledger)
        logger.info("Deleted ledger ledger_id=%d", ledger_id)

    def delete_transaction(self, transaction: Transaction) -> None:
        """Delete a transaction and recompute the balance of its card"""
        transaction_id = transaction.id
        card_id = transaction.card_id
        with self._unit_of_work():
            self.ledger_repo.remove_transactions_no_commit([transaction_id])
            self.transaction_repo.delete_no_commit(transaction)
            self.aggregation.recompute_card_balances_no_commit([card_id])
        logger.info("Deleted transaction transaction_id=%d card_id=%d", transaction_id, card_id)

    def delete_user(self, user: User) -> None:
        """
        Delete a user and everything the user owns.

        Record sets are removed in order, each in its own commit, so an
        interrupted cascade leaves some sets fully deleted and none half done.
        A set hitting a transient store error is retried until empty or
        until CASCADE_MAX_ATTEMPTS is exhausted; any other store error stops
        the cascade at that set.

        Raises:
            PartialCascadeFailureException: With the ids of the failing set and
                of every set not yet processed (including the user row).
        """
        user_id = user.id
        record_sets: list[RecordSet] = [
            ("ledgers", self.ledger_repo.get_ids_by_user, self.ledger_repo.delete_by_ids_no_commit),
            ("transactions", self.transaction_repo.get_ids_by_user, self._purge_transactions),
            ("budgets", self.budget_repo.get_ids_by_user, self.budget_repo.delete_by_ids_no_commit),
            (
                "categories",
                self.category_repo.get_ids_by_user,
                self.category_repo.delete_by_ids_no_commit,
            ),
            ("cards", self.card_repo.get_ids_by_user, self.card_repo.delete_by_ids_no_commit),
            ("users", self.user_repo.get_ids, self.user_repo.delete_by_ids_no_commit),
        ]

        logger.info("Starting user cascade user_id=%d", user_id)
        for index, (name, find_ids, purge) in enumerate(record_sets):
            remaining = self._delete_record_set(user_id, name, find_ids, purge)
            if remaining is None:
                continue

            unfinished = {name: remaining}
            for later_name, later_find_ids, _ in record_sets[index + 1 :]:
                unfinished[later_name] = later_find_ids(user_id)
            unfinished = {
                set_name: ids for set_name, ids in unfinished.items() if ids or set_name == name
            }
            logger.error("User cascade incomplete user_id=%d remaining=%s", user_id, unfinished)
            raise PartialCascadeFailureException(
                f"Could not delete {name} for user {user_id}",
                unfinished,
            )
        logger.info("Finished user cascade user_id=%d", user_id)

    def _purge_transactions(self, transaction_ids: list[int]) -> int:
        self.ledger_repo.remove_transactions_no_commit(transaction_ids)
        return self.transaction_repo.delete_by_ids_no_commit(transaction_ids)

    def _delete_record_set(
        self,
        user_id: int,
        name: str,
        find_ids: Callable[[int], list[int]],
        purge: Callable[[list[int]], int],
    ) -> list[int] | None:
        """
        Delete one record set, retrying transient store errors.

        An attempt commits one purge and reports the ids still present, so a
        set that keeps refilling is retried like a failed one. Any other store
        error stops the set at once.

        Returns:
            None once the set is empty, otherwise the ids still in it
        """
        last_seen: list[int] = []

        def purge_once() -> list[int]:
            try:
                ids = find_ids(user_id)
                if not ids:
                    return []
                last_seen[:] = ids
                deleted = purge(ids)
                self.db.commit()
                logger.info("Cascade user_id=%d deleted %s count=%d", user_id, name, deleted)
                return find_ids(user_id)
            except SQLAlchemyError:
                self.db.rollback()
                raise

        def log_retry(retry_state: RetryCallState) -> None:
            outcome = retry_state.outcome
            reason = outcome.exception() if outcome.failed else f"ids left {outcome.result()}"
            logger.warning(
                "Cascade user_id=%d %s attempt=%d/%d failed: %s",
                user_id,
                name,
                retry_state.attempt_number,
                max_attempts,
                reason,
            )

        max_attempts = max(1, settings.CASCADE_MAX_ATTEMPTS)
        retrying = Retrying(
            stop=stop_after_attempt(max_attempts),
            wait=wait_exponential(multiplier=settings.CASCADE_RETRY_DELAY_SECONDS),
            retry=retry_if_exception_type(OperationalError) | retry_if_result(bool),
            before_sleep=log_retry,
        )

        try:
            retrying(purge_once)
            return None
        except RetryError:
            logger.error(
                "Cascade user_id=%d %s gave up after %d attempts", user_id, name, max_attempts
            )
        except SQLAlchemyError as e:
            logger.error("Cascade user_id=%d %s stopped on store error: %s", user_id, name, e)

        try:
            ids = find_ids(user_id)
        except SQLAlchemyError:
            self.db.rollback()
            return last_seen
        return ids or None
