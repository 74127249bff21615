import datetime
import logging
from typing import Optional
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundException, ValidationException
from app.core.ownership import require_owner, require_session
from app.models.auth_session import AuthSession
from app.models.transaction import Transaction, TransactionType
from app.repositories.transaction_repository import TransactionRepository
from app.schemas.common_schemas import BudgetSummary, CardSummary, CategorySummary
from app.schemas.transaction_schemas import (
    TransactionCreate,
    TransactionDetailResponse,
    TransactionResponse,
    TransactionUpdate,
)
from app.services.aggregation import AggregationService
from app.services.cascade_service import CascadeService
from app.services.reference_validator import ReferenceValidator

logger = logging.getLogger(__name__)


class TransactionService:
    """Service layer for transaction business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.transaction_repo = TransactionRepository(db)
        self.references = ReferenceValidator(db)
        self.aggregation = AggregationService(db)

    def create_transaction(
        self, transaction_data: TransactionCreate, session: AuthSession | None
    ) -> Transaction:
        """
        Create a new transaction and recompute its card balance atomically.

        Args:
            transaction_data: Transaction creation data
            session: Current session (for ownership verification)

        Returns:
            Created transaction

        Raises:
            ReferenceViolationException: If card, budget or category is missing
                or belongs to another user
        """
        session = require_session(session)
        card = self.references.card(transaction_data.card_id, session.user_id)
        budget = self.references.budget(transaction_data.budget_id, session.user_id)
        category = self.references.category(transaction_data.category_id, session.user_id)

        transaction = Transaction(
            user_id=session.user_id,
            card_id=card.id,
            budget_id=budget.id if budget else None,
            category_id=category.id if category else None,
            amount=transaction_data.amount,
            transaction_type=transaction_data.transaction_type,
            date=transaction_data.date or datetime.date.today(),
            description=transaction_data.description,
        )

        try:
            self.transaction_repo.create_no_commit(transaction)
            self.aggregation.recompute_card_balances_no_commit([card.id])
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(transaction)
        logger.info("Created transaction transaction_id=%d card_id=%d", transaction.id, card.id)
        return transaction

    def get_transaction(self, transaction_id: int, session: AuthSession | None) -> Transaction:
        """
        Get transaction by ID with ownership verification.

        Raises:
            NotFoundException: If transaction doesn't exist
            ForbiddenException: If transaction belongs to another user
        """
        transaction = self.transaction_repo.get_by_id(transaction_id)
        if not transaction:
            raise NotFoundException(f"Transaction {transaction_id} not found")
        require_owner(session, transaction.user_id, "Transaction")
        return transaction

    def get_transaction_detail(
        self, transaction_id: int, session: AuthSession | None
    ) -> TransactionDetailResponse:
        """Transaction with card, budget and category summaries resolved"""
        transaction = self.get_transaction(transaction_id, session)
        return TransactionDetailResponse(
            **TransactionResponse.model_validate(transaction).model_dump(),
            card=CardSummary.model_validate(transaction.card),
            budget=BudgetSummary.model_validate(transaction.budget) if transaction.budget else None,
            category=(
                CategorySummary.model_validate(transaction.category)
                if transaction.category
                else None
            ),
        )

    def get_transactions(
        self,
        session: AuthSession | None,
        card_id: Optional[int] = None,
        budget_id: Optional[int] = None,
        category_id: Optional[int] = None,
        transaction_type: Optional[TransactionType] = None,
        start_date: Optional[datetime.date] = None,
        end_date: Optional[datetime.date] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> tuple[list[Transaction], int]:
        """
        Get the session user's transactions with filters.

        Filter ids that resolve to another user's records simply match
        nothing, since the query is always scoped to the session's user.

        Returns:
            Tuple of (transactions, total_count)
        """
        session = require_session(session)
        return self.transaction_repo.get_with_filters(
            user_id=session.user_id,
            card_id=card_id,
            budget_id=budget_id,
            category_id=category_id,
            transaction_type=transaction_type,
            start_date=start_date,
            end_date=end_date,
            limit=limit,
            offset=offset,
        )

    def update_transaction(
        self, transaction_id: int, transaction_data: TransactionUpdate, session: AuthSession | None
    ) -> Transaction:
        """
        Update transaction and recompute balances of every card it touched.

        An update that moves the transaction to another card recomputes
        both the old and the new card.

        Raises:
            NotFoundException: If transaction doesn't exist
            ForbiddenException: If transaction belongs to another user
            ValidationException: If card_id is sent as null
            ReferenceViolationException: If a changed reference is invalid
        """
        transaction = self.get_transaction(transaction_id, session)
        owner_id = transaction.user_id
        provided = transaction_data.model_fields_set
        if "card_id" in provided and transaction_data.card_id is None:
            raise ValidationException("A transaction must stay on a card", field="card_id")

        # Validate every changed reference before touching the record
        card = None
        if transaction_data.card_id is not None:
            card = self.references.card(transaction_data.card_id, owner_id)
        budget = self.references.budget(transaction_data.budget_id, owner_id)
        category = self.references.category(transaction_data.category_id, owner_id)

        old_card_id = transaction.card_id

        if card is not None:
            transaction.card = card
        if "budget_id" in provided:
            transaction.budget = budget
        if "category_id" in provided:
            transaction.category = category
        if transaction_data.amount is not None:
            transaction.amount = transaction_data.amount
        if transaction_data.transaction_type is not None:
            transaction.transaction_type = transaction_data.transaction_type
        if transaction_data.date is not None:
            transaction.date = transaction_data.date
        if transaction_data.description is not None:
            transaction.description = transaction_data.description

        try:
            self.db.flush()
            self.aggregation.recompute_card_balances_no_commit([old_card_id, transaction.card_id])
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(transaction)
        return transaction

    def delete_transaction(self, transaction_id: int, session: AuthSession | None) -> None:
        """
        Delete transaction and recompute its card balance.

        Raises:
            NotFoundException: If transaction doesn't exist (including already deleted)
            ForbiddenException: If transaction belongs to another user
        """
        transaction = self.get_transaction(transaction_id, session)
        CascadeService(self.db).delete_transaction(transaction)
