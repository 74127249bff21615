from sqlalchemy.orm import Session
from app.core.exceptions import NotFoundException, ValidationException
from app.core.ownership import require_owner, require_session
from app.core.validation import validate_date_range
from app.models.auth_session import AuthSession
from app.models.ledger import Ledger, LedgerEntry
from app.models.transaction import Transaction
from app.repositories.ledger_repository import LedgerRepository
from app.schemas.common_schemas import TransactionSummary
from app.schemas.ledger_schemas import (
    LedgerCreate,
    LedgerDetailResponse,
    LedgerResponse,
    LedgerUpdate,
)
from app.services.aggregation import ledger_net_total
from app.services.cascade_service import CascadeService
from app.services.reference_validator import ReferenceValidator


def _entries_for(transactions: list[Transaction]) -> list[LedgerEntry]:
    return [
        LedgerEntry(transaction_id=txn.id, position=position)
        for position, txn in enumerate(transactions)
    ]


class LedgerService:
    """Service for ledger business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = LedgerRepository(db)
        self.references = ReferenceValidator(db)

    def create_ledger(self, data: LedgerCreate, session: AuthSession | None) -> Ledger:
        """
        Create a ledger grouping the given transactions in order.

        Raises:
            ValidationException: If dates are inverted or a transaction repeats
            ReferenceViolationException: If a transaction is not the owner's
        """
        session = require_session(session)
        validate_date_range(data.start_date, data.end_date)
        transactions = self.references.transactions(data.transaction_ids, session.user_id)

        ledger = Ledger(
            user_id=session.user_id,
            name=data.name,
            start_date=data.start_date,
            end_date=data.end_date,
        )
        ledger.entries = _entries_for(transactions)
        return self.repo.create(ledger)

    def get_user_ledgers(self, session: AuthSession | None) -> list[Ledger]:
        session = require_session(session)
        return self.repo.get_by_user(session.user_id)

    def get_ledger(self, ledger_id: int, session: AuthSession | None) -> Ledger:
        """
        Get specific ledger ensuring ownership.

        Raises:
            NotFoundException: If ledger not found
            ForbiddenException: If ledger belongs to another user
        """
        ledger = self.repo.get_by_id(ledger_id)
        if not ledger:
            raise NotFoundException(f"Ledger {ledger_id} not found")
        require_owner(session, ledger.user_id, "Ledger")
        return ledger

    def get_ledger_detail(self, ledger_id: int, session: AuthSession | None) -> LedgerDetailResponse:
        ledger = self.get_ledger(ledger_id, session)
        transactions = ledger.transactions
        return LedgerDetailResponse(
            **LedgerResponse.model_validate(ledger).model_dump(),
            transactions=[TransactionSummary.model_validate(txn) for txn in transactions],
            net_total=float(ledger_net_total(transactions)),
        )

    def update_ledger(self, ledger_id: int, data: LedgerUpdate, session: AuthSession | None) -> Ledger:
        """Update ledger; a provided transaction_ids list replaces the sequence"""
        ledger = self.get_ledger(ledger_id, session)

        start_date = data.start_date if data.start_date is not None else ledger.start_date
        end_date = data.end_date if data.end_date is not None else ledger.end_date
        validate_date_range(start_date, end_date)

        transactions = None
        if data.transaction_ids is not None:
            transactions = self.references.transactions(data.transaction_ids, ledger.user_id)

        if data.name is not None:
            ledger.name = data.name
        ledger.start_date = start_date
        ledger.end_date = end_date
        if transactions is not None:
            ledger.entries = _entries_for(transactions)

        return self.repo.update(ledger)

    def add_transaction(
        self, ledger_id: int, transaction_id: int, session: AuthSession | None
    ) -> Ledger:
        """Append a transaction to the end of the ledger"""
        ledger = self.get_ledger(ledger_id, session)
        if transaction_id in ledger.transaction_ids:
            raise ValidationException(
                f"Transaction {transaction_id} already in ledger", field="transaction_id"
            )
        txn = self.references.transactions([transaction_id], ledger.user_id)[0]

        next_position = max((entry.position for entry in ledger.entries), default=-1) + 1
        ledger.entries.append(LedgerEntry(transaction_id=txn.id, position=next_position))
        return self.repo.update(ledger)

    def remove_transaction(
        self, ledger_id: int, transaction_id: int, session: AuthSession | None
    ) -> Ledger:
        """Take a transaction out of the ledger; the transaction itself stays"""
        ledger = self.get_ledger(ledger_id, session)
        entry = next((e for e in ledger.entries if e.transaction_id == transaction_id), None)
        if entry is None:
            raise NotFoundException(f"Transaction {transaction_id} not in ledger {ledger_id}")

        ledger.entries.remove(entry)
        return self.repo.update(ledger)

    def delete_ledger(self, ledger_id: int, session: AuthSession | None) -> None:
        """Delete ledger only; grouped transactions are kept"""
        ledger = self.get_ledger(ledger_id, session)
        CascadeService(self.db).delete_ledger(ledger)
