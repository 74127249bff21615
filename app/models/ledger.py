from datetime import date
from sqlalchemy import String, Integer, ForeignKey, Date
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING
from app.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from app.models.transaction import Transaction


class LedgerEntry(Base):
    """
    Ordered association row placing a transaction inside a ledger.

    The ledger does not own the transaction: removing an entry never
    deletes the transaction itself.
    """

    __tablename__ = "ledger_entries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    ledger_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("ledgers.id"), nullable=False, index=True
    )
    transaction_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("transactions.id"), nullable=False, index=True
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)

    transaction: Mapped["Transaction"] = relationship("Transaction")


class Ledger(Base, TimestampMixin):
    """Named grouping of transactions over a date range."""

    __tablename__ = "ledgers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)

    # Entries are association rows, they live and die with the ledger
    entries: Mapped[list[LedgerEntry]] = relationship(
        LedgerEntry,
        order_by=LedgerEntry.position,
        cascade="all, delete-orphan",
    )

    @property
    def transaction_ids(self) -> list[int]:
        return [entry.transaction_id for entry in self.entries]

    @property
    def transactions(self) -> list["Transaction"]:
        return [entry.transaction for entry in self.entries]

    def __repr__(self) -> str:
        return f"<Ledger(id={self.id}, name='{self.name}')>"
