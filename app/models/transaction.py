import datetime
from enum import Enum as PyEnum
from sqlalchemy import Integer, Numeric, ForeignKey, Date, Text, Enum, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING
from app.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from app.models.card import Card
    from app.models.budget import Budget
    from app.models.category import Category


class TransactionType(str, PyEnum):
    """Transaction type enumeration"""

    INCOME = "income"
    EXPENSE = "expense"
    TRANSFER = "transfer"


class Transaction(Base, TimestampMixin):
    """
    Money movements against a card.

    Amount: always a positive magnitude; the sign applied to the card
    balance comes from transaction_type.
    Card is required; budget and category are optional and are detached
    (set to NULL) when their target is deleted.
    """

    __tablename__ = "transactions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False, index=True
    )
    card_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("cards.id"), nullable=False, index=True
    )
    budget_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("budgets.id"), nullable=True, index=True
    )
    category_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("categories.id"), nullable=True, index=True
    )
    amount: Mapped[float] = mapped_column(Numeric(precision=15, scale=2), nullable=False)
    transaction_type: Mapped[TransactionType] = mapped_column(
        Enum(TransactionType, native_enum=False, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
    )
    date: Mapped[datetime.date] = mapped_column(
        Date, nullable=False, default=datetime.date.today, index=True
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    card: Mapped["Card"] = relationship("Card")
    budget: Mapped["Budget | None"] = relationship("Budget")
    category: Mapped["Category | None"] = relationship("Category")

    # Composite indexes for common queries
    __table_args__ = (
        Index("ix_transactions_user_date", "user_id", "date"),
        Index("ix_transactions_budget_date", "budget_id", "date"),
    )

    def __repr__(self) -> str:
        return f"<Transaction(id={self.id}, type={self.transaction_type.value}, amount={self.amount})>"
