from datetime import date
from sqlalchemy import Column, String, Integer, Numeric, ForeignKey, Date, Text, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING
from app.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from app.models.card import Card
    from app.models.category import Category


# Non-owning link between a budget and the categories it covers
budget_categories = Table(
    "budget_categories",
    Base.metadata,
    Column("budget_id", Integer, ForeignKey("budgets.id"), primary_key=True),
    Column("category_id", Integer, ForeignKey("categories.id"), primary_key=True),
)


class Budget(Base, TimestampMixin):
    """
    Amount allocated to a card and a set of categories over a date range.

    "Remaining" is derived from transactions on read and never stored.
    """

    __tablename__ = "budgets"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False, index=True
    )
    card_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("cards.id"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    amount: Mapped[float] = mapped_column(Numeric(precision=15, scale=2), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    card: Mapped["Card"] = relationship("Card")
    categories: Mapped[list["Category"]] = relationship(
        "Category", secondary=budget_categories, order_by="Category.id"
    )

    @property
    def category_ids(self) -> list[int]:
        return [category.id for category in self.categories]

    def __repr__(self) -> str:
        return f"<Budget(id={self.id}, name='{self.name}')>"
