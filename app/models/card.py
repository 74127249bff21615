from sqlalchemy import String, Integer, Numeric, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from app.models.base import Base, TimestampMixin


class Card(Base, TimestampMixin):
    """
    Payment sources owned by users.

    Balance is calculated field (signed sum of the card's transactions)
    stored for performance. It is only written by the aggregation service.
    """

    __tablename__ = "cards"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id"),
        nullable=False,
        index=True,  # Critical for owner-scoped queries
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    balance: Mapped[float] = mapped_column(
        Numeric(precision=15, scale=2), nullable=False, default=0.00
    )

    def __repr__(self) -> str:
        return f"<Card(id={self.id}, name='{self.name}')>"
