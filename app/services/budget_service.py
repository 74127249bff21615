from sqlalchemy.orm import Session
from app.core.exceptions import NotFoundException, ValidationException
from app.core.ownership import require_owner, require_session
from app.core.validation import validate_date_range
from app.models.auth_session import AuthSession
from app.models.budget import Budget
from app.repositories.budget_repository import BudgetRepository
from app.schemas.budget_schemas import (
    BudgetCreate,
    BudgetDetailResponse,
    BudgetResponse,
    BudgetUpdate,
)
from app.schemas.common_schemas import CardSummary, CategorySummary
from app.services.aggregation import AggregationService
from app.services.cascade_service import CascadeService
from app.services.reference_validator import ReferenceValidator

class BudgetService:
    """Service for budget business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = BudgetRepository(db)
        self.references = ReferenceValidator(db)
        self.aggregation = AggregationService(db)

    def create_budget(self, data: BudgetCreate, session: AuthSession | None) -> Budget:
        """
        Create a budget on one of the user's cards.

        Raises:
            ValidationException: If start_date is after end_date
            ReferenceViolationException: If card or any category is missing
                or owned by another user
        """
        session = require_session(session)
        validate_date_range(data.start_date, data.end_date)
        card = self.references.card(data.card_id, session.user_id)
        categories = self.references.categories(data.category_ids, session.user_id)

        budget = Budget(
            user_id=session.user_id,
            card_id=card.id,
            name=data.name,
            start_date=data.start_date,
            end_date=data.end_date,
            amount=data.amount,
            description=data.description,
        )
        budget.categories = categories
        return self.repo.create(budget)

    def get_user_budgets(self, session: AuthSession | None) -> list[Budget]:
        session = require_session(session)
        return self.repo.get_by_user(session.user_id)

    def get_budget(self, budget_id: int, session: AuthSession | None) -> Budget:
        """
        Get specific budget ensuring ownership.

        Raises:
            NotFoundException: If budget not found
            ForbiddenException: If budget belongs to another user
        """
        budget = self.repo.get_by_id(budget_id)
        if not budget:
            raise NotFoundException(f"Budget {budget_id} not found")
        require_owner(session, budget.user_id, "Budget")
        return budget

    def get_budget_detail(self, budget_id: int, session: AuthSession | None) -> BudgetDetailResponse:
        """Budget with card/category summaries plus spent and remaining"""
        budget = self.get_budget(budget_id, session)
        spent = self.aggregation.get_budget_spent(budget)
        return BudgetDetailResponse(
            **BudgetResponse.model_validate(budget).model_dump(),
            card=CardSummary.model_validate(budget.card),
            categories=[CategorySummary.model_validate(c) for c in budget.categories],
            spent=float(spent),
            remaining=float(budget.amount - spent),
        )

    def update_budget(self, budget_id: int, data: BudgetUpdate, session: AuthSession | None) -> Budget:
        """
        Update budget; changed references are re-validated before writing.

        Raises:
            ValidationException: If the resulting date range is inverted or
                card_id is cleared
            ReferenceViolationException: If a new card/category is not the owner's
        """
        budget = self.get_budget(budget_id, session)
        if "card_id" in data.model_fields_set and data.card_id is None:
            raise ValidationException("A budget must stay on a card", field="card_id")

        start_date = data.start_date if data.start_date is not None else budget.start_date
        end_date = data.end_date if data.end_date is not None else budget.end_date
        validate_date_range(start_date, end_date)

        card = None
        if data.card_id is not None:
            card = self.references.card(data.card_id, budget.user_id)
        categories = None
        if data.category_ids is not None:
            categories = self.references.categories(data.category_ids, budget.user_id)

        if data.name is not None:
            budget.name = data.name
        budget.start_date = start_date
        budget.end_date = end_date
        if data.amount is not None:
            budget.amount = data.amount
        if data.description is not None:
            budget.description = data.description
        if card is not None:
            budget.card = card
        if categories is not None:
            budget.categories = categories

        return self.repo.update(budget)

    def delete_budget(self, budget_id: int, session: AuthSession | None) -> None:
        """Delete budget, detaching it from its transactions"""
        budget = self.get_budget(budget_id, session)
        CascadeService(self.db).delete_budget(budget)
