from sqlalchemy.orm import Session
from app.core.exceptions import NotFoundException
from app.core.ownership import require_owner, require_session
from app.models.auth_session import AuthSession
from app.models.category import Category
from app.repositories.category_repository import CategoryRepository
from app.schemas.category_schemas import CategoryCreate, CategoryUpdate
from app.services.cascade_service import CascadeService


class CategoryService:
    """Service for category business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = CategoryRepository(db)

    def create_category(self, data: CategoryCreate, session: AuthSession | None) -> Category:
        """Create new category for the session's user"""
        session = require_session(session)
        category = Category(
            user_id=session.user_id,
            name=data.name,
            description=data.description,
            budgeted_amount=data.budgeted_amount,
        )
        return self.repo.create(category)

    def get_user_categories(self, session: AuthSession | None) -> list[Category]:
        session = require_session(session)
        return self.repo.get_by_user(session.user_id)

    def get_category(self, category_id: int, session: AuthSession | None) -> Category:
        """
        Get specific category ensuring ownership.

        Raises:
            NotFoundException: If category not found
            ForbiddenException: If category belongs to another user
        """
        category = self.repo.get_by_id(category_id)
        if not category:
            raise NotFoundException(f"Category {category_id} not found")
        require_owner(session, category.user_id, "Category")
        return category

    def update_category(
        self, category_id: int, data: CategoryUpdate, session: AuthSession | None
    ) -> Category:
        category = self.get_category(category_id, session)

        if data.name is not None:
            category.name = data.name
        if data.description is not None:
            category.description = data.description
        if data.budgeted_amount is not None:
            category.budgeted_amount = data.budgeted_amount

        return self.repo.update(category)

    def delete_category(self, category_id: int, session: AuthSession | None) -> None:
        """Delete category, detaching it from transactions and budgets"""
        category = self.get_category(category_id, session)
        CascadeService(self.db).delete_category(category)
