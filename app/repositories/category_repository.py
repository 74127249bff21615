from sqlalchemy.orm import Session
from app.models.budget import budget_categories
from app.models.category import Category


class CategoryRepository:
    """Repository for Category model operations with owner scoping"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, category_id: int) -> Category | None:
        """Get category by ID regardless of owner (existence check)"""
        return self.db.query(Category).filter(Category.id == category_id).first()

    def get_by_ids(self, category_ids: list[int]) -> list[Category]:
        if not category_ids:
            return []
        return self.db.query(Category).filter(Category.id.in_(category_ids)).all()

    def get_by_user(self, user_id: int) -> list[Category]:
        """Get all categories for a user"""
        return (
            self.db.query(Category)
            .filter(Category.user_id == user_id)
            .order_by(Category.id)
            .all()
        )

    def get_ids_by_user(self, user_id: int) -> list[int]:
        return [
            row.id for row in self.db.query(Category.id).filter(Category.user_id == user_id).all()
        ]

    def create(self, category: Category) -> Category:
        """Create new category"""
        self.db.add(category)
        self.db.commit()
        self.db.refresh(category)
        return category

    def update(self, category: Category) -> Category:
        """Update existing category"""
        self.db.commit()
        self.db.refresh(category)
        return category

    def unlink_from_budgets_no_commit(self, category_ids: list[int]) -> int:
        """Remove categories from every budget's category set"""
        result = self.db.execute(
            budget_categories.delete().where(budget_categories.c.category_id.in_(category_ids))
        )
        return result.rowcount

    def delete_no_commit(self, category: Category) -> None:
        """Delete category without committing (caller owns the unit of work)"""
        self.db.delete(category)
        self.db.flush()

    def delete_by_ids_no_commit(self, category_ids: list[int]) -> int:
        self.unlink_from_budgets_no_commit(category_ids)
        return (
            self.db.query(Category)
            .filter(Category.id.in_(category_ids))
            .delete(synchronize_session=False)
        )
