from sqlalchemy.orm import Session
from app.models.user import User


class UserRepository:
    """Repository for User model operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, user_id: int) -> User | None:
        """Get user by internal ID"""
        return self.db.query(User).filter(User.id == user_id).first()

    def get_by_email(self, email: str) -> User | None:
        """Get user by email (case-insensitive, emails are stored lowercased)"""
        return self.db.query(User).filter(User.email == email.lower()).first()

    def create(self, user: User) -> User:
        """Create new user"""
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def update(self, user: User) -> User:
        """Update existing user"""
        self.db.commit()
        self.db.refresh(user)
        return user

    def get_ids(self, user_id: int) -> list[int]:
        """[user_id] while the user row exists, else []"""
        return [row.id for row in self.db.query(User.id).filter(User.id == user_id).all()]

    def delete_by_ids_no_commit(self, user_ids: list[int]) -> int:
        return self.db.query(User).filter(User.id.in_(user_ids)).delete(synchronize_session=False)
