"""User repository - Database operations for user profiles"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import User
from ...shared.persistence import commit_or_fail


class UserRepository:
    """Repository for user database operations"""

    @staticmethod
    def get_user(db: Session, user_id: str) -> Optional[User]:
        return db.query(User).filter(User.id == user_id).first()

    @staticmethod
    def get_user_by_firebase_uid(db: Session, firebase_uid: str) -> Optional[User]:
        return db.query(User).filter(User.firebase_uid == firebase_uid).first()

    @staticmethod
    def get_user_by_email(db: Session, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == email).first()

    @staticmethod
    def get_vendor(db: Session, vendor_id: str) -> Optional[User]:
        return db.query(User).filter(User.id == vendor_id, User.role == "vendor").first()

    @staticmethod
    def list_users(
        db: Session, search: Optional[str] = None, role: Optional[str] = None
    ) -> list[User]:
        query = db.query(User)
        if role:
            query = query.filter(User.role == role)
        if search:
            search_term = f"%{search.lower()}%"
            query = query.filter((User.name.ilike(search_term)) | (User.email.ilike(search_term)))
        return query.order_by(User.created_at.desc()).all()

    @staticmethod
    def create_user(db: Session, **user_data) -> User:
        user = User(**user_data)
        db.add(user)
        commit_or_fail(db, "create user")
        db.refresh(user)
        return user

    @staticmethod
    def update_user(db: Session, user: User, **updates) -> User:
        for key, value in updates.items():
            if value is not None and hasattr(user, key):
                setattr(user, key, value)
        commit_or_fail(db, "update user")
        db.refresh(user)
        return user
