"""User service - sign-up profiles and admin user management"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...errors import UserNotFound
from ...models import User
from ...realtime import publish_change
from ...utils.sanitization import sanitize_string
from .repository import UserRepository
from .schemas import RegisterRequest, UserResponse

logger = logging.getLogger(__name__)


class UserService:
    """Service layer for user profiles"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepository()

    def register(self, claims: dict, data: RegisterRequest) -> User:
        """Create the profile for a freshly signed-up identity.

        Vendors start ``pending`` and cannot sign in until an admin activates
        them; clients are active immediately.
        """
        firebase_uid = claims["uid"]
        email = claims.get("email")
        if not email:
            raise HTTPException(status_code=400, detail="Identity token has no email address")

        if self.repo.get_user_by_firebase_uid(self.db, firebase_uid):
            raise HTTPException(status_code=409, detail="Profile already exists")
        if self.repo.get_user_by_email(self.db, email):
            raise HTTPException(status_code=409, detail="This email is already registered")

        status = "pending" if data.role == "vendor" else "active"
        try:
            user = self.repo.create_user(
                self.db,
                firebase_uid=firebase_uid,
                name=sanitize_string(data.name),
                email=email,
                role=data.role,
                status=status,
            )
        except IntegrityError as e:
            logger.warning(f"⚠️ Concurrent registration for {email}")
            raise HTTPException(status_code=409, detail="Profile already exists") from e
        logger.info(f"🆕 Registered {data.role} {email} (status={status})")
        publish_change("users", "created", UserResponse.model_validate(user).to_document())
        return user

    def get_user(self, user_id: str) -> User:
        user = self.repo.get_user(self.db, user_id)
        if not user:
            raise UserNotFound(user_id)
        return user

    def list_users(self, search: Optional[str] = None, role: Optional[str] = None) -> list[User]:
        return self.repo.list_users(self.db, search, role)

    def list_vendors(self) -> list[User]:
        return self.repo.list_users(self.db, role="vendor")

    def set_role(self, user_id: str, role: str, admin: User) -> User:
        user = self.get_user(user_id)
        user = self.repo.update_user(self.db, user, role=role)
        logger.info(f"✅ {admin.email} changed role of {user.email} to {role}")
        publish_change("users", "updated", UserResponse.model_validate(user).to_document())
        return user

    def set_status(self, user_id: str, status: str, admin: User) -> User:
        """Approve (active), suspend (disabled) or park (pending) an account"""
        user = self.get_user(user_id)
        user = self.repo.update_user(self.db, user, status=status)
        logger.info(f"✅ {admin.email} changed status of {user.email} to {status}")
        publish_change("users", "updated", UserResponse.model_validate(user).to_document())
        return user
