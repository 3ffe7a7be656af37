"""Notification service - per-recipient messages and their read flag"""

import logging

from sqlalchemy.orm import Session

from ...config import FRONTEND_URL
from ...errors import NotificationNotFound
from ...models import Notification, User
from ...realtime import publish_change
from ...shared.persistence import commit_or_fail
from .repository import NotificationRepository
from .schemas import NotificationResponse

logger = logging.getLogger(__name__)


def booking_link(booking_id: str) -> str:
    return f"{FRONTEND_URL.rstrip('/')}/booking/{booking_id}"


def booking_status_message(package_name: str, status: str) -> str:
    readable = status.replace("-", " ")
    return f'The status of your booking for "{package_name}" has been updated to {readable}.'


class NotificationService:
    """Service layer for notifications"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = NotificationRepository()

    def stage(self, user_id: str, message: str, link: str | None = None) -> Notification:
        """Queue a notification in the caller's unit of work; the caller commits"""
        return self.repo.stage(self.db, user_id=user_id, message=message, link=link, is_read=False)

    def list_for_user(self, user: User, unread_only: bool = False) -> list[Notification]:
        return self.repo.list_for_user(self.db, user.id, unread_only)

    def unread_count(self, user: User) -> int:
        return self.repo.count_unread(self.db, user.id)

    def set_read(self, notification_id: str, user: User, is_read: bool = True) -> Notification:
        """Only the recipient may flip the read flag"""
        notification = self.repo.get(self.db, notification_id)
        if not notification or notification.user_id != user.id:
            raise NotificationNotFound(notification_id)

        notification.is_read = is_read
        commit_or_fail(self.db, "update notification")
        self.db.refresh(notification)
        publish_change("notifications", "updated", NotificationResponse.model_validate(notification).to_document())
        return notification

    def mark_all_read(self, user: User) -> int:
        updated = self.repo.mark_all_read(self.db, user.id)
        logger.info(f"📬 Marked {len(updated)} notifications read for {user.email}")
        for notification in updated:
            self.db.refresh(notification)
            publish_change("notifications", "updated", NotificationResponse.model_validate(notification).to_document())
        return len(updated)
