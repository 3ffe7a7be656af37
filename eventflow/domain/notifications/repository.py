"""Notification repository - Database operations for notifications"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Notification
from ...shared.persistence import commit_or_fail


class NotificationRepository:
    """Repository for notification database operations"""

    @staticmethod
    def stage(db: Session, **notification_data) -> Notification:
        """Add a notification to the current unit of work without committing"""
        notification = Notification(**notification_data)
        db.add(notification)
        return notification

    @staticmethod
    def get(db: Session, notification_id: str) -> Optional[Notification]:
        return db.query(Notification).filter(Notification.id == notification_id).first()

    @staticmethod
    def list_for_user(db: Session, user_id: str, unread_only: bool = False) -> list[Notification]:
        query = db.query(Notification).filter(Notification.user_id == user_id)
        if unread_only:
            query = query.filter(Notification.is_read.is_(False))
        return query.order_by(Notification.created_at.desc()).all()

    @staticmethod
    def count_unread(db: Session, user_id: str) -> int:
        return (
            db.query(Notification)
            .filter(Notification.user_id == user_id, Notification.is_read.is_(False))
            .count()
        )

    @staticmethod
    def mark_all_read(db: Session, user_id: str) -> list[Notification]:
        unread = (
            db.query(Notification)
            .filter(Notification.user_id == user_id, Notification.is_read.is_(False))
            .all()
        )
        for notification in unread:
            notification.is_read = True
        commit_or_fail(db, "mark notifications read")
        return unread
