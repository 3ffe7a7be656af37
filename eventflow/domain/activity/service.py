"""Activity service - records admin-visible events, serves the capped feed"""

from typing import Optional

from sqlalchemy.orm import Session

from ...config import ACTIVITY_FEED_LIMIT
from ...models import ActivityLog
from .repository import ActivityRepository


def booking_created_message(client_name: str, package_name: str) -> str:
    return f'New booking from {client_name} for "{package_name}".'


def assignment_message(vendor_name: str, category: str, package_name: str) -> str:
    return f'Admin assigned {vendor_name} to the {category} task for "{package_name}".'


class ActivityService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = ActivityRepository()

    def stage(self, message: str, **meta) -> ActivityLog:
        """Queue an entry in the caller's unit of work; the caller commits"""
        return self.repo.stage(self.db, message, {k: v for k, v in meta.items() if v is not None})

    def feed(self, limit: Optional[int] = None) -> list[ActivityLog]:
        """Most recent entries first, capped at ACTIVITY_FEED_LIMIT"""
        cap = min(limit, ACTIVITY_FEED_LIMIT) if limit else ACTIVITY_FEED_LIMIT
        return self.repo.recent(self.db, cap)
