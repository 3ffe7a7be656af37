"""Activity repository - append-only admin audit log"""

from sqlalchemy.orm import Session

from ...models import ActivityLog


class ActivityRepository:
    @staticmethod
    def stage(db: Session, message: str, meta: dict) -> ActivityLog:
        """Add an entry to the current unit of work without committing"""
        entry = ActivityLog(message=message, meta=meta)
        db.add(entry)
        return entry

    @staticmethod
    def recent(db: Session, limit: int) -> list[ActivityLog]:
        return (
            db.query(ActivityLog)
            .order_by(ActivityLog.created_at.desc(), ActivityLog.id.desc())
            .limit(limit)
            .all()
        )
