"""Booking repository - Database operations for bookings"""

from datetime import date
from typing import Optional

from sqlalchemy import and_, or_
from sqlalchemy.orm import Session

from ...models import Booking
from .state_machine import DATE_BLOCKING_STATUSES


class BookingRepository:
    """Repository for booking database operations"""

    @staticmethod
    def stage(db: Session, **booking_data) -> Booking:
        """Add a booking to the current unit of work without committing"""
        booking = Booking(**booking_data)
        db.add(booking)
        return booking

    @staticmethod
    def get_booking(db: Session, booking_id: str) -> Optional[Booking]:
        return db.query(Booking).filter(Booking.id == booking_id).first()

    @staticmethod
    def list_for_client(db: Session, client_id: str) -> list[Booking]:
        return (
            db.query(Booking)
            .filter(Booking.client_id == client_id)
            .order_by(Booking.created_at.desc(), Booking.id.desc())
            .all()
        )

    @staticmethod
    def _filtered(db: Session, search: Optional[str] = None, status: Optional[str] = None):
        query = db.query(Booking)
        if status:
            query = query.filter(Booking.status == status)
        if search:
            search_term = f"%{search}%"
            query = query.filter(
                or_(Booking.client_name.ilike(search_term), Booking.package_name.ilike(search_term))
            )
        return query

    @staticmethod
    def search_bookings(
        db: Session, search: Optional[str] = None, status: Optional[str] = None
    ) -> list[Booking]:
        query = BookingRepository._filtered(db, search, status)
        return query.order_by(Booking.created_at.desc(), Booking.id.desc()).all()

    @staticmethod
    def page_after(
        db: Session,
        limit: int,
        cursor: Optional[Booking] = None,
        search: Optional[str] = None,
        status: Optional[str] = None,
    ) -> list[Booking]:
        """
        Keyset page ordered newest first.

        Fetches ``limit + 1`` rows so the caller can tell whether another page
        exists. Rows inserted between calls may be skipped or repeated.
        """
        query = BookingRepository._filtered(db, search, status)
        if cursor is not None:
            query = query.filter(
                or_(
                    Booking.created_at < cursor.created_at,
                    and_(Booking.created_at == cursor.created_at, Booking.id < cursor.id),
                )
            )
        return query.order_by(Booking.created_at.desc(), Booking.id.desc()).limit(limit + 1).all()

    @staticmethod
    def blocked_dates(db: Session) -> list[date]:
        rows = (
            db.query(Booking.event_date)
            .filter(Booking.status.in_(DATE_BLOCKING_STATUSES))
            .distinct()
            .order_by(Booking.event_date)
            .all()
        )
        return [row[0] for row in rows]

    @staticmethod
    def is_date_blocked(db: Session, event_date: date) -> bool:
        return (
            db.query(Booking.id)
            .filter(Booking.event_date == event_date, Booking.status.in_(DATE_BLOCKING_STATUSES))
            .first()
            is not None
        )
