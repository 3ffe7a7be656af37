"""Booking service - submission, status transitions, admin listing and export"""

import csv
import logging
from datetime import date, datetime
from io import StringIO
from typing import Optional

from fastapi import HTTPException
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from ...config import BOOKING_PAGE_SIZE, STRICT_BOOKING_TRANSITIONS
from ...errors import BookingNotFound, EventDateUnavailable, InvalidEventDate, InvalidStatusTransition, PackageNotFound
from ...models import Booking, User, generate_id
from ...realtime import publish_change
from ...shared.persistence import commit_or_fail
from ...shared.validators import is_future_date
from ...utils.sanitization import sanitize_string, sanitize_text
from ..activity.schemas import ActivityResponse
from ..activity.service import ActivityService, booking_created_message
from ..catalog.pricing import compute_total_price, required_categories
from ..catalog.service import CatalogService
from ..notifications.schemas import NotificationResponse
from ..notifications.service import NotificationService, booking_link, booking_status_message
from .repository import BookingRepository
from .schemas import BookingCreate, BookingDetailResponse, BookingPage, BookingResponse
from .state_machine import allowed_next_statuses, validate_booking_transition

logger = logging.getLogger(__name__)


class BookingService:
    """Service layer for bookings"""

    def __init__(self, db: Session, strict_transitions: Optional[bool] = None):
        self.db = db
        self.repo = BookingRepository()
        self.strict_transitions = (
            STRICT_BOOKING_TRANSITIONS if strict_transitions is None else strict_transitions
        )

    def get_booking(self, booking_id: str) -> Booking:
        booking = self.repo.get_booking(self.db, booking_id)
        if not booking:
            raise BookingNotFound(booking_id)
        return booking

    def submit(self, client: User, data: BookingCreate, today: Optional[date] = None) -> Booking:
        """
        Create a pending booking with its price frozen.

        The event date must be after today and must not fall on a date held by
        a confirmed or in-progress booking. The booking and its activity entry
        are committed together.
        """
        if not is_future_date(data.eventDate, today):
            raise InvalidEventDate("Event date must be after today")

        catalog = CatalogService(self.db)
        package = catalog.get_package(data.packageId)
        if package.is_archived:
            raise PackageNotFound(data.packageId)

        if self.repo.is_date_blocked(self.db, data.eventDate):
            logger.info(f"📅 Rejected booking from {client.email}: {data.eventDate} is taken")
            raise EventDateUnavailable(data.eventDate.isoformat())

        selected = catalog.resolve_selections(data.customizationIds)
        total_price = compute_total_price(package.base_price, selected, data.guestCount)

        booking = self.repo.stage(
            self.db,
            id=generate_id(),
            client_id=client.id,
            client_name=client.name,
            package_id=package.id,
            package_name=package.name,
            customizations=[item.model_dump() for item in selected],
            total_price=total_price,
            event_date=data.eventDate,
            guest_count=data.guestCount,
            requirements=sanitize_text(data.requirements),
            status="pending",
        )
        activity = ActivityService(self.db).stage(
            booking_created_message(client.name, package.name),
            bookingId=booking.id,
            clientName=client.name,
        )
        commit_or_fail(self.db, "submit booking")
        self.db.refresh(booking)
        self.db.refresh(activity)

        logger.info(f"🆕 Booking {booking.id} submitted by {client.email} for {package.name} (${total_price})")
        publish_change("bookings", "created", BookingResponse.model_validate(booking).to_document())
        publish_change("activity_logs", "created", ActivityResponse.model_validate(activity).to_document())
        return booking

    def transition(self, booking_id: str, new_status: str, admin: User) -> Booking:
        """
        Move a booking to ``new_status`` and notify its client.

        The status write and the notification are one commit: either both land
        or neither does. Selecting the current status changes nothing.
        """
        booking = self.get_booking(booking_id)
        current_status = booking.status

        if not validate_booking_transition(current_status, new_status, self.strict_transitions):
            logger.warning(f"⚠️ Refused booking {booking_id} transition {current_status} → {new_status}")
            raise InvalidStatusTransition(current_status, new_status)

        if current_status == new_status:
            return booking

        booking.status = new_status
        notification = NotificationService(self.db).stage(
            booking.client_id,
            booking_status_message(booking.package_name, new_status),
            booking_link(booking.id),
        )
        commit_or_fail(self.db, "update booking status")
        self.db.refresh(booking)
        self.db.refresh(notification)

        logger.info(f"✅ {admin.email} moved booking {booking_id}: {current_status} → {new_status}")
        publish_change("bookings", "updated", BookingResponse.model_validate(booking).to_document())
        publish_change(
            "notifications", "created", NotificationResponse.model_validate(notification).to_document()
        )
        return booking

    def get_detail(self, booking_id: str, user: User) -> BookingDetailResponse:
        """Admins see any booking; clients only their own"""
        booking = self.get_booking(booking_id)
        if user.role != "admin" and booking.client_id != user.id:
            raise BookingNotFound(booking_id)

        detail = BookingDetailResponse.model_validate(booking)
        detail.required_categories = required_categories(detail.customizations)
        detail.allowed_statuses = allowed_next_statuses(booking.status, self.strict_transitions)
        return detail

    def list_for_client(self, client: User) -> list[Booking]:
        return self.repo.list_for_client(self.db, client.id)

    def list_page(
        self,
        search: Optional[str] = None,
        status: Optional[str] = None,
        cursor: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> BookingPage:
        """Newest-first page; pass the returned nextCursor to continue"""
        page_size = limit or BOOKING_PAGE_SIZE
        cursor_booking = None
        if cursor:
            cursor_booking = self.repo.get_booking(self.db, cursor)
            if not cursor_booking:
                raise HTTPException(status_code=400, detail="Invalid pagination cursor")

        rows = self.repo.page_after(self.db, page_size, cursor_booking, sanitize_string(search), status)
        items = rows[:page_size]
        next_cursor = items[-1].id if len(rows) > page_size else None
        return BookingPage(
            items=[BookingResponse.model_validate(booking) for booking in items],
            next_cursor=next_cursor,
        )

    def unavailable_dates(self) -> list[date]:
        """Dates already held by confirmed or in-progress bookings"""
        return self.repo.blocked_dates(self.db)

    def export_bookings_csv(
        self, user: User, search: Optional[str] = None, status: Optional[str] = None
    ) -> StreamingResponse:
        """Export bookings as CSV"""
        logger.info(f"📊 CSV Export requested by user {user.id} ({user.email})")
        bookings = self.repo.search_bookings(self.db, sanitize_string(search), status)
        logger.info(f"Found {len(bookings)} bookings to export")

        output = StringIO()
        writer = csv.writer(output)
        writer.writerow(
            [
                "Booking ID",
                "Client Name",
                "Package Name",
                "Event Date",
                "Status",
                "Guest Count",
                "Total Price",
                "Customizations",
                "Requirements",
            ]
        )
        for booking in bookings:
            writer.writerow(
                [
                    booking.id,
                    booking.client_name,
                    booking.package_name,
                    booking.event_date.isoformat(),
                    booking.status,
                    booking.guest_count,
                    f"{booking.total_price:.2f}",
                    "; ".join(item.get("name", "") for item in booking.customizations or []),
                    booking.requirements or "",
                ]
            )

        output.seek(0)
        filename = f"bookings_export_{datetime.now().strftime('%Y%m%d_%H%M%S')}.csv"
        return StreamingResponse(
            iter([output.getvalue()]),
            media_type="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
