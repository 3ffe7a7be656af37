"""
Assignment coordinator

Links a vendor to one category of a booking. Two guards run before anything
is written: the category must not already be staffed, and the vendor must not
have blocked the booking's event date. The task and its activity entry are
then committed together.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...errors import CategoryAlreadyAssigned, VendorNotFound, VendorUnavailable
from ...models import Booking, User, VendorTask
from ...realtime import publish_change
from ...shared.persistence import commit_or_fail
from ..activity.schemas import ActivityResponse
from ..activity.service import ActivityService, assignment_message
from ..availability.service import AvailabilityService
from ..users.repository import UserRepository
from .repository import TaskRepository
from .schemas import TaskResponse

logger = logging.getLogger(__name__)

DEFAULT_REQUIREMENTS = "No specific requirements provided."


def task_title(category: str, package_name: str) -> str:
    return f"{category.capitalize()} for {package_name}"


def task_description(category: str, client_name: str) -> str:
    return f"Handle {category} for {client_name}'s event."


class AssignmentCoordinator:
    def __init__(self, db: Session):
        self.db = db
        self.repo = TaskRepository()
        self.availability = AvailabilityService(db)

    def assign(self, booking: Booking, vendor_id: str, category: str, admin: User) -> VendorTask:
        vendor = UserRepository.get_vendor(self.db, vendor_id)
        if not vendor:
            raise VendorNotFound(vendor_id)

        existing = self.repo.get_for_category(self.db, booking.id, category)
        if existing:
            logger.info(f"⚠️ {category} on booking {booking.id} already held by {existing.vendor_name}")
            raise CategoryAlreadyAssigned(booking.id, category, existing.vendor_name)

        if self.availability.is_unavailable(vendor.id, booking.event_date):
            logger.info(f"📅 {vendor.name} is unavailable on {booking.event_date}, assignment refused")
            raise VendorUnavailable(vendor.name, booking.event_date.isoformat())

        task = self.repo.stage(
            self.db,
            booking_id=booking.id,
            vendor_id=vendor.id,
            vendor_name=vendor.name,
            category=category,
            title=task_title(category, booking.package_name),
            description=task_description(category, booking.client_name),
            status="assigned",
            event_date=booking.event_date,
            client_requirements=booking.requirements or DEFAULT_REQUIREMENTS,
        )
        activity = ActivityService(self.db).stage(
            assignment_message(vendor.name, category, booking.package_name),
            bookingId=booking.id,
            vendorName=vendor.name,
            clientName=booking.client_name,
        )

        try:
            commit_or_fail(self.db, "assign vendor")
        except IntegrityError as e:
            # Lost a race with a concurrent assignment for the same category
            raise CategoryAlreadyAssigned(booking.id, category) from e

        self.db.refresh(task)
        self.db.refresh(activity)
        logger.info(f"✅ {admin.email} assigned {vendor.name} to {category} for booking {booking.id}")
        publish_change("tasks", "created", TaskResponse.model_validate(task).to_document())
        publish_change("activity_logs", "created", ActivityResponse.model_validate(activity).to_document())
        return task
