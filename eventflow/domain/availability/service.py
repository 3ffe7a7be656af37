"""Availability service - vendors manage the dates they cannot work"""

import logging
from datetime import date

from sqlalchemy.orm import Session

from ...errors import VendorNotFound
from ...models import User
from ...realtime import publish_change
from ..users.repository import UserRepository
from .repository import AvailabilityRepository
from .schemas import AvailabilityResponse

logger = logging.getLogger(__name__)


class AvailabilityService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = AvailabilityRepository()

    def get_dates(self, vendor_id: str) -> AvailabilityResponse:
        record = self.repo.get(self.db, vendor_id)
        if record is None:
            return AvailabilityResponse(vendor_id=vendor_id, unavailable_dates=[])
        return AvailabilityResponse.model_validate(record)

    def get_for_vendor(self, vendor_id: str) -> AvailabilityResponse:
        """Admin lookup; the id must belong to a vendor"""
        if not UserRepository.get_vendor(self.db, vendor_id):
            raise VendorNotFound(vendor_id)
        return self.get_dates(vendor_id)

    def set_dates(self, vendor: User, dates: list[date]) -> AvailabilityResponse:
        """Replace the vendor's blocked dates (stored sorted, without duplicates)"""
        normalized = sorted({d.isoformat() for d in dates})
        record = self.repo.upsert(self.db, vendor.id, normalized)
        logger.info(f"📅 {vendor.email} now unavailable on {len(normalized)} date(s)")
        response = AvailabilityResponse.model_validate(record)
        publish_change("vendor_availability", "updated", response.to_document())
        return response

    def is_unavailable(self, vendor_id: str, event_date: date) -> bool:
        record = self.repo.get(self.db, vendor_id)
        if record is None:
            return False
        return event_date.isoformat() in (record.unavailable_dates or [])
