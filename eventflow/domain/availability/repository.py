"""Availability repository - one record of blocked dates per vendor"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import VendorAvailability
from ...shared.persistence import commit_or_fail


class AvailabilityRepository:
    @staticmethod
    def get(db: Session, vendor_id: str) -> Optional[VendorAvailability]:
        return db.query(VendorAvailability).filter(VendorAvailability.vendor_id == vendor_id).first()

    @staticmethod
    def upsert(db: Session, vendor_id: str, unavailable_dates: list[str]) -> VendorAvailability:
        record = AvailabilityRepository.get(db, vendor_id)
        if record is None:
            record = VendorAvailability(vendor_id=vendor_id, unavailable_dates=unavailable_dates)
            db.add(record)
        else:
            record.unavailable_dates = unavailable_dates
        commit_or_fail(db, "save availability")
        db.refresh(record)
        return record
