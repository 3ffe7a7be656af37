from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel

from ...shared.schemas import CamelModel


class AvailabilityUpdate(BaseModel):
    unavailableDates: list[date]


class AvailabilityResponse(CamelModel):
    vendor_id: str
    unavailable_dates: list[date] = []
    updated_at: Optional[datetime] = None
