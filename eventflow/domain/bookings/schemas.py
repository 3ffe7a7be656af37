"""Booking domain schemas - Pydantic models for validation"""

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, field_validator

from ...shared.schemas import CamelModel
from ..tasks.schemas import TaskResponse

BookingStatus = Literal["pending", "awaiting-payment", "confirmed", "in-progress", "completed", "rejected"]


class BookingCreate(BaseModel):
    packageId: str
    customizationIds: list[str] = []
    guestCount: int
    eventDate: date
    requirements: Optional[str] = None

    @field_validator("guestCount")
    @classmethod
    def validate_guests(cls, v):
        if v < 1:
            raise ValueError("Guest count must be at least 1")
        return v


class BookingStatusUpdate(BaseModel):
    status: BookingStatus


class CustomizationSnapshot(CamelModel):
    id: str
    category: str
    name: str
    price: float


class BookingResponse(CamelModel):
    id: str
    client_id: str
    client_name: str
    package_id: str
    package_name: str
    customizations: list[CustomizationSnapshot] = []
    total_price: float
    event_date: date
    guest_count: int
    requirements: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class BookingDetailResponse(BookingResponse):
    required_categories: list[str] = []
    allowed_statuses: list[str] = []
    tasks: list[TaskResponse] = []


class BookingPage(CamelModel):
    items: list[BookingResponse]
    next_cursor: Optional[str] = None
