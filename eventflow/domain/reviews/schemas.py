"""Review domain schemas"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from ...shared.schemas import CamelModel
from ...shared.validators import validate_rating


class ReviewCreate(BaseModel):
    bookingId: str
    rating: int
    comment: Optional[str] = None

    @field_validator("rating")
    @classmethod
    def check_rating(cls, v):
        return validate_rating(v)


class ReviewResponse(CamelModel):
    id: str
    package_id: str
    booking_id: str
    client_id: str
    client_name: Optional[str] = None
    rating: int
    comment: Optional[str] = None
    created_at: Optional[datetime] = None


class RatingSummary(CamelModel):
    average: float = 0.0
    count: int = 0


class PackageReviewsResponse(CamelModel):
    package_id: str
    rating: RatingSummary
    reviews: list[ReviewResponse]


class VendorRatingSummary(CamelModel):
    vendor_id: str
    vendor_name: str
    average: float = 0.0
    count: int = 0
    completed_tasks: int = 0
