"""Catalog schemas - packages, customization options and quotes"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from ...shared.schemas import CamelModel
from ...shared.validators import validate_category
from .pricing import PriceLine


class PackageCreate(BaseModel):
    name: str
    description: Optional[str] = None
    basePrice: float
    image: Optional[str] = None
    features: list[str] = []
    popular: bool = False

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not v or not v.strip():
            raise ValueError("Package name is required")
        return v.strip()

    @field_validator("basePrice")
    @classmethod
    def validate_price(cls, v):
        if v < 0:
            raise ValueError("Base price cannot be negative")
        return v


class PackageUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    basePrice: Optional[float] = None
    image: Optional[str] = None
    features: Optional[list[str]] = None
    popular: Optional[bool] = None

    @field_validator("basePrice")
    @classmethod
    def validate_price(cls, v):
        if v is not None and v < 0:
            raise ValueError("Base price cannot be negative")
        return v


class PackageResponse(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    base_price: float
    image: Optional[str] = None
    features: list[str] = []
    popular: bool = False
    is_archived: bool = False
    created_at: Optional[datetime] = None
    rating: float = 0.0
    review_count: int = 0


class CustomizationOptionCreate(BaseModel):
    category: str
    name: str
    price: float
    description: Optional[str] = None
    image: Optional[str] = None

    @field_validator("category")
    @classmethod
    def check_category(cls, v):
        return validate_category(v)

    @field_validator("price")
    @classmethod
    def validate_price(cls, v):
        if v < 0:
            raise ValueError("Price cannot be negative")
        return v


class CustomizationOptionUpdate(BaseModel):
    category: Optional[str] = None
    name: Optional[str] = None
    price: Optional[float] = None
    description: Optional[str] = None
    image: Optional[str] = None

    @field_validator("category")
    @classmethod
    def check_category(cls, v):
        return validate_category(v) if v is not None else v


class CustomizationOptionResponse(CamelModel):
    id: str
    category: str
    name: str
    price: float
    description: Optional[str] = None
    image: Optional[str] = None


class QuoteRequest(BaseModel):
    packageId: str
    customizationIds: list[str] = []
    guestCount: int = 1
    eventDate: Optional[date] = None

    @field_validator("guestCount")
    @classmethod
    def validate_guests(cls, v):
        if v < 1:
            raise ValueError("Guest count must be at least 1")
        return v


class QuoteResponse(CamelModel):
    package_id: str
    guest_count: int
    customizations: list[CustomizationOptionResponse]
    lines: list[PriceLine]
    total_price: float
