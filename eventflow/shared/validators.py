"""Shared validation utilities"""

from datetime import date
from typing import Optional

from ..models import CATEGORIES


def validate_category(category: str) -> str:
    """Normalize and check a service category"""
    normalized = (category or "").strip().lower()
    if normalized not in CATEGORIES:
        raise ValueError(f"Category must be one of: {', '.join(CATEGORIES)}")
    return normalized


def validate_rating(rating: int) -> int:
    if rating < 1 or rating > 5:
        raise ValueError("Rating must be between 1 and 5")
    return rating


def is_future_date(value: date, today: Optional[date] = None) -> bool:
    """True when ``value`` is strictly after today (no same-day or past events)"""
    return value > (today or date.today())
