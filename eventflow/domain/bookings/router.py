"""Booking router - client submission, admin management endpoints"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user, require_admin, require_client
from ...database import get_db
from ...models import User
from ...rate_limiter import create_rate_limiter
from .schemas import BookingCreate, BookingDetailResponse, BookingPage, BookingResponse, BookingStatusUpdate
from .service import BookingService

router = APIRouter(prefix="/bookings", tags=["Bookings"])

booking_submit_limiter = create_rate_limiter(limit=10, window_seconds=3600, key_prefix="booking_submit")


def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    """Dependency injection for BookingService"""
    return BookingService(db)


@router.post("", response_model=BookingResponse, status_code=201)
async def submit_booking(
    data: BookingCreate,
    client: User = Depends(require_client),
    service: BookingService = Depends(get_booking_service),
    _: None = Depends(booking_submit_limiter),
):
    """Submit a booking request (status pending)"""
    return service.submit(client, data)


@router.get("/mine", response_model=list[BookingResponse])
async def my_bookings(
    client: User = Depends(require_client),
    service: BookingService = Depends(get_booking_service),
):
    return service.list_for_client(client)


@router.get("/unavailable-dates", response_model=list[date])
async def unavailable_dates(
    _: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    """Dates that can no longer be booked"""
    return service.unavailable_dates()


@router.get("/export")
async def export_bookings_csv(
    search: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    admin: User = Depends(require_admin),
    service: BookingService = Depends(get_booking_service),
):
    """Export bookings as CSV with optional filters"""
    return service.export_bookings_csv(admin, search, status)


@router.get("", response_model=BookingPage)
async def list_bookings(
    search: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    cursor: Optional[str] = Query(None),
    limit: Optional[int] = Query(None, ge=1, le=100),
    _: User = Depends(require_admin),
    service: BookingService = Depends(get_booking_service),
):
    """All bookings, newest first, cursor-paginated"""
    return service.list_page(search, status, cursor, limit)


@router.get("/{booking_id}", response_model=BookingDetailResponse)
async def get_booking(
    booking_id: str,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    return service.get_detail(booking_id, current_user)


@router.patch("/{booking_id}/status", response_model=BookingResponse)
async def update_booking_status(
    booking_id: str,
    data: BookingStatusUpdate,
    admin: User = Depends(require_admin),
    service: BookingService = Depends(get_booking_service),
):
    """Move a booking to a new status and notify the client"""
    return service.transition(booking_id, data.status, admin)
