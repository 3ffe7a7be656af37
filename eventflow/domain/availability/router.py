from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import require_admin, require_vendor
from ...database import get_db
from ...models import User
from .schemas import AvailabilityResponse, AvailabilityUpdate
from .service import AvailabilityService

router = APIRouter(prefix="/availability", tags=["Availability"])


def get_availability_service(db: Session = Depends(get_db)) -> AvailabilityService:
    return AvailabilityService(db)


@router.get("/me", response_model=AvailabilityResponse)
async def my_availability(
    vendor: User = Depends(require_vendor),
    service: AvailabilityService = Depends(get_availability_service),
):
    return service.get_dates(vendor.id)


@router.put("/me", response_model=AvailabilityResponse)
async def set_my_availability(
    data: AvailabilityUpdate,
    vendor: User = Depends(require_vendor),
    service: AvailabilityService = Depends(get_availability_service),
):
    """Replace the full set of dates the vendor is unavailable"""
    return service.set_dates(vendor, data.unavailableDates)


@router.get("/{vendor_id}", response_model=AvailabilityResponse)
async def vendor_availability(
    vendor_id: str,
    _: User = Depends(require_admin),
    service: AvailabilityService = Depends(get_availability_service),
):
    return service.get_for_vendor(vendor_id)
