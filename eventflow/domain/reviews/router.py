"""Review router - client reviews and rating summaries"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ...auth import get_current_user, require_client
from ...database import get_db
from ...models import User
from .schemas import PackageReviewsResponse, ReviewCreate, ReviewResponse, VendorRatingSummary
from .service import ReviewService

router = APIRouter(prefix="/reviews", tags=["Reviews"])


def get_review_service(db: Session = Depends(get_db)) -> ReviewService:
    """Dependency injection for ReviewService"""
    return ReviewService(db)


@router.post("", response_model=ReviewResponse, status_code=201)
async def submit_review(
    data: ReviewCreate,
    client: User = Depends(require_client),
    service: ReviewService = Depends(get_review_service),
):
    """Review a completed booking"""
    return service.submit(client, data)


@router.get("/packages/{package_id}", response_model=PackageReviewsResponse)
async def package_reviews(
    package_id: str,
    _: User = Depends(get_current_user),
    service: ReviewService = Depends(get_review_service),
):
    return service.package_reviews(package_id)


@router.get("/vendors/{vendor_id}/summary", response_model=VendorRatingSummary)
async def vendor_summary(
    vendor_id: str,
    current_user: User = Depends(get_current_user),
    service: ReviewService = Depends(get_review_service),
):
    """Vendors may read their own summary; admins anyone's"""
    if current_user.role != "admin" and current_user.id != vendor_id:
        raise HTTPException(status_code=403, detail="You do not have access to this resource")
    return service.vendor_summary(vendor_id)
