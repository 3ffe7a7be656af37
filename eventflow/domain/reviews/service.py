"""Review service - review submission and derived ratings"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...cache import get_package_rating_cached, invalidate_package_rating, set_package_rating_cached
from ...config import RATING_CACHE_TTL
from ...errors import BookingNotFound, DuplicateReview, ReviewNotAllowed, VendorNotFound
from ...models import Review, User
from ...realtime import publish_change
from ...shared.persistence import commit_or_fail
from ...utils.sanitization import sanitize_text
from ..bookings.repository import BookingRepository
from ..catalog.service import CatalogService
from ..users.repository import UserRepository
from .repository import ReviewRepository
from .schemas import PackageReviewsResponse, RatingSummary, ReviewCreate, ReviewResponse, VendorRatingSummary

logger = logging.getLogger(__name__)


class ReviewService:
    """Service layer for reviews"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ReviewRepository()

    def submit(self, client: User, data: ReviewCreate) -> Review:
        """One review per completed booking per client"""
        booking = BookingRepository.get_booking(self.db, data.bookingId)
        if not booking or booking.client_id != client.id:
            raise BookingNotFound(data.bookingId)
        if booking.status != "completed":
            raise ReviewNotAllowed()
        if self.repo.get_for_booking(self.db, booking.id, client.id):
            raise DuplicateReview(booking.id)

        review = self.repo.stage(
            self.db,
            package_id=booking.package_id,
            booking_id=booking.id,
            client_id=client.id,
            client_name=client.name,
            rating=data.rating,
            comment=sanitize_text(data.comment, max_length=2000),
        )
        try:
            commit_or_fail(self.db, "submit review")
        except IntegrityError as e:
            raise DuplicateReview(booking.id) from e
        self.db.refresh(review)

        invalidate_package_rating(booking.package_id)
        logger.info(f"⭐ {client.email} rated booking {booking.id} {data.rating}/5")
        publish_change("reviews", "created", ReviewResponse.model_validate(review).to_document())
        return review

    def package_rating(self, package_id: str) -> RatingSummary:
        """Average and count for a package, computed on read and cached"""
        cached = get_package_rating_cached(package_id)
        if cached is not None:
            return RatingSummary(**cached)

        average, count = self.repo.package_stats(self.db, package_id)
        summary = RatingSummary(average=round(average, 1), count=count)
        set_package_rating_cached(package_id, summary.model_dump(), RATING_CACHE_TTL)
        return summary

    def package_reviews(self, package_id: str) -> PackageReviewsResponse:
        CatalogService(self.db).get_package(package_id)
        return PackageReviewsResponse(
            package_id=package_id,
            rating=self.package_rating(package_id),
            reviews=[ReviewResponse.model_validate(r) for r in self.repo.list_for_package(self.db, package_id)],
        )

    def vendor_summary(self, vendor_id: str) -> VendorRatingSummary:
        """Ratings of every package the vendor has worked on"""
        vendor = UserRepository.get_vendor(self.db, vendor_id)
        if not vendor:
            raise VendorNotFound(vendor_id)

        package_ids = self.repo.vendor_package_ids(self.db, vendor_id)
        average, count = self.repo.stats_for_packages(self.db, package_ids)
        return VendorRatingSummary(
            vendor_id=vendor.id,
            vendor_name=vendor.name,
            average=round(average, 1),
            count=count,
            completed_tasks=self.repo.completed_task_count(self.db, vendor_id),
        )
