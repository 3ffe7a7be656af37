"""
Analytics service - admin statistics

Revenue only counts bookings that have moved past the request stage:
pending and rejected bookings are left out of the dashboard figures, while
the headline total only drops rejected ones.
"""

import logging
from collections import defaultdict

from sqlalchemy import func
from sqlalchemy.orm import Session

from ...models import Booking, EventPackage, User, VendorTask
from ..bookings.state_machine import REVENUE_EXCLUDED_STATUSES
from ..reviews.service import ReviewService
from .schemas import (
    DashboardResponse,
    MonthlyRevenue,
    PackagePerformance,
    SummaryResponse,
    VendorEngagement,
    VendorInsight,
)

logger = logging.getLogger(__name__)


class AnalyticsService:
    def __init__(self, db: Session):
        self.db = db

    def summary(self) -> SummaryResponse:
        total_bookings = self.db.query(func.count(Booking.id)).scalar() or 0
        pending = self.db.query(func.count(Booking.id)).filter(Booking.status == "pending").scalar() or 0
        revenue = (
            self.db.query(func.sum(Booking.total_price)).filter(Booking.status != "rejected").scalar() or 0.0
        )
        vendors = self.db.query(func.count(User.id)).filter(User.role == "vendor").scalar() or 0
        clients = self.db.query(func.count(User.id)).filter(User.role == "client").scalar() or 0
        packages = (
            self.db.query(func.count(EventPackage.id)).filter(EventPackage.is_archived.is_(False)).scalar() or 0
        )
        return SummaryResponse(
            total_bookings=total_bookings,
            pending_bookings=pending,
            total_revenue=round(float(revenue), 2),
            total_vendors=vendors,
            total_clients=clients,
            total_packages=packages,
        )

    def _realised_bookings(self) -> list[Booking]:
        return self.db.query(Booking).filter(Booking.status.notin_(REVENUE_EXCLUDED_STATUSES)).all()

    def monthly_revenue(self, bookings: list[Booking]) -> list[MonthlyRevenue]:
        """Revenue grouped by the month each booking was created"""
        totals: dict[str, float] = defaultdict(float)
        for booking in bookings:
            if booking.created_at:
                totals[booking.created_at.strftime("%Y-%m")] += booking.total_price
        return [MonthlyRevenue(month=month, revenue=round(totals[month], 2)) for month in sorted(totals)]

    def package_performance(self, bookings: list[Booking]) -> list[PackagePerformance]:
        counts: dict[str, int] = defaultdict(int)
        revenue: dict[str, float] = defaultdict(float)
        for booking in bookings:
            counts[booking.package_name] += 1
            revenue[booking.package_name] += booking.total_price
        rows = [
            PackagePerformance(package_name=name, bookings=counts[name], revenue=round(revenue[name], 2))
            for name in counts
        ]
        return sorted(rows, key=lambda row: (-row.bookings, row.package_name))

    def vendor_engagement(self) -> list[VendorEngagement]:
        rows = (
            self.db.query(User.id, User.name, func.count(VendorTask.id))
            .join(VendorTask, VendorTask.vendor_id == User.id)
            .filter(VendorTask.status == "completed")
            .group_by(User.id, User.name)
            .all()
        )
        engagement = [
            VendorEngagement(vendor_id=vendor_id, vendor_name=name, completed_tasks=count)
            for vendor_id, name, count in rows
        ]
        return sorted(engagement, key=lambda row: (-row.completed_tasks, row.vendor_name))

    def vendor_insights(self) -> list[VendorInsight]:
        reviews = ReviewService(self.db)
        insights = []
        for vendor in self.db.query(User).filter(User.role == "vendor").order_by(User.name).all():
            summary = reviews.vendor_summary(vendor.id)
            insights.append(
                VendorInsight(
                    vendor_id=vendor.id,
                    vendor_name=vendor.name,
                    average_rating=summary.average,
                    review_count=summary.count,
                )
            )
        return insights

    def dashboard(self) -> DashboardResponse:
        bookings = self._realised_bookings()
        logger.debug(f"📈 Building dashboard over {len(bookings)} realised bookings")
        return DashboardResponse(
            monthly_revenue=self.monthly_revenue(bookings),
            package_performance=self.package_performance(bookings),
            vendor_engagement=self.vendor_engagement(),
            vendor_insights=self.vendor_insights(),
        )
