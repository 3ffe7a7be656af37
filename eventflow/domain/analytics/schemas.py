from ...shared.schemas import CamelModel


class SummaryResponse(CamelModel):
    total_bookings: int
    pending_bookings: int
    total_revenue: float
    total_vendors: int
    total_clients: int
    total_packages: int


class MonthlyRevenue(CamelModel):
    month: str  # YYYY-MM
    revenue: float


class PackagePerformance(CamelModel):
    package_name: str
    bookings: int
    revenue: float


class VendorEngagement(CamelModel):
    vendor_id: str
    vendor_name: str
    completed_tasks: int


class VendorInsight(CamelModel):
    vendor_id: str
    vendor_name: str
    average_rating: float
    review_count: int


class DashboardResponse(CamelModel):
    monthly_revenue: list[MonthlyRevenue]
    package_performance: list[PackagePerformance]
    vendor_engagement: list[VendorEngagement]
    vendor_insights: list[VendorInsight]
