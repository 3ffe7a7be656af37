from datetime import datetime

import pytest

from eventflow.domain.tasks.assignment import AssignmentCoordinator


@pytest.fixture
def history(make_user, make_package, make_booking):
    gala = make_package("Charity Gala", 1000.0)
    wedding = make_package("Beach Wedding", 500.0)
    customer = make_user("client")
    make_booking(customer, gala, status="completed", total_price=1000.0, created_at=datetime(2026, 1, 10))
    make_booking(customer, gala, status="confirmed", total_price=1200.0, created_at=datetime(2026, 2, 5))
    make_booking(customer, wedding, status="in-progress", total_price=500.0, created_at=datetime(2026, 2, 20))
    make_booking(customer, wedding, status="pending", total_price=700.0, created_at=datetime(2026, 2, 21))
    make_booking(customer, wedding, status="rejected", total_price=900.0, created_at=datetime(2026, 3, 1))
    return gala, wedding


def test_summary_excludes_rejected_revenue(client, login, admin, make_user, history):
    make_user("vendor")
    login(admin)

    summary = client.get("/analytics/summary").json()

    assert summary["totalBookings"] == 5
    assert summary["pendingBookings"] == 1
    assert summary["totalRevenue"] == 1000.0 + 1200.0 + 500.0 + 700.0
    assert summary["totalVendors"] == 1
    assert summary["totalPackages"] == 2


def test_dashboard_revenue_skips_pending_and_rejected(client, login, admin, history):
    login(admin)

    dashboard = client.get("/analytics/dashboard").json()

    assert dashboard["monthlyRevenue"] == [
        {"month": "2026-01", "revenue": 1000.0},
        {"month": "2026-02", "revenue": 1700.0},
    ]
    assert dashboard["packagePerformance"] == [
        {"packageName": "Charity Gala", "bookings": 2, "revenue": 2200.0},
        {"packageName": "Beach Wedding", "bookings": 1, "revenue": 500.0},
    ]


def test_vendor_engagement_counts_completed_tasks(client, login, admin, make_user, make_package, make_booking, db):
    busy = make_user("vendor", name="Busy Vendor")
    idle = make_user("vendor", name="Idle Vendor")
    customer = make_user("client")
    package = make_package()
    coordinator = AssignmentCoordinator(db)
    for category in ("venue", "catering"):
        task = coordinator.assign(make_booking(customer, package), busy.id, category, admin)
        task.status = "completed"
    coordinator.assign(make_booking(customer, package), idle.id, "venue", admin)
    db.commit()

    login(admin)
    dashboard = client.get("/analytics/dashboard").json()

    assert dashboard["vendorEngagement"] == [
        {"vendorId": busy.id, "vendorName": "Busy Vendor", "completedTasks": 2}
    ]
    assert {v["vendorName"] for v in dashboard["vendorInsights"]} == {"Busy Vendor", "Idle Vendor"}


def test_analytics_is_admin_only(client, login, make_user):
    login(make_user("client"))
    assert client.get("/analytics/summary").status_code == 403
