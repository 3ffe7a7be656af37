from datetime import date

import pytest
from sqlalchemy.exc import IntegrityError

from eventflow.domain.tasks.assignment import AssignmentCoordinator
from eventflow.domain.tasks.repository import TaskRepository
from eventflow.errors import CategoryAlreadyAssigned
from eventflow.models import ActivityLog, Notification, VendorTask


@pytest.fixture
def booking(make_user, make_package, make_booking):
    client = make_user("client", name="Grace Hopper")
    package = make_package("Classic Wedding", 1500.0)
    return make_booking(client, package, event_date=date(2099, 6, 1))


def assign(client, booking, vendor_id, category="venue"):
    return client.post(
        f"/bookings/{booking.id}/assignments", json={"vendorId": vendor_id, "category": category}
    )


class TestAssignmentCoordinator:
    def test_assignment_creates_task_and_activity(self, client, login, admin, make_user, booking, db):
        vendor = make_user("vendor", name="Venue Co")
        login(admin)

        response = assign(client, booking, vendor.id, "venue")

        assert response.status_code == 201
        task = response.json()
        assert task["status"] == "assigned"
        assert task["title"] == "Venue for Classic Wedding"
        assert task["description"] == "Handle venue for Grace Hopper's event."
        assert task["clientRequirements"] == "No specific requirements provided."
        assert task["eventDate"] == "2099-06-01"
        assert task["vendorName"] == "Venue Co"

        entry = db.query(ActivityLog).one()
        assert entry.message == 'Admin assigned Venue Co to the venue task for "Classic Wedding".'
        assert entry.meta == {
            "bookingId": booking.id,
            "vendorName": "Venue Co",
            "clientName": "Grace Hopper",
        }

    def test_second_vendor_for_same_category_is_rejected(self, client, login, admin, make_user, booking, db):
        first = make_user("vendor", name="Venue Co")
        second = make_user("vendor", name="Other Venues")
        login(admin)

        assert assign(client, booking, first.id, "venue").status_code == 201
        response = assign(client, booking, second.id, "venue")

        assert response.status_code == 409
        assert "Venue Co" in response.json()["detail"]
        tasks = db.query(VendorTask).filter(VendorTask.booking_id == booking.id).all()
        assert len(tasks) == 1
        assert tasks[0].vendor_id == first.id
        assert db.query(ActivityLog).count() == 1

    def test_different_categories_can_be_staffed(self, client, login, admin, make_user, booking, db):
        vendor = make_user("vendor")
        login(admin)

        assert assign(client, booking, vendor.id, "venue").status_code == 201
        assert assign(client, booking, vendor.id, "catering").status_code == 201
        assert db.query(VendorTask).count() == 2

    def test_unavailable_vendor_is_rejected_without_writes(
        self, client, login, admin, make_user, booking, block_dates, db
    ):
        vendor = make_user("vendor", name="Busy Bakers")
        block_dates(vendor, date(2099, 5, 31), date(2099, 6, 1))
        login(admin)

        response = assign(client, booking, vendor.id, "catering")

        assert response.status_code == 409
        assert "unavailable" in response.json()["detail"]
        assert db.query(VendorTask).count() == 0
        assert db.query(ActivityLog).count() == 0

    def test_other_blocked_dates_do_not_matter(self, client, login, admin, make_user, booking, block_dates):
        vendor = make_user("vendor")
        block_dates(vendor, date(2099, 6, 2))
        login(admin)

        assert assign(client, booking, vendor.id, "catering").status_code == 201

    def test_unknown_vendor(self, client, login, admin, booking, db):
        login(admin)
        response = assign(client, booking, "missing-vendor")

        assert response.status_code == 404
        assert db.query(VendorTask).count() == 0

    def test_non_vendor_user_is_not_a_vendor(self, client, login, admin, make_user, booking):
        customer = make_user("client")
        login(admin)

        assert assign(client, booking, customer.id).status_code == 404

    def test_unknown_category(self, client, login, admin, make_user, booking):
        vendor = make_user("vendor")
        login(admin)

        assert assign(client, booking, vendor.id, "fireworks").status_code == 422

    def test_unknown_booking(self, client, login, admin, make_user):
        vendor = make_user("vendor")
        login(admin)

        response = client.post(
            "/bookings/missing/assignments", json={"vendorId": vendor.id, "category": "venue"}
        )
        assert response.status_code == 404

    def test_only_admins_assign(self, client, login, make_user, booking):
        vendor = login(make_user("vendor"))
        assert assign(client, booking, vendor.id).status_code == 403

    def test_concurrent_duplicate_is_reported_as_already_assigned(
        self, admin, make_user, booking, db, monkeypatch
    ):
        first = make_user("vendor")
        second = make_user("vendor")
        AssignmentCoordinator(db).assign(booking, first.id, "venue", admin)

        # Simulate a second admin whose pre-check ran before the first commit
        monkeypatch.setattr(TaskRepository, "get_for_category", staticmethod(lambda *args: None))

        with pytest.raises(CategoryAlreadyAssigned):
            AssignmentCoordinator(db).assign(booking, second.id, "venue", admin)

        assert db.query(VendorTask).count() == 1
        assert db.query(ActivityLog).count() == 1

    def test_unique_constraint_backs_occupancy(self, admin, make_user, booking, db):
        vendor = make_user("vendor")
        db.add(VendorTask(
            booking_id=booking.id, vendor_id=vendor.id, vendor_name=vendor.name, category="venue",
            title="t", status="assigned", event_date=booking.event_date,
        ))
        db.commit()
        db.add(VendorTask(
            booking_id=booking.id, vendor_id=vendor.id, vendor_name=vendor.name, category="venue",
            title="t", status="assigned", event_date=booking.event_date,
        ))
        with pytest.raises(IntegrityError):
            db.commit()
        db.rollback()


class TestVendorTasks:
    @pytest.fixture
    def task(self, admin, make_user, booking, db):
        vendor = make_user("vendor", name="Venue Co")
        return AssignmentCoordinator(db).assign(booking, vendor.id, "venue", admin)

    def test_vendor_sees_only_own_tasks(self, client, login, admin, make_user, booking, task, db):
        other = make_user("vendor")
        AssignmentCoordinator(db).assign(booking, other.id, "catering", admin)

        login(task.vendor)
        tasks = client.get("/tasks/mine").json()

        assert [t["id"] for t in tasks] == [task.id]

    def test_owner_advances_task(self, client, login, task):
        login(task.vendor)

        for status in ["in-progress", "completed"]:
            response = client.patch(f"/tasks/{task.id}/status", json={"status": status})
            assert response.status_code == 200
            assert response.json()["status"] == status

    def test_other_vendor_cannot_update(self, client, login, make_user, task, db):
        login(make_user("vendor"))

        response = client.patch(f"/tasks/{task.id}/status", json={"status": "completed"})

        assert response.status_code == 403
        db.refresh(task)
        assert task.status == "assigned"

    def test_same_status_is_noop(self, client, login, task):
        login(task.vendor)
        response = client.patch(f"/tasks/{task.id}/status", json={"status": "assigned"})

        assert response.status_code == 200
        assert response.json()["status"] == "assigned"

    def test_missing_task(self, client, login, make_user):
        login(make_user("vendor"))
        assert client.patch("/tasks/missing/status", json={"status": "completed"}).status_code == 404

    def test_task_update_sends_no_notification(self, client, login, task, db):
        login(task.vendor)
        client.patch(f"/tasks/{task.id}/status", json={"status": "completed"})

        assert db.query(Notification).count() == 0

    def test_stats(self, client, login, admin, booking, task, db):
        AssignmentCoordinator(db).assign(booking, task.vendor_id, "catering", admin)
        task.status = "completed"
        db.commit()

        login(task.vendor)
        stats = client.get("/tasks/mine/stats").json()

        assert stats == {"total": 2, "assigned": 1, "inProgress": 0, "completed": 1}

    def test_booking_detail_includes_tasks(self, client, login, admin, booking, task):
        login(admin)
        detail = client.get(f"/bookings/{booking.id}").json()

        assert [t["category"] for t in detail["tasks"]] == ["venue"]
