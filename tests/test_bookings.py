import csv
from datetime import date, datetime, timedelta
from io import StringIO

import pytest
from fastapi import HTTPException
from sqlalchemy.exc import OperationalError

from eventflow.domain.bookings.service import BookingService
from eventflow.errors import InvalidStatusTransition
from eventflow.models import ActivityLog, Booking, Notification, User
from eventflow.realtime import change_feed

from .conftest import future_date


@pytest.fixture
def catalog(make_package, make_option):
    return {
        "package": make_package("Classic Wedding", 1500.0),
        "rooftop": make_option("venue", "Rooftop Lounge", 800.0),
        "barn": make_option("venue", "Countryside Barn", 650.0),
        "buffet": make_option("catering", "Buffet", 25.0),
        "dj": make_option("entertainment", "DJ Set", 300.0),
    }


def submit(client, package, option_ids=(), guests=40, event_date=None, requirements=None):
    return client.post(
        "/bookings",
        json={
            "packageId": package.id,
            "customizationIds": list(option_ids),
            "guestCount": guests,
            "eventDate": (event_date or future_date()).isoformat(),
            "requirements": requirements,
        },
    )


class TestSubmission:
    def test_price_is_frozen_through_every_transition(self, client, login, make_user, admin, catalog, db):
        customer = login(make_user("client"))
        response = submit(
            client, catalog["package"], [catalog["rooftop"].id, catalog["buffet"].id, catalog["dj"].id]
        )
        assert response.status_code == 201
        booking = response.json()
        expected = 1500.0 + 800.0 + 25.0 * 40 + 300.0
        assert booking["totalPrice"] == expected
        assert booking["status"] == "pending"
        assert booking["clientId"] == customer.id

        login(admin)
        for status in ["awaiting-payment", "confirmed", "in-progress", "completed"]:
            moved = client.patch(f"/bookings/{booking['id']}/status", json={"status": status})
            assert moved.status_code == 200
            assert moved.json()["totalPrice"] == expected

        assert db.get(Booking, booking["id"]).total_price == expected

    def test_later_option_in_category_wins(self, client, login, make_user, catalog):
        login(make_user("client"))
        response = submit(client, catalog["package"], [catalog["rooftop"].id, catalog["barn"].id], guests=10)

        assert response.status_code == 201
        body = response.json()
        assert [c["name"] for c in body["customizations"]] == ["Countryside Barn"]
        assert body["totalPrice"] == 1500.0 + 650.0

    @pytest.mark.parametrize("offset", [0, -1, -30])
    def test_rejects_today_and_past_dates(self, client, login, make_user, catalog, offset):
        login(make_user("client"))
        response = submit(client, catalog["package"], event_date=date.today() + timedelta(days=offset))

        assert response.status_code == 400

    def test_rejects_date_held_by_confirmed_booking(self, client, login, make_user, make_booking, catalog, db):
        other = make_user("client")
        taken = future_date(45)
        make_booking(other, catalog["package"], event_date=taken, status="confirmed")

        login(make_user("client"))
        response = submit(client, catalog["package"], event_date=taken)

        assert response.status_code == 409
        assert db.query(Booking).count() == 1

    def test_pending_booking_does_not_block_date(self, client, login, make_user, make_booking, catalog):
        date_ = future_date(45)
        make_booking(make_user("client"), catalog["package"], event_date=date_, status="pending")

        login(make_user("client"))
        assert submit(client, catalog["package"], event_date=date_).status_code == 201

    def test_unknown_customization(self, client, login, make_user, catalog, db):
        login(make_user("client"))
        response = submit(client, catalog["package"], ["no-such-option"])

        assert response.status_code == 404
        assert db.query(Booking).count() == 0

    def test_archived_package_cannot_be_booked(self, client, login, make_user, make_package):
        login(make_user("client"))
        archived = make_package("Old Package", 100.0, archived=True)

        assert submit(client, archived).status_code == 404

    def test_guest_count_must_be_positive(self, client, login, make_user, catalog):
        login(make_user("client"))
        assert submit(client, catalog["package"], guests=0).status_code == 422

    def test_submission_writes_activity_entry(self, client, login, make_user, catalog, db):
        login(make_user("client", name="Grace Hopper"))
        booking = submit(client, catalog["package"]).json()

        entry = db.query(ActivityLog).one()
        assert "Grace Hopper" in entry.message
        assert entry.meta["bookingId"] == booking["id"]

    def test_only_clients_submit(self, client, login, make_user, catalog):
        login(make_user("vendor"))
        assert submit(client, catalog["package"]).status_code == 403


class TestStatusTransition:
    def test_transition_emits_exactly_one_notification(self, client, login, make_user, make_booking, admin, catalog, db):
        customer = make_user("client")
        booking = make_booking(customer, catalog["package"])
        before = db.query(Notification).filter(Notification.user_id == customer.id).count()

        login(admin)
        response = client.patch(f"/bookings/{booking.id}/status", json={"status": "confirmed"})

        assert response.status_code == 200
        notifications = db.query(Notification).filter(Notification.user_id == customer.id).all()
        assert len(notifications) == before + 1
        assert "confirmed" in notifications[-1].message
        assert notifications[-1].message == (
            'The status of your booking for "Classic Wedding" has been updated to confirmed.'
        )
        assert notifications[-1].link.endswith(f"/booking/{booking.id}")
        assert notifications[-1].is_read is False

    def test_status_is_humanized_in_message(self, client, login, make_user, make_booking, admin, catalog, db):
        booking = make_booking(make_user("client"), catalog["package"])

        login(admin)
        client.patch(f"/bookings/{booking.id}/status", json={"status": "in-progress"})

        assert db.query(Notification).one().message.endswith("updated to in progress.")

    def test_same_status_changes_nothing(self, client, login, make_user, make_booking, admin, catalog, db):
        booking = make_booking(make_user("client"), catalog["package"], status="confirmed")

        login(admin)
        response = client.patch(f"/bookings/{booking.id}/status", json={"status": "confirmed"})

        assert response.status_code == 200
        assert db.query(Notification).count() == 0

    def test_unknown_status_is_422(self, client, login, make_user, make_booking, admin, catalog):
        booking = make_booking(make_user("client"), catalog["package"])

        login(admin)
        response = client.patch(f"/bookings/{booking.id}/status", json={"status": "archived"})

        assert response.status_code == 422

    def test_missing_booking_is_404(self, client, login, admin):
        login(admin)
        assert client.patch("/bookings/nope/status", json={"status": "confirmed"}).status_code == 404

    def test_clients_cannot_transition(self, client, login, make_user, make_booking, catalog):
        customer = make_user("client")
        booking = make_booking(customer, catalog["package"])

        login(customer)
        response = client.patch(f"/bookings/{booking.id}/status", json={"status": "confirmed"})

        assert response.status_code == 403

    def test_strict_mode_rejects_skipping_ahead(self, make_user, make_booking, admin, catalog, db):
        booking = make_booking(make_user("client"), catalog["package"])
        service = BookingService(db, strict_transitions=True)

        with pytest.raises(InvalidStatusTransition):
            service.transition(booking.id, "completed", admin)

        db.refresh(booking)
        assert booking.status == "pending"
        assert db.query(Notification).count() == 0

        service.transition(booking.id, "awaiting-payment", admin)
        assert db.query(Notification).count() == 1

    def test_failed_write_applies_nothing(self, make_user, make_booking, admin, catalog, db, monkeypatch):
        booking = make_booking(make_user("client"), catalog["package"])
        events = []
        subscription = change_feed.subscribe("notifications", events.append)

        def failing_commit():
            raise OperationalError("UPDATE bookings", {}, Exception("connection lost"))

        monkeypatch.setattr(db, "commit", failing_commit)
        try:
            with pytest.raises(HTTPException) as exc_info:
                BookingService(db).transition(booking.id, "confirmed", admin)
        finally:
            subscription.unsubscribe()
            monkeypatch.undo()

        assert exc_info.value.status_code == 500
        db.refresh(booking)
        assert booking.status == "pending"
        assert db.query(Notification).count() == 0
        assert events == []


class TestAdminListing:
    @pytest.fixture
    def five_bookings(self, make_user, make_booking, catalog):
        customer = make_user("client")
        start = datetime(2026, 1, 1, 12, 0, 0)
        return [
            make_booking(customer, catalog["package"], created_at=start + timedelta(minutes=i))
            for i in range(5)
        ]

    def test_cursor_pagination_walks_newest_first(self, client, login, admin, five_bookings):
        login(admin)
        seen = []
        cursor = None
        pages = 0
        while True:
            params = {"limit": 2}
            if cursor:
                params["cursor"] = cursor
            page = client.get("/bookings", params=params).json()
            seen.extend(item["id"] for item in page["items"])
            pages += 1
            cursor = page["nextCursor"]
            if cursor is None:
                break

        assert pages == 3
        assert seen == [b.id for b in reversed(five_bookings)]

    def test_invalid_cursor(self, client, login, admin, five_bookings):
        login(admin)
        assert client.get("/bookings", params={"cursor": "missing"}).status_code == 400

    def test_search_and_status_filter(self, client, login, admin, make_user, make_booking, make_package):
        gala = make_package("Charity Gala", 5000.0)
        wedding = make_package("Beach Wedding", 3000.0)
        make_booking(make_user("client", name="Alan Turing"), gala, status="confirmed")
        make_booking(make_user("client", name="Barbara Liskov"), wedding)

        login(admin)
        by_package = client.get("/bookings", params={"search": "gala"}).json()["items"]
        by_client = client.get("/bookings", params={"search": "liskov"}).json()["items"]
        by_status = client.get("/bookings", params={"status": "confirmed"}).json()["items"]

        assert [b["packageName"] for b in by_package] == ["Charity Gala"]
        assert [b["clientName"] for b in by_client] == ["Barbara Liskov"]
        assert [b["packageName"] for b in by_status] == ["Charity Gala"]

    def test_search_matches_registered_names(
        self, client, login, token_claims, admin, make_booking, make_package, db
    ):
        token_claims("uid-obrien", "pat@example.com")
        assert client.post("/auth/register", json={"name": "Pat O'Brien"}).status_code == 201
        customer = db.query(User).filter(User.firebase_uid == "uid-obrien").one()
        make_booking(customer, make_package())

        login(admin)
        items = client.get("/bookings", params={"search": "O'Brien"}).json()["items"]
        export = client.get("/bookings/export", params={"search": "O'Brien"})

        assert [b["clientId"] for b in items] == [customer.id]
        assert len(list(csv.reader(StringIO(export.text)))) == 2

    def test_listing_requires_admin(self, client, login, make_user):
        login(make_user("client"))
        assert client.get("/bookings").status_code == 403

    def test_csv_export(self, client, login, admin, make_user, make_booking, catalog):
        make_booking(
            make_user("client", name="Alan Turing"),
            catalog["package"],
            customizations=[
                {"id": "a", "category": "venue", "name": "Rooftop Lounge", "price": 800.0},
                {"id": "b", "category": "entertainment", "name": "DJ Set", "price": 300.0},
            ],
            total_price=2600.0,
            requirements="Vegan menu",
        )

        login(admin)
        response = client.get("/bookings/export")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        rows = list(csv.reader(StringIO(response.text)))
        assert rows[0] == [
            "Booking ID",
            "Client Name",
            "Package Name",
            "Event Date",
            "Status",
            "Guest Count",
            "Total Price",
            "Customizations",
            "Requirements",
        ]
        assert rows[1][1] == "Alan Turing"
        assert rows[1][6] == "2600.00"
        assert rows[1][7] == "Rooftop Lounge; DJ Set"
        assert rows[1][8] == "Vegan menu"


class TestClientViews:
    def test_detail_hidden_from_other_clients(self, client, login, make_user, make_booking, catalog):
        booking = make_booking(make_user("client"), catalog["package"])

        login(make_user("client"))
        assert client.get(f"/bookings/{booking.id}").status_code == 404

    def test_detail_lists_required_categories(self, client, login, make_user, make_booking, catalog):
        owner = make_user("client")
        booking = make_booking(
            owner,
            catalog["package"],
            customizations=[
                {"id": "a", "category": "venue", "name": "Rooftop Lounge", "price": 800.0},
                {"id": "b", "category": "catering", "name": "Buffet", "price": 25.0},
            ],
        )

        login(owner)
        detail = client.get(f"/bookings/{booking.id}").json()

        assert detail["requiredCategories"] == ["venue", "catering"]
        assert detail["tasks"] == []

    def test_my_bookings_newest_first(self, client, login, make_user, make_booking, catalog):
        owner = make_user("client")
        older = make_booking(owner, catalog["package"], created_at=datetime(2026, 1, 1))
        newer = make_booking(owner, catalog["package"], created_at=datetime(2026, 2, 1))
        make_booking(make_user("client"), catalog["package"])

        login(owner)
        ids = [b["id"] for b in client.get("/bookings/mine").json()]

        assert ids == [newer.id, older.id]

    def test_unavailable_dates(self, client, login, make_user, make_booking, catalog):
        customer = make_user("client")
        make_booking(customer, catalog["package"], event_date=future_date(10), status="confirmed")
        make_booking(customer, catalog["package"], event_date=future_date(20), status="in-progress")
        make_booking(customer, catalog["package"], event_date=future_date(30), status="pending")
        make_booking(customer, catalog["package"], event_date=future_date(40), status="rejected")

        login(customer)
        dates = client.get("/bookings/unavailable-dates").json()

        assert dates == [future_date(10).isoformat(), future_date(20).isoformat()]
