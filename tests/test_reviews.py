import pytest

from eventflow.domain.tasks.assignment import AssignmentCoordinator
from eventflow.models import Review


@pytest.fixture
def package(make_package):
    return make_package("Classic Wedding", 1500.0)


@pytest.fixture
def customer(make_user):
    return make_user("client", name="Grace Hopper")


def post_review(client, booking_id, rating=5, comment="Wonderful evening"):
    return client.post("/reviews", json={"bookingId": booking_id, "rating": rating, "comment": comment})


class TestReviewSubmission:
    def test_second_review_for_booking_is_rejected(self, client, login, customer, package, make_booking, db):
        booking = make_booking(customer, package, status="completed")
        login(customer)

        assert post_review(client, booking.id).status_code == 201
        second = post_review(client, booking.id, rating=1, comment="Changed my mind")

        assert second.status_code == 409
        reviews = db.query(Review).filter(Review.booking_id == booking.id, Review.client_id == customer.id).all()
        assert len(reviews) == 1
        assert reviews[0].rating == 5

    @pytest.mark.parametrize("status", ["pending", "confirmed", "in-progress", "rejected"])
    def test_only_completed_bookings(self, client, login, customer, package, make_booking, db, status):
        booking = make_booking(customer, package, status=status)
        login(customer)

        assert post_review(client, booking.id).status_code == 409
        assert db.query(Review).count() == 0

    def test_cannot_review_someone_elses_booking(self, client, login, customer, make_user, package, make_booking):
        booking = make_booking(make_user("client"), package, status="completed")
        login(customer)

        assert post_review(client, booking.id).status_code == 404

    @pytest.mark.parametrize("rating", [0, 6])
    def test_rating_range(self, client, login, customer, package, make_booking, rating):
        booking = make_booking(customer, package, status="completed")
        login(customer)

        assert post_review(client, booking.id, rating=rating).status_code == 422

    def test_review_does_not_change_booking(self, client, login, customer, package, make_booking, db):
        booking = make_booking(customer, package, status="completed")
        login(customer)
        post_review(client, booking.id)

        db.refresh(booking)
        assert booking.status == "completed"


class TestDerivedRatings:
    def test_package_rating_is_average_of_reviews(self, client, login, make_user, package, make_booking):
        for rating in (5, 4, 3):
            reviewer = make_user("client")
            booking = make_booking(reviewer, package, status="completed")
            login(reviewer)
            post_review(client, booking.id, rating=rating)

        body = client.get(f"/reviews/packages/{package.id}").json()

        assert body["rating"] == {"average": 4.0, "count": 3}
        assert len(body["reviews"]) == 3

    def test_catalog_listing_carries_rating(self, client, login, customer, package, make_booking):
        booking = make_booking(customer, package, status="completed")
        login(customer)
        post_review(client, booking.id, rating=4)

        listed = client.get("/catalog/packages").json()

        assert listed[0]["rating"] == 4.0
        assert listed[0]["reviewCount"] == 1

    def test_vendor_summary_follows_tasks_to_packages(
        self, client, login, admin, make_user, make_package, make_booking, db
    ):
        vendor = make_user("vendor", name="Venue Co")
        worked = make_package("Worked Package", 100.0)
        other = make_package("Other Package", 100.0)
        customer = make_user("client")

        worked_booking = make_booking(customer, worked, status="completed")
        AssignmentCoordinator(db).assign(worked_booking, vendor.id, "venue", admin)

        login(customer)
        post_review(client, worked_booking.id, rating=2)
        other_booking = make_booking(customer, other, status="completed")
        post_review(client, other_booking.id, rating=5)

        login(admin)
        summary = client.get(f"/reviews/vendors/{vendor.id}/summary").json()

        assert summary["vendorName"] == "Venue Co"
        assert summary["average"] == 2.0
        assert summary["count"] == 1
        assert summary["completedTasks"] == 0

    def test_vendor_summary_access(self, client, login, make_user):
        vendor = make_user("vendor")
        login(make_user("vendor"))

        assert client.get(f"/reviews/vendors/{vendor.id}/summary").status_code == 403

        login(vendor)
        assert client.get(f"/reviews/vendors/{vendor.id}/summary").status_code == 200
