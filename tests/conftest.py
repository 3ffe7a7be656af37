import os

# Must be set before eventflow is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["REDIS_ENABLED"] = "false"
os.environ.setdefault("FIREBASE_PROJECT_ID", "eventflow-test")

from datetime import date, datetime, timedelta  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from eventflow.auth import get_current_user, get_token_claims  # noqa: E402
from eventflow.database import Base, SessionLocal, engine, get_db  # noqa: E402
from eventflow.domain.bookings.router import booking_submit_limiter  # noqa: E402
from eventflow.main import app  # noqa: E402
from eventflow.models import (  # noqa: E402
    Booking,
    CustomizationOption,
    EventPackage,
    User,
    VendorAvailability,
)


def future_date(days: int = 30) -> date:
    return date.today() + timedelta(days=days)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[booking_submit_limiter] = lambda: None
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def login():
    """Make subsequent requests run as ``user``"""

    def _login(user: User):
        app.dependency_overrides[get_current_user] = lambda: user
        return user

    return _login


@pytest.fixture
def token_claims():
    def _set(uid: str, email: str):
        app.dependency_overrides[get_token_claims] = lambda: {"uid": uid, "email": email}

    return _set


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make(role: str = "client", name: str | None = None, status: str = "active") -> User:
        counter["n"] += 1
        n = counter["n"]
        user = User(
            firebase_uid=f"uid-{role}-{n}",
            name=name or f"{role.title()} {n}",
            email=f"{role}{n}@example.com",
            role=role,
            status=status,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def admin(make_user):
    return make_user("admin", name="Ada Admin")


@pytest.fixture
def make_package(db):
    def _make(name: str = "Classic Wedding", base_price: float = 1000.0, archived: bool = False) -> EventPackage:
        package = EventPackage(
            name=name,
            description="A complete event",
            base_price=base_price,
            features=["Planning"],
            is_archived=archived,
        )
        db.add(package)
        db.commit()
        db.refresh(package)
        return package

    return _make


@pytest.fixture
def make_option(db):
    def _make(category: str, name: str, price: float) -> CustomizationOption:
        option = CustomizationOption(category=category, name=name, price=price)
        db.add(option)
        db.commit()
        db.refresh(option)
        return option

    return _make


@pytest.fixture
def make_booking(db):
    """Insert a booking directly, bypassing submission checks"""

    def _make(
        client: User,
        package: EventPackage,
        event_date: date | None = None,
        status: str = "pending",
        customizations: list[dict] | None = None,
        total_price: float | None = None,
        created_at: datetime | None = None,
        requirements: str | None = None,
    ) -> Booking:
        booking = Booking(
            client_id=client.id,
            client_name=client.name,
            package_id=package.id,
            package_name=package.name,
            customizations=customizations or [],
            total_price=package.base_price if total_price is None else total_price,
            event_date=event_date or future_date(),
            guest_count=50,
            requirements=requirements,
            status=status,
        )
        if created_at is not None:
            booking.created_at = created_at
        db.add(booking)
        db.commit()
        db.refresh(booking)
        return booking

    return _make


@pytest.fixture
def block_dates(db):
    def _block(vendor: User, *dates: date) -> VendorAvailability:
        record = VendorAvailability(
            vendor_id=vendor.id, unavailable_dates=sorted(d.isoformat() for d in dates)
        )
        db.add(record)
        db.commit()
        return record

    return _block
