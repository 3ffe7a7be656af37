import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from .database import Base

# Fixed vocabularies (stored as plain strings)
USER_ROLES = ("client", "vendor", "admin")
USER_STATUSES = ("active", "pending", "disabled")
CATEGORIES = ("venue", "catering", "decoration", "entertainment", "photography")
BOOKING_STATUSES = (
    "pending",
    "awaiting-payment",
    "confirmed",
    "in-progress",
    "completed",
    "rejected",
)
TASK_STATUSES = ("assigned", "in-progress", "completed")


def generate_id():
    """Generate an opaque unique record ID"""
    return str(uuid.uuid4())


def utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_id)
    firebase_uid = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    role = Column(String(20), nullable=False, default="client")  # client, vendor, admin
    status = Column(String(20), nullable=False, default="active")  # active, pending, disabled
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    tasks = relationship("VendorTask", back_populates="vendor")


class EventPackage(Base):
    __tablename__ = "packages"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    base_price = Column(Float, nullable=False)
    image = Column(String(500), nullable=True)
    features = Column(JSON, default=list)
    popular = Column(Boolean, default=False, nullable=False)
    is_archived = Column(Boolean, default=False, nullable=False)  # soft delete
    created_at = Column(DateTime, default=utcnow)


class CustomizationOption(Base):
    __tablename__ = "customization_options"

    id = Column(String(36), primary_key=True, default=generate_id)
    category = Column(String(50), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    price = Column(Float, nullable=False)  # per guest for catering, flat otherwise
    description = Column(Text, nullable=True)
    image = Column(String(500), nullable=True)
    created_at = Column(DateTime, default=utcnow)


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(String(36), primary_key=True, default=generate_id)
    client_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    client_name = Column(String(255), nullable=False)
    package_id = Column(String(36), ForeignKey("packages.id"), nullable=False, index=True)
    package_name = Column(String(255), nullable=False)
    # Snapshot of chosen options: [{"id", "category", "name", "price"}]
    customizations = Column(JSON, default=list, nullable=False)
    # Frozen at submission; never recomputed
    total_price = Column(Float, nullable=False)
    event_date = Column(Date, nullable=False, index=True)
    guest_count = Column(Integer, nullable=False)
    requirements = Column(Text, nullable=True)
    status = Column(String(30), default="pending", nullable=False, index=True)
    created_at = Column(DateTime, default=utcnow, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    tasks = relationship("VendorTask", back_populates="booking")


class VendorTask(Base):
    __tablename__ = "tasks"
    __table_args__ = (UniqueConstraint("booking_id", "category", name="uq_task_booking_category"),)

    id = Column(String(36), primary_key=True, default=generate_id)
    booking_id = Column(String(36), ForeignKey("bookings.id"), nullable=False, index=True)
    vendor_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    vendor_name = Column(String(255), nullable=False)
    category = Column(String(50), nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(30), default="assigned", nullable=False)  # assigned, in-progress, completed
    event_date = Column(Date, nullable=False)  # copied from booking
    client_requirements = Column(Text, nullable=True)  # copied from booking
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    booking = relationship("Booking", back_populates="tasks")
    vendor = relationship("User", back_populates="tasks")


class Review(Base):
    __tablename__ = "reviews"
    __table_args__ = (UniqueConstraint("booking_id", "client_id", name="uq_review_booking_client"),)

    id = Column(String(36), primary_key=True, default=generate_id)
    package_id = Column(String(36), ForeignKey("packages.id"), nullable=False, index=True)
    booking_id = Column(String(36), ForeignKey("bookings.id"), nullable=False)
    client_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    client_name = Column(String(255), nullable=True)
    rating = Column(Integer, nullable=False)  # 1-5
    comment = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utcnow)


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    message = Column(String(1000), nullable=False)
    is_read = Column(Boolean, default=False, nullable=False)
    link = Column(String(500), nullable=True)
    created_at = Column(DateTime, default=utcnow, index=True)


class ChatMessage(Base):
    __tablename__ = "chat_messages"

    id = Column(String(36), primary_key=True, default=generate_id)
    booking_id = Column(String(36), ForeignKey("bookings.id"), nullable=False, index=True)
    sender_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    sender_name = Column(String(255), nullable=False)
    sender_role = Column(String(20), nullable=False)  # client or admin
    text = Column(Text, nullable=False)
    created_at = Column(DateTime, default=utcnow, index=True)


class ActivityLog(Base):
    __tablename__ = "activity_logs"

    id = Column(String(36), primary_key=True, default=generate_id)
    message = Column(String(1000), nullable=False)
    # bookingId / vendorName / clientName as applicable
    meta = Column(JSON, default=dict)
    created_at = Column(DateTime, default=utcnow, index=True)


class VendorAvailability(Base):
    __tablename__ = "vendor_availability"

    vendor_id = Column(String(36), ForeignKey("users.id"), primary_key=True)
    unavailable_dates = Column(JSON, default=list, nullable=False)  # sorted ISO dates
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)


class Wishlist(Base):
    __tablename__ = "wishlists"

    user_id = Column(String(36), ForeignKey("users.id"), primary_key=True)
    package_ids = Column(JSON, default=list, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
