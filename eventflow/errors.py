"""Named errors raised by the domain services.

Each error is an HTTPException so services can raise them directly and the
routers need no translation layer. Business-rule rejections use 409.
"""

from fastapi import HTTPException


class BookingNotFound(HTTPException):
    def __init__(self, booking_id: str):
        super().__init__(status_code=404, detail=f"Booking {booking_id} not found")


class TaskNotFound(HTTPException):
    def __init__(self, task_id: str):
        super().__init__(status_code=404, detail=f"Task {task_id} not found")


class VendorNotFound(HTTPException):
    def __init__(self, vendor_id: str):
        super().__init__(status_code=404, detail=f"Vendor {vendor_id} not found")


class PackageNotFound(HTTPException):
    def __init__(self, package_id: str):
        super().__init__(status_code=404, detail=f"Package {package_id} not found")


class CustomizationNotFound(HTTPException):
    def __init__(self, option_id: str):
        super().__init__(status_code=404, detail=f"Customization option {option_id} not found")


class UserNotFound(HTTPException):
    def __init__(self, user_id: str):
        super().__init__(status_code=404, detail=f"User {user_id} not found")


class NotificationNotFound(HTTPException):
    def __init__(self, notification_id: str):
        super().__init__(status_code=404, detail=f"Notification {notification_id} not found")


class CategoryAlreadyAssigned(HTTPException):
    def __init__(self, booking_id: str, category: str, vendor_name: str | None = None):
        holder = f" to {vendor_name}" if vendor_name else ""
        super().__init__(
            status_code=409,
            detail=f"The {category} category for booking {booking_id} is already assigned{holder}",
        )
        self.category = category


class VendorUnavailable(HTTPException):
    def __init__(self, vendor_name: str, event_date):
        super().__init__(
            status_code=409,
            detail=f"{vendor_name} is unavailable on {event_date}",
        )


class EventDateUnavailable(HTTPException):
    def __init__(self, event_date):
        super().__init__(
            status_code=409,
            detail=f"The selected date {event_date} is no longer available. Please choose another date.",
        )


class InvalidEventDate(HTTPException):
    def __init__(self, detail: str = "Event date must be after today"):
        super().__init__(status_code=400, detail=detail)


class DuplicateReview(HTTPException):
    def __init__(self, booking_id: str):
        super().__init__(status_code=409, detail=f"You have already reviewed booking {booking_id}")


class ReviewNotAllowed(HTTPException):
    def __init__(self, detail: str = "Only completed bookings can be reviewed"):
        super().__init__(status_code=409, detail=detail)


class InvalidStatusTransition(HTTPException):
    def __init__(self, current: str, target: str):
        super().__init__(
            status_code=409,
            detail=f"Invalid status transition: {current} → {target}",
        )
        self.current = current
        self.target = target


class NotTaskOwner(HTTPException):
    def __init__(self):
        super().__init__(status_code=403, detail="Only the assigned vendor can update this task")


class AccountNotActive(HTTPException):
    def __init__(self, status: str):
        message = (
            "Your vendor account is awaiting admin approval"
            if status == "pending"
            else "Your account has been disabled"
        )
        super().__init__(status_code=403, detail=message)


class ChatUnavailable(HTTPException):
    def __init__(self, detail: str = "Chat is closed for rejected bookings"):
        super().__init__(status_code=409, detail=detail)
