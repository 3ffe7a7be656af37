"""Which change events a connected user may receive"""

from typing import Callable

from ...realtime import ChangeEvent

# Readable by every signed-in user
PUBLIC_COLLECTIONS = {"packages", "customization_options", "reviews"}

LIVE_COLLECTIONS = PUBLIC_COLLECTIONS | {
    "bookings",
    "tasks",
    "notifications",
    "activity_logs",
    "users",
    "vendor_availability",
    "chat_messages",
}


def can_see(user: dict, event: ChangeEvent, owns_booking: Callable[[str], bool]) -> bool:
    """
    Admins see everything. Clients see their own bookings and the tasks on
    them, vendors their own tasks and availability, and everyone their own
    notifications. Chat on a booking reaches its client only.
    """
    if user["role"] == "admin" or event.collection in PUBLIC_COLLECTIONS:
        return True

    document = event.document
    if event.collection == "bookings":
        return user["role"] == "client" and document.get("clientId") == user["id"]
    if event.collection == "tasks":
        if user["role"] == "vendor":
            return document.get("vendorId") == user["id"]
        return user["role"] == "client" and owns_booking(document.get("bookingId"))
    if event.collection == "notifications":
        return document.get("userId") == user["id"]
    if event.collection == "vendor_availability":
        return document.get("vendorId") == user["id"]
    if event.collection == "chat_messages":
        return user["role"] == "client" and owns_booking(document.get("bookingId"))
    return False
