"""
Booking status state machine

Happy path: pending → awaiting-payment → confirmed → in-progress → completed.
Any state before completion may also be rejected. completed and rejected are
terminal.

By default admins may pick any status from any status. With
STRICT_BOOKING_TRANSITIONS enabled only the forward edges below are accepted.
"""

from ...models import BOOKING_STATUSES

BOOKING_TRANSITIONS = {
    "pending": ["awaiting-payment", "rejected"],
    "awaiting-payment": ["confirmed", "rejected"],
    "confirmed": ["in-progress", "rejected"],
    "in-progress": ["completed", "rejected"],
    "completed": [],  # Terminal state
    "rejected": [],  # Terminal state
}

# Statuses that occupy the event date for every other client
DATE_BLOCKING_STATUSES = ("confirmed", "in-progress")

# Left out of realised revenue in analytics
REVENUE_EXCLUDED_STATUSES = ("pending", "rejected")


def validate_booking_transition(current_status: str, new_status: str, strict: bool = False) -> bool:
    """
    Validate if a booking status transition is allowed

    Args:
        current_status: Current booking status
        new_status: Desired new status
        strict: Enforce the forward-only graph

    Returns:
        bool: True if transition is valid, False otherwise
    """
    if new_status not in BOOKING_STATUSES:
        return False

    # Allow same status (no-op)
    if current_status == new_status:
        return True

    if not strict:
        return True

    return new_status in BOOKING_TRANSITIONS.get(current_status, [])


def allowed_next_statuses(current_status: str, strict: bool = False) -> list[str]:
    if not strict:
        return [status for status in BOOKING_STATUSES if status != current_status]
    return list(BOOKING_TRANSITIONS.get(current_status, []))
