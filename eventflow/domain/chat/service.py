"""Chat service - per-booking conversation between the client and the admins"""

import logging

from sqlalchemy.orm import Session

from ...errors import BookingNotFound, ChatUnavailable
from ...models import Booking, ChatMessage, User
from ...realtime import publish_change
from ...shared.persistence import commit_or_fail
from ...utils.sanitization import sanitize_text
from ..bookings.repository import BookingRepository
from .repository import ChatRepository
from .schemas import MAX_MESSAGE_LENGTH, ChatMessageCreate, ChatMessageResponse

logger = logging.getLogger(__name__)


class ChatService:
    """Service layer for booking chat"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ChatRepository()

    def _get_conversation(self, booking_id: str, user: User) -> Booking:
        """Only the booking's client and admins take part; anyone else gets a 404"""
        booking = BookingRepository.get_booking(self.db, booking_id)
        if not booking:
            raise BookingNotFound(booking_id)
        if user.role != "admin" and booking.client_id != user.id:
            raise BookingNotFound(booking_id)
        return booking

    def list_messages(self, booking_id: str, user: User) -> list[ChatMessage]:
        booking = self._get_conversation(booking_id, user)
        return self.repo.list_for_booking(self.db, booking.id)

    def send(self, booking_id: str, sender: User, data: ChatMessageCreate) -> ChatMessage:
        booking = self._get_conversation(booking_id, sender)
        if booking.status == "rejected" and sender.role != "admin":
            raise ChatUnavailable()

        message = self.repo.stage(
            self.db,
            booking_id=booking.id,
            sender_id=sender.id,
            sender_name=sender.name,
            sender_role=sender.role,
            text=sanitize_text(data.text, max_length=MAX_MESSAGE_LENGTH),
        )
        commit_or_fail(self.db, "send message")
        self.db.refresh(message)

        logger.info(f"💬 {sender.email} wrote on booking {booking.id}")
        publish_change("chat_messages", "created", ChatMessageResponse.model_validate(message).to_document())
        return message
