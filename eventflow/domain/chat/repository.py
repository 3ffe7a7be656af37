"""Chat repository - messages exchanged on a booking"""

from sqlalchemy.orm import Session

from ...models import ChatMessage


class ChatRepository:
    @staticmethod
    def stage(db: Session, **message_data) -> ChatMessage:
        message = ChatMessage(**message_data)
        db.add(message)
        return message

    @staticmethod
    def list_for_booking(db: Session, booking_id: str) -> list[ChatMessage]:
        return (
            db.query(ChatMessage)
            .filter(ChatMessage.booking_id == booking_id)
            .order_by(ChatMessage.created_at.asc(), ChatMessage.id.asc())
            .all()
        )
