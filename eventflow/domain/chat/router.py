"""Chat router - messages on a booking"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from .schemas import ChatMessageCreate, ChatMessageResponse
from .service import ChatService

router = APIRouter(prefix="/bookings", tags=["Chat"])


def get_chat_service(db: Session = Depends(get_db)) -> ChatService:
    """Dependency injection for ChatService"""
    return ChatService(db)


@router.get("/{booking_id}/messages", response_model=list[ChatMessageResponse])
async def list_messages(
    booking_id: str,
    current_user: User = Depends(get_current_user),
    service: ChatService = Depends(get_chat_service),
):
    """Conversation on a booking, oldest first"""
    return service.list_messages(booking_id, current_user)


@router.post("/{booking_id}/messages", response_model=ChatMessageResponse, status_code=201)
async def send_message(
    booking_id: str,
    data: ChatMessageCreate,
    current_user: User = Depends(get_current_user),
    service: ChatService = Depends(get_chat_service),
):
    return service.send(booking_id, current_user, data)
