"""Chat domain schemas"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from ...shared.schemas import CamelModel

MAX_MESSAGE_LENGTH = 2000


class ChatMessageCreate(BaseModel):
    text: str

    @field_validator("text")
    @classmethod
    def validate_text(cls, v):
        if not v or not v.strip():
            raise ValueError("Message cannot be empty")
        if len(v) > MAX_MESSAGE_LENGTH:
            raise ValueError(f"Message must be at most {MAX_MESSAGE_LENGTH} characters")
        return v.strip()


class ChatMessageResponse(CamelModel):
    id: str
    booking_id: str
    sender_id: str
    sender_name: str
    sender_role: str
    text: str
    created_at: Optional[datetime] = None
