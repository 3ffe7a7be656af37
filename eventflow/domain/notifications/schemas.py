from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from ...shared.schemas import CamelModel


class NotificationResponse(CamelModel):
    id: str
    user_id: str
    message: str
    is_read: bool
    link: Optional[str] = None
    created_at: Optional[datetime] = None


class ReadUpdate(BaseModel):
    isRead: bool = True


class UnreadCountResponse(CamelModel):
    unread_count: int
