from datetime import datetime
from typing import Any, Optional

from ...shared.schemas import CamelModel


class ActivityResponse(CamelModel):
    id: str
    message: str
    meta: dict[str, Any] = {}
    created_at: Optional[datetime] = None
