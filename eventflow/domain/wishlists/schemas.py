from datetime import datetime
from typing import Optional

from ...shared.schemas import CamelModel


class WishlistResponse(CamelModel):
    user_id: str
    package_ids: list[str] = []
    updated_at: Optional[datetime] = None


class WishlistToggleResponse(WishlistResponse):
    saved: bool
