"""Wishlist service - packages a client has saved for later"""

import logging

from sqlalchemy.orm import Session

from ...models import User
from ..catalog.service import CatalogService
from .repository import WishlistRepository
from .schemas import WishlistResponse, WishlistToggleResponse

logger = logging.getLogger(__name__)


class WishlistService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = WishlistRepository()

    def get(self, user: User) -> WishlistResponse:
        wishlist = self.repo.get(self.db, user.id)
        if wishlist is None:
            return WishlistResponse(user_id=user.id, package_ids=[])
        return WishlistResponse.model_validate(wishlist)

    def toggle(self, user: User, package_id: str) -> WishlistToggleResponse:
        """Save the package, or remove it if it is already saved"""
        current = list(self.get(user).package_ids)
        if package_id in current:
            current.remove(package_id)
            saved = False
        else:
            CatalogService(self.db).get_package(package_id)
            current.append(package_id)
            saved = True

        wishlist = self.repo.save(self.db, user.id, current)
        logger.debug(f"💾 Wishlist for {user.id}: {package_id} saved={saved}")
        return WishlistToggleResponse(
            user_id=wishlist.user_id,
            package_ids=wishlist.package_ids,
            updated_at=wishlist.updated_at,
            saved=saved,
        )
