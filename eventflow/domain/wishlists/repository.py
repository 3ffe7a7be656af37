from typing import Optional

from sqlalchemy.orm import Session

from ...models import Wishlist
from ...shared.persistence import commit_or_fail


class WishlistRepository:
    @staticmethod
    def get(db: Session, user_id: str) -> Optional[Wishlist]:
        return db.query(Wishlist).filter(Wishlist.user_id == user_id).first()

    @staticmethod
    def save(db: Session, user_id: str, package_ids: list[str]) -> Wishlist:
        wishlist = WishlistRepository.get(db, user_id)
        if wishlist is None:
            wishlist = Wishlist(user_id=user_id, package_ids=package_ids)
            db.add(wishlist)
        else:
            # Reassign so the JSON column is flagged dirty
            wishlist.package_ids = package_ids
        commit_or_fail(db, "save wishlist")
        db.refresh(wishlist)
        return wishlist
