from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from .schemas import WishlistResponse, WishlistToggleResponse
from .service import WishlistService

router = APIRouter(prefix="/wishlist", tags=["Wishlist"])


def get_wishlist_service(db: Session = Depends(get_db)) -> WishlistService:
    return WishlistService(db)


@router.get("", response_model=WishlistResponse)
async def my_wishlist(
    current_user: User = Depends(get_current_user),
    service: WishlistService = Depends(get_wishlist_service),
):
    return service.get(current_user)


@router.post("/{package_id}/toggle", response_model=WishlistToggleResponse)
async def toggle_wishlist(
    package_id: str,
    current_user: User = Depends(get_current_user),
    service: WishlistService = Depends(get_wishlist_service),
):
    return service.toggle(current_user, package_id)
