"""User router - sign-up profile and admin user management endpoints"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user, get_token_claims, require_admin
from ...database import get_db
from ...models import User
from .schemas import RegisterRequest, RoleUpdate, StatusUpdate, UserResponse
from .service import UserService

auth_router = APIRouter(prefix="/auth", tags=["Auth"])
router = APIRouter(prefix="/users", tags=["Users"])


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    """Dependency injection for UserService"""
    return UserService(db)


@auth_router.post("/register", response_model=UserResponse, status_code=201)
async def register(
    data: RegisterRequest,
    claims: dict = Depends(get_token_claims),
    service: UserService = Depends(get_user_service),
):
    """Create the profile for the signed-in identity (vendors await approval)"""
    return service.register(claims, data)


@auth_router.get("/me", response_model=UserResponse)
async def me(current_user: User = Depends(get_current_user)):
    return current_user


@router.get("", response_model=list[UserResponse])
async def list_users(
    search: Optional[str] = Query(None),
    role: Optional[str] = Query(None),
    _: User = Depends(require_admin),
    service: UserService = Depends(get_user_service),
):
    """List all users (admin)"""
    return service.list_users(search, role)


@router.get("/vendors", response_model=list[UserResponse])
async def list_vendors(
    _: User = Depends(require_admin),
    service: UserService = Depends(get_user_service),
):
    return service.list_vendors()


@router.patch("/{user_id}/role", response_model=UserResponse)
async def update_role(
    user_id: str,
    data: RoleUpdate,
    admin: User = Depends(require_admin),
    service: UserService = Depends(get_user_service),
):
    return service.set_role(user_id, data.role, admin)


@router.patch("/{user_id}/status", response_model=UserResponse)
async def update_status(
    user_id: str,
    data: StatusUpdate,
    admin: User = Depends(require_admin),
    service: UserService = Depends(get_user_service),
):
    """Approve or disable an account"""
    return service.set_status(user_id, data.status, admin)
