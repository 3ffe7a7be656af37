"""Catalog router - packages, customization options and price quotes"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user, require_admin
from ...database import get_db
from ...models import User
from .schemas import (
    CustomizationOptionCreate,
    CustomizationOptionResponse,
    CustomizationOptionUpdate,
    PackageCreate,
    PackageResponse,
    PackageUpdate,
    QuoteRequest,
    QuoteResponse,
)
from .service import CatalogService

router = APIRouter(prefix="/catalog", tags=["Catalog"])


def get_catalog_service(db: Session = Depends(get_db)) -> CatalogService:
    """Dependency injection for CatalogService"""
    return CatalogService(db)


@router.get("/packages", response_model=list[PackageResponse])
async def list_packages(
    search: Optional[str] = Query(None),
    sort: Optional[str] = Query(None, pattern="^(price-asc|price-desc)$"),
    include_archived: bool = Query(False),
    current_user: User = Depends(get_current_user),
    service: CatalogService = Depends(get_catalog_service),
):
    """List packages; archived ones only for admins who ask for them"""
    show_archived = include_archived and current_user.role == "admin"
    return service.list_packages(search, sort, show_archived)


@router.get("/packages/{package_id}", response_model=PackageResponse)
async def get_package(
    package_id: str,
    _: User = Depends(get_current_user),
    service: CatalogService = Depends(get_catalog_service),
):
    return service.get_package_response(package_id)


@router.post("/packages", response_model=PackageResponse, status_code=201)
async def create_package(
    data: PackageCreate,
    admin: User = Depends(require_admin),
    service: CatalogService = Depends(get_catalog_service),
):
    return service.create_package(data, admin)


@router.patch("/packages/{package_id}", response_model=PackageResponse)
async def update_package(
    package_id: str,
    data: PackageUpdate,
    _: User = Depends(require_admin),
    service: CatalogService = Depends(get_catalog_service),
):
    return service.update_package(package_id, data)


@router.post("/packages/{package_id}/archive", response_model=PackageResponse)
async def archive_package(
    package_id: str,
    _: User = Depends(require_admin),
    service: CatalogService = Depends(get_catalog_service),
):
    return service.set_archived(package_id, True)


@router.post("/packages/{package_id}/restore", response_model=PackageResponse)
async def restore_package(
    package_id: str,
    _: User = Depends(require_admin),
    service: CatalogService = Depends(get_catalog_service),
):
    return service.set_archived(package_id, False)


@router.get("/options", response_model=list[CustomizationOptionResponse])
async def list_options(
    category: Optional[str] = Query(None),
    _: User = Depends(get_current_user),
    service: CatalogService = Depends(get_catalog_service),
):
    return service.list_options(category)


@router.post("/options", response_model=CustomizationOptionResponse, status_code=201)
async def create_option(
    data: CustomizationOptionCreate,
    _: User = Depends(require_admin),
    service: CatalogService = Depends(get_catalog_service),
):
    return service.create_option(data)


@router.patch("/options/{option_id}", response_model=CustomizationOptionResponse)
async def update_option(
    option_id: str,
    data: CustomizationOptionUpdate,
    _: User = Depends(require_admin),
    service: CatalogService = Depends(get_catalog_service),
):
    return service.update_option(option_id, data)


@router.delete("/options/{option_id}", status_code=204)
async def delete_option(
    option_id: str,
    _: User = Depends(require_admin),
    service: CatalogService = Depends(get_catalog_service),
):
    service.delete_option(option_id)


@router.post("/quote", response_model=QuoteResponse)
async def quote(
    data: QuoteRequest,
    _: User = Depends(get_current_user),
    service: CatalogService = Depends(get_catalog_service),
):
    """Price breakdown for a prospective booking"""
    return service.quote(data)
