"""Catalog service - package and customization option management, quotes"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...errors import CustomizationNotFound, PackageNotFound
from ...models import CustomizationOption, EventPackage, User
from ...realtime import publish_change
from ...shared.persistence import commit_or_fail
from ...utils.sanitization import sanitize_string, sanitize_text
from .pricing import SelectedCustomization, compute_total_price, price_breakdown, select_customization
from .repository import CatalogRepository
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

logger = logging.getLogger(__name__)


class CatalogService:
    """Service layer for the event catalog"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = CatalogRepository()

    def _to_response(
        self, package: EventPackage, ratings: Optional[dict[str, tuple[float, int]]] = None
    ) -> PackageResponse:
        response = PackageResponse.model_validate(package)
        if ratings is None:
            ratings = self.repo.rating_stats(self.db)
        average, count = ratings.get(package.id, (0.0, 0))
        response.rating = round(average, 1)
        response.review_count = count
        return response

    def list_packages(
        self, search: Optional[str] = None, sort: Optional[str] = None, include_archived: bool = False
    ) -> list[PackageResponse]:
        """Packages annotated with their derived rating"""
        packages = self.repo.list_packages(self.db, search, sort, include_archived)
        ratings = self.repo.rating_stats(self.db)
        return [self._to_response(package, ratings) for package in packages]

    def get_package(self, package_id: str) -> EventPackage:
        package = self.repo.get_package(self.db, package_id)
        if not package:
            raise PackageNotFound(package_id)
        return package

    def get_package_response(self, package_id: str) -> PackageResponse:
        return self._to_response(self.get_package(package_id))

    def create_package(self, data: PackageCreate, admin: User) -> PackageResponse:
        package = self.repo.create_package(
            self.db,
            name=sanitize_string(data.name),
            description=sanitize_text(data.description),
            base_price=data.basePrice,
            image=data.image,
            features=[sanitize_string(f) for f in data.features],
            popular=data.popular,
        )
        logger.info(f"✅ {admin.email} created package {package.id} ({package.name})")
        response = self._to_response(package, {})
        publish_change("packages", "created", response.to_document())
        return response

    def update_package(self, package_id: str, data: PackageUpdate) -> PackageResponse:
        package = self.get_package(package_id)
        package = self.repo.update_package(
            self.db,
            package,
            name=sanitize_string(data.name),
            description=sanitize_text(data.description),
            base_price=data.basePrice,
            image=data.image,
            features=[sanitize_string(f) for f in data.features] if data.features is not None else None,
            popular=data.popular,
        )
        response = self._to_response(package)
        publish_change("packages", "updated", response.to_document())
        return response

    def set_archived(self, package_id: str, archived: bool = True) -> PackageResponse:
        """Soft delete: archived packages disappear from the client catalog"""
        package = self.get_package(package_id)
        package.is_archived = archived
        commit_or_fail(self.db, "archive package")
        self.db.refresh(package)
        logger.info(f"🗄️ Package {package_id} archived={archived}")
        response = self._to_response(package)
        publish_change("packages", "updated", response.to_document())
        return response

    def list_options(self, category: Optional[str] = None) -> list[CustomizationOption]:
        return self.repo.list_options(self.db, category)

    def get_option(self, option_id: str) -> CustomizationOption:
        option = self.repo.get_option(self.db, option_id)
        if not option:
            raise CustomizationNotFound(option_id)
        return option

    def create_option(self, data: CustomizationOptionCreate) -> CustomizationOption:
        option = self.repo.create_option(
            self.db,
            category=data.category,
            name=sanitize_string(data.name),
            price=data.price,
            description=sanitize_text(data.description),
            image=data.image,
        )
        publish_change(
            "customization_options", "created", CustomizationOptionResponse.model_validate(option).to_document()
        )
        return option

    def update_option(self, option_id: str, data: CustomizationOptionUpdate) -> CustomizationOption:
        option = self.get_option(option_id)
        option = self.repo.update_option(
            self.db,
            option,
            category=data.category,
            name=sanitize_string(data.name),
            price=data.price,
            description=sanitize_text(data.description),
            image=data.image,
        )
        publish_change(
            "customization_options", "updated", CustomizationOptionResponse.model_validate(option).to_document()
        )
        return option

    def delete_option(self, option_id: str) -> None:
        """Existing bookings keep their snapshot of the option"""
        option = self.get_option(option_id)
        self.repo.delete_option(self.db, option)
        logger.info(f"🗑️ Deleted customization option {option_id}")

    def resolve_selections(self, option_ids: list[str]) -> list[SelectedCustomization]:
        """Turn requested option ids into a selection with one option per category.

        Ids are applied in request order, so a later option in a category
        replaces an earlier one.
        """
        options = {option.id: option for option in self.repo.get_options(self.db, option_ids)}
        selected: list[SelectedCustomization] = []
        for option_id in option_ids:
            option = options.get(option_id)
            if not option:
                raise CustomizationNotFound(option_id)
            selected = select_customization(selected, option)
        return selected

    def quote(self, data: QuoteRequest) -> QuoteResponse:
        package = self.get_package(data.packageId)
        if package.is_archived:
            raise PackageNotFound(data.packageId)
        selected = self.resolve_selections(data.customizationIds)
        return QuoteResponse(
            package_id=package.id,
            guest_count=data.guestCount,
            customizations=[CustomizationOptionResponse.model_validate(item.model_dump()) for item in selected],
            lines=price_breakdown(package.name, package.base_price, selected, data.guestCount),
            total_price=compute_total_price(package.base_price, selected, data.guestCount),
        )
