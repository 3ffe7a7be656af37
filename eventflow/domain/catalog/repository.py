"""Catalog repository - packages and customization options"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ...models import CustomizationOption, EventPackage, Review
from ...shared.persistence import commit_or_fail


class CatalogRepository:
    """Repository for catalog database operations"""

    @staticmethod
    def get_package(db: Session, package_id: str) -> Optional[EventPackage]:
        return db.query(EventPackage).filter(EventPackage.id == package_id).first()

    @staticmethod
    def list_packages(
        db: Session,
        search: Optional[str] = None,
        sort: Optional[str] = None,
        include_archived: bool = False,
    ) -> list[EventPackage]:
        query = db.query(EventPackage)
        if not include_archived:
            query = query.filter(EventPackage.is_archived.is_(False))
        if search:
            query = query.filter(EventPackage.name.ilike(f"%{search}%"))

        if sort == "price-asc":
            query = query.order_by(EventPackage.base_price.asc())
        elif sort == "price-desc":
            query = query.order_by(EventPackage.base_price.desc())
        else:
            query = query.order_by(EventPackage.created_at.desc())
        return query.all()

    @staticmethod
    def create_package(db: Session, **package_data) -> EventPackage:
        package = EventPackage(**package_data)
        db.add(package)
        commit_or_fail(db, "create package")
        db.refresh(package)
        return package

    @staticmethod
    def update_package(db: Session, package: EventPackage, **updates) -> EventPackage:
        for key, value in updates.items():
            if value is not None and hasattr(package, key):
                setattr(package, key, value)
        commit_or_fail(db, "update package")
        db.refresh(package)
        return package

    @staticmethod
    def get_option(db: Session, option_id: str) -> Optional[CustomizationOption]:
        return db.query(CustomizationOption).filter(CustomizationOption.id == option_id).first()

    @staticmethod
    def get_options(db: Session, option_ids: list[str]) -> list[CustomizationOption]:
        if not option_ids:
            return []
        return db.query(CustomizationOption).filter(CustomizationOption.id.in_(option_ids)).all()

    @staticmethod
    def list_options(db: Session, category: Optional[str] = None) -> list[CustomizationOption]:
        query = db.query(CustomizationOption)
        if category:
            query = query.filter(CustomizationOption.category == category)
        return query.order_by(CustomizationOption.category, CustomizationOption.price).all()

    @staticmethod
    def create_option(db: Session, **option_data) -> CustomizationOption:
        option = CustomizationOption(**option_data)
        db.add(option)
        commit_or_fail(db, "create customization option")
        db.refresh(option)
        return option

    @staticmethod
    def update_option(db: Session, option: CustomizationOption, **updates) -> CustomizationOption:
        for key, value in updates.items():
            if value is not None and hasattr(option, key):
                setattr(option, key, value)
        commit_or_fail(db, "update customization option")
        db.refresh(option)
        return option

    @staticmethod
    def delete_option(db: Session, option: CustomizationOption) -> None:
        db.delete(option)
        commit_or_fail(db, "delete customization option")

    @staticmethod
    def rating_stats(db: Session) -> dict[str, tuple[float, int]]:
        """Average rating and review count for every reviewed package"""
        rows = (
            db.query(Review.package_id, func.avg(Review.rating), func.count(Review.id))
            .group_by(Review.package_id)
            .all()
        )
        return {package_id: (float(avg or 0), count) for package_id, avg, count in rows}
