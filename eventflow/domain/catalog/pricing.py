"""
Pricing and customization selection

Catering options are priced per guest; every other category is a flat fee.
A booking may carry at most one option per category: selecting a second
option in a category replaces the first.
"""

from typing import Iterable, Optional, Protocol

from pydantic import BaseModel

from ...shared.schemas import CamelModel


class PricedOption(Protocol):
    id: str
    category: str
    name: str
    price: float


class SelectedCustomization(BaseModel):
    """Snapshot of a chosen option as stored on the booking"""

    id: str
    category: str
    name: str
    price: float

    @classmethod
    def from_option(cls, option: PricedOption) -> "SelectedCustomization":
        return cls(id=option.id, category=option.category, name=option.name, price=option.price)


class PriceLine(CamelModel):
    label: str
    category: Optional[str] = None
    unit_price: float
    quantity: int = 1
    amount: float


def customization_cost(option: PricedOption, guest_count: int) -> float:
    if option.category == "catering":
        return option.price * guest_count
    return option.price


def compute_total_price(
    base_price: float, selections: Iterable[PricedOption], guest_count: int
) -> float:
    """Base package price plus each selected option's cost, rounded to cents"""
    total = base_price + sum(customization_cost(option, guest_count) for option in selections)
    return round(total, 2)


def price_breakdown(
    package_name: str, base_price: float, selections: Iterable[PricedOption], guest_count: int
) -> list[PriceLine]:
    lines = [PriceLine(label=package_name, unit_price=base_price, amount=base_price)]
    for option in selections:
        quantity = guest_count if option.category == "catering" else 1
        lines.append(
            PriceLine(
                label=option.name,
                category=option.category,
                unit_price=option.price,
                quantity=quantity,
                amount=round(customization_cost(option, guest_count), 2),
            )
        )
    return lines


def select_customization(
    selected: list[SelectedCustomization], option: PricedOption
) -> list[SelectedCustomization]:
    """Add ``option``, replacing whatever was chosen in its category"""
    kept = [item for item in selected if item.category != option.category]
    return kept + [SelectedCustomization.from_option(option)]


def toggle_customization(
    selected: list[SelectedCustomization], option: PricedOption
) -> list[SelectedCustomization]:
    """Deselect ``option`` if it is already chosen, otherwise select it"""
    if any(item.id == option.id for item in selected):
        return [item for item in selected if item.id != option.id]
    return select_customization(selected, option)


def required_categories(selections: Iterable[PricedOption]) -> list[str]:
    """Distinct categories a booking needs staffed, in selection order"""
    categories: list[str] = []
    for option in selections:
        if option.category not in categories:
            categories.append(option.category)
    return categories
