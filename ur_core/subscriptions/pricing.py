# ur_core/subscriptions/pricing.py
"""
Price composition for an assignment: base unit price plus one line item per
billable service, in the order the services were supplied.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_money(value: Any) -> Decimal:
    """
    Permissive conversion: anything that is not a finite number becomes 0.00.
    """
    if value is None or isinstance(value, bool):
        return ZERO
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError, TypeError):
        return ZERO
    if not amount.is_finite():
        return ZERO
    return amount.quantize(CENT)


@dataclass(frozen=True)
class ServiceEntry:
    service_id: int
    name: str
    catalog_price: Any
    is_base: bool = False
    price_snapshot: Any = None

    @classmethod
    def from_link(cls, link) -> "ServiceEntry":
        service = link.service
        return cls(
            service_id=service.id,
            name=service.name,
            catalog_price=service.unit_price,
            is_base=service.is_base,
            price_snapshot=link.price_snapshot,
        )

    @property
    def nominal_price(self) -> Decimal:
        if self.price_snapshot is not None:
            return to_money(self.price_snapshot)
        return to_money(self.catalog_price)


@dataclass(frozen=True)
class LineItem:
    id: int
    name: str
    price: Decimal
    is_base: bool

    def as_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "price": self.price, "is_base": self.is_base}


@dataclass(frozen=True)
class PriceBreakdown:
    base: Decimal
    line_items: list[LineItem] = field(default_factory=list)
    total: Decimal = ZERO

    def as_dict(self) -> dict[str, Any]:
        return {
            "base": self.base,
            "line_items": [item.as_dict() for item in self.line_items],
            "total": self.total,
        }


def line_item_for(entry: ServiceEntry) -> LineItem:
    # Base services are already part of the unit price: listed, never charged.
    price = ZERO if entry.is_base else entry.nominal_price
    return LineItem(id=entry.service_id, name=entry.name, price=price, is_base=entry.is_base)


def compose(base_price: Any, entries: Iterable[ServiceEntry]) -> PriceBreakdown:
    base = to_money(base_price)
    items = [line_item_for(entry) for entry in entries]
    total = sum((item.price for item in items), base)
    return PriceBreakdown(base=base, line_items=items, total=total.quantize(CENT))
