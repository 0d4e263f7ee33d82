"""
General Store for the Oregon Trail.

Fixed per-unit prices for food, ammunition, clothing, oxen and spare
wagon parts. An order is priced as a whole and refused if it costs more
than the party's cash.
"""

from dataclasses import dataclass, replace
from typing import Any
import logging

from oregon_trail.data_models import SpareParts, Supplies


logger = logging.getLogger(__name__)


class InsufficientFundsError(Exception):
    """Raised when an order costs more than the party can pay."""

    def __init__(self, total: float, cash: float):
        self.total = total
        self.cash = cash
        super().__init__(
            f"You don't have enough money for this purchase! "
            f"It costs ${total:.2f} and you have ${cash:.2f}."
        )


# Dollars per unit: food per pound, ammunition per box of 20 bullets,
# clothing per set, oxen per ox, spare parts per part
PRICES: dict[str, float] = {
    "food": 0.20,
    "ammunition": 2.00,
    "clothing": 10.00,
    "oxen": 40.00,
    "wheels": 10.00,
    "axles": 10.00,
    "tongues": 10.00,
}

ITEM_ALIASES: dict[str, str] = {
    "ammo": "ammunition",
    "ox": "oxen",
    "wheel": "wheels",
    "axle": "axles",
    "tongue": "tongues",
}

PURCHASE_MESSAGE = "You purchased new supplies from the general store."


@dataclass(frozen=True)
class StoreOrder:
    """Quantities to buy. Negative quantities are treated as zero."""

    food: int = 0
    ammunition: int = 0
    clothing: int = 0
    oxen: int = 0
    wheels: int = 0
    axles: int = 0
    tongues: int = 0

    def __post_init__(self):
        for item in PRICES:
            if getattr(self, item) < 0:
                object.__setattr__(self, item, 0)

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, item) == 0 for item in PRICES)

    @classmethod
    def from_items(cls, items: dict[str, int]) -> "StoreOrder":
        """
        Build an order from item names, accepting singular aliases.

        Raises:
            ValueError: If an item is not sold here
        """
        quantities: dict[str, int] = {}
        for name, quantity in items.items():
            key = ITEM_ALIASES.get(name.lower(), name.lower())
            if key not in PRICES:
                raise ValueError(f"The store doesn't sell {name!r}")
            quantities[key] = quantities.get(key, 0) + quantity
        return cls(**quantities)

    def to_dict(self) -> dict[str, int]:
        return {item: getattr(self, item) for item in PRICES}


def item_cost(item: str, quantity: int) -> float:
    return round(PRICES[item] * max(0, quantity), 2)


def order_total(order: StoreOrder) -> float:
    """Total price of an order in dollars."""
    return round(sum(PRICES[item] * getattr(order, item) for item in PRICES), 2)


def purchase(supplies: Supplies, order: StoreOrder) -> Supplies:
    """
    Buy an order.

    Args:
        supplies: The party's current supplies
        order: Quantities to buy

    Returns:
        New supplies with the goods added and cash reduced

    Raises:
        InsufficientFundsError: If the order costs more than the party's cash
    """
    total = order_total(order)
    if total > supplies.cash:
        raise InsufficientFundsError(total, supplies.cash)

    spares = supplies.spare_parts
    new_supplies = replace(
        supplies.adjust(
            food=order.food,
            ammunition=order.ammunition,
            clothing=order.clothing,
            oxen=order.oxen,
            cash=-total,
        ),
        spare_parts=SpareParts(
            wheels=spares.wheels + order.wheels,
            axles=spares.axles + order.axles,
            tongues=spares.tongues + order.tongues,
        ),
    )
    logger.info(f"Purchased {order.to_dict()} for ${total:.2f}")
    return new_supplies


def price_list() -> list[dict[str, Any]]:
    """Prices for display, one row per item."""
    return [{"item": item, "price": price} for item, price in PRICES.items()]
