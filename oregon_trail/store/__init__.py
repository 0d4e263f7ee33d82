"""
General Store.

Prices, orders and purchases.
"""

from oregon_trail.store.general_store import (
    PRICES,
    PURCHASE_MESSAGE,
    InsufficientFundsError,
    StoreOrder,
    item_cost,
    order_total,
    price_list,
    purchase,
)

__all__ = [
    "PRICES",
    "PURCHASE_MESSAGE",
    "InsufficientFundsError",
    "StoreOrder",
    "item_cost",
    "order_total",
    "price_list",
    "purchase",
]
