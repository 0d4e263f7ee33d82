"""
Tests for the general store.
"""

import pytest

from oregon_trail.data_models import SpareParts, Supplies
from oregon_trail.store import (
    InsufficientFundsError,
    PRICES,
    StoreOrder,
    item_cost,
    order_total,
    price_list,
    purchase,
)


@pytest.fixture
def supplies():
    return Supplies(
        food=200,
        ammunition=2,
        clothing=3,
        oxen=4,
        spare_parts=SpareParts(wheels=1, axles=1, tongues=1),
        cash=400.0,
    )


class TestPricing:
    """Prices and totals."""

    def test_prices(self):
        """Per-unit prices."""
        assert PRICES["food"] == 0.20
        assert PRICES["ammunition"] == 2.00
        assert PRICES["clothing"] == 10.00
        assert PRICES["oxen"] == 40.00
        assert PRICES["wheels"] == PRICES["axles"] == PRICES["tongues"] == 10.00

    def test_order_total(self):
        """An order is priced as a whole."""
        assert order_total(StoreOrder(food=100, oxen=2)) == 100.0
        assert order_total(StoreOrder(ammunition=3, clothing=1, wheels=1)) == 26.0

    def test_fractional_total(self):
        """Food pricing can leave cents."""
        assert order_total(StoreOrder(food=7)) == 1.4
        assert item_cost("food", 7) == 1.4

    def test_empty_order(self):
        """Nothing costs nothing."""
        assert StoreOrder().is_empty
        assert order_total(StoreOrder()) == 0

    def test_negative_quantities_ignored(self):
        """Negative quantities count as zero."""
        order = StoreOrder(food=-50, oxen=1)
        assert order.food == 0
        assert order_total(order) == 40.0

    def test_price_list(self):
        """One row per item."""
        rows = price_list()
        assert len(rows) == len(PRICES)
        assert {"item": "oxen", "price": 40.0} in rows


class TestStoreOrder:
    """Building orders from item names."""

    def test_from_items_with_aliases(self):
        """Singular names and 'ammo' are accepted."""
        order = StoreOrder.from_items({"ox": 2, "ammo": 5, "Wheel": 1, "food": 100})
        assert order == StoreOrder(food=100, ammunition=5, oxen=2, wheels=1)

    def test_from_items_unknown(self):
        """The store sells only its own goods."""
        with pytest.raises(ValueError):
            StoreOrder.from_items({"whiskey": 1})

    def test_to_dict(self):
        order = StoreOrder(food=10)
        assert order.to_dict()["food"] == 10
        assert set(order.to_dict()) == set(PRICES)


class TestPurchase:
    """Buying goods."""

    def test_purchase(self, supplies):
        """Goods added, cash reduced."""
        new = purchase(supplies, StoreOrder(food=100, oxen=2, tongues=1))
        assert new.food == 300
        assert new.oxen == 6
        assert new.spare_parts == SpareParts(wheels=1, axles=1, tongues=2)
        assert new.cash == 290.0

    def test_exact_cash(self, supplies):
        """Spending every last dollar is allowed."""
        new = purchase(supplies, StoreOrder(oxen=10))
        assert new.cash == 0
        assert new.oxen == 14

    def test_insufficient_funds(self, supplies):
        """An order costing more than the cash is refused whole."""
        with pytest.raises(InsufficientFundsError) as exc_info:
            purchase(supplies, StoreOrder(oxen=10, food=1))
        assert exc_info.value.total == 400.2
        assert exc_info.value.cash == 400.0
        assert "You don't have enough money for this purchase!" in str(exc_info.value)

    def test_refused_order_changes_nothing(self, supplies):
        """Supplies are values; a refusal leaves them untouched."""
        with pytest.raises(InsufficientFundsError):
            purchase(supplies, StoreOrder(oxen=11))
        assert supplies.cash == 400.0
        assert supplies.oxen == 4
