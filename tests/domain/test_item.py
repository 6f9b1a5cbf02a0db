"""Unit tests for the Item aggregate."""

import pytest

from orderledger.domain.exceptions import ValidationError
from orderledger.domain.model.item import Item
from orderledger.domain.model.value_objects import Money


class TestItemCreation:

    def test_happy_path(self):
        item = Item.create(name="Apple", price=100, stock=2)
        assert item.name == "Apple"
        assert item.price == Money(100)
        assert item.stock == 2
        assert item.version == 0
        assert item.id

    def test_ids_are_unique(self):
        assert Item.create("A", 1, 1).id != Item.create("A", 1, 1).id

    def test_name_is_stripped(self):
        assert Item.create("  Apple ", 100, 1).name == "Apple"

    def test_free_item_with_no_stock_accepted(self):
        item = Item.create("Sample", 0, 0)
        assert item.price.amount == 0
        assert item.stock == 0

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError, match="name is required"):
            Item.create("   ", 100, 1)

    def test_name_at_limit_accepted(self):
        assert len(Item.create("x" * 200, 100, 1).name) == 200

    def test_name_length_counted_after_stripping(self):
        assert Item.create("  " + "x" * 200 + "  ", 100, 1).name == "x" * 200

    def test_name_over_limit_rejected(self):
        with pytest.raises(ValidationError, match="at most 200"):
            Item.create("x" * 201, 100, 1)

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Item.create("Apple", -1, 1)

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError, match="Stock cannot be negative"):
            Item.create("Apple", 100, -1)

    def test_non_integer_stock_rejected(self):
        with pytest.raises(ValidationError, match="Stock must be an integer"):
            Item.create("Apple", 100, 1.5)


class TestItemPrice:

    def test_update_price_leaves_stock_and_version(self):
        item = Item.create("Apple", 100, 5)
        item.update_price(Money(150))
        assert item.price == Money(150)
        assert item.stock == 5
        assert item.version == 0
