"""
Unit tests for index construction.
"""

from decimal import Decimal

import pytest

from sales_report.errors import ValidationError
from sales_report.indexes import build_indexes
from sales_report.models import Product, Seller

SELLERS = [
    {"id": "S-001", "first_name": "Anna", "last_name": "Lee"},
    {"id": "S-002", "first_name": "Bo", "last_name": "Chan"},
]
PRODUCTS = [{"sku": "SKU_001", "purchase_price": "12.50"}]


class TestBuildIndexes:
    def test_seller_accumulators_start_at_zero(self):
        sellers, _ = build_indexes(SELLERS, PRODUCTS)
        stats = sellers["S-001"]
        assert stats.name == "Anna Lee"
        assert stats.revenue == Decimal("0")
        assert stats.profit == Decimal("0")
        assert stats.sales_count == 0
        assert stats.products_sold == {}

    def test_seller_order_preserved(self):
        sellers, _ = build_indexes(list(reversed(SELLERS)), PRODUCTS)
        assert list(sellers) == ["S-002", "S-001"]

    def test_product_lookup(self):
        _, products = build_indexes(SELLERS, PRODUCTS)
        assert products["SKU_001"].purchase_price == Decimal("12.50")

    def test_accepts_models(self):
        sellers, products = build_indexes(
            [Seller(id="S-9", first_name="X", last_name="Y")],
            [Product(sku="P", purchase_price=Decimal("1"))],
        )
        assert "S-9" in sellers and "P" in products

    def test_accumulators_are_independent(self):
        first, _ = build_indexes(SELLERS, PRODUCTS)
        first["S-001"].products_sold["SKU_001"] = 3
        second, _ = build_indexes(SELLERS, PRODUCTS)
        assert second["S-001"].products_sold == {}
        assert first["S-002"].products_sold == {}


class TestBuildIndexesErrors:
    def test_empty_sellers(self):
        with pytest.raises(ValidationError, match="Seller list"):
            build_indexes([], PRODUCTS)

    def test_empty_products(self):
        with pytest.raises(ValidationError, match="Product list"):
            build_indexes(SELLERS, [])

    def test_seller_missing_name(self):
        with pytest.raises(ValidationError, match="Malformed seller at position 0"):
            build_indexes([{"id": "S-001"}], PRODUCTS)

    def test_negative_purchase_price(self):
        with pytest.raises(ValidationError, match="Malformed product"):
            build_indexes(SELLERS, [{"sku": "SKU_001", "purchase_price": -1}])

    def test_duplicate_seller(self):
        with pytest.raises(ValidationError, match="Duplicate seller id 'S-001'"):
            build_indexes(SELLERS + SELLERS[:1], PRODUCTS)

    def test_duplicate_sku(self):
        with pytest.raises(ValidationError, match="Duplicate product sku"):
            build_indexes(SELLERS, PRODUCTS * 2)
