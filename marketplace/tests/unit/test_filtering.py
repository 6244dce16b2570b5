from decimal import Decimal
from unittest.mock import Mock

import pytest

from marketplace.catalog.domain.services.filtering import (
    available_keywords,
    filter_by_keyword,
    filter_by_price_range,
    parse_keywords,
    related_products,
    search_products,
)
from marketplace.models import Product


def make_product(pk, title, price, keywords=None, description=""):
    product = Mock(spec=Product)
    product.pk = pk
    product.title = title
    product.description = description
    product.price = Decimal(price)
    product.keywords = keywords or []
    return product


@pytest.mark.unit
class TestProductFiltering:
    def setup_method(self):
        self.air_filter = make_product(1, "Performance Air Filter", "49.99", ["filters", "performance"])
        self.brake_pads = make_product(2, "Ceramic Brake Pads", "89.00", ["brakes"], "Low dust pads")
        self.oil_filter = make_product(3, "Oil Filter", "12.50", ["filters", "engine"])
        self.products = [self.air_filter, self.brake_pads, self.oil_filter]

    def test_search_matches_title_case_insensitively(self):
        assert search_products(self.products, "FILTER") == [self.air_filter, self.oil_filter]

    def test_search_matches_description_and_keywords(self):
        assert search_products(self.products, "dust") == [self.brake_pads]
        assert search_products(self.products, "engine") == [self.oil_filter]

    def test_blank_search_returns_everything_in_order(self):
        assert search_products(self.products, "   ") == self.products
        assert search_products(self.products, None) == self.products

    def test_search_without_match_is_empty(self):
        assert search_products(self.products, "turbo") == []

    def test_filter_by_keyword_is_exact_and_ignores_case(self):
        assert filter_by_keyword(self.products, "Filters") == [self.air_filter, self.oil_filter]
        assert filter_by_keyword(self.products, "filt") == []

    def test_price_range_is_inclusive(self):
        result = filter_by_price_range(self.products, Decimal("12.50"), Decimal("49.99"))
        assert result == [self.air_filter, self.oil_filter]

    def test_price_range_open_bounds(self):
        assert filter_by_price_range(self.products, min_price=Decimal("50")) == [self.brake_pads]
        assert filter_by_price_range(self.products, max_price=Decimal("20")) == [self.oil_filter]
        assert filter_by_price_range(self.products) == self.products

    def test_available_keywords_sorted_unique(self):
        assert available_keywords(self.products) == ["brakes", "engine", "filters", "performance"]

    def test_related_products_share_a_keyword_and_exclude_self(self):
        assert related_products(self.air_filter, self.products) == [self.oil_filter]
        assert related_products(self.brake_pads, self.products) == []

    def test_related_products_respects_limit(self):
        extra = [make_product(10 + i, f"Filter {i}", "5.00", ["filters"]) for i in range(5)]
        assert len(related_products(self.air_filter, self.products + extra, limit=3)) == 3


@pytest.mark.unit
class TestParseKeywords:
    def test_comma_separated_string(self):
        assert parse_keywords(" brakes, , pads ,ceramic") == ["brakes", "pads", "ceramic"]

    def test_list_is_trimmed(self):
        assert parse_keywords(["  air ", "", "filter"]) == ["air", "filter"]

    def test_none_is_empty(self):
        assert parse_keywords(None) == []
