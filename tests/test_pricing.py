"""Summary: Tests for quote pricing helpers.

Importance: Ensures quoted amounts and tier bounds are correct.
Alternatives: Verify prices manually in drafted emails.
"""

from __future__ import annotations

from quotepilot.models import CatalogProduct
from quotepilot.pricing import (
    calculate_multi_product_price,
    calculate_price_with_tax,
    find_price_tier,
    format_amount,
    price_for,
    quantity_ranges,
)

PEN_SMALL = CatalogProduct(
    name="Gel Pen", code="GP-1", unit_price=35.0, tax_rate=18.0, min_quantity=1, max_quantity=99
)
PEN_BULK = CatalogProduct(
    name="Gel Pen", code="GP-100", unit_price=30.0, tax_rate=18.0, min_quantity=100, max_quantity=999
)


def test_price_with_tax() -> None:
    """Summary: Base, tax, and total are computed from rate percentages."""

    price = calculate_price_with_tax(245.0, 10, 12.0)
    assert price.base == 2450.0
    assert price.tax == 294.0
    assert price.total == 2744.0


def test_amounts_round_half_up_to_cents() -> None:
    """Summary: Half cents round upward."""

    price = calculate_price_with_tax(0.005, 1, 0)
    assert price.base == 0.01


def test_price_for_respects_quantity_tier() -> None:
    """Summary: Quantities outside the tier bounds are not priced.

    Importance: Out-of-tier requests need a manual quote.
    Alternatives: Clamp to the nearest tier.
    """

    product = CatalogProduct(
        name="Gel Pen", code="GP-1", unit_price=35.0, tax_rate=18.0, min_quantity=10, max_quantity=100
    )
    assert price_for(product, 5) is None
    assert price_for(product, 101) is None
    price = price_for(product, 10)
    assert price is not None
    assert price.total == 413.0


def test_format_amount() -> None:
    """Summary: Amounts render with a symbol and two decimals."""

    assert format_amount(12.5, "$") == "$12.50"
    assert format_amount(5488) == "₹5488.00"


def test_price_for_uses_the_tier_covering_the_quantity() -> None:
    """Summary: Same-name catalog entries act as quantity tiers.

    Importance: Bulk quantities get the bulk tier price.
    Alternatives: Price every quantity at the first tier found.
    """

    catalog = [PEN_SMALL, PEN_BULK]
    assert find_price_tier(PEN_SMALL, 200, catalog) == PEN_BULK
    assert find_price_tier(PEN_SMALL, 50, catalog) == PEN_SMALL
    assert find_price_tier(PEN_SMALL, 5000, catalog) is None
    price = price_for(PEN_SMALL, 200, catalog)
    assert price is not None
    assert price.unit_price == 30.0
    assert price.total == 7080.0
    assert price_for(PEN_SMALL, 200) is None


def test_quantity_ranges_are_sorted() -> None:
    """Summary: Ranges list every tier of a product, lowest first."""

    open_tier = CatalogProduct(name="Gel Pen", code="GP-X", unit_price=28.0, min_quantity=1000)
    catalog = [PEN_BULK, open_tier, PEN_SMALL]
    assert quantity_ranges(catalog, "Gel Pen") == [(1, 99), (100, 999), (1000, 999999)]
    assert quantity_ranges(catalog, "Stapler") == []


def test_multi_product_price_totals_priced_lines() -> None:
    """Summary: Each product gets its own line and the grand total sums them.

    Importance: Lets one quote cover every product in the email.
    Alternatives: Quote products one email at a time.
    """

    paper = CatalogProduct(name="Copier Paper A4", code="JK-A4-75", unit_price=245.0, tax_rate=12.0)
    result = calculate_multi_product_price(
        [(paper, 10), (PEN_SMALL, 100), (PEN_SMALL, 5000)], [paper, PEN_SMALL, PEN_BULK]
    )
    assert [(item.product, item.code, item.price.total) for item in result.items] == [
        ("Copier Paper A4", "JK-A4-75", 2744.0),
        ("Gel Pen", "GP-100", 3540.0),
    ]
    assert result.total == 6284.0
    assert result.unpriced == ("Gel Pen",)
