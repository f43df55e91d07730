"""Summary: Price calculation helpers for quotes.

Importance: Produces the per-unit, tax, and total amounts shown in quote emails.
Alternatives: Delegate pricing to an ERP or spreadsheet formula.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

from quotepilot.models import CatalogProduct

# Upper bound reported for tiers without a maximum quantity.
OPEN_TIER_MAX = 999_999


@dataclass(frozen=True)
class PriceBreakdown:
    """Summary: Base, tax, and total amounts for a quoted quantity."""

    unit_price: float
    quantity: int
    base: float
    tax: float
    total: float


@dataclass(frozen=True)
class LineItem:
    """Summary: One priced product line of a multi-product quote."""

    product: str
    code: str
    tax_rate: float
    price: PriceBreakdown


@dataclass(frozen=True)
class MultiProductPrice:
    """Summary: Priced lines, their grand total, and products no tier covers."""

    items: tuple[LineItem, ...]
    total: float
    unpriced: tuple[str, ...] = ()


def calculate_price_with_tax(unit_price: float, quantity: int, tax_rate: float) -> PriceBreakdown:
    """Summary: Compute base, tax, and total amounts rounded to cents.

    Importance: Keeps quote amounts consistent with invoice rounding.
    Alternatives: Round only the final total.
    """

    base = unit_price * quantity
    tax = base * tax_rate / 100
    return PriceBreakdown(
        unit_price=unit_price,
        quantity=quantity,
        base=_round_cents(base),
        tax=_round_cents(tax),
        total=_round_cents(base + tax),
    )


def in_tier(product: CatalogProduct, quantity: int) -> bool:
    """Summary: Whether a quantity falls within a product tier's bounds."""

    if product.min_quantity is not None and quantity < product.min_quantity:
        return False
    if product.max_quantity is not None and quantity > product.max_quantity:
        return False
    return True


def find_price_tier(
    product: CatalogProduct, quantity: int, catalog: Sequence[CatalogProduct] = ()
) -> CatalogProduct | None:
    """Summary: Find the catalog entry with the product's name that covers a quantity.

    Importance: A product may be listed once per quantity tier, each with its own price.
    Alternatives: Store tier prices as a list on a single product record.
    """

    tiers = [candidate for candidate in catalog if candidate.name == product.name]
    if product not in tiers:
        tiers.insert(0, product)
    for tier in tiers:
        if in_tier(tier, quantity):
            return tier
    return None


def quantity_ranges(catalog: Sequence[CatalogProduct], name: str) -> list[tuple[int, int]]:
    """Summary: List the quantity ranges a product is priced for, lowest first."""

    ranges = [
        (product.min_quantity or 1, product.max_quantity or OPEN_TIER_MAX)
        for product in catalog
        if product.name == name
    ]
    return sorted(ranges)


def price_for(
    product: CatalogProduct, quantity: int, catalog: Sequence[CatalogProduct] = ()
) -> PriceBreakdown | None:
    """Summary: Price a product for a quantity using the tier that covers it.

    Importance: Products are priced per quantity tier; requests no tier covers need review.
    Alternatives: Fall back to the nearest tier price.
    """

    if quantity <= 0:
        return None
    tier = find_price_tier(product, quantity, catalog)
    if tier is None:
        return None
    return calculate_price_with_tax(tier.unit_price, quantity, tier.tax_rate)


def calculate_multi_product_price(
    requests: Sequence[tuple[CatalogProduct, int]], catalog: Sequence[CatalogProduct] = ()
) -> MultiProductPrice:
    """Summary: Price several products at once with a grand total.

    Importance: One email often asks for more than one product.
    Alternatives: Draft a separate quote per product.
    """

    items: list[LineItem] = []
    unpriced: list[str] = []
    for product, quantity in requests:
        tier = find_price_tier(product, quantity, catalog) if quantity > 0 else None
        if tier is None:
            unpriced.append(product.name)
            continue
        items.append(
            LineItem(
                product=product.name,
                code=tier.code,
                tax_rate=tier.tax_rate,
                price=calculate_price_with_tax(tier.unit_price, quantity, tier.tax_rate),
            )
        )
    total = _round_cents(sum(item.price.total for item in items))
    return MultiProductPrice(items=tuple(items), total=total, unpriced=tuple(unpriced))


def format_amount(amount: float, symbol: str = "₹") -> str:
    """Summary: Render an amount with a currency symbol and two decimals."""

    return f"{symbol}{amount:.2f}"


def _round_cents(value: float) -> float:
    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))
