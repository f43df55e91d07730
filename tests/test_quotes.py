"""Summary: Tests for quote drafting.

Importance: Ensures only confident, complete, priceable requests are auto-quoted.
Alternatives: Review every quote manually.
"""

from __future__ import annotations

from quotepilot.classifier import classify
from quotepilot.models import CatalogProduct, EmailDocument
from quotepilot.quotes import QuotePlanner, best_quantity, parse_sender, render

PAPER = CatalogProduct(
    name="Copier Paper A4",
    code="JK-A4-75",
    brand="JK",
    unit_price=245.0,
    tax_rate=12.0,
    min_quantity=1,
    max_quantity=999,
)
QUOTE_EMAIL = EmailDocument(
    id="q-1",
    subject="",
    body="Please send a quotation for 20 units of JK-A4-75 copier paper",
    sender="Priya Sharma <priya@example.com>",
)


def test_parse_sender_variants() -> None:
    """Summary: Names come from the display name or the address local part."""

    assert parse_sender("Priya Sharma <priya@example.com>") == ("Priya Sharma", "priya@example.com")
    assert parse_sender("accounts@example.com") == ("Accounts", "accounts@example.com")
    assert parse_sender("") == ("Customer", "")


def test_render_leaves_unknown_placeholders() -> None:
    """Summary: Only known placeholders are substituted."""

    assert render("{product} x {unknown}", {"product": "Pen"}) == "Pen x {unknown}"


def test_ready_quote_is_rendered() -> None:
    """Summary: A confident quote request produces a priced draft.

    Importance: Covers the auto-quote happy path.
    Alternatives: Draft quotes only after manual approval.
    """

    planner = QuotePlanner(shop_name="Test Shop")
    draft = planner.plan(QUOTE_EMAIL, classify(QUOTE_EMAIL, [PAPER]))
    assert draft.ready
    assert draft.product == "Copier Paper A4"
    assert draft.quantity == 20
    assert draft.price is not None
    assert draft.price.total == 5488.0
    assert draft.subject == "Your Quotation for Copier Paper A4"
    assert draft.body.startswith("Dear Priya Sharma,")
    assert "Total Amount: ₹5488.00" in draft.body
    assert draft.body.endswith("Best regards,\nTest Shop")
    assert draft.to_dict()["price"]["total"] == 5488.0


def test_non_quote_is_skipped() -> None:
    """Summary: Non-quote emails are never drafted."""

    email = EmailDocument(body="I have a complaint about my last order, please refund")
    draft = QuotePlanner().plan(email, classify(email, [PAPER]))
    assert draft.status == "not_quotation"


def test_tier_outside_auto_quote_tiers_needs_manual_review() -> None:
    """Summary: Medium confidence requires review when only high is automatic."""

    email = EmailDocument(body="Please send me a quote for copier paper")
    result = classify(email, [PAPER])
    assert result.confidence_tier == "medium"
    draft = QuotePlanner(auto_quote_tiers=("high",)).plan(email, result)
    assert draft.status == "manual_required"


def test_missing_product_is_incomplete() -> None:
    """Summary: Quote requests without a catalog product cannot be drafted."""

    email = EmailDocument(body="Need 50 pcs urgently, bulk order")
    draft = QuotePlanner().plan(email, classify(email, [PAPER]))
    assert draft.status == "incomplete_data"


def test_quantity_outside_tier_is_pricing_error() -> None:
    """Summary: Quantities beyond the product tier bounds are flagged."""

    small_tier = CatalogProduct(
        name="Copier Paper A4", code="JK-A4-75", brand="JK", unit_price=245.0, max_quantity=10
    )
    draft = QuotePlanner().plan(QUOTE_EMAIL, classify(QUOTE_EMAIL, [small_tier]))
    assert draft.status == "pricing_error"
    assert draft.quantity == 20


def test_best_quantity_prefers_confidence_then_order() -> None:
    """Summary: The most confident mention wins; ties keep the earliest."""

    body = "Copier Paper A4: 5 boxes" + " " * 80 + "qty 7"
    result = classify(EmailDocument(body=body), [PAPER])
    assert [m.quantity for m in result.extracted_quantities] == [7, 5]
    mention = best_quantity(result.extracted_quantities, "Copier Paper A4")
    assert mention is not None
    assert mention.quantity == 5
    assert best_quantity(result.extracted_quantities, "Other") is None


def test_quantity_priced_from_another_tier() -> None:
    """Summary: A quantity outside the matched entry uses the covering tier.

    Importance: Bulk requests are quoted at the bulk price instead of failing.
    Alternatives: Require the customer to name the tier.
    """

    small = CatalogProduct(
        name="Gel Pen", code="GP-1", unit_price=35.0, tax_rate=18.0, min_quantity=1, max_quantity=99
    )
    bulk = CatalogProduct(
        name="Gel Pen", code="GP-100", unit_price=30.0, tax_rate=18.0, min_quantity=100, max_quantity=999
    )
    email = EmailDocument(body="Please quote 200 pcs of gel pen")
    catalog = [small, bulk]
    result = classify(email, catalog)
    draft = QuotePlanner().plan(email, result, catalog)
    assert draft.status == "ready"
    assert draft.price is not None
    assert draft.price.unit_price == 30.0
    assert draft.price.total == 7080.0
    assert "Price per Unit: ₹30.00" in draft.body

    too_many = EmailDocument(body="Please quote 5000 pcs of gel pen")
    failed = QuotePlanner().plan(too_many, classify(too_many, catalog), catalog)
    assert failed.status == "pricing_error"
    assert failed.message.endswith("priced ranges: 1-99, 100-999")


def test_several_products_are_broken_down() -> None:
    """Summary: Every detected product with a quantity gets a priced line.

    Importance: Customers often ask for more than one item per email.
    Alternatives: Quote only the best-matching product.
    """

    pen = CatalogProduct(
        name="Gel Pen", code="RY-GP", brand="Reynolds", unit_price=35.0, tax_rate=18.0, min_quantity=10
    )
    body = "Copier Paper A4 10 boxes" + " " * 80 + "Gel Pen 100 pcs. Please send a quotation."
    email = EmailDocument(id="m-1", body=body)
    catalog = [PAPER, pen]
    result = classify(email, catalog)
    assert result.confidence_tier == "high"
    draft = QuotePlanner().plan(email, result, catalog)
    assert draft.ready
    assert draft.product == "Copier Paper A4"
    assert draft.quantity == 10
    assert draft.items is not None
    assert [(item.product, item.price.quantity) for item in draft.items.items] == [
        ("Copier Paper A4", 10),
        ("Gel Pen", 100),
    ]
    assert draft.items.total == 6874.0
    assert "Grand Total: ₹6874.00" in draft.body
    assert draft.to_dict()["items"]["total"] == 6874.0
