"""Summary: Quote drafting from classification results.

Importance: Turns a confident classification into a ready-to-send quote email.
Alternatives: Always hand quote drafting to a human operator.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from email.utils import parseaddr
from typing import Sequence

from quotepilot.models import CatalogProduct, ClassificationResult, EmailDocument, QuantityMention
from quotepilot.pricing import (
    MultiProductPrice,
    PriceBreakdown,
    calculate_multi_product_price,
    format_amount,
    price_for,
    quantity_ranges,
)

STATUS_NOT_QUOTATION = "not_quotation"
STATUS_MANUAL_REQUIRED = "manual_required"
STATUS_INCOMPLETE_DATA = "incomplete_data"
STATUS_PRICING_ERROR = "pricing_error"
STATUS_READY = "ready"


@dataclass(frozen=True)
class QuoteTemplate:
    """Summary: Text template for quote emails with brace placeholders.

    Importance: Lets shops customize wording without code changes.
    Alternatives: Use a full templating engine such as Jinja2.
    """

    subject: str
    greeting: str
    body: str
    signoff: str


DEFAULT_TEMPLATE = QuoteTemplate(
    subject="Your Quotation for {product}",
    greeting="Dear {customer},",
    body=(
        "Thank you for your inquiry. Please find our quotation below:\n\n"
        "Product: {product}\n"
        "Quantity: {quantity}\n"
        "Price per Unit: {price_per_unit}\n"
        "Tax: {tax_amount}\n"
        "Total Amount: {total_amount}\n\n"
        "This quotation is valid for {validity_days} days from the date of this email."
    ),
    signoff="Best regards,\n{shop_name}",
)


@dataclass(frozen=True)
class QuoteDraft:
    """Summary: Outcome of planning a quote for one email.

    Importance: Records why an email was or was not auto-quoted.
    Alternatives: Raise exceptions for every non-ready outcome.
    """

    status: str
    message: str
    email_id: str | None = None
    customer_name: str = ""
    customer_email: str = ""
    product: str | None = None
    quantity: int | None = None
    price: PriceBreakdown | None = None
    items: MultiProductPrice | None = None
    subject: str = ""
    body: str = ""
    reasoning: str = ""
    categories: tuple[str, ...] = field(default_factory=tuple)

    @property
    def ready(self) -> bool:
        return self.status == STATUS_READY

    def to_dict(self) -> dict[str, object]:
        return {
            "status": self.status,
            "message": self.message,
            "email_id": self.email_id,
            "customer_name": self.customer_name,
            "customer_email": self.customer_email,
            "product": self.product,
            "quantity": self.quantity,
            "price": asdict(self.price) if self.price is not None else None,
            "items": asdict(self.items) if self.items is not None else None,
            "subject": self.subject,
            "body": self.body,
            "reasoning": self.reasoning,
            "categories": list(self.categories),
        }


def parse_sender(sender: str) -> tuple[str, str]:
    """Summary: Extract a customer name and address from a From header.

    Importance: Personalizes the greeting without a contacts database.
    Alternatives: Look customers up in a CRM by address.
    """

    display_name, address = parseaddr(sender or "")
    if "@" not in address:
        address = ""
    if display_name.strip():
        return display_name.strip(), address
    local_part = address.split("@", 1)[0] if address else ""
    if local_part:
        return local_part[:1].upper() + local_part[1:], address
    return "Customer", address


def render(template_text: str, values: dict[str, str]) -> str:
    """Summary: Substitute brace placeholders, leaving unknown braces intact."""

    rendered = template_text
    for key, value in values.items():
        rendered = rendered.replace("{" + key + "}", value)
    return rendered


@dataclass(frozen=True)
class QuotePlanner:
    """Summary: Decides whether a classified email can be quoted automatically.

    Importance: Only confident, complete, priceable requests are drafted.
    Alternatives: Queue every quote request for manual review.
    """

    template: QuoteTemplate = DEFAULT_TEMPLATE
    auto_quote_tiers: tuple[str, ...] = ("high", "medium")
    shop_name: str = "Your Stationery Shop"
    currency_symbol: str = "₹"
    validity_days: int = 14

    def plan(
        self,
        email: EmailDocument,
        result: ClassificationResult,
        catalog: Sequence[CatalogProduct] = (),
    ) -> QuoteDraft:
        """Summary: Produce a quote draft or the reason no draft was made.

        Importance: Mirrors the auto-quote decision steps in order. The catalog
        supplies the other quantity tiers of the detected products.
        Alternatives: Draft a quote for every detected product.
        """

        customer_name, customer_email = parse_sender(email.sender)
        common = {
            "email_id": email.id,
            "customer_name": customer_name,
            "customer_email": customer_email,
            "reasoning": result.reasoning,
            "categories": result.categories,
        }
        if not result.is_quote_request:
            return QuoteDraft(
                status=STATUS_NOT_QUOTATION,
                message="Email is not a quotation request",
                **common,
            )
        if result.confidence_tier not in self.auto_quote_tiers:
            return QuoteDraft(
                status=STATUS_MANUAL_REQUIRED,
                message="Email requires manual processing due to low confidence",
                **common,
            )
        if not result.detected_products:
            return QuoteDraft(
                status=STATUS_INCOMPLETE_DATA,
                message="Could not extract complete product and quantity information",
                **common,
            )
        product = result.detected_products[0].product
        mention = best_quantity(result.extracted_quantities, product.name)
        if mention is None:
            return QuoteDraft(
                status=STATUS_INCOMPLETE_DATA,
                message="Could not extract complete product and quantity information",
                product=product.name,
                **common,
            )
        price = price_for(product, mention.quantity, catalog)
        if price is None:
            message = f"Could not calculate price for {product.name} with quantity {mention.quantity}"
            ranges = quantity_ranges(catalog, product.name)
            if ranges:
                listed = ", ".join(f"{low}-{high}" for low, high in ranges)
                message = f"{message}; priced ranges: {listed}"
            return QuoteDraft(
                status=STATUS_PRICING_ERROR,
                message=message,
                product=product.name,
                quantity=mention.quantity,
                **common,
            )
        values = {
            "product": product.name,
            "customer": customer_name,
            "quantity": str(mention.quantity),
            "price_per_unit": format_amount(price.unit_price, self.currency_symbol),
            "tax_amount": format_amount(price.tax, self.currency_symbol),
            "total_amount": format_amount(price.total, self.currency_symbol),
            "validity_days": str(self.validity_days),
            "shop_name": self.shop_name,
        }
        items = calculate_multi_product_price(requested_items(result), catalog)
        parts = [render(self.template.greeting, values), render(self.template.body, values)]
        if len(items.items) > 1:
            parts.append(self._breakdown(items))
        parts.append(render(self.template.signoff, values))
        return QuoteDraft(
            status=STATUS_READY,
            message=f"Quote ready for {mention.quantity} units of {product.name}",
            product=product.name,
            quantity=mention.quantity,
            price=price,
            items=items,
            subject=render(self.template.subject, values),
            body="\n\n".join(parts),
            **common,
        )

    def _breakdown(self, items: MultiProductPrice) -> str:
        lines = ["All requested items:"]
        for item in items.items:
            lines.append(
                f"- {item.product} x {item.price.quantity}: "
                f"{format_amount(item.price.total, self.currency_symbol)}"
            )
        lines.append(f"Grand Total: {format_amount(items.total, self.currency_symbol)}")
        return "\n".join(lines)


def best_quantity(
    mentions: Sequence[QuantityMention], product_name: str
) -> QuantityMention | None:
    """Summary: Pick the most confident quantity for a product, earliest on ties."""

    candidates = [mention for mention in mentions if mention.product_ref == product_name]
    if not candidates:
        return None
    return max(candidates, key=lambda mention: mention.confidence)


def requested_items(result: ClassificationResult) -> list[tuple[CatalogProduct, int]]:
    """Summary: Pair each distinct detected product with its best quantity.

    Importance: Feeds the multi-product breakdown in ranked product order.
    Alternatives: Quote only the top-ranked product.
    """

    items: list[tuple[CatalogProduct, int]] = []
    seen: set[str] = set()
    for match in result.detected_products:
        name = match.product.name
        if name in seen:
            continue
        seen.add(name)
        mention = best_quantity(result.extracted_quantities, name)
        if mention is not None:
            items.append((match.product, mention.quantity))
    return items
