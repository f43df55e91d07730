"""Summary: Quote request classification for inbound emails.

Importance: Combines intent, product, and quantity signals into one decision.
Alternatives: Use an LLM-based classifier for higher recall.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from quotepilot.intent import score_quote_intent
from quotepilot.keywords import (
    BULK_KEYWORDS,
    HIGH_TIER_SCORE,
    INTENT_TABLES,
    MEDIUM_TIER_SCORE,
    PRODUCT_SCORE_DIVISOR,
    QUANTITY_BONUS,
    QUOTE_REQUEST_SCORE,
    URGENT_KEYWORDS,
    KeywordTable,
)
from quotepilot.matcher import match_products
from quotepilot.models import (
    TIER_HIGH,
    TIER_LOW,
    TIER_MEDIUM,
    CatalogProduct,
    ClassificationResult,
    EmailDocument,
    IntentScore,
    ProductMatch,
    QuantityMention,
)
from quotepilot.quantities import extract_quantities
from quotepilot.text import email_text


@dataclass(frozen=True)
class QuoteClassifier:
    """Summary: Deterministic keyword and catalog based quote classifier.

    Importance: Offers fast, explainable classification without AI providers.
    Alternatives: Use a supervised ML classifier trained on past quotes.
    """

    tables: tuple[KeywordTable, ...] = INTENT_TABLES

    def classify(
        self, email: EmailDocument, catalog: Sequence[CatalogProduct]
    ) -> ClassificationResult:
        """Summary: Classify one email against a catalog snapshot.

        Importance: Pure function of its inputs; the catalog is never mutated.
        Alternatives: Cache matcher state per catalog between calls.
        """

        text = email_text(email)
        intent = score_quote_intent(text, self.tables)
        matches = match_products(text, tuple(catalog))
        quantities = extract_quantities(text, [match.product.name for match in matches])
        return aggregate(intent, matches, quantities, text, email_id=email.id)


def classify(email: EmailDocument, catalog: Sequence[CatalogProduct]) -> ClassificationResult:
    """Summary: Classify an email with the default keyword tables."""

    return QuoteClassifier().classify(email, catalog)


def aggregate(
    intent: IntentScore,
    matches: Sequence[ProductMatch],
    quantities: Sequence[QuantityMention],
    text: str,
    email_id: str | None = None,
) -> ClassificationResult:
    """Summary: Combine stage outputs into a tiered classification.

    Importance: The quote decision uses its own threshold, so a medium tier can
    pair with a non-quote decision when products match but the score is low.
    Alternatives: Derive the quote decision from the tier.
    """

    overall = float(intent.score)
    if matches:
        overall += matches[0].match_score / PRODUCT_SCORE_DIVISOR
    if quantities:
        overall += QUANTITY_BONUS

    if overall >= HIGH_TIER_SCORE and matches:
        tier = TIER_HIGH
    elif overall >= MEDIUM_TIER_SCORE or matches:
        tier = TIER_MEDIUM
    else:
        tier = TIER_LOW

    is_quote_request = overall >= QUOTE_REQUEST_SCORE
    return ClassificationResult(
        is_quote_request=is_quote_request,
        confidence_tier=tier,
        score=overall,
        detected_products=tuple(matches),
        extracted_quantities=tuple(quantities),
        reasoning=build_reasoning(intent, len(matches), len(quantities), overall),
        categories=tuple(categorize(text, is_quote_request, len(matches))),
        email_id=email_id,
    )


def build_reasoning(
    intent: IntentScore, product_count: int, quantity_count: int, overall: float
) -> str:
    """Summary: Summarize which signals fired as a pipe-separated string."""

    parts: list[str] = []
    if intent.matched_keywords:
        parts.append(f"Quote keywords: {', '.join(intent.matched_keywords)}")
    if product_count:
        parts.append(f"{product_count} product(s) detected")
    if quantity_count:
        parts.append(f"{quantity_count} quantity mention(s)")
    parts.append(f"Overall score: {round_half_up(overall)}")
    return " | ".join(parts)


def categorize(text: str, is_quote_request: bool, product_count: int) -> list[str]:
    """Summary: Assign coarse category tags to a classified email.

    Importance: Lets inbox views filter urgent and bulk requests.
    Alternatives: Use user-defined categories with keyword rules.
    """

    categories: list[str] = []
    if is_quote_request:
        categories.append("quote_request")
        categories.append("specific_product" if product_count else "general_inquiry")
    else:
        categories.append("general_email")
    if any(keyword in text for keyword in URGENT_KEYWORDS):
        categories.append("urgent")
    if any(keyword in text for keyword in BULK_KEYWORDS):
        categories.append("bulk_order")
    return categories


def round_half_up(value: float) -> int:
    # round() rounds halves to even; scores are reported with halves rounded up.
    return math.floor(value + 0.5)
