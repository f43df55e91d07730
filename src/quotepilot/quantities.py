"""Summary: Quantity extraction and product association.

Importance: Captures how many units a customer wants for quote drafting.
Alternatives: Ask customers to fill a structured order form instead.
"""

from __future__ import annotations

import re
from typing import Sequence

from quotepilot.keywords import (
    GENERIC_CONFIDENCE,
    MAX_QUANTITY,
    MAX_QUANTITY_CONFIDENCE,
    MISSING_PRODUCT_CONFIDENCE,
    PROXIMITY_BASE_CONFIDENCE,
    PROXIMITY_WINDOW,
)
from quotepilot.models import GENERIC_PRODUCT, QuantityMention

# Longer digit runs are at or above MAX_QUANTITY and may exceed the int conversion limit.
MAX_QUANTITY_DIGITS = len(str(MAX_QUANTITY - 1))

QUANTITY_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"(\d+)\s*(?:units?|pieces?|pcs?\.?|nos?\.?|qty|quantity)", re.IGNORECASE),
    re.compile(r"(?:quantity|qty)\s*[:=]?\s*(\d+)", re.IGNORECASE),
    # The captured description is not used to pick a product.
    re.compile(r"(\d+)\s*(?:of|x)\s+([a-zA-Z0-9\s\-]+)", re.IGNORECASE),
    re.compile(r"(?:need|require|want|order)\s+(\d+)\s*(?:units?|pieces?|pcs?)?", re.IGNORECASE),
    re.compile(r"(\d+)\s*(?:sets?|boxes?|cartons?|packets?)", re.IGNORECASE),
)


def extract_quantities(text: str, product_names: Sequence[str]) -> list[QuantityMention]:
    """Summary: Find quantities in text and attach them to detected products.

    Importance: Every accepted quantity is broadcast to every detected product,
    each with its own proximity confidence; duplicates across patterns are kept.
    Alternatives: Associate each quantity only with its nearest product.
    """

    mentions: list[QuantityMention] = []
    for pattern in QUANTITY_PATTERNS:
        for match in pattern.finditer(text):
            digits = match.group(1).lstrip("0")
            if len(digits) > MAX_QUANTITY_DIGITS:
                continue
            quantity = int(digits or "0")
            if not 0 < quantity < MAX_QUANTITY:
                continue
            if not product_names:
                mentions.append(
                    QuantityMention(
                        product_ref=GENERIC_PRODUCT,
                        quantity=quantity,
                        confidence=GENERIC_CONFIDENCE,
                    )
                )
                continue
            for name in product_names:
                mentions.append(
                    QuantityMention(
                        product_ref=name,
                        quantity=quantity,
                        confidence=proximity_confidence(text, match.start(), name),
                    )
                )
    return mentions


def proximity_confidence(text: str, quantity_index: int, product_name: str) -> float:
    """Summary: Confidence that a quantity belongs to a product, by distance.

    Importance: Rewards quantities written near the product name, capped below certainty.
    Alternatives: Use sentence boundaries instead of character distance.
    """

    product_index = text.lower().find(product_name.lower())
    if product_index == -1:
        return MISSING_PRODUCT_CONFIDENCE
    distance = abs(quantity_index - product_index)
    proximity = max(0.0, 1 - distance / PROXIMITY_WINDOW)
    return min(MAX_QUANTITY_CONFIDENCE, PROXIMITY_BASE_CONFIDENCE + proximity)
