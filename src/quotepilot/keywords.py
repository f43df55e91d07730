"""Summary: Keyword tables and scoring constants for quote classification.

Importance: Keeps every tunable weight and threshold in one place.
Alternatives: Load keyword tables from the configuration file.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class KeywordTable:
    """Summary: A named group of phrases sharing one per-hit weight.

    Importance: Lets tests swap a single weight and observe its exact effect.
    Alternatives: Store a flat phrase-to-weight dictionary.
    """

    name: str
    weight: int
    phrases: tuple[str, ...]


HIGH_PRIORITY = KeywordTable(
    name="high",
    weight=3,
    phrases=(
        "quote",
        "quotation",
        "price quote",
        "pricing",
        "estimate",
        "cost estimate",
        "how much",
        "what is the price",
        "price list",
        "rate card",
    ),
)

MEDIUM_PRIORITY = KeywordTable(
    name="medium",
    weight=2,
    phrases=(
        "price",
        "cost",
        "rates",
        "charges",
        "amount",
        "invoice",
        "purchase",
        "buy",
        "order",
        "procurement",
        "tender",
    ),
)

LOW_PRIORITY = KeywordTable(
    name="low",
    weight=1,
    phrases=(
        "inquiry",
        "enquiry",
        "interested",
        "need",
        "require",
        "supply",
        "provide",
        "available",
        "stock",
        "delivery",
    ),
)

NEGATIVE = KeywordTable(
    name="negative",
    weight=-2,
    phrases=(
        "complaint",
        "issue",
        "problem",
        "return",
        "refund",
        "cancel",
        "support",
        "help",
        "question",
        "information only",
    ),
)

INTENT_TABLES: tuple[KeywordTable, ...] = (HIGH_PRIORITY, MEDIUM_PRIORITY, LOW_PRIORITY, NEGATIVE)

# Product matcher
CODE_MATCH_SCORE = 50
TOKEN_SCORE_PER_CHAR = 2
MIN_TOKEN_LENGTH = 3
BRAND_MATCH_SCORE = 15
FUZZY_MATCH_SCORE = 25
FUZZY_SIMILARITY_THRESHOLD = 0.7
FUZZY_MATCH_TERM = "fuzzy_match"
MULTI_SIGNAL_BOOST = 1.5
MIN_MATCH_SCORE = 5
MAX_PRODUCT_MATCHES = 10

# Quantity extractor
MAX_QUANTITY = 1_000_000
GENERIC_CONFIDENCE = 0.5
MISSING_PRODUCT_CONFIDENCE = 0.3
PROXIMITY_BASE_CONFIDENCE = 0.5
PROXIMITY_WINDOW = 100
MAX_QUANTITY_CONFIDENCE = 0.9

# Aggregator
PRODUCT_SCORE_DIVISOR = 10
QUANTITY_BONUS = 10
HIGH_TIER_SCORE = 15
MEDIUM_TIER_SCORE = 8
QUOTE_REQUEST_SCORE = 5
URGENT_KEYWORDS: tuple[str, ...] = ("urgent", "asap")
BULK_KEYWORDS: tuple[str, ...] = ("bulk", "wholesale")
