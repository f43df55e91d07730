"""Summary: Catalog product matching against email text.

Importance: Ranks the products a customer most likely refers to.
Alternatives: Use rapidfuzz token ratios or an embedding index over the catalog.
"""

from __future__ import annotations

import re
from typing import Sequence

from quotepilot.keywords import (
    BRAND_MATCH_SCORE,
    CODE_MATCH_SCORE,
    FUZZY_MATCH_SCORE,
    FUZZY_MATCH_TERM,
    FUZZY_SIMILARITY_THRESHOLD,
    MAX_PRODUCT_MATCHES,
    MIN_MATCH_SCORE,
    MIN_TOKEN_LENGTH,
    MULTI_SIGNAL_BOOST,
    TOKEN_SCORE_PER_CHAR,
)
from quotepilot.models import CatalogProduct, ProductMatch

_NAME_SPLIT = re.compile(r"[\s\-_,]")


def match_products(
    text: str,
    catalog: Sequence[CatalogProduct],
    limit: int = MAX_PRODUCT_MATCHES,
) -> list[ProductMatch]:
    """Summary: Score every catalog product and return the best matches.

    Importance: Products at or below the minimum score are dropped; ties keep
    catalog order so results are reproducible.
    Alternatives: Build an inverted index of name tokens for large catalogs.
    """

    matches: list[ProductMatch] = []
    for product in catalog:
        match = score_product(text, product)
        if match is not None:
            matches.append(match)
    matches.sort(key=lambda match: match.match_score, reverse=True)
    return matches[:limit]


def score_product(text: str, product: CatalogProduct) -> ProductMatch | None:
    """Summary: Compute the match score of one product against normalized text.

    Importance: Combines code, name token, brand, and fuzzy evidence.
    Alternatives: Keep only the strongest single signal per product.
    """

    score = 0.0
    terms: list[str] = []

    code = product.code.lower()
    if code and code in text:
        score += CODE_MATCH_SCORE
        terms.append(product.code)

    for token in name_tokens(product.name):
        if len(token) >= MIN_TOKEN_LENGTH and token in text:
            score += len(token) * TOKEN_SCORE_PER_CHAR
            terms.append(token)

    if product.brand and product.brand.lower() in text:
        score += BRAND_MATCH_SCORE
        terms.append(product.brand)

    if jaccard_similarity(text, product.name.lower()) > FUZZY_SIMILARITY_THRESHOLD:
        score += FUZZY_MATCH_SCORE
        terms.append(FUZZY_MATCH_TERM)

    if len(set(terms)) > 1:
        score *= MULTI_SIGNAL_BOOST

    if score <= MIN_MATCH_SCORE:
        return None
    return ProductMatch(product=product, match_score=score, matched_terms=tuple(terms))


def name_tokens(name: str) -> list[str]:
    """Summary: Split a product name on whitespace, hyphen, underscore, and comma."""

    return _NAME_SPLIT.split(name.lower())


def jaccard_similarity(left: str, right: str) -> float:
    """Summary: Jaccard similarity of the whitespace-split word sets.

    Importance: Coarse whole-text check; long emails rarely pass the threshold.
    Alternatives: Window the comparison around candidate mentions.
    """

    left_words = set(left.split())
    right_words = set(right.split())
    union = left_words | right_words
    if not union:
        return 0.0
    return len(left_words & right_words) / len(union)
