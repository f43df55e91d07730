"""Summary: Domain model dataclasses for QuotePilot.

Importance: Defines the catalog, email, and classification entities shared across modules.
Alternatives: Use Pydantic models or plain dictionaries throughout.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

TIER_HIGH = "high"
TIER_MEDIUM = "medium"
TIER_LOW = "low"

GENERIC_PRODUCT = "generic"


@dataclass(frozen=True)
class CatalogProduct:
    """Summary: Represents one priced product tier in a user's catalog.

    Importance: Supplies the names, codes, and brands the matcher compares against.
    Alternatives: Pass raw catalog rows and coerce fields during matching.
    """

    name: str
    code: str
    brand: str | None = None
    category: str | None = None
    unit_price: float = 0.0
    tax_rate: float = 0.0
    min_quantity: int | None = None
    max_quantity: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """Summary: Serialize the product for JSON responses."""

        return {
            "name": self.name,
            "code": self.code,
            "brand": self.brand,
            "category": self.category,
            "unit_price": self.unit_price,
            "tax_rate": self.tax_rate,
            "min_quantity": self.min_quantity,
            "max_quantity": self.max_quantity,
        }


@dataclass(frozen=True)
class EmailDocument:
    """Summary: Represents an inbound email to classify.

    Importance: Core unit for classification and quote drafting workflows.
    Alternatives: Classify on raw subject and body strings only.
    """

    id: str = ""
    subject: str = ""
    body: str = ""
    sender: str = ""


@dataclass(frozen=True)
class IntentScore:
    """Summary: Holds the quote-intent score and the keywords that fired."""

    score: int
    matched_keywords: tuple[str, ...] = ()


@dataclass(frozen=True)
class ProductMatch:
    """Summary: Represents a catalog product matched against email text.

    Importance: Carries the evidence used to rank products for explainability.
    Alternatives: Return only product codes without scores.
    """

    product: CatalogProduct
    match_score: float
    matched_terms: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Summary: Serialize the match with its nested product."""

        return {
            "product": self.product.to_dict(),
            "match_score": self.match_score,
            "matched_terms": list(self.matched_terms),
        }


@dataclass(frozen=True)
class QuantityMention:
    """Summary: Associates an extracted quantity with a product name.

    Importance: Feeds quote drafting with the amounts customers asked for.
    Alternatives: Store quantities without product association.
    """

    product_ref: str
    quantity: int
    confidence: float

    def to_dict(self) -> dict[str, Any]:
        """Summary: Serialize the quantity mention for JSON output."""

        return {
            "product_ref": self.product_ref,
            "quantity": self.quantity,
            "confidence": self.confidence,
        }


@dataclass(frozen=True)
class ClassificationResult:
    """Summary: Aggregate outcome of classifying one email.

    Importance: Single payload consumed by quote drafting, the CLI, and the API.
    Alternatives: Return separate results from each scoring stage.
    """

    is_quote_request: bool
    confidence_tier: str
    score: float
    detected_products: tuple[ProductMatch, ...] = ()
    extracted_quantities: tuple[QuantityMention, ...] = ()
    reasoning: str = ""
    categories: tuple[str, ...] = field(default_factory=tuple)
    email_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Summary: Serialize the result for JSON output.

        Importance: Keeps the CLI and HTTP layers on a single output shape.
        Alternatives: Use dataclasses.asdict and post-process tuples.
        """

        return {
            "email_id": self.email_id,
            "is_quote_request": self.is_quote_request,
            "confidence_tier": self.confidence_tier,
            "score": self.score,
            "detected_products": [match.to_dict() for match in self.detected_products],
            "extracted_quantities": [
                mention.to_dict() for mention in self.extracted_quantities
            ],
            "reasoning": self.reasoning,
            "categories": list(self.categories),
        }
