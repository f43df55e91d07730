"""Summary: Application services for QuotePilot.

Importance: Orchestrates catalog loading, classification, and quote drafting flows.
Alternatives: Call the classifier directly from each entrypoint.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from quotepilot.catalog import CatalogImportError, ImportReport, load_catalog, search_products
from quotepilot.classifier import QuoteClassifier
from quotepilot.models import CatalogProduct, ClassificationResult, EmailDocument
from quotepilot.quotes import QuoteDraft, QuotePlanner

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogService:
    """Summary: Loads and searches the product catalog.

    Importance: Shields classification from catalog storage failures.
    Alternatives: Require callers to load catalog files themselves.
    """

    catalog_path: Path

    def load(self) -> tuple[CatalogProduct, ...]:
        """Summary: Load the catalog snapshot, or an empty one on failure.

        Importance: Classification proceeds with intent and quantity signals
        even when the catalog is unavailable.
        Alternatives: Abort startup when the catalog is missing.
        """

        if not self.catalog_path.exists():
            logger.warning("Catalog file %s not found; using an empty catalog.", self.catalog_path)
            return ()
        try:
            report = load_catalog(self.catalog_path)
        except CatalogImportError as exc:
            logger.warning("Catalog file %s could not be imported: %s", self.catalog_path, exc)
            return ()
        return tuple(report.products)

    def import_file(self, path: Path) -> ImportReport:
        """Summary: Import a catalog file and report row-level errors."""

        return load_catalog(path)

    def search(
        self, catalog: Sequence[CatalogProduct], term: str, limit: int = 10
    ) -> list[CatalogProduct]:
        return search_products(catalog, term, limit)


@dataclass(frozen=True)
class ClassificationService:
    """Summary: Classifies emails against the loaded catalog.

    Importance: Provides a single classification path for the CLI and API.
    Alternatives: Instantiate classifiers per request.
    """

    classifier: QuoteClassifier
    catalog: tuple[CatalogProduct, ...]
    max_emails_per_batch: int = 10

    def classify(
        self, email: EmailDocument, catalog: Sequence[CatalogProduct] | None = None
    ) -> ClassificationResult:
        """Summary: Classify one email, defaulting to the loaded catalog.

        Importance: Callers may pass a per-request catalog snapshot.
        Alternatives: Only allow the configured catalog.
        """

        products = self.catalog if catalog is None else tuple(catalog)
        result = self.classifier.classify(email, products)
        logger.info(
            "Classified email %s as %s (%s, score %.1f).",
            email.id or "<no id>",
            "quote request" if result.is_quote_request else "general email",
            result.confidence_tier,
            result.score,
        )
        return result

    def classify_batch(
        self,
        emails: Sequence[EmailDocument],
        catalog: Sequence[CatalogProduct] | None = None,
    ) -> list[ClassificationResult]:
        """Summary: Classify up to the configured batch size of emails.

        Importance: Bounds the work done per polling cycle.
        Alternatives: Classify every email regardless of volume.
        """

        batch = list(emails)[: self.max_emails_per_batch]
        if len(emails) > len(batch):
            logger.info("Batch capped at %s of %s emails.", len(batch), len(emails))
        results = [self.classify(email, catalog) for email in batch]
        quotes = sum(1 for result in results if result.is_quote_request)
        logger.info("Classified %s emails; %s quote requests.", len(results), quotes)
        return results


@dataclass(frozen=True)
class QuoteService:
    """Summary: Drafts quotes for classified emails.

    Importance: Connects classification to the auto-quote decision.
    Alternatives: Draft quotes manually from the classification output.
    """

    classification: ClassificationService
    planner: QuotePlanner

    def draft(
        self, email: EmailDocument, catalog: Sequence[CatalogProduct] | None = None
    ) -> QuoteDraft:
        """Summary: Classify an email and plan its quote.

        Importance: Returns the draft status so callers can route manual reviews.
        Alternatives: Return only ready drafts and drop the rest.
        """

        products = self.classification.catalog if catalog is None else tuple(catalog)
        result = self.classification.classify(email, products)
        draft = self.planner.plan(email, result, products)
        logger.info("Quote draft for email %s: %s.", email.id or "<no id>", draft.status)
        return draft
