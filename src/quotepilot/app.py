"""Summary: Application factory wiring core services.

Importance: Centralizes dependency creation for the CLI and API layers.
Alternatives: Instantiate services manually in each entrypoint.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from quotepilot.classifier import QuoteClassifier
from quotepilot.config import AppConfig
from quotepilot.models import CatalogProduct
from quotepilot.quotes import QuotePlanner
from quotepilot.services import CatalogService, ClassificationService, QuoteService


@dataclass(frozen=True)
class AppServices:
    """Summary: Bundle of core services for QuotePilot.

    Importance: Simplifies passing dependencies to CLI or API layers.
    Alternatives: Use a dependency injection container.
    """

    catalog: CatalogService
    classification: ClassificationService
    quotes: QuoteService
    products: tuple[CatalogProduct, ...]


def build_services(
    config: AppConfig, products: Sequence[CatalogProduct] | None = None
) -> AppServices:
    """Summary: Build core services from configuration.

    Importance: Provides a single construction path for the application.
    Alternatives: Instantiate services directly within the CLI entrypoint.
    """

    catalog = CatalogService(catalog_path=Path(config.catalog_path))
    snapshot = catalog.load() if products is None else tuple(products)
    classification = ClassificationService(
        classifier=QuoteClassifier(),
        catalog=snapshot,
        max_emails_per_batch=config.max_emails_per_batch,
    )
    planner = QuotePlanner(
        auto_quote_tiers=tuple(config.auto_quote_tiers),
        shop_name=config.shop_name,
        currency_symbol=config.currency_symbol,
        validity_days=config.quote_validity_days,
    )
    quotes = QuoteService(classification=classification, planner=planner)
    return AppServices(
        catalog=catalog,
        classification=classification,
        quotes=quotes,
        products=snapshot,
    )
