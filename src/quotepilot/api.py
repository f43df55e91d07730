"""Summary: FastAPI application for QuotePilot.

Importance: Exposes classification and quote drafting to inbox and UI clients.
Alternatives: Use a CLI-only workflow or a different web framework.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import Depends, FastAPI, Header, HTTPException
from pydantic import BaseModel, Field

from quotepilot.app import build_services
from quotepilot.config import AppConfig
from quotepilot.models import CatalogProduct, EmailDocument


class EmailPayload(BaseModel):
    """Summary: Email fields accepted for classification.

    Importance: Missing subject or body are valid and classify as empty text.
    Alternatives: Accept raw RFC 822 messages only.
    """

    id: str = ""
    subject: str | None = ""
    body: str | None = ""
    sender: str | None = ""

    def to_document(self) -> EmailDocument:
        return EmailDocument(
            id=self.id,
            subject=self.subject or "",
            body=self.body or "",
            sender=self.sender or "",
        )


class ProductPayload(BaseModel):
    """Summary: Catalog product supplied with a request.

    Importance: Validates numeric fields at the HTTP boundary.
    Alternatives: Accept only the server-side catalog.
    """

    name: str = Field(min_length=1)
    code: str = Field(min_length=1)
    brand: str | None = None
    category: str | None = None
    unit_price: float = Field(default=0.0, ge=0)
    tax_rate: float = Field(default=0.0, ge=0)
    min_quantity: int | None = Field(default=None, ge=0)
    max_quantity: int | None = Field(default=None, ge=0)

    def to_product(self) -> CatalogProduct:
        return CatalogProduct(
            name=self.name,
            code=self.code,
            brand=self.brand or None,
            category=self.category or None,
            unit_price=self.unit_price,
            tax_rate=self.tax_rate,
            min_quantity=self.min_quantity,
            max_quantity=self.max_quantity,
        )


class ClassifyRequest(BaseModel):
    """Summary: Request payload for single-email classification.

    Importance: The catalog override lets clients classify against their own snapshot.
    Alternatives: Require catalog uploads before classification.
    """

    email: EmailPayload
    catalog: list[ProductPayload] | None = None


class BatchClassifyRequest(BaseModel):
    """Summary: Request payload for batch classification."""

    emails: list[EmailPayload]
    catalog: list[ProductPayload] | None = None


def _catalog_override(payload: list[ProductPayload] | None) -> list[CatalogProduct] | None:
    if payload is None:
        return None
    return [item.to_product() for item in payload]


def create_app(config: AppConfig) -> FastAPI:
    """Summary: Create a FastAPI app wired to QuotePilot services.

    Importance: Ensures the API layer shares the same configuration and catalog.
    Alternatives: Instantiate services globally outside the factory.
    """

    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=config.log_level, format="%(levelname)s %(name)s: %(message)s"
        )
    app = FastAPI(title="QuotePilot API", version="0.1.0")
    services = build_services(config)

    def require_api_key(x_api_key: str | None = Header(default=None)) -> None:
        """Summary: Enforce API key authentication when configured.

        Importance: Adds a minimal security layer for local and private deployments.
        Alternatives: Use OAuth or session-based authentication.
        """

        if not config.api_key:
            return
        if x_api_key != config.api_key:
            raise HTTPException(status_code=401, detail="Invalid API key")

    @app.get("/health")
    def health() -> dict[str, str]:
        """Summary: Health check endpoint."""

        return {"status": "ok"}

    @app.get("/catalog", dependencies=[Depends(require_api_key)])
    def list_catalog() -> list[dict[str, Any]]:
        """Summary: List the loaded catalog snapshot."""

        return [product.to_dict() for product in services.products]

    @app.get("/catalog/search", dependencies=[Depends(require_api_key)])
    def search_catalog(term: str = "", limit: int = 10) -> list[dict[str, Any]]:
        """Summary: Search the catalog by name, code, or brand.

        Importance: Helps operators pick products for manual quotes.
        Alternatives: Filter the catalog client-side.
        """

        if limit < 1 or limit > 100:
            raise HTTPException(status_code=400, detail="limit must be between 1 and 100")
        matches = services.catalog.search(services.products, term, limit)
        return [product.to_dict() for product in matches]

    @app.post("/classify", dependencies=[Depends(require_api_key)])
    def classify(payload: ClassifyRequest) -> dict[str, Any]:
        """Summary: Classify one email.

        Importance: Core HTTP entrypoint for inbox integrations.
        Alternatives: Classify emails only in scheduled batches.
        """

        result = services.classification.classify(
            payload.email.to_document(), _catalog_override(payload.catalog)
        )
        return result.to_dict()

    @app.post("/classify/batch", dependencies=[Depends(require_api_key)])
    def classify_batch(payload: BatchClassifyRequest) -> dict[str, Any]:
        """Summary: Classify a batch of emails up to the configured cap."""

        results = services.classification.classify_batch(
            [email.to_document() for email in payload.emails],
            _catalog_override(payload.catalog),
        )
        return {
            "classified": len(results),
            "quote_requests": sum(1 for result in results if result.is_quote_request),
            "results": [result.to_dict() for result in results],
        }

    @app.post("/quotes/draft", dependencies=[Depends(require_api_key)])
    def draft_quote(payload: ClassifyRequest) -> dict[str, Any]:
        """Summary: Classify an email and draft a quote when possible.

        Importance: Returns the draft status so clients can queue manual reviews.
        Alternatives: Send quotes directly from the server.
        """

        draft = services.quotes.draft(
            payload.email.to_document(), _catalog_override(payload.catalog)
        )
        return draft.to_dict()

    return app
