"""Summary: Catalog ingestion and search helpers.

Importance: Converts loosely typed catalog rows into validated products at the boundary.
Alternatives: Read catalog rows straight from a spreadsheet API on every request.
"""

from __future__ import annotations

import csv
import json
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Sequence

from quotepilot.models import CatalogProduct

logger = logging.getLogger(__name__)

REQUIRED_HEADERS = ("Brand", "Product Description", "Product Code", "Unit Price", "GST Rate")


class CatalogImportError(ValueError):
    """Summary: Raised when a catalog file cannot be imported at all."""


@dataclass(frozen=True)
class ImportReport:
    """Summary: Outcome of a catalog import.

    Importance: Keeps good rows usable while surfacing bad rows to the user.
    Alternatives: Abort the whole import on the first invalid row.
    """

    products: list[CatalogProduct]
    errors: list[str] = field(default_factory=list)

    @property
    def imported_count(self) -> int:
        return len(self.products)


def product_from_record(record: Mapping[str, Any]) -> CatalogProduct:
    """Summary: Build a product from a loosely typed mapping.

    Importance: Converts numeric strings once so the matcher sees clean types.
    Alternatives: Let Pydantic coerce rows with a schema model.
    """

    name = _clean(record.get("name"))
    code = _clean(record.get("code"))
    if not name or not code:
        raise ValueError("Missing product name or code")
    if not _clean(record.get("unit_price")):
        raise ValueError("Missing unit price")
    unit_price = _to_float(record.get("unit_price"), "unit price")
    tax_rate = _to_float(record.get("tax_rate"), "tax rate")
    return CatalogProduct(
        name=name,
        code=code,
        brand=_clean(record.get("brand")) or None,
        category=_clean(record.get("category")) or None,
        unit_price=unit_price,
        tax_rate=tax_rate,
        min_quantity=_to_optional_int(record.get("min_quantity"), "min quantity"),
        max_quantity=_to_optional_int(record.get("max_quantity"), "max quantity"),
    )


def load_catalog_csv(path: Path) -> ImportReport:
    """Summary: Import products from a CSV export of the catalog sheet.

    Importance: Matches the column layout users export from their spreadsheets.
    Alternatives: Accept only JSON catalog files.
    """

    try:
        with path.open(encoding="utf-8-sig", newline="") as handle:
            rows = [row for row in csv.reader(handle) if any(value.strip() for value in row)]
    except (OSError, UnicodeDecodeError, csv.Error) as exc:
        raise CatalogImportError(f"Could not read {path}: {exc}") from exc
    if len(rows) < 2:
        raise CatalogImportError("File must contain header and at least one data row")
    headers = [header.strip() for header in rows[0]]
    missing = [header for header in REQUIRED_HEADERS if header not in headers]
    if missing:
        raise CatalogImportError(f"Missing required headers: {', '.join(missing)}")

    products: list[CatalogProduct] = []
    errors: list[str] = []
    for row_number, row in enumerate(rows[1:], start=2):
        values = dict(zip(headers, (value.strip() for value in row)))
        record = {
            "name": values.get("Product Description"),
            "code": values.get("Product Code"),
            "brand": values.get("Brand"),
            "category": values.get("Category"),
            "unit_price": values.get("Unit Price"),
            "tax_rate": values.get("GST Rate"),
            "min_quantity": values.get("Min Quantity"),
            "max_quantity": values.get("Max Quantity"),
        }
        try:
            products.append(product_from_record(record))
        except ValueError as exc:
            errors.append(f"Row {row_number}: {exc}")
    for error in errors:
        logger.warning("Skipped catalog row. %s", error)
    logger.info("Imported %s products from %s.", len(products), path)
    return ImportReport(products=products, errors=errors)


def load_catalog_json(path: Path) -> ImportReport:
    """Summary: Import products from a JSON list of product objects."""

    try:
        data = json.loads(path.read_text(encoding="utf-8-sig"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise CatalogImportError(f"Could not read {path}: {exc}") from exc
    if not isinstance(data, list):
        raise CatalogImportError("Catalog JSON must be a list of products")
    products: list[CatalogProduct] = []
    errors: list[str] = []
    for index, item in enumerate(data, start=1):
        try:
            if not isinstance(item, dict):
                raise ValueError("Product entry must be an object")
            products.append(product_from_record(item))
        except ValueError as exc:
            errors.append(f"Row {index}: {exc}")
    for error in errors:
        logger.warning("Skipped catalog row. %s", error)
    logger.info("Imported %s products from %s.", len(products), path)
    return ImportReport(products=products, errors=errors)


def load_catalog(path: Path) -> ImportReport:
    """Summary: Import a catalog file, picking the parser by extension."""

    if path.suffix.lower() == ".json":
        return load_catalog_json(path)
    return load_catalog_csv(path)


def search_products(
    catalog: Sequence[CatalogProduct], term: str, limit: int = 10
) -> list[CatalogProduct]:
    """Summary: Search products by name, code, or brand.

    Importance: Whole-term matches rank ahead of products matching a single word.
    Alternatives: Reuse the email matcher scores for catalog search.
    """

    if not term.strip():
        return list(catalog[:limit])
    needle = term.lower()
    exact = [product for product in catalog if _contains(product, needle)]
    words = [word for word in needle.split() if word]
    partial = [
        product
        for product in catalog
        if product not in exact and any(_contains(product, word) for word in words)
    ]
    return (exact + partial)[:limit]


def _contains(product: CatalogProduct, needle: str) -> bool:
    return (
        needle in product.name.lower()
        or needle in product.code.lower()
        or needle in (product.brand or "").lower()
    )


def _clean(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _to_float(value: Any, label: str) -> float:
    text = _clean(value)
    if not text:
        return 0.0
    try:
        number = float(text)
    except ValueError as exc:
        raise ValueError(f"Invalid {label}: {text}") from exc
    if not math.isfinite(number) or number < 0:
        raise ValueError(f"Invalid {label}: {text}")
    return number


def _to_optional_int(value: Any, label: str) -> int | None:
    text = _clean(value)
    if not text:
        return None
    try:
        number = int(float(text))
    except (ValueError, OverflowError) as exc:
        raise ValueError(f"Invalid {label}: {text}") from exc
    if number < 0:
        raise ValueError(f"Invalid {label}: {text}")
    return number
