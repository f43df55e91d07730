"""Summary: Tests for catalog ingestion and search.

Importance: Ensures catalog rows are validated before they reach the matcher.
Alternatives: Trust spreadsheet exports without validation.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from quotepilot.catalog import (
    CatalogImportError,
    load_catalog,
    load_catalog_csv,
    product_from_record,
    search_products,
)
from quotepilot.models import CatalogProduct


def test_csv_import_converts_numbers_and_reports_bad_rows(tmp_path: Path) -> None:
    """Summary: Valid rows import; invalid rows are reported and skipped.

    Importance: One bad row should not block the whole catalog.
    Alternatives: Abort the import on the first error.
    """

    path = tmp_path / "catalog.csv"
    path.write_text(
        "Brand,Product Description,Product Code,Unit Price,GST Rate,Min Quantity\n"
        "JK,JK Copier Paper A4,JK-A4-75,245.50,12,10\n"
        "Classmate,,CM-NB-172,48,12,\n"
        "Reynolds,Trimax Gel Pen,RY-TMX,abc,18,\n",
        encoding="utf-8",
    )
    report = load_catalog_csv(path)
    assert report.imported_count == 1
    product = report.products[0]
    assert product.code == "JK-A4-75"
    assert product.unit_price == 245.5
    assert product.tax_rate == 12.0
    assert product.min_quantity == 10
    assert product.max_quantity is None
    assert report.errors == [
        "Row 3: Missing product name or code",
        "Row 4: Invalid unit price: abc",
    ]


def test_csv_import_requires_headers(tmp_path: Path) -> None:
    """Summary: Missing required headers reject the file."""

    path = tmp_path / "catalog.csv"
    path.write_text("Brand,Name\nJK,Paper\n", encoding="utf-8")
    with pytest.raises(CatalogImportError, match="Missing required headers"):
        load_catalog_csv(path)


def test_csv_import_requires_data_rows(tmp_path: Path) -> None:
    """Summary: A header-only file is rejected."""

    path = tmp_path / "catalog.csv"
    path.write_text("Brand,Product Description,Product Code,Unit Price,GST Rate\n", encoding="utf-8")
    with pytest.raises(CatalogImportError):
        load_catalog_csv(path)


def test_json_catalog_import(tmp_path: Path) -> None:
    """Summary: JSON catalogs use the product field names.

    Importance: Supports catalogs exported from other systems.
    Alternatives: Support CSV only.
    """

    path = tmp_path / "catalog.json"
    path.write_text(
        json.dumps(
            [
                {"name": "Stapler HD-10", "code": "KG-HD10", "brand": "Kangaro", "unit_price": "85"},
                {"name": "Broken", "code": "BR-1", "unit_price": -1},
            ]
        ),
        encoding="utf-8",
    )
    report = load_catalog(path)
    assert [product.code for product in report.products] == ["KG-HD10"]
    assert report.products[0].unit_price == 85.0
    assert report.errors == ["Row 2: Invalid unit price: -1"]


def test_product_from_record_blank_optionals() -> None:
    """Summary: Blank optional fields become None."""

    product = product_from_record(
        {"name": " Pen ", "code": "P-1", "brand": "", "unit_price": "10", "tax_rate": ""}
    )
    assert product == CatalogProduct(name="Pen", code="P-1", unit_price=10.0)


def test_search_products_ranks_whole_term_first() -> None:
    """Summary: Whole-term matches come before single-word matches.

    Importance: Operators find the exact product quickly.
    Alternatives: Sort search results alphabetically.
    """

    catalog = [
        CatalogProduct(name="Gel Pen Blue", code="GP-B", brand="Reynolds"),
        CatalogProduct(name="Blue Folder", code="BF-1"),
        CatalogProduct(name="Stapler", code="ST-1"),
    ]
    results = search_products(catalog, "gel pen")
    assert [product.code for product in results] == ["GP-B"]
    results = search_products(catalog, "blue pen")
    assert [product.code for product in results] == ["GP-B", "BF-1"]
    assert len(search_products(catalog, " ", limit=2)) == 2


def test_csv_import_accepts_byte_order_mark(tmp_path: Path) -> None:
    """Summary: Spreadsheet exports with a UTF-8 BOM keep their first header."""

    path = tmp_path / "catalog.csv"
    path.write_text(
        "\ufeffBrand,Product Description,Product Code,Unit Price,GST Rate\n"
        "JK,Copier Paper A4,JK-A4-75,245,12\n",
        encoding="utf-8",
    )
    report = load_catalog_csv(path)
    assert [product.brand for product in report.products] == ["JK"]
    assert report.errors == []


def test_unreadable_files_raise_import_error(tmp_path: Path) -> None:
    """Summary: Malformed JSON and undecodable CSV fail as import errors.

    Importance: Callers handle one exception type for files that cannot be imported.
    Alternatives: Let parser exceptions propagate unchanged.
    """

    broken_json = tmp_path / "catalog.json"
    broken_json.write_text("[{", encoding="utf-8")
    with pytest.raises(CatalogImportError, match="Could not read"):
        load_catalog(broken_json)

    binary_csv = tmp_path / "catalog.csv"
    binary_csv.write_bytes(b"Brand,Product\n\xff\xfe\xfa,1\n")
    with pytest.raises(CatalogImportError, match="Could not read"):
        load_catalog(binary_csv)

    with pytest.raises(CatalogImportError):
        load_catalog(tmp_path / "missing.csv")
