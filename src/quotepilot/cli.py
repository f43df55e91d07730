"""Summary: Command-line interface for QuotePilot.

Importance: Provides a local-first entry point for classification and quoting.
Alternatives: Build a web UI first.
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any

from quotepilot.app import build_services
from quotepilot.catalog import CatalogImportError, load_catalog
from quotepilot.config import AppConfig
from quotepilot.email import EmlEmailProvider, MockEmailProvider
from quotepilot.models import EmailDocument


def build_parser() -> argparse.ArgumentParser:
    """Summary: Build the CLI argument parser.

    Importance: Defines supported commands for local operation.
    Alternatives: Use a CLI framework like Typer or Click.
    """

    parser = argparse.ArgumentParser(description="QuotePilot CLI")
    parser.add_argument("--catalog", type=str, default=None, help="Override the catalog file")
    subparsers = parser.add_subparsers(dest="command", required=True)

    classify = subparsers.add_parser("classify", help="Classify a single email")
    _add_email_arguments(classify)

    classify_mock = subparsers.add_parser("classify-mock", help="Classify emails from a JSON fixture")
    classify_mock.add_argument("--limit", type=int, default=10)
    classify_mock.add_argument(
        "--fixture", type=str, default=str(Path("data") / "mock_emails.json")
    )

    classify_eml = subparsers.add_parser("classify-eml", help="Classify .eml files")
    classify_eml.add_argument("paths", nargs="+", type=str)
    classify_eml.add_argument("--limit", type=int, default=10)

    import_catalog = subparsers.add_parser("import-catalog", help="Validate a catalog file")
    import_catalog.add_argument("path", type=str)

    search_catalog = subparsers.add_parser("search-catalog", help="Search the catalog")
    search_catalog.add_argument("term", type=str)
    search_catalog.add_argument("--limit", type=int, default=10)

    draft = subparsers.add_parser("draft-quote", help="Draft a quote for an email")
    _add_email_arguments(draft)

    subparsers.add_parser("serve", help="Run the HTTP API")
    return parser


def _add_email_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--subject", type=str, default="")
    parser.add_argument("--body", type=str, default="")
    parser.add_argument("--sender", type=str, default="")
    parser.add_argument("--id", type=str, default="cli")


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False))


def run_cli(argv: list[str] | None = None) -> None:
    """Summary: Execute CLI commands based on arguments.

    Importance: Drives classification and quoting without a UI.
    Alternatives: Invoke services via the HTTP API.
    """

    parser = build_parser()
    args = parser.parse_args(argv)
    config = AppConfig.from_env()
    logging.basicConfig(level=config.log_level, format="%(levelname)s %(name)s: %(message)s")

    products = None
    if args.catalog:
        try:
            products = load_catalog(Path(args.catalog)).products
        except CatalogImportError as exc:
            print(f"Catalog import failed: {exc}")
            return
    services = build_services(config, products)

    if args.command == "classify":
        email = EmailDocument(id=args.id, subject=args.subject, body=args.body, sender=args.sender)
        _print_json(services.classification.classify(email).to_dict())
        return

    if args.command == "classify-mock":
        emails = MockEmailProvider(Path(args.fixture)).fetch_recent(args.limit)
        results = services.classification.classify_batch(emails)
        _print_json([result.to_dict() for result in results])
        return

    if args.command == "classify-eml":
        emails = EmlEmailProvider([Path(path) for path in args.paths]).fetch_recent(args.limit)
        results = services.classification.classify_batch(emails)
        _print_json([result.to_dict() for result in results])
        return

    if args.command == "import-catalog":
        try:
            report = services.catalog.import_file(Path(args.path))
        except CatalogImportError as exc:
            print(f"Catalog import failed: {exc}")
            return
        print(f"Imported {report.imported_count} products.")
        for error in report.errors:
            print(error)
        return

    if args.command == "search-catalog":
        for product in services.catalog.search(services.products, args.term, args.limit):
            print(f"{product.code}: {product.name} ({product.brand or '-'})")
        return

    if args.command == "draft-quote":
        email = EmailDocument(id=args.id, subject=args.subject, body=args.body, sender=args.sender)
        draft = services.quotes.draft(email)
        print(f"Status: {draft.status} - {draft.message}")
        if draft.ready:
            print(f"Subject: {draft.subject}\n\n{draft.body}")
        return

    if args.command == "serve":
        import uvicorn

        from quotepilot.api import create_app

        uvicorn.run(create_app(config), host=config.api_host, port=config.api_port)
        return


if __name__ == "__main__":
    run_cli()
