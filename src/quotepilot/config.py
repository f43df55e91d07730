"""Summary: Application configuration for QuotePilot.

Importance: Centralizes environment, .env, and config defaults for consistent behavior.
Alternatives: Use a dedicated settings library like Pydantic Settings.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class AppConfig:
    """Summary: Holds configuration values for the catalog, API, and quoting.

    Importance: Ensures all services derive settings from a single source of truth.
    Alternatives: Store settings in a shared config file and parse at startup.
    """

    catalog_path: str
    api_host: str
    api_port: int
    api_key: str
    log_level: str
    auto_quote_tiers: list[str]
    max_emails_per_batch: int
    currency_symbol: str
    shop_name: str
    quote_validity_days: int

    @staticmethod
    def from_env() -> "AppConfig":
        """Summary: Build configuration from defaults, .env, and environment.

        Importance: Keeps all variables defined in config defaults while allowing overrides.
        Alternatives: Parse only environment variables without a defaults file.
        """

        defaults = load_defaults(Path("config") / "defaults.json")
        load_dotenv(Path(".env"))
        return AppConfig(
            catalog_path=os.getenv("QUOTEPILOT_CATALOG_PATH", defaults["catalog_path"]),
            api_host=os.getenv("QUOTEPILOT_API_HOST", defaults["api_host"]),
            api_port=int(os.getenv("QUOTEPILOT_API_PORT", defaults["api_port"])),
            api_key=os.getenv("QUOTEPILOT_API_KEY", defaults["api_key"]),
            log_level=os.getenv("QUOTEPILOT_LOG_LEVEL", defaults["log_level"]).upper(),
            auto_quote_tiers=split_list(
                os.getenv("QUOTEPILOT_AUTO_QUOTE_TIERS", defaults["auto_quote_tiers"])
            ),
            max_emails_per_batch=int(
                os.getenv("QUOTEPILOT_MAX_EMAILS_PER_BATCH", defaults["max_emails_per_batch"])
            ),
            currency_symbol=os.getenv("QUOTEPILOT_CURRENCY_SYMBOL", defaults["currency_symbol"]),
            shop_name=os.getenv("QUOTEPILOT_SHOP_NAME", defaults["shop_name"]),
            quote_validity_days=int(
                os.getenv("QUOTEPILOT_QUOTE_VALIDITY_DAYS", defaults["quote_validity_days"])
            ),
        )


def load_defaults(path: Path) -> dict[str, str]:
    """Summary: Load configuration defaults from JSON.

    Importance: Ensures all variables exist in a single config file.
    Alternatives: Inline defaults in the AppConfig initializer.
    """

    if not path.exists():
        raise FileNotFoundError(f"Defaults file not found: {path}")
    return json.loads(path.read_text(encoding="utf-8"))


def load_dotenv(path: Path) -> None:
    """Summary: Load key-value pairs from a .env file into the environment.

    Importance: Keeps local overrides out of code.
    Alternatives: Use python-dotenv or OS-specific secret stores.
    """

    if not path.exists():
        return
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        os.environ.setdefault(key.strip(), value.strip())


def split_list(value: str) -> list[str]:
    """Summary: Split a comma-separated setting into trimmed, lower-cased items."""

    return [item.strip().lower() for item in value.split(",") if item.strip()]
