"""Summary: Email input providers for local files.

Importance: Feeds classification from exported mail without touching a mail server.
Alternatives: Poll IMAP or provider APIs directly.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from email import message_from_bytes
from email.header import decode_header
from pathlib import Path

from quotepilot.models import EmailDocument


class EmailProvider(ABC):
    """Summary: Abstract interface for email input.

    Importance: Standardizes retrieval across fixture and .eml sources.
    Alternatives: Use source-specific loaders directly in services.
    """

    @abstractmethod
    def fetch_recent(self, limit: int) -> list[EmailDocument]:
        """Summary: Fetch up to `limit` emails from the provider."""


class MockEmailProvider(EmailProvider):
    """Summary: Loads email documents from a local JSON fixture.

    Importance: Supports offline testing and demos.
    Alternatives: Generate synthetic emails in code.
    """

    def __init__(self, fixture_path: Path) -> None:
        self._fixture_path = fixture_path

    def fetch_recent(self, limit: int) -> list[EmailDocument]:
        """Summary: Load emails from the fixture file.

        Importance: Provides predictable data for tests and demos.
        Alternatives: Return an empty list when no fixture is present.
        """

        data = json.loads(self._fixture_path.read_text(encoding="utf-8"))
        emails = [
            EmailDocument(
                id=str(item.get("id", "")),
                subject=item.get("subject") or "",
                body=item.get("body") or "",
                sender=item.get("sender") or "",
            )
            for item in data
        ]
        return emails[:limit]


class EmlEmailProvider(EmailProvider):
    """Summary: Loads email documents from .eml files.

    Importance: Supports classifying exported messages without provider APIs.
    Alternatives: Read from a mailbox directory and glob files internally.
    """

    def __init__(self, eml_paths: list[Path]) -> None:
        self._eml_paths = eml_paths

    def fetch_recent(self, limit: int) -> list[EmailDocument]:
        """Summary: Parse .eml files into EmailDocument objects.

        Importance: Allows local-first classification of exported emails.
        Alternatives: Parse HTML parts when no plain text part exists.
        """

        emails: list[EmailDocument] = []
        for path in self._eml_paths[:limit]:
            message = message_from_bytes(path.read_bytes())
            emails.append(
                EmailDocument(
                    id=message.get("Message-Id", path.name),
                    subject=_decode_header_value(message.get("Subject", "")),
                    body=_extract_body(message),
                    sender=_decode_header_value(message.get("From", "")),
                )
            )
        return emails


def _decode_header_value(value: str) -> str:
    """Summary: Decode RFC 2047 encoded header values."""

    fragments: list[str] = []
    for part, encoding in decode_header(value):
        if isinstance(part, bytes):
            fragments.append(part.decode(encoding or "utf-8", errors="ignore"))
        else:
            fragments.append(part)
    return "".join(fragments).strip()


def _extract_body(message: object) -> str:
    """Summary: Extract a plaintext body from an email message.

    Importance: The classifier only reads plain text.
    Alternatives: Strip tags from HTML parts as a fallback.
    """

    if message.is_multipart():
        parts = []
        for part in message.walk():
            if part.get_content_type() == "text/plain":
                payload = part.get_payload(decode=True) or b""
                parts.append(payload.decode(part.get_content_charset() or "utf-8", errors="ignore"))
        return "\n".join(parts).strip()
    payload = message.get_payload(decode=True) or b""
    return payload.decode(message.get_content_charset() or "utf-8", errors="ignore").strip()
