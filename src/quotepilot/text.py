"""Summary: Text normalization helpers.

Importance: Gives every scorer the same lower-cased view of an email.
Alternatives: Add stemming or Unicode folding for looser matching.
"""

from __future__ import annotations

from quotepilot.models import EmailDocument


def normalize(text: str | None) -> str:
    """Summary: Lower-case text for keyword and product comparison."""

    return (text or "").lower()


def email_text(email: EmailDocument) -> str:
    """Summary: Join subject and body with a single space and normalize.

    Importance: Keyword tables are matched against this exact combined form.
    Alternatives: Score subject and body separately with different weights.
    """

    return normalize(f"{email.subject or ''} {email.body or ''}")
