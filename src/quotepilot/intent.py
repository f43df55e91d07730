"""Summary: Quote-intent scoring over weighted keyword tables.

Importance: Provides the primary signal for deciding whether an email asks for a quote.
Alternatives: Use an LLM or a trained classifier for intent detection.
"""

from __future__ import annotations

from typing import Sequence

from quotepilot.keywords import INTENT_TABLES, KeywordTable
from quotepilot.models import IntentScore


def score_quote_intent(
    text: str, tables: Sequence[KeywordTable] = INTENT_TABLES
) -> IntentScore:
    """Summary: Score normalized text against the keyword tables.

    Importance: Each phrase counts once on presence; negative evidence only
    reduces positive evidence, so the total never drops below zero.
    Alternatives: Count every occurrence or normalize by text length.
    """

    total = 0
    matched: list[str] = []
    for table in tables:
        for phrase in table.phrases:
            if phrase not in text:
                continue
            total += table.weight
            matched.append(f"-{phrase}" if table.weight < 0 else phrase)
    return IntentScore(score=max(0, total), matched_keywords=tuple(matched))
