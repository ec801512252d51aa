"""Text normalization for deterministic intent routing."""

from __future__ import annotations


def normalize_text(text: str) -> str:
    """Normalize an instruction for rule predicates.

    Normalization is intentionally minimal: strip surrounding whitespace and lowercase. Punctuation
    is kept because several rules depend on it (`?` endings, `$` amounts, `:` separators).
    """

    return (text or "").strip().lower()
