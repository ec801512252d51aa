"""English vocabularies for intent rules and extractors.

These word lists feed the rule predicates and the lead-in stripping in the extractors. Each list
is turned into a regex alternation once, at import time.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from src.intent.schema import Priority

# Display verbs. Approval listing also accepts "get".
DISPLAY_VERBS: tuple[str, ...] = ("show", "list", "display", "view")
APPROVAL_DISPLAY_VERBS: tuple[str, ...] = ("show", "list", "get", "display", "view")

STORAGE_VERBS: tuple[str, ...] = ("store", "save", "add", "remember", "record", "put", "set")
REQUEST_CREATE_VERBS: tuple[str, ...] = ("create", "make", "new", "submit", "open")
APPROVAL_REQUEST_VERBS: tuple[str, ...] = ("request", "need", "submit")
SCHEDULING_VERBS: tuple[str, ...] = ("need", "schedule", "book", "arrange")
STATUS_WORDS: tuple[str, ...] = ("status", "health", "check", "ping")
KNOWLEDGE_NOUNS: tuple[str, ...] = ("knowledge", "entries", "docs")
OPEN_STATUS_WORDS: tuple[str, ...] = ("open", "pending", "active")

URGENCY_TERMS: tuple[str, ...] = ("urgent", "urgently", "asap", "critical", "emergency")


def alternation(words: tuple[str, ...]) -> str:
    """Build a regex alternation (without a group) from literal words."""

    return "|".join(re.escape(w) for w in words)


@dataclass(frozen=True)
class PriorityMatch:
    """A priority level and the pattern that selects it."""

    priority: Priority
    pattern: re.Pattern[str]


# Checked in order; the first hit wins, otherwise the priority is "medium".
PRIORITY_MATCHES: tuple[PriorityMatch, ...] = (
    PriorityMatch("critical", re.compile(rf"\b(?:{alternation(URGENCY_TERMS)})\b", re.IGNORECASE)),
    PriorityMatch("high", re.compile(r"\bhigh\s*(?:priority)?\b", re.IGNORECASE)),
    PriorityMatch("low", re.compile(r"\blow\s*(?:priority)?\b", re.IGNORECASE)),
)

PRIORITY_TERMS_RE = re.compile(
    rf"\b(?:{alternation(URGENCY_TERMS)}|high\s*priority|low\s*priority)\b",
    re.IGNORECASE,
)


def detect_priority(text: str) -> Priority:
    """Infer a request priority from urgency words in the text."""

    for match in PRIORITY_MATCHES:
        if match.pattern.search(text or ""):
            return match.priority
    return "medium"


def strip_priority_terms(text: str) -> str:
    """Remove every urgency/priority phrase from text and collapse the leftover whitespace."""

    return " ".join(PRIORITY_TERMS_RE.sub(" ", text or "").split())
