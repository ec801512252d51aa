"""Ordered rule table for instruction routing.

Rules are tried in table order and the first predicate that holds wins. Narrow phrasings sit above
the general ones that would otherwise shadow them, e.g. "approve abc123" (a decision) must be tested
before "approve a ..." (a new approval request).

Predicates receive the normalized (trimmed, lowercased) instruction; extractors receive the trimmed
instruction with its original casing.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass

from src.intent import extractors
from src.intent.dictionaries import (
    APPROVAL_DISPLAY_VERBS,
    APPROVAL_REQUEST_VERBS,
    DISPLAY_VERBS,
    KNOWLEDGE_NOUNS,
    REQUEST_CREATE_VERBS,
    SCHEDULING_VERBS,
    STATUS_WORDS,
    STORAGE_VERBS,
    alternation,
)
from src.intent.schema import Intent, Payload

Predicate = Callable[[str], bool]
Extractor = Callable[[str], Payload]


@dataclass(frozen=True)
class Rule:
    """A (predicate, intent, extractor) triple. Priority is the rule's position in `RULES`."""

    name: str
    intent: Intent
    predicate: Predicate
    extract: Extractor

    def matches(self, normalized: str) -> bool:
        return self.predicate(normalized)


_DISPLAY = alternation(DISPLAY_VERBS)

_APPROVE_ID_RE = re.compile(r"^approve\s+\S+")
_APPROVE_EXCLUDE_RE = re.compile(r"request|for|need")
_DENY_ID_RE = re.compile(r"^(?:deny|reject)\s+\S+")

_APPROVALS_LIST_RE = re.compile(
    rf"\b(?:{alternation(APPROVAL_DISPLAY_VERBS)})\b.*\b(?:pending\s+)?approvals?\b"
)

_APPROVAL_REQUEST_RES: tuple[re.Pattern[str], ...] = (
    re.compile(rf"\b(?:{alternation(APPROVAL_REQUEST_VERBS)})\s+(?:an?\s+)?approval\b"),
    re.compile(r"\bapproval\s+(?:for|to|request)"),
    re.compile(r"\bapprove\s+(?:a|the|this|my)\b"),
)

_KNOWLEDGE_CREATE_RE = re.compile(
    rf"\b(?:{alternation(STORAGE_VERBS)}|create\s+(?:a\s+)?knowledge)\b"
)
_APPROVAL_VOCABULARY_RE = re.compile(r"request|approval")

_KNOWLEDGE_LIST_RE = re.compile(
    rf"\b(?:{_DISPLAY})\s+(?:all\s+)?(?:{alternation(KNOWLEDGE_NOUNS)})\b"
)

_QUESTION_OPENER_RE = re.compile(
    r"\b(?:what(?:'?s|\s+is|\s+are)|how\s+(?:do|to|does)|find|search|look\s*up|where"
    r"|tell\s+me|explain|describe)\b"
)
_WORKFLOW_VOCABULARY_RE = re.compile(r"approval|request|pending")

_REQUESTS_LIST_RE = re.compile(rf"\b(?:{_DISPLAY})\s+(?:all\s+)?(?:open\s+)?requests?\b")

_REQUEST_CREATE_RES: tuple[re.Pattern[str], ...] = (
    re.compile(rf"\b(?:{alternation(REQUEST_CREATE_VERBS)})\s+(?:a\s+)?request\b"),
    re.compile(r"\brequest\s+to\b"),
)
_SCHEDULING_RE = re.compile(rf"\b(?:{alternation(SCHEDULING_VERBS)})\b")

_STATUS_RE = re.compile(rf"^(?:{alternation(STATUS_WORDS)})\b")


def _is_approve_decision(text: str) -> bool:
    # "approve a request for travel" is a new approval, not a decision on one.
    return bool(_APPROVE_ID_RE.search(text)) and not _APPROVE_EXCLUDE_RE.search(text)


def _is_deny_decision(text: str) -> bool:
    return bool(_DENY_ID_RE.search(text))


def _is_approvals_list(text: str) -> bool:
    return bool(_APPROVALS_LIST_RE.search(text))


def _is_approval_request(text: str) -> bool:
    return any(p.search(text) for p in _APPROVAL_REQUEST_RES)


def _is_knowledge_create(text: str) -> bool:
    return bool(_KNOWLEDGE_CREATE_RE.search(text)) and not _APPROVAL_VOCABULARY_RE.search(text)


def _is_knowledge_list(text: str) -> bool:
    return bool(_KNOWLEDGE_LIST_RE.search(text))


def _is_knowledge_search(text: str) -> bool:
    return bool(_QUESTION_OPENER_RE.search(text)) and not _WORKFLOW_VOCABULARY_RE.search(text)


def _is_requests_list(text: str) -> bool:
    return bool(_REQUESTS_LIST_RE.search(text))


def _is_request_create(text: str) -> bool:
    if any(p.search(text) for p in _REQUEST_CREATE_RES):
        return True
    return bool(_SCHEDULING_RE.search(text)) and "approval" not in text


def _is_status(text: str) -> bool:
    return bool(_STATUS_RE.search(text))


RULES: tuple[Rule, ...] = (
    Rule("approve_by_id", Intent.approvals_decide, _is_approve_decision,
         extractors.extract_approve_decision),
    Rule("deny_by_id", Intent.approvals_decide, _is_deny_decision,
         extractors.extract_deny_decision),
    Rule("approvals_list", Intent.approvals_list, _is_approvals_list,
         extractors.extract_approvals_list),
    Rule("approval_request", Intent.approvals_request, _is_approval_request,
         extractors.extract_approval_request),
    Rule("knowledge_create", Intent.knowledge_create, _is_knowledge_create,
         extractors.extract_knowledge_create),
    Rule("knowledge_list", Intent.knowledge_list, _is_knowledge_list,
         extractors.extract_nothing),
    Rule("knowledge_search", Intent.knowledge_search, _is_knowledge_search,
         extractors.extract_knowledge_search),
    Rule("requests_list", Intent.requests_list, _is_requests_list,
         extractors.extract_requests_list),
    Rule("request_create", Intent.requests_create, _is_request_create,
         extractors.extract_request_create),
    Rule("status", Intent.status, _is_status, extractors.extract_nothing),
)
