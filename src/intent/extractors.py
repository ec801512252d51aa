"""Per-intent payload extractors.

Every extractor is a total function of the raw (trimmed) instruction: it never raises and falls back
to documented defaults when the text is ambiguous. Lead-in phrases are removed by ordered
first-occurrence substitution, so an instruction repeating a lead-in keeps the later copies.
"""

from __future__ import annotations

import re

from src.intent.amounts import parse_amount
from src.intent.dictionaries import (
    APPROVAL_REQUEST_VERBS,
    OPEN_STATUS_WORDS,
    REQUEST_CREATE_VERBS,
    STORAGE_VERBS,
    alternation,
    detect_priority,
    strip_priority_terms,
)
from src.intent.schema import (
    ApprovalRequestPayload,
    ApprovalsDecidePayload,
    ApprovalsListPayload,
    EmptyPayload,
    KnowledgeCreatePayload,
    KnowledgeSearchPayload,
    RequestCreatePayload,
    RequestsListPayload,
)

DEFAULT_KNOWLEDGE_TITLE = "New Entry"
DEFAULT_APPROVAL_TITLE = "Approval Request"
TITLE_WORD_LIMIT = 5

_STORAGE = alternation(STORAGE_VERBS)

_KNOWLEDGE_COLON_RE = re.compile(
    rf"\b(?:{_STORAGE})\s+(?:(?:a|our|the|my|this)\s+)?(?P<title>.+?):\s*(?P<content>.+)",
    re.IGNORECASE | re.DOTALL,
)
_KNOWLEDGE_SIMPLE_RE = re.compile(
    rf"\b(?:{_STORAGE})\s+(?:that\s+|this\s+|our\s+|the\s+|a\s+)?(?P<text>.+)",
    re.IGNORECASE | re.DOTALL,
)

_QUESTION_PHRASE_RE = re.compile(
    r"\b(?:what(?:'?s|\s+is|\s+are)|how\s+(?:does|do|to)|find|search(?:\s+for)?|look\s*up"
    r"|where(?:'?s|\s+is)|tell\s+me\s+(?:about)?|explain|describe)\b\s*",
    re.IGNORECASE,
)
_LEADING_ARTICLE_RE = re.compile(r"^(?:our|the|my|a|an)\s+", re.IGNORECASE)
_TRAILING_QUESTION_RE = re.compile(r"\?+$")

_APPROVAL_VERBS = alternation(APPROVAL_REQUEST_VERBS)
_APPROVAL_LEAD_IN_RE = re.compile(
    rf"\b(?:{_APPROVAL_VERBS})\s+(?:an?\s+)?approval\s*(?:for|to)?\s*", re.IGNORECASE
)
_APPROVAL_NOUN_LEAD_IN_RE = re.compile(r"\bapproval\s*(?:for|to|request)\s*", re.IGNORECASE)
_APPROVAL_CORE_RE = re.compile(rf"^(?:{_APPROVAL_VERBS})\s+(?:an?\s+)?approval\s*", re.IGNORECASE)

_DECISION_ID_RE = re.compile(r"^(?:approve|deny|reject)\s+(?P<id>\S+)", re.IGNORECASE)
_PENDING_RE = re.compile(r"pending", re.IGNORECASE)
_OPEN_STATUS_RE = re.compile(rf"\b(?:{alternation(OPEN_STATUS_WORDS)})\b", re.IGNORECASE)

_REQUEST_LEAD_IN_RES: tuple[re.Pattern[str], ...] = (
    re.compile(
        rf"\b(?:{alternation(REQUEST_CREATE_VERBS)})\s+(?:a\s+)?request\s*(?:for|to)?\s*",
        re.IGNORECASE,
    ),
    re.compile(r"\brequest\s+to\s*", re.IGNORECASE),
    re.compile(r"\b(?:need\s+to|need\s+a|schedule|book|arrange)\s*", re.IGNORECASE),
)


def _first_words(text: str, limit: int = TITLE_WORD_LIMIT) -> str:
    return " ".join(text.split()[:limit])


def extract_knowledge_create(text: str) -> KnowledgeCreatePayload:
    """Extract a title and content for a new knowledge entry.

    Recognized shapes, in order:
        - "store our refund policy: full refund within 30 days" (colon splits title/content)
        - "remember that the office closes at 6pm" (title = first five words of the content)
        - anything else: placeholder title, content = the whole instruction
    """

    colon = _KNOWLEDGE_COLON_RE.search(text)
    if colon:
        return KnowledgeCreatePayload(
            title=colon.group("title").strip(),
            content=colon.group("content").strip(),
        )

    simple = _KNOWLEDGE_SIMPLE_RE.search(text)
    if simple:
        content = simple.group("text").strip()
        if content:
            return KnowledgeCreatePayload(title=_first_words(content), content=content)

    return KnowledgeCreatePayload(title=DEFAULT_KNOWLEDGE_TITLE, content=text)


def extract_search_query(text: str) -> str:
    """Reduce a question to its subject ("what's our escalation protocol?" -> "escalation protocol")."""

    query = _QUESTION_PHRASE_RE.sub("", text)
    query = _LEADING_ARTICLE_RE.sub("", query, count=1)
    query = _TRAILING_QUESTION_RE.sub("", query).strip()

    if len(query) < 2:
        query = _TRAILING_QUESTION_RE.sub("", text).strip()
    return query


def extract_knowledge_search(text: str) -> KnowledgeSearchPayload:
    return KnowledgeSearchPayload(query=extract_search_query(text))


def extract_approval_request(text: str) -> ApprovalRequestPayload:
    """Extract a new approval request: title, optional dollar amount, full description."""

    title = _APPROVAL_LEAD_IN_RE.sub("", text, count=1)
    title = _APPROVAL_NOUN_LEAD_IN_RE.sub("", title, count=1).strip()

    if len(title) < 3:
        title = _APPROVAL_CORE_RE.sub("", text, count=1).strip()

    return ApprovalRequestPayload(
        title=title or DEFAULT_APPROVAL_TITLE,
        description=text,
        amount=parse_amount(text),
    )


def extract_approvals_list(text: str) -> ApprovalsListPayload:
    return ApprovalsListPayload(status="pending" if _PENDING_RE.search(text) else None)


def _decision_id(text: str) -> str:
    match = _DECISION_ID_RE.search(text)
    return match.group("id") if match else ""


def extract_approve_decision(text: str) -> ApprovalsDecidePayload:
    return ApprovalsDecidePayload(id=_decision_id(text), decision="approved")


def extract_deny_decision(text: str) -> ApprovalsDecidePayload:
    return ApprovalsDecidePayload(id=_decision_id(text), decision="denied")


def extract_request_create(text: str) -> RequestCreatePayload:
    """Extract a new request: title without lead-in or urgency words, inferred priority."""

    title = text
    for pattern in _REQUEST_LEAD_IN_RES:
        title = pattern.sub("", title, count=1)

    title = strip_priority_terms(title)
    if len(title) < 3:
        title = text.strip()

    return RequestCreatePayload(title=title, description=text, priority=detect_priority(text))


def extract_requests_list(text: str) -> RequestsListPayload:
    return RequestsListPayload(status="open" if _OPEN_STATUS_RE.search(text) else None)


def extract_nothing(_text: str) -> EmptyPayload:
    return EmptyPayload()
