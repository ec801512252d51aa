"""Tests for the rule table in isolation from the dispatch loop."""

from __future__ import annotations

import dataclasses

import pytest

from src.intent.normalize import normalize_text
from src.intent.rules import RULES, Rule
from src.intent.schema import (
    ApprovalRequestPayload,
    ApprovalsDecidePayload,
    ApprovalsListPayload,
    EmptyPayload,
    Intent,
    KnowledgeCreatePayload,
    KnowledgeSearchPayload,
    RequestCreatePayload,
    RequestsListPayload,
)

PAYLOAD_TYPES = {
    Intent.knowledge_create: KnowledgeCreatePayload,
    Intent.knowledge_search: KnowledgeSearchPayload,
    Intent.knowledge_list: EmptyPayload,
    Intent.approvals_request: ApprovalRequestPayload,
    Intent.approvals_list: ApprovalsListPayload,
    Intent.approvals_decide: ApprovalsDecidePayload,
    Intent.requests_create: RequestCreatePayload,
    Intent.requests_list: RequestsListPayload,
    Intent.status: EmptyPayload,
}


def _rule(name: str) -> Rule:
    return next(r for r in RULES if r.name == name)


def test_rule_order() -> None:
    assert [r.name for r in RULES] == [
        "approve_by_id",
        "deny_by_id",
        "approvals_list",
        "approval_request",
        "knowledge_create",
        "knowledge_list",
        "knowledge_search",
        "requests_list",
        "request_create",
        "status",
    ]


def test_every_routable_intent_has_a_rule() -> None:
    assert {r.intent for r in RULES} == set(Intent) - {Intent.unknown}


def test_rules_are_immutable() -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        RULES[0].name = "renamed"  # type: ignore[misc]


@pytest.mark.parametrize(
    ("name", "text"),
    [
        ("approve_by_id", "approve abc123"),
        ("deny_by_id", "deny abc123"),
        ("approvals_list", "show me all pending approvals"),
        ("approval_request", "request approval for $5,000 vendor payment"),
        ("knowledge_create", "store our refund policy: full refund within 30 days"),
        ("knowledge_list", "show all entries"),
        ("knowledge_search", "what's our escalation protocol?"),
        ("requests_list", "show all open requests"),
        ("request_create", "create a request to schedule HVAC inspection"),
        ("status", "status"),
    ],
)
def test_extractor_returns_payload_for_its_intent(name: str, text: str) -> None:
    rule = _rule(name)
    assert rule.matches(normalize_text(text))
    assert isinstance(rule.extract(text), PAYLOAD_TYPES[rule.intent])


@pytest.mark.parametrize(
    "text",
    [
        "approve a request for travel",
        "approve abc123 for payroll",
        "approve invoice-7 if we need it",
        "approve",
    ],
)
def test_approve_decision_exclusions(text: str) -> None:
    assert not _rule("approve_by_id").matches(normalize_text(text))


@pytest.mark.parametrize(
    "text",
    [
        "need approval to hire a contractor",
        "submit an approval for the offsite",
        "approval request for new laptops",
        "approve the conference budget",
    ],
)
def test_approval_request_phrasings(text: str) -> None:
    assert _rule("approval_request").matches(normalize_text(text))


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("remember the wifi password", True),
        ("create a knowledge entry", True),
        ("save this approval template", False),
        ("record the request history", False),
        ("reset the address book", False),
    ],
)
def test_knowledge_create_excludes_workflow_vocabulary(text: str, expected: bool) -> None:
    assert _rule("knowledge_create").matches(normalize_text(text)) is expected


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("how do i reset my password", True),
        ("look up the travel policy", True),
        ("what are pending approvals", False),
        ("find my request", False),
    ],
)
def test_knowledge_search_excludes_workflow_vocabulary(text: str, expected: bool) -> None:
    assert _rule("knowledge_search").matches(normalize_text(text)) is expected


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("schedule a plumber", True),
        ("we need a new projector", True),
        ("need approval for a projector", False),
        ("request to repaint the lobby", True),
        ("open a request", True),
    ],
)
def test_request_create_phrasings(text: str, expected: bool) -> None:
    assert _rule("request_create").matches(normalize_text(text)) is expected


def test_status_requires_leading_keyword() -> None:
    rule = _rule("status")
    assert rule.matches("ping")
    assert not rule.matches("what is the status")
