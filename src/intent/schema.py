"""Intent and payload schema (Pydantic models).

This schema is the contract between the router and whatever layer executes the routed action. Every
extractor returns one of these payload models; the execution layer receives nothing else.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict


class Intent(StrEnum):
    """Closed set of instruction intents.

    Values are the action names the execution layer dispatches on.
    """

    knowledge_create = "knowledge.create"
    knowledge_search = "knowledge.search"
    knowledge_list = "knowledge.list"
    approvals_request = "approvals.request"
    approvals_list = "approvals.list"
    approvals_decide = "approvals.decide"
    requests_create = "requests.create"
    requests_list = "requests.list"
    status = "status"
    unknown = "unknown"


Decision = Literal["approved", "denied"]
Priority = Literal["critical", "high", "medium", "low"]
RouteSource = Literal["rule", "fallback", "unresolved"]


class _Payload(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class EmptyPayload(_Payload):
    """Payload for intents that carry no fields (knowledge listing, status check)."""


class KnowledgeCreatePayload(_Payload):
    title: str
    content: str


class KnowledgeSearchPayload(_Payload):
    query: str


class ApprovalRequestPayload(_Payload):
    """A new approval to submit.

    `description` is always the full instruction; `amount` is only set when a `$` amount was found.
    """

    title: str
    description: str
    amount: float | None = None


class ApprovalsListPayload(_Payload):
    """`status=None` means all statuses."""

    status: Literal["pending"] | None = None


class ApprovalsDecidePayload(_Payload):
    id: str
    decision: Decision


class RequestCreatePayload(_Payload):
    title: str
    description: str
    priority: Priority = "medium"


class RequestsListPayload(_Payload):
    status: Literal["open"] | None = None


Payload = (
    EmptyPayload
    | KnowledgeCreatePayload
    | KnowledgeSearchPayload
    | ApprovalRequestPayload
    | ApprovalsListPayload
    | ApprovalsDecidePayload
    | RequestCreatePayload
    | RequestsListPayload
)


@dataclass(frozen=True)
class RouteResult:
    """Routed intent plus information about which path produced it."""

    intent: Intent
    payload: Payload | None
    source: RouteSource
    rule: str | None = None

    @property
    def resolved(self) -> bool:
        return self.intent != Intent.unknown

    def to_dict(self) -> dict[str, Any]:
        """Render as `{"action": ..., **payload}`, omitting unset optional fields."""

        data: dict[str, Any] = {"action": self.intent.value}
        if self.payload is not None:
            data.update(self.payload.model_dump(exclude_none=True))
        return data


UNRESOLVED = RouteResult(intent=Intent.unknown, payload=None, source="unresolved")
