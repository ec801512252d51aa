"""Command handlers for the `run` and `rules` commands.

Hard contract: an instruction either prints exactly one routed action, or prints
`Could not understand: "<instruction>"` with usage help and returns a non-zero exit code. Nothing
is executed here; the routed action is handed to whatever consumes the output.
"""

from __future__ import annotations

import json
import logging
from time import monotonic

import click

from src.config.settings import Settings
from src.intent.router import UnresolvedInstructionError, require_intent
from src.intent.rules import RULES
from src.intent.schema import RouteResult

logger = logging.getLogger(__name__)

RUN_HELP = """
Usage: instruction-router run "<natural language instruction>"

Examples:
  # Knowledge
  instruction-router run "store our refund policy: full refund within 30 days"
  instruction-router run "what's our escalation protocol?"

  # Approvals
  instruction-router run "request approval for $5000 vendor payment"
  instruction-router run "show me all pending approvals"

  # Requests
  instruction-router run "create a request to schedule HVAC inspection"
  instruction-router run "show all open requests"

  # Status
  instruction-router run "status"
"""


def _render_text(result: RouteResult) -> str:
    data = result.to_dict()
    lines = [click.style(str(data.pop("action")), fg="yellow", bold=True)]
    for key, value in data.items():
        lines.append(f"  {click.style(key + ':', dim=True)} {value}")
    return "\n".join(lines)


def handle_run(instruction: str, *, settings: Settings, as_json: bool = False) -> int:
    """Route one instruction and print the resulting action. Returns the process exit code."""

    started = monotonic()
    text = (instruction or "").strip()
    if not text:
        click.secho("Please provide an instruction.", fg="red", err=True)
        click.echo(RUN_HELP, err=True)
        return 1

    try:
        result = require_intent(text, short_input_threshold=settings.short_input_threshold)
    except UnresolvedInstructionError as exc:
        latency_ms = int((monotonic() - started) * 1000)
        logger.info("unresolved length=%d latency_ms=%d", len(text), latency_ms)
        click.secho(str(exc), fg="red", err=True)
        click.echo(RUN_HELP, err=True)
        return 1

    if as_json:
        click.echo(json.dumps(result.to_dict(), separators=(",", ":")))
    else:
        click.echo(_render_text(result))

    latency_ms = int((monotonic() - started) * 1000)
    logger.info(
        "handled source=%s rule=%s action=%s latency_ms=%d",
        result.source,
        result.rule,
        result.intent,
        latency_ms,
    )
    return 0


def handle_rules() -> None:
    """Print the rule table in priority order."""

    for position, rule in enumerate(RULES, start=1):
        click.echo(f"{position:>2}. {rule.name:<18} {rule.intent}")
