"""Instruction dispatcher: rule table first, then the short-input/question fallback."""

from __future__ import annotations

import logging

from src.intent.extractors import extract_knowledge_search
from src.intent.normalize import normalize_text
from src.intent.rules import RULES, Rule
from src.intent.schema import UNRESOLVED, Intent, RouteResult

logger = logging.getLogger(__name__)

# Unmatched instructions shorter than this are treated as knowledge searches.
SHORT_INPUT_THRESHOLD = 80


class UnresolvedInstructionError(ValueError):
    """Raised by `require_intent` when no rule or fallback applies to an instruction."""


def _falls_back_to_search(text: str, threshold: int) -> bool:
    return text.endswith("?") or len(text) < threshold


def route(
        text: str,
        *,
        short_input_threshold: int = SHORT_INPUT_THRESHOLD,
        rules: tuple[Rule, ...] = RULES,
) -> RouteResult:
    """Route an instruction to an intent and payload.

    Strategy:
        1) Try each rule in order; the first matching predicate decides the intent.
        2) If nothing matches, treat questions ("...?") and short inputs as a knowledge search.
        3) Otherwise return `UNRESOLVED`.

    Never raises for string input; "no intent found" is the `UNRESOLVED` result.
    """

    raw = (text or "").strip()
    normalized = normalize_text(raw)
    if not normalized.rstrip("?"):
        # Nothing but question marks leaves no subject to search for.
        logger.debug("unresolved reason=empty")
        return UNRESOLVED

    for rule in rules:
        if rule.matches(normalized):
            logger.debug("matched rule=%s intent=%s", rule.name, rule.intent)
            return RouteResult(
                intent=rule.intent,
                payload=rule.extract(raw),
                source="rule",
                rule=rule.name,
            )

    if _falls_back_to_search(raw, short_input_threshold):
        logger.debug("fallback intent=%s length=%d", Intent.knowledge_search, len(raw))
        return RouteResult(
            intent=Intent.knowledge_search,
            payload=extract_knowledge_search(raw),
            source="fallback",
        )

    logger.debug("unresolved reason=no_match length=%d", len(raw))
    return UNRESOLVED


def require_intent(text: str, *, short_input_threshold: int = SHORT_INPUT_THRESHOLD) -> RouteResult:
    """Route an instruction, raising when it cannot be understood.

    Raises:
        UnresolvedInstructionError: If routing ends in the unresolved state.
    """

    result = route(text, short_input_threshold=short_input_threshold)
    if not result.resolved:
        raise UnresolvedInstructionError(f'Could not understand: "{(text or "").strip()}"')
    return result
