"""Currency amount parsing.

Only dollar amounts are recognized: `$` followed by digits with optional thousands separators and
an optional two-digit cents group (`$5000`, `$5,000`, `$1,299.99`).
"""

from __future__ import annotations

import re

_AMOUNT_RE = re.compile(r"\$(?P<digits>[\d,]+(?:\.\d{2})?)")


def parse_amount(text: str) -> float | None:
    """Return the first dollar amount in text, or `None`.

    A `$` followed only by separators (e.g. `$,`) is treated as no amount.
    """

    match = _AMOUNT_RE.search(text or "")
    if not match:
        return None

    digits = match.group("digits").replace(",", "")
    try:
        return float(digits)
    except ValueError:
        return None
