"""
Duration parsing for free-form deliverable lengths.

Accepted shapes, in order of precedence:
  - "M:SS"                       → minutes:seconds
  - "2 min", "45 seg", "1m30s"   → unit tokens, each optional
  - "90"                         → a bare integer is seconds
Anything else normalizes to a zero duration; deciding whether zero is
acceptable is the caller's job.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from fukuro_quote.models.schemas import Duration

logger = logging.getLogger(__name__)

_COLON_PATTERN = re.compile(r"^\s*(\d+)\s*:\s*(\d+)\s*$")
_MINUTES_PATTERN = re.compile(
    r"(\d+(?:[.,]\d+)?)\s*(?:minutos?|minutes?|mins?|m)(?![a-z])",
    re.IGNORECASE,
)
_SECONDS_PATTERN = re.compile(
    r"(\d+(?:[.,]\d+)?)\s*(?:segundos?|seconds?|secs?|segs?|s)(?![a-z])",
    re.IGNORECASE,
)
_BARE_INTEGER_PATTERN = re.compile(r"\d+")


def _to_number(token: str) -> float:
    return float(token.replace(",", "."))


def parse_duration(text: Optional[str]) -> Duration:
    """Normalize a duration expression into a Duration. Never raises."""
    if text is None:
        return Duration()
    text = str(text).strip()
    if not text:
        return Duration()

    colon = _COLON_PATTERN.match(text)
    if colon:
        return Duration.from_parts(int(colon.group(1)), int(colon.group(2)))

    minutes_match = _MINUTES_PATTERN.search(text)
    seconds_match = _SECONDS_PATTERN.search(text)
    if minutes_match or seconds_match:
        minutes = _to_number(minutes_match.group(1)) if minutes_match else 0
        seconds = _to_number(seconds_match.group(1)) if seconds_match else 0
        return Duration.from_parts(minutes, seconds)

    bare = _BARE_INTEGER_PATTERN.search(text)
    if bare:
        return Duration.from_parts(0, int(bare.group(0)))

    logger.debug(f"[DURATION] Unparseable duration {text!r}, using 0")
    return Duration()
