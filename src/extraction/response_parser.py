"""
Recover a JSON object from raw generator output.

Models are asked for JSON only but regularly wrap it in prose or code fences.
We try a strict parse of the whole text first, then a strict parse of the first
balanced {...} span. Anything else is Unparseable; nothing is guessed.
"""

import json
import logging
from typing import Any, Dict, Optional

from project_planner.errors import Unparseable

logger = logging.getLogger(__name__)


def first_balanced_object(text: str) -> Optional[str]:
    """Return the outermost brace-matched span starting at the first '{', if any.

    Braces inside JSON string literals do not count.
    """
    start = text.find("{")
    if start == -1:
        return None

    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start : i + 1]

    return None


def _loads(candidate: str) -> Optional[Any]:
    try:
        return json.loads(candidate)
    except (json.JSONDecodeError, RecursionError):
        return None


def extract_payload(raw_text: str) -> Dict[str, Any]:
    """Parse generator output into a JSON object or raise Unparseable."""
    text = (raw_text or "").strip()

    parsed = _loads(text) if text else None
    if not isinstance(parsed, dict):
        span = first_balanced_object(text)
        parsed = _loads(span) if span is not None else None
        if isinstance(parsed, dict):
            logger.info("Recovered JSON object embedded in generator output")

    if not isinstance(parsed, dict):
        raise Unparseable(raw_text)

    return parsed
