"""
Recover a JSON object from free-form model output.

Models asked for "ONLY valid JSON" still wrap it in prose, markdown fences
or leave trailing commas behind.  ``extract_json`` repairs what it can:

1. direct parse of the whole (stripped) text;
2. strip ```` ```json ```` / ```` ``` ```` fence markers anywhere in the text;
3. scan for top-level ``{...}`` spans whose braces balance outside string
   literals, and take the first one that parses;
4. an object that never balances (unbalanced quote, truncated answer) is
   tried as one span, from its ``{`` through the last ``}``; objects nested
   inside it are never returned on their own;
5. drop trailing commas before ``}`` / ``]`` prior to each parse.

No ``{...}`` span at all raises ``ExtractionError``; spans that never parse
raise ``MalformedJSONError`` carrying the cleaned text of the first one.
"""

import json
import logging
import re
from typing import Any

from smartppt.core.exceptions import ExtractionError, MalformedJSONError

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?\s*", re.IGNORECASE)


def strip_code_fences(text: str) -> str:
    """Remove every markdown code-fence marker, case-insensitively."""
    return _FENCE_RE.sub("", text)


def _scan_spans(text: str) -> tuple[list[str], int | None]:
    """Split *text* into closed top-level ``{...}`` spans in one pass.

    Returns the closed spans, left to right, and the offset of the first
    ``{`` that never closes (``None`` when every object closes).  Braces
    after that one belong to the broken object and are never spans.
    """
    spans: list[str] = []
    depth = 0
    start = 0
    in_string = False
    escaped = False
    for i, ch in enumerate(text):
        if depth == 0:
            if ch == "{":
                depth, start = 1, i
            continue
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
                spans.append(text[start : i + 1])
    return spans, (start if depth else None)


def _greedy_span(text: str) -> str | None:
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        return None
    return text[start : end + 1]


def strip_trailing_commas(text: str) -> str:
    """Drop commas that directly precede ``}`` or ``]`` outside string literals."""
    out: list[str] = []
    in_string = False
    escaped = False
    length = len(text)
    for i, ch in enumerate(text):
        if in_string:
            out.append(ch)
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == ",":
            j = i + 1
            while j < length and text[j].isspace():
                j += 1
            if j < length and text[j] in "}]":
                continue
        out.append(ch)
    return "".join(out)


def _loads(text: str) -> Any:
    # strict=False tolerates raw newlines inside strings
    return json.loads(text, strict=False)


def extract_json(text: str | None) -> dict[str, Any]:
    """Return the first JSON object recoverable from *text*."""
    stripped = (text or "").strip()

    try:
        direct = _loads(stripped)
    except json.JSONDecodeError:
        direct = None
    if isinstance(direct, dict):
        return direct

    unfenced = strip_code_fences(stripped)
    candidates, open_start = _scan_spans(unfenced)
    if open_start is not None:
        # An object that never closes is parsed whole or not at all.
        greedy = _greedy_span(unfenced[open_start:])
        if greedy is not None:
            candidates.append(greedy)
    if not candidates:
        logger.error("No JSON found in response: %s", stripped[:500])
        raise ExtractionError()

    first_failure: tuple[str, json.JSONDecodeError] | None = None
    for position, candidate in enumerate(candidates, start=1):
        cleaned = strip_trailing_commas(candidate)
        try:
            parsed = _loads(cleaned)
        except json.JSONDecodeError as exc:
            if first_failure is None:
                first_failure = (cleaned, exc)
            continue
        if isinstance(parsed, dict):
            if position > 1:
                logger.debug("Skipped %d unparsable brace span(s) in response", position - 1)
            return parsed

    cleaned, exc = first_failure if first_failure is not None else (candidates[0], None)
    logger.error("JSON parse error: %s. Cleaned JSON: %s", exc, cleaned[:500])
    raise MalformedJSONError(cleaned, str(exc) if exc else "")
