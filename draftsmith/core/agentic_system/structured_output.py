"""
Tolerant decoding of model output.

Models often wrap answers in markdown code fences or add prose around a
JSON object. These helpers strip the fences and decode the object, raising
ParseError instead of leaking a JSONDecodeError.

Dependencies: json (stdlib)
System role: Structured output contract for LLM responses
"""

import json
import re
from typing import Any

from draftsmith.core.exceptions import ParseError

_OPENING_FENCE = re.compile(r"^\s*```[\w+-]*[ \t]*\n?")
_CLOSING_FENCE = re.compile(r"\n?```\s*$")


def strip_fences(text: str) -> str:
    """
    Remove a surrounding ``` / ```latex / ```json fence if present.

    Args:
        text: Raw model output

    Returns:
        str: Inner text, stripped of surrounding whitespace
    """
    stripped = text.strip()
    if stripped.startswith("```"):
        stripped = _OPENING_FENCE.sub("", stripped, count=1)
        stripped = _CLOSING_FENCE.sub("", stripped, count=1)
    return stripped.strip()


def parse_json_object(text: str) -> dict[str, Any]:
    """
    Decode a JSON object from model output.

    Tries the fence-stripped text first, then the span from the first "{"
    to the last "}".

    Args:
        text: Raw model output

    Returns:
        dict: Decoded object

    Raises:
        ParseError: No decodable JSON object found
    """
    candidate = strip_fences(text)
    try:
        data = json.loads(candidate)
    except json.JSONDecodeError:
        start, end = candidate.find("{"), candidate.rfind("}")
        if start == -1 or end <= start:
            raise ParseError("No JSON object found in model output", raw_output=text)
        try:
            data = json.loads(candidate[start:end + 1])
        except json.JSONDecodeError as e:
            raise ParseError(f"Invalid JSON in model output: {e.msg}", raw_output=text) from e

    if not isinstance(data, dict):
        raise ParseError(
            f"Expected a JSON object, got {type(data).__name__}",
            raw_output=text,
        )
    return data
