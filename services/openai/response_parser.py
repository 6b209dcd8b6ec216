"""Helpers to parse Responses API outputs."""

import json
import re
from typing import Any, Dict, Optional

from pydantic import ValidationError

from models.vision_models import (
    ClassificationEmpty,
    ClassificationOk,
    ClassificationOutcome,
    ClassificationParseError,
    ClassificationResult,
)
from utils.errors import ResponseFormatError

# One opening fence line (optionally tagged with a language) and one closing fence line.
_LEADING_FENCE = re.compile(r"\A`{3,}[^\n`]*\n")
_TRAILING_FENCE = re.compile(r"(?:\A|(?<=\n))`{3,}\s*\Z")


def extract_function_arguments(response: Any, *, tool_name: str) -> Optional[str]:
    """Return the raw arguments string of the named function call, or None when absent."""
    for item in getattr(response, "output", None) or []:
        if getattr(item, "type", None) == "function_call" and getattr(item, "name", None) == tool_name:
            arguments = getattr(item, "arguments", None)
            return arguments if arguments and arguments.strip() else None
    return None


def extract_output_text(response: Any) -> Optional[str]:
    """Pull the aggregated text out of a Responses API result."""
    text = getattr(response, "output_text", None)
    if text:
        return text

    parts = []
    for item in getattr(response, "output", None) or []:
        if getattr(item, "type", None) != "message":
            continue
        for content in getattr(item, "content", None) or []:
            if getattr(content, "type", None) == "output_text":
                parts.append(getattr(content, "text", "") or "")
    joined = "".join(parts)
    return joined or None


def extract_usage(response: Any) -> Dict[str, Optional[int]]:
    """Return token usage information from the response, if present."""
    usage = getattr(response, "usage", None)
    return {
        "input_tokens": getattr(usage, "input_tokens", None) if usage else None,
        "output_tokens": getattr(usage, "output_tokens", None) if usage else None,
    }


def parse_classification(arguments: Optional[str]) -> ClassificationOutcome:
    """Turn the classification tool arguments into a tagged outcome.

    Missing content is reported as `ClassificationEmpty`, which callers must
    keep apart from both success and failure. Parsing is pure, so identical
    input always yields an equal outcome.
    """
    if arguments is None or not arguments.strip():
        return ClassificationEmpty()

    try:
        data = json.loads(arguments)
    except json.JSONDecodeError as exc:
        return ClassificationParseError(ResponseFormatError(f"Classification output is not valid JSON: {exc.msg}"))

    if not isinstance(data, dict):
        return ClassificationParseError(ResponseFormatError("Classification output is not a JSON object."))

    try:
        return ClassificationOk(ClassificationResult.model_validate(data))
    except ValidationError as exc:
        return ClassificationParseError(
            ResponseFormatError(f"Classification output has an unexpected shape ({exc.error_count()} errors).")
        )


def strip_code_fences(text: str) -> str:
    """Remove a markdown fence wrapped around generated code.

    At most one leading fence line (```` ```python ```` and similar) and one
    trailing fence line are removed; backticks at the end of a code line are
    kept. Text without fences is returned unchanged, so stripping a singly
    wrapped block twice equals stripping it once. Stacked fences lose only
    their outermost markers per call.
    """
    text = _LEADING_FENCE.sub("", text, count=1)
    return _TRAILING_FENCE.sub("", text, count=1)
