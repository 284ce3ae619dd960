"""Reading the model's answer out of a generateContent response.

Two steps, each with its own failure kind:

- ``extract_text`` walks ``candidates[0].content.parts[0].text`` and removes
  the markdown code fence the model sometimes wraps around its JSON.
- ``parse_answer`` decodes that text and checks it holds a non-empty
  ``points`` array of strings.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import ValidationError

from agent.core.errors import InvalidJSON, MalformedEnvelope, SchemaMismatch
from agent.core.models import ParsedAnswer


FENCE = "```"


def strip_fences(text: str) -> str:
    if text.startswith(FENCE):
        _opening, newline, rest = text.partition("\n")
        if newline:
            text = rest
    trimmed = text.rstrip()
    if trimmed.endswith(FENCE):
        text = trimmed[: -len(FENCE)]
    return text


def extract_text(envelope: Any) -> str:
    if not isinstance(envelope, dict):
        raise MalformedEnvelope(envelope, "envelope is not a JSON object")

    candidates = envelope.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        raise MalformedEnvelope(envelope, "no candidates")

    content = candidates[0].get("content") if isinstance(candidates[0], dict) else None
    if not isinstance(content, dict):
        raise MalformedEnvelope(envelope, "first candidate has no content")

    parts = content.get("parts")
    if not isinstance(parts, list) or not parts:
        raise MalformedEnvelope(envelope, "content has no parts")

    text = parts[0].get("text") if isinstance(parts[0], dict) else None
    if not isinstance(text, str):
        raise MalformedEnvelope(envelope, "first part has no text")

    return strip_fences(text)


def parse_answer(text: str) -> ParsedAnswer:
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, RecursionError) as exc:
        raise InvalidJSON(text, str(exc)) from exc

    if not isinstance(data, dict):
        raise SchemaMismatch(data, f"expected an object, got {type(data).__name__}")
    if "points" not in data:
        raise SchemaMismatch(data, "missing 'points'")

    try:
        return ParsedAnswer.model_validate(data)
    except ValidationError as exc:
        reason = "; ".join(err["msg"] for err in exc.errors())
        raise SchemaMismatch(data, reason) from exc
