from __future__ import annotations

import copy
from typing import Any, Dict, Sequence

from agent.core.models import RequestPayload, TranscriptEntry


DEFAULT_TEMPERATURE = 0.7

# Sent as a hint to the model; parse_answer is what enforces the shape.
OUTPUT_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "points": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
        }
    },
    "required": ["points"],
}


def compose_request(
    transcript: Sequence[TranscriptEntry],
    temperature: float = DEFAULT_TEMPERATURE,
) -> RequestPayload:
    if not transcript:
        raise ValueError("Cannot compose a request from an empty transcript")
    return RequestPayload(
        messages=list(transcript),
        temperature=temperature,
        output_schema=copy.deepcopy(OUTPUT_SCHEMA),
    )
