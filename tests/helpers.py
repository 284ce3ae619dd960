"""Shared test doubles and envelope builders."""

from __future__ import annotations

from dataclasses import dataclass, field
import json
from typing import Any, Dict, List, Optional

from agent.core.models import RequestPayload


def make_envelope(text: str) -> Dict[str, Any]:
    """Wrap model text in a generateContent response envelope."""
    return {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}


def points_envelope(*points: str) -> Dict[str, Any]:
    return make_envelope(json.dumps({"points": list(points)}))


@dataclass
class FakeClient:
    """Client double returning queued envelopes (or raising queued errors).

    Pass ``gate`` to hold every call until the event is set.
    """

    responses: List[Any] = field(default_factory=list)
    payloads: List[RequestPayload] = field(default_factory=list)
    gate: Any = None

    async def generate(self, payload: RequestPayload) -> Dict[str, Any]:
        self.payloads.append(payload)
        if self.gate is not None:
            await self.gate.wait()
        outcome = self.responses.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    @property
    def last_payload(self) -> Optional[RequestPayload]:
        return self.payloads[-1] if self.payloads else None
