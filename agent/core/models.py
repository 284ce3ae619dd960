from __future__ import annotations

from typing import Any, Dict, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, StrictStr, model_validator


class Turn(BaseModel):
    """One message shown in the conversation."""

    model_config = ConfigDict(frozen=True)

    text: Union[StrictStr, List[StrictStr]]
    sender: Literal["user", "bot"]
    kind: Literal["text", "list"] = "text"

    @model_validator(mode="after")
    def _check_kind(self) -> "Turn":
        if self.kind == "list":
            if not isinstance(self.text, list) or not self.text:
                raise ValueError("list turns need a non-empty list of strings")
        elif not isinstance(self.text, str):
            raise ValueError("text turns need a single string")
        return self


class TranscriptEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Literal["system", "user", "model"]
    content: str


class RequestPayload(BaseModel):
    messages: List[TranscriptEntry]
    temperature: float
    output_schema: Dict[str, Any]

    def to_wire(self) -> Dict[str, Any]:
        """Render the generateContent request body.

        ``contents`` only accepts the user and model roles, so the system
        entry travels as a leading user message.
        """
        contents = [
            {
                "role": "model" if entry.role == "model" else "user",
                "parts": [{"text": entry.content}],
            }
            for entry in self.messages
        ]
        return {
            "contents": contents,
            "generationConfig": {
                "temperature": self.temperature,
                "responseMimeType": "application/json",
                "responseSchema": self.output_schema,
            },
        }


class ParsedAnswer(BaseModel):
    points: List[StrictStr] = Field(..., min_length=1)
