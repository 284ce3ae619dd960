from __future__ import annotations

from typing import List, Sequence

from agent.core.errors import EmptyInput
from agent.core.models import TranscriptEntry, Turn
from agent.core.prompt import SYSTEM_PROMPT


BULLET = "- "


def project_turn_text(turn: Turn) -> str:
    """Flatten a turn to the string replayed to the model.

    Bullet lists are newline-joined with a leading ``- `` per point.
    """
    if isinstance(turn.text, list):
        return "\n".join(f"{BULLET}{point}" for point in turn.text)
    return turn.text


def build_transcript(
    turns: Sequence[Turn],
    utterance: str,
    system_prompt: str = SYSTEM_PROMPT,
) -> List[TranscriptEntry]:
    cleaned = (utterance or "").strip()
    if not cleaned:
        raise EmptyInput()

    messages: List[TranscriptEntry] = [TranscriptEntry(role="system", content=system_prompt)]
    for turn in turns:
        role = "user" if turn.sender == "user" else "model"
        messages.append(TranscriptEntry(role=role, content=project_turn_text(turn)))
    messages.append(TranscriptEntry(role="user", content=cleaned))
    return messages
