from __future__ import annotations

import enum
import logging
from typing import Any, List, Optional, Tuple

from agent.client import GeminiClient
from agent.core.errors import ChatError, EmptyInput, UnexpectedFailure
from agent.core.models import ParsedAnswer, RequestPayload, Turn
from agent.core.prompt import SYSTEM_PROMPT
from agent.core.request import DEFAULT_TEMPERATURE, compose_request
from agent.core.response import extract_text, parse_answer
from agent.core.transcript import build_transcript


logger = logging.getLogger("halal_chat")


class SessionState(str, enum.Enum):
    IDLE = "idle"
    AWAITING = "awaiting"


class ChatSession:
    """Owns the turn list of one conversation and drives each round-trip.

    A round-trip is two named transitions: ``submit`` commits the user turn
    and returns the request to send; ``resolve`` or ``fail`` commits the bot
    turn once the call finishes. ``send`` runs both around the network call.
    Only one request may be in flight; submissions while awaiting are ignored.
    """

    def __init__(
        self,
        client: Any = None,
        *,
        system_prompt: str = SYSTEM_PROMPT,
        temperature: float = DEFAULT_TEMPERATURE,
    ) -> None:
        self.client = client if client is not None else GeminiClient()
        self.system_prompt = system_prompt
        self.temperature = temperature
        self.draft = ""
        self._turns: List[Turn] = []
        self._state = SessionState.IDLE

    @property
    def turns(self) -> Tuple[Turn, ...]:
        return tuple(self._turns)

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def pending(self) -> bool:
        return self._state is SessionState.AWAITING

    def update_draft(self, text: str) -> None:
        self.draft = text

    def submit(self, utterance: Optional[str] = None) -> Optional[RequestPayload]:
        if utterance is None:
            utterance = self.draft
        if self.pending:
            logger.warning("Submission ignored: a request is already in flight")
            return None
        try:
            transcript = build_transcript(self._turns, utterance, self.system_prompt)
        except EmptyInput:
            logger.warning("Submission ignored: empty utterance")
            return None

        payload = compose_request(transcript, temperature=self.temperature)
        self._turns.append(Turn(text=transcript[-1].content, sender="user", kind="text"))
        self.draft = ""
        self._state = SessionState.AWAITING
        logger.info(
            "Submitted turn %s (history_turns=%s)",
            len(self._turns),
            len(transcript) - 2,
        )
        return payload

    def resolve(self, answer: ParsedAnswer) -> Turn:
        self._require_awaiting("resolve")
        return self._finish(Turn(text=list(answer.points), sender="bot", kind="list"))

    def fail(self, error: ChatError) -> Turn:
        self._require_awaiting("fail")
        return self._finish(Turn(text=error.user_message, sender="bot", kind="text"))

    async def send(self, utterance: Optional[str] = None) -> Optional[Turn]:
        payload = self.submit(utterance)
        if payload is None:
            return None

        try:
            envelope = await self.client.generate(payload)
            text = extract_text(envelope)
            answer = parse_answer(text)
        except ChatError as exc:
            self._log_failure(exc)
            return self.fail(exc)
        except Exception as exc:
            logger.exception("Conversation pipeline failed unexpectedly")
            return self.fail(UnexpectedFailure(exc))

        logger.info("Model responded with %s points", len(answer.points))
        return self.resolve(answer)

    async def handle_key(self, key: str) -> Optional[Turn]:
        if key != "Enter" or self.pending:
            return None
        return await self.send()

    def _finish(self, turn: Turn) -> Turn:
        self._turns.append(turn)
        self._state = SessionState.IDLE
        return turn

    def _require_awaiting(self, transition: str) -> None:
        if not self.pending:
            raise RuntimeError(f"Cannot {transition} a session with no request in flight")

    @staticmethod
    def _log_failure(exc: ChatError) -> None:
        context = None
        for attr in ("envelope", "text", "payload", "detail"):
            if hasattr(exc, attr):
                context = getattr(exc, attr)
                break
        logger.error("%s: %s | raw=%r", type(exc).__name__, exc, context)
