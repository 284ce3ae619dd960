from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict, List, Union

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
import logging
from pydantic import BaseModel, Field

from agent.agent import ChatSession
from agent.client import GeminiClient
from config.settings import get_settings


logging.basicConfig(level=logging.INFO, format="[%(asctime)s] %(levelname)s - %(message)s")
logger = logging.getLogger("halal_chat")

app = FastAPI(title="Halal Restaurant Chatbot", version="1.0.0")

# CORS: allow local frontend during development
settings = get_settings()
if settings.app_env.lower() in {"dev", "development", "local"}:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


class ChatRequest(BaseModel):
    message: str = Field(..., description="User's latest message")


class TurnOut(BaseModel):
    text: Union[str, List[str]]
    sender: str
    kind: str


class SessionOut(BaseModel):
    turns: List[TurnOut]
    pending: bool


@lru_cache(maxsize=1)
def get_session() -> ChatSession:
    settings = get_settings()
    return ChatSession(GeminiClient(settings), temperature=settings.temperature)


def _snapshot(session: ChatSession) -> Dict[str, Any]:
    return {
        "turns": [turn.model_dump() for turn in session.turns],
        "pending": session.pending,
    }


@app.post("/chat", response_model=SessionOut)
async def chat(req: ChatRequest, session: ChatSession = Depends(get_session)) -> Dict[str, Any]:
    settings = get_settings()
    if not settings.google_api_key:
        raise HTTPException(
            status_code=500,
            detail="Missing GOOGLE_API_KEY in environment or .env",
        )

    logger.info(
        "Incoming chat: message_len=%s turns=%s pending=%s",
        len(req.message),
        len(session.turns),
        session.pending,
    )
    turn = await session.send(req.message)
    if turn is not None:
        logger.info("Bot replied with a %s turn", turn.kind)
    return _snapshot(session)


@app.get("/turns", response_model=SessionOut)
def turns(session: ChatSession = Depends(get_session)) -> Dict[str, Any]:
    return _snapshot(session)


@app.get("/health")
def health():
    return {"status": "ok"}
