from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from agent.core.errors import TransportError
from agent.core.models import RequestPayload
from config.settings import Settings, get_settings


logger = logging.getLogger("halal_chat")


class GeminiClient:
    """Single-attempt POST to the generateContent endpoint."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._transport = transport

    async def generate(self, payload: RequestPayload) -> Dict[str, Any]:
        settings = self.settings
        if not settings.google_api_key:
            raise TransportError("GOOGLE_API_KEY not configured")

        logger.info(
            "Calling Gemini: model=%s messages=%s",
            settings.gemini_model,
            len(payload.messages),
        )
        try:
            async with httpx.AsyncClient(
                timeout=settings.request_timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    settings.generate_url,
                    params={"key": settings.google_api_key},
                    json=payload.to_wire(),
                )
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as exc:
            raise TransportError(
                exc.response.text[:500], status_code=exc.response.status_code
            ) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise TransportError(str(exc) or type(exc).__name__) from exc
        except ValueError as exc:
            # body was not JSON
            raise TransportError(f"unreadable response body: {exc}") from exc
        except RecursionError as exc:
            raise TransportError("response body nested too deeply") from exc
