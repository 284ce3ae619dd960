"""Pytest configuration and fixtures.

Provides environment isolation and the fake Gemini client. Fixtures here are
autouse unless noted.
"""

from __future__ import annotations

from contextlib import suppress
import logging
import os

import pytest

from config.settings import get_settings
from tests.helpers import FakeClient


@pytest.fixture
def fake_client() -> FakeClient:
    """Fresh client double (not autouse)."""
    return FakeClient()


# =============================================================================
# Environment Isolation (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def block_dotenv(request, monkeypatch):
    """Prevent python-dotenv from loading project .env files during tests.

    Opt-out: @pytest.mark.allow_dotenv
    """
    if request.node.get_closest_marker("allow_dotenv"):
        return
    with suppress(Exception):
        monkeypatch.setattr(
            "dotenv.load_dotenv", lambda *_args, **_kwargs: False, raising=False
        )


@pytest.fixture(autouse=True)
def isolate_env(monkeypatch):
    """Clear Gemini-related env vars and the cached settings for each test."""
    for key in list(os.environ.keys()):
        if key.startswith(("GEMINI_", "GOOGLE_")) or key in {
            "APP_ENV",
            "MODEL_TEMPERATURE",
            "REQUEST_TIMEOUT",
        }:
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(scope="session", autouse=True)
def quiet_noisy_libraries():
    """Suppress noisy third-party loggers."""
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
