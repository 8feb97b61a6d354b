"""Shared pytest fixtures."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("HUGGING_FACE_KEY", "test-key")
os.environ.setdefault("ENVIRONMENT", "test")

from sentiment_proxy.config import get_settings  # noqa: E402
from sentiment_proxy.main import create_app  # noqa: E402


@pytest.fixture(autouse=True)
def configure_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure required environment variables are present during tests."""

    monkeypatch.setenv("HUGGING_FACE_KEY", "test-key")
    monkeypatch.setenv("ENVIRONMENT", "test")


class RecordingSleep:
    """Stand-in for ``asyncio.sleep`` that records requested delays."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def app():
    get_settings.cache_clear()
    return create_app()


@pytest.fixture
def positive_payload() -> list[list[dict[str, object]]]:
    return [
        [
            {"label": "POSITIVE", "score": 0.9998},
            {"label": "NEGATIVE", "score": 0.0002},
        ]
    ]
