from __future__ import annotations

import importlib
import random
import sys
from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from assistant_providers import ProviderSettings  # noqa: E402


@pytest.fixture
def backend_module(monkeypatch):
    # Network stages off; provider tests drive them through httpx.MockTransport.
    monkeypatch.setenv("USE_LOCAL_LLM", "false")
    monkeypatch.setenv("USE_HUGGINGFACE", "false")
    monkeypatch.delenv("HUGGINGFACE_API_KEY", raising=False)
    monkeypatch.delenv("USE_RULE_BASED_ONLY", raising=False)
    monkeypatch.delenv("MEDITRACK_CHAT_PROVIDERS", raising=False)

    if "main" in sys.modules:
        module = importlib.reload(sys.modules["main"])
    else:
        module = importlib.import_module("main")
    module.container.engine.composer.rng = random.Random(7)
    return module


@pytest.fixture
def client(backend_module):
    with TestClient(backend_module.app) as test_client:
        yield test_client


@pytest.fixture
def fixed_clock() -> Callable[[int], Callable[[], datetime]]:
    def _make(hour: int) -> Callable[[], datetime]:
        return lambda: datetime(2026, 10, 19, hour, 0, tzinfo=timezone.utc)

    return _make


@pytest.fixture
def make_settings() -> Callable[..., ProviderSettings]:
    def _make(**overrides) -> ProviderSettings:
        values = {
            "local_url": "http://llm.test/api/chat",
            "hosted_base_url": "https://hosted.test",
            "hosted_model": "medical/model",
            "hosted_api_key": "hf_test_key",
            "timeout_seconds": 2.0,
        }
        values.update(overrides)
        return ProviderSettings(**values)

    return _make
