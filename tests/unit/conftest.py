"""Pytest fixtures for unit and API tests."""

import copy
import json
from contextlib import ExitStack
from typing import Optional

import pytest
from fastapi.testclient import TestClient

from fairytale.api.config import Settings, get_settings
from fairytale.api.dependencies import get_gateway, get_rate_limiter
from fairytale.api.main import app
from fairytale.core.rate_limit import SlidingWindowRateLimiter

VALID_BOOK = {
    "bookTitle": "Мария и морската звезда",
    "shortDescription": "Смелостта расте, когато я споделим.",
    "motivationEnd": "Всяко приключение започва с едно любопитно сърце.",
    "scenes": [
        {"text": "Една слънчева сутрин Мария тичаше по брега на морето."},
        {"text": "И тогава се случи нещо вълшебно…"},
    ],
}


def _fenced(payload) -> str:
    return f"Ето вашата приказка:\n```json\n{json.dumps(payload, ensure_ascii=False)}\n```"


class StubGateway:
    """Deterministic stand-in for the generation backend."""

    def __init__(self, response: Optional[str] = None, error: Optional[Exception] = None):
        self.response = response
        self.error = error
        self.calls = []

    async def generate(self, prompt: str, model: str, credential: str) -> str:
        self.calls.append({"prompt": prompt, "model": model, "credential": credential})
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def valid_book():
    """A book the extractor accepts."""
    return copy.deepcopy(VALID_BOOK)


@pytest.fixture
def fence():
    """Wrap a payload in a ```json fence, the way the model usually answers."""
    return _fenced


@pytest.fixture
def valid_body():
    """A request body that passes validation."""
    return {"name": "Мария", "age": 5, "gender": "girl", "topic": "море"}


@pytest.fixture
def test_settings():
    """Settings with a backend credential and permissive CORS."""
    return Settings(gemini_api_key="test-gemini-key", log_json=False)


@pytest.fixture
def make_gateway():
    """Factory for stub gateways."""
    return StubGateway


@pytest.fixture
def stub_gateway(valid_book):
    """Gateway answering with a fenced valid book."""
    return StubGateway(response=_fenced(valid_book))


@pytest.fixture
def make_client(test_settings, stub_gateway):
    """Factory for a TestClient with overridden settings, gateway and rate limiter."""
    with ExitStack() as stack:

        def _make(
            settings: Optional[Settings] = None,
            gateway=None,
            rate_limiter: Optional[SlidingWindowRateLimiter] = None,
        ) -> TestClient:
            active_settings = settings or test_settings
            active_gateway = gateway or stub_gateway
            app.dependency_overrides[get_settings] = lambda: active_settings
            app.dependency_overrides[get_gateway] = lambda: active_gateway
            app.dependency_overrides[get_rate_limiter] = lambda: rate_limiter
            return stack.enter_context(TestClient(app))

        yield _make

    app.dependency_overrides.clear()


@pytest.fixture
def client(make_client):
    """TestClient with default test settings and the stub gateway."""
    return make_client()
