from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from backend.main import create_app


@pytest.fixture(autouse=True)
def gateway_env(monkeypatch):
    monkeypatch.setenv("LOVABLE_API_KEY", "test-key")
    monkeypatch.delenv("LOVABLE_BASE_URL", raising=False)
    monkeypatch.delenv("LOVABLE_MODEL", raising=False)
    monkeypatch.delenv("CORS_ALLOW_ORIGINS", raising=False)


@pytest.fixture
def client():
    with TestClient(create_app()) as c:
        yield c


def make_completion(content):
    """Minimal stand-in for an openai ChatCompletion object."""
    message = SimpleNamespace(content=content)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])
