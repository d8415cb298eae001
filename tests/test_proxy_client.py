import pytest
import requests

from viewer import proxy_client
from viewer.proxy_client import Analysis, AnalysisRequestError, ProxyClient

IMAGE = "data:image/png;base64,AAAA"


class FakeResponse:
    def __init__(self, status_code, body=None):
        self.status_code = status_code
        self._body = body

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._body is None:
            raise ValueError("no json")
        return self._body


@pytest.fixture
def post(monkeypatch):
    calls = []
    state = {"response": None, "error": None}

    def fake_post(url, json=None, timeout=None):
        calls.append({"url": url, "json": json, "timeout": timeout})
        if state["error"] is not None:
            raise state["error"]
        return state["response"]

    monkeypatch.setattr(proxy_client.requests, "post", fake_post)
    state["calls"] = calls
    return state


def test_analyze_posts_image_and_returns_analysis(post):
    post["response"] = FakeResponse(200, {"disease": "Eczema", "causes": "Dry skin", "summary": "Mild"})

    result = ProxyClient("http://api.test/").analyze(IMAGE)

    assert result == Analysis(disease="Eczema", causes="Dry skin", summary="Mild")
    assert post["calls"][0]["url"] == "http://api.test/api/analyze-skin"
    assert post["calls"][0]["json"] == {"image": IMAGE}


def test_base_url_defaults_to_environment(monkeypatch):
    monkeypatch.setenv("DERMADICT_API_URL", "http://proxy.internal:9000/")

    assert ProxyClient().base_url == "http://proxy.internal:9000"


def test_error_status_raises_with_proxy_message(post):
    post["response"] = FakeResponse(429, {"error": "Rate limit exceeded. Please try again in a moment."})

    with pytest.raises(AnalysisRequestError, match="Rate limit exceeded"):
        ProxyClient("http://api.test").analyze(IMAGE)


def test_error_status_without_json_body(post):
    post["response"] = FakeResponse(502)

    with pytest.raises(AnalysisRequestError, match="HTTP 502"):
        ProxyClient("http://api.test").analyze(IMAGE)


def test_transport_failure_raises(post):
    post["error"] = requests.ConnectionError("refused")

    with pytest.raises(AnalysisRequestError, match="refused"):
        ProxyClient("http://api.test").analyze(IMAGE)


def test_malformed_success_body_raises(post):
    post["response"] = FakeResponse(200, {"disease": "Eczema"})

    with pytest.raises(AnalysisRequestError):
        ProxyClient("http://api.test").analyze(IMAGE)
