"""
proxy_client.py
===============
HTTP client for the analysis proxy used by the Streamlit viewer.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

import requests

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:8000"
ANALYZE_PATH    = "/api/analyze-skin"
_TIMEOUT        = 130


class AnalysisRequestError(RuntimeError):
    """The proxy call raised or answered with an error status."""


@dataclass(frozen=True)
class Analysis:
    disease: str
    causes: str
    summary: str


def default_api_url() -> str:
    return os.getenv("DERMADICT_API_URL", DEFAULT_API_URL).strip().rstrip("/")


class ProxyClient:
    def __init__(self, base_url: str = "", timeout: float = _TIMEOUT):
        self.base_url = (base_url or default_api_url()).rstrip("/")
        self.timeout  = timeout

    def analyze(self, image: str) -> Analysis:
        url = f"{self.base_url}{ANALYZE_PATH}"
        try:
            r = requests.post(url, json={"image": image}, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.error("Analysis request to %s failed: %s", url, exc)
            raise AnalysisRequestError(str(exc)) from exc

        try:
            body = r.json()
        except ValueError:
            body = {}

        if not r.ok:
            message = body.get("error") if isinstance(body, dict) else None
            logger.error("Analysis proxy returned %s: %s", r.status_code, message)
            raise AnalysisRequestError(message or f"HTTP {r.status_code}")

        try:
            return Analysis(
                disease = body["disease"],
                causes  = body["causes"],
                summary = body["summary"],
            )
        except (KeyError, TypeError) as exc:
            raise AnalysisRequestError("Malformed analysis response") from exc
