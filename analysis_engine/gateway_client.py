"""
gateway_client.py
=================
Single chat-completion call to the OpenAI-compatible AI gateway.

  • base_url : LOVABLE_BASE_URL (default https://ai.gateway.lovable.dev/v1)
  • model    : LOVABLE_MODEL    (default google/gemini-2.5-flash)
  • auth     : bearer LOVABLE_API_KEY

Exactly one request is issued per analysis; the SDK's automatic retries are
disabled.  Upstream failures are mapped onto GatewayError subclasses, each
carrying the HTTP status and message the proxy returns to its caller.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

import openai

from analysis_engine.prompts import DEFAULT_BASE_URL, DEFAULT_MODEL, TEMPERATURE, build_messages

logger = logging.getLogger(__name__)

_REQUEST_TIMEOUT = 120.0


# ---------------------------------------------------------------------------
# Error taxonomy
# ---------------------------------------------------------------------------

class GatewayError(RuntimeError):
    """Generic upstream failure."""

    status_code = 500
    message     = "AI analysis failed. Please try again."

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail or self.message)
        self.detail = detail


class GatewayNotConfiguredError(GatewayError):
    message = "AI service not configured"


class GatewayRateLimitError(GatewayError):
    status_code = 429
    message     = "Rate limit exceeded. Please try again in a moment."


class GatewayPaymentRequiredError(GatewayError):
    status_code = 402
    message     = "AI service payment required. Please contact support."


class InvalidGatewayResponseError(GatewayError):
    message = "Invalid AI response"


_STATUS_ERRORS = {
    429: GatewayRateLimitError,
    402: GatewayPaymentRequiredError,
}


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

def _clean_env(name: str, default: str = "") -> str:
    value = os.getenv(name, default)
    return value.strip().strip('"').strip("'")


def get_api_key() -> str:
    return _clean_env("LOVABLE_API_KEY", "")


def get_model() -> str:
    return _clean_env("LOVABLE_MODEL", DEFAULT_MODEL) or DEFAULT_MODEL


def is_configured() -> bool:
    api_key = get_api_key()
    return bool(api_key) and not api_key.startswith("your_")


def _build_client(api_key: str) -> openai.OpenAI:
    return openai.OpenAI(
        base_url    = _clean_env("LOVABLE_BASE_URL", DEFAULT_BASE_URL) or DEFAULT_BASE_URL,
        api_key     = api_key,
        timeout     = _REQUEST_TIMEOUT,
        max_retries = 0,
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def request_analysis(image: str) -> str:
    """
    Send *image* (a data URI or URL) to the gateway with the fixed prompt.

    Returns
    -------
    The model's raw message content.

    Raises
    ------
    GatewayNotConfiguredError   no usable LOVABLE_API_KEY
    GatewayRateLimitError       upstream 429
    GatewayPaymentRequiredError upstream 402
    InvalidGatewayResponseError success status but no message content
    GatewayError                any other upstream or transport failure
    """
    if not is_configured():
        logger.error("LOVABLE_API_KEY is not configured")
        raise GatewayNotConfiguredError()

    client = _build_client(get_api_key())
    model  = get_model()

    logger.info("Sending request to AI gateway (model=%s)…", model)
    try:
        completion = client.chat.completions.create(
            model       = model,
            messages    = build_messages(image),
            temperature = TEMPERATURE,
        )
    except openai.APIStatusError as exc:
        logger.error("AI gateway error: %s %s", exc.status_code, exc.body)
        error_cls = _STATUS_ERRORS.get(exc.status_code, GatewayError)
        raise error_cls(str(exc)) from exc
    except openai.APIError as exc:
        logger.error("AI gateway request failed: %s", exc)
        raise GatewayError(str(exc)) from exc

    logger.info("AI gateway response received")

    content = _extract_content(completion)
    if not content:
        logger.error("No content in AI response")
        raise InvalidGatewayResponseError()

    return content


def _extract_content(completion) -> Optional[str]:
    choices = getattr(completion, "choices", None)
    if not choices:
        return None
    message = getattr(choices[0], "message", None)
    if message is None:
        return None
    return getattr(message, "content", None)
