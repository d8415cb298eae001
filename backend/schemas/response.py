"""
schemas/response.py
===================
Pydantic v2 models for the proxy's JSON output.

A successful analysis always serialises to exactly three string fields;
every non-200 response carries an ``error`` message.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator


def _utc_now() -> str:
    return datetime.now(UTC).isoformat(timespec="seconds").replace("+00:00", "Z")


class AnalysisResponse(BaseModel):
    disease: str
    causes: str
    summary: str


class HealthResponse(BaseModel):
    status: str = "ok"
    gateway_configured: bool
    model: str
    api_version: str


# ---------------------------------------------------------------------------
# Error response
# ---------------------------------------------------------------------------

class ErrorResponse(BaseModel):
    error: str
    timestamp: str = Field(default_factory=_utc_now)

    @field_validator("timestamp", mode="before")
    @classmethod
    def _ensure_utc_string(cls, v: Any) -> str:
        if isinstance(v, datetime):
            return v.astimezone(UTC).isoformat(timespec="seconds").replace("+00:00", "Z")
        return str(v)
