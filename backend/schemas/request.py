"""
schemas/request.py
==================
Body accepted by POST /api/analyze-skin.

``image`` is optional at the schema level so that a missing image is answered
with the proxy's own 400 message instead of a generic validation error.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class AnalyzeRequest(BaseModel):
    image: Optional[str] = Field(
        None, description="Encoded image, e.g. data:image/png;base64,…"
    )
