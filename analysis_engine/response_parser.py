"""
response_parser.py
==================
Turns the model's free-text reply into the three-field analysis structure.

The model is asked for strict JSON but frequently wraps it in a markdown
code fence (```json ... ```).  parse_analysis() strips the fence, parses the
remainder strictly, and falls back to a canned structure holding the raw
reply when that fails, so callers always receive all three fields.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import asdict, dataclass
from typing import Dict

logger = logging.getLogger(__name__)

FALLBACK_DISEASE = "Analysis Result"
FALLBACK_CAUSES  = "Could not parse detailed causes from AI response."

RESULT_FIELDS = ("disease", "causes", "summary")

_FENCE_RE = re.compile(r"```json\n?|\n?```", re.IGNORECASE)

# Phrases the system prompt's disclaimer instruction tends to produce
_DISCLAIMER_MARKERS = (
    "disclaimer",
    "not a substitute",
    "professional medical advice",
    "consult a dermatologist",
    "consult a healthcare",
    "consult a doctor",
)


@dataclass(frozen=True)
class AnalysisResult:
    disease: str
    causes: str
    summary: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


def strip_code_fences(content: str) -> str:
    """Remove ```json / ``` fence markers and surrounding whitespace."""
    return _FENCE_RE.sub("", content).strip()


def fallback_result(content: str) -> AnalysisResult:
    return AnalysisResult(
        disease = FALLBACK_DISEASE,
        causes  = FALLBACK_CAUSES,
        summary = content,
    )


def parse_analysis(content: str) -> AnalysisResult:
    """
    Parse a model reply into an AnalysisResult.

    Parameters
    ----------
    content : raw message content returned by the gateway

    Returns
    -------
    The reply's ``disease`` / ``causes`` / ``summary`` values unchanged when the
    (fence-stripped) reply is a JSON object with string values for all three
    keys; otherwise the fallback structure with *content* as the summary.
    """
    cleaned = strip_code_fences(content)

    # RecursionError: pathologically nested arrays/objects
    try:
        data = json.loads(cleaned)
    except (ValueError, RecursionError) as exc:
        logger.error("Failed to parse AI response as JSON: %s", exc)
        return fallback_result(content)

    if not isinstance(data, dict):
        logger.error("AI response JSON is a %s, not an object.", type(data).__name__)
        return fallback_result(content)

    missing = [key for key in RESULT_FIELDS if not isinstance(data.get(key), str)]
    if missing:
        logger.error("AI response JSON lacks string fields: %s", ", ".join(missing))
        return fallback_result(content)

    return AnalysisResult(
        disease = data["disease"],
        causes  = data["causes"],
        summary = data["summary"],
    )


def has_disclaimer(text: str) -> bool:
    """True when *text* contains recognisable medical-disclaimer wording."""
    lowered = text.lower()
    return any(marker in lowered for marker in _DISCLAIMER_MARKERS)
