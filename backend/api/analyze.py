"""
api/analyze.py
==============
POST /api/analyze-skin
----------------------
Accepts a JSON body ``{"image": "<data URI>"}`` and:

  1. Rejects a missing/empty image with 400 (no gateway call is made)
  2. Forwards the image plus the fixed dermatologist prompt to the AI gateway
  3. Maps upstream failures to 402 / 429 / 500 ``{"error": ...}`` responses
  4. Normalises the model reply into ``{disease, causes, summary}``

OPTIONS /api/analyze-skin answers bare preflights with permissive CORS
headers; preflights carrying an Origin are answered by CORSMiddleware.
"""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Optional

from fastapi import APIRouter, Request, Response, status
from fastapi.responses import JSONResponse

from analysis_engine.gateway_client import GatewayError, request_analysis
from analysis_engine.response_parser import has_disclaimer, parse_analysis
from backend.schemas.request import AnalyzeRequest
from backend.schemas.response import AnalysisResponse, ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter()

CORS_ALLOW_HEADERS = ["authorization", "x-client-info", "apikey", "content-type"]


def allowed_origins() -> list:
    raw = os.getenv("CORS_ALLOW_ORIGINS", "*")
    origins = [item.strip() for item in raw.split(",") if item.strip()]
    return origins or ["*"]


def preflight_headers(origin: Optional[str]) -> dict:
    """CORS headers for a bare OPTIONS request, honouring CORS_ALLOW_ORIGINS."""
    headers = {"Access-Control-Allow-Headers": ", ".join(CORS_ALLOW_HEADERS)}
    origins = allowed_origins()
    if "*" in origins:
        headers["Access-Control-Allow-Origin"] = "*"
    elif origin and origin in origins:
        headers["Access-Control-Allow-Origin"] = origin
        headers["Vary"] = "Origin"
    return headers


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code = status_code,
        content     = ErrorResponse(error=message).model_dump(),
    )


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.options("/api/analyze-skin")
async def analyze_skin_preflight(request: Request) -> Response:
    return Response(
        status_code = status.HTTP_200_OK,
        headers     = preflight_headers(request.headers.get("origin")),
    )


@router.post(
    "/api/analyze-skin",
    response_model = AnalysisResponse,
    responses      = {
        400: {"model": ErrorResponse},
        402: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def analyze_skin(payload: AnalyzeRequest):
    """Run one image through the AI gateway and return the normalised result."""
    if not payload.image:
        return error_response(status.HTTP_400_BAD_REQUEST, "No image provided")

    try:
        content = await asyncio.to_thread(request_analysis, payload.image)

        result = parse_analysis(content)
        if not has_disclaimer(result.summary):
            logger.warning("AI summary for '%s' carries no medical disclaimer.", result.disease)

        response = AnalysisResponse(**result.to_dict())
    except GatewayError as exc:
        return error_response(exc.status_code, exc.message)
    except Exception as exc:
        logger.error("Error in analyze-skin: %s", exc, exc_info=True)
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            str(exc) or "Unknown error occurred",
        )

    logger.info("Analysis successful")
    return response
