"""
main.py
=======
FastAPI application entry point for DermaDict AI.

Run locally:
  uvicorn backend.main:app --reload --port 8000

The app holds no state between requests; the lifespan handler only reports
whether the AI gateway credential is present.
"""

from __future__ import annotations

import logging
import os
import sys
from contextlib import asynccontextmanager

from dotenv import load_dotenv  # type: ignore
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

# Load .env from project root (one level above this file's package)
load_dotenv(os.path.join(os.path.dirname(__file__), "..", ".env"))

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from analysis_engine.gateway_client import get_model, is_configured
from backend.api.analyze import (
    CORS_ALLOW_HEADERS,
    allowed_origins,
    error_response,
    router as analyze_router,
)
from backend.api.health import API_VERSION, router as health_router

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Lifespan: startup / shutdown
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("DermaDict backend starting up…")

    if is_configured():
        logger.info("AI gateway configured (model=%s). Ready.", get_model())
    else:
        logger.error("LOVABLE_API_KEY is not configured; analyses will fail until it is set.")

    yield

    logger.info("DermaDict backend shutting down.")


# ---------------------------------------------------------------------------
# Error handlers
# ---------------------------------------------------------------------------

async def _validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning("Rejected malformed request to %s: %s", request.url.path, exc.errors())
    return error_response(status.HTTP_400_BAD_REQUEST, "Invalid request body")


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------

def create_app() -> FastAPI:
    app = FastAPI(
        title       = "DermaDict AI API",
        description = (
            "Skin image analysis proxy: forwards an uploaded photo to a "
            "multimodal AI model and returns the condition, causes and summary."
        ),
        version     = API_VERSION,
        docs_url    = "/docs",
        redoc_url   = "/redoc",
        lifespan    = lifespan,
    )

    # ── CORS ──────────────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins = allowed_origins(),
        allow_methods = ["GET", "POST", "OPTIONS"],
        allow_headers = CORS_ALLOW_HEADERS,
    )

    # ── Errors ────────────────────────────────────────────────────────────
    app.add_exception_handler(RequestValidationError, _validation_error_handler)

    # ── Routers ───────────────────────────────────────────────────────────
    app.include_router(health_router)
    app.include_router(analyze_router)

    return app


app = create_app()
