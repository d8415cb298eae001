# backend/schemas/__init__.py
from backend.schemas.request import AnalyzeRequest
from backend.schemas.response import AnalysisResponse, ErrorResponse, HealthResponse

__all__ = ["AnalyzeRequest", "AnalysisResponse", "ErrorResponse", "HealthResponse"]
