"""
backend — FastAPI application package.

Routers: api/analyze.py, api/health.py
Schemas: schemas/request.py, schemas/response.py
Entry point: main.py → run with `uvicorn backend.main:app --reload`
"""
