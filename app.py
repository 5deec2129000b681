from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from service import (
    InternshipSearchService,
    InvalidResultsError,
    MissingCredentialError,
    SearchUnavailableError,
)


def create_app(service: InternshipSearchService, static_dir: Optional[str] = None) -> FastAPI:
    app = FastAPI(title="Internship Radar API")
    logger = logging.getLogger("internship_api")

    @app.get("/healthz")
    async def health() -> Dict[str, str]:
        return {"status": "ok"}

    @app.get("/search")
    async def search(
        q: Optional[str] = Query(None, description="Free-text job search query"),
    ) -> Any:
        try:
            response = await service.search(q)
        except SearchUnavailableError as exc:
            logger.exception("Search failed: %s", exc)
            return JSONResponse(status_code=500, content={"error": str(exc)})
        except Exception as exc:  # broad for the HTTP surface, log and wrap
            logger.exception("Unexpected search failure: %s", exc)
            return JSONResponse(status_code=500, content={"error": "Failed to fetch job postings"})
        return response.to_dict()

    @app.post("/refine")
    async def refine(request: Request) -> Any:
        try:
            body = await request.json()
        except ValueError:
            return JSONResponse(status_code=400, content={"error": "Request body must be JSON"})
        results = body.get("results") if isinstance(body, dict) else None
        try:
            response = await service.refine(results)
        except (InvalidResultsError, MissingCredentialError) as exc:
            return JSONResponse(status_code=400, content={"error": str(exc)})
        return {"summary": response.summary}

    if static_dir and Path(static_dir).is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
    elif static_dir:
        logger.info("Static directory %s not found; serving API only", static_dir)

    return app
