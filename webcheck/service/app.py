"""FastAPI application entrypoint for webcheck service mode."""

from __future__ import annotations

from typing import Any, Callable, Dict, List

import uvicorn
from fastapi import Depends, FastAPI
from pydantic import BaseModel

from ..models import FileInput
from ..orchestrator import StaticAnalyzer


class FilePayload(BaseModel):
    path: str
    content: str


class AnalyzeRequest(BaseModel):
    files: List[FilePayload]


class HealthResponse(BaseModel):
    status: str


def _default_analyzer() -> StaticAnalyzer:
    return StaticAnalyzer()


def create_app(
    analyzer_factory: Callable[[], StaticAnalyzer] = _default_analyzer,
) -> FastAPI:
    """Create the FastAPI application exposing batch analysis."""

    app = FastAPI(title="WebCheck Service", version="1.0.0")

    async def get_analyzer() -> StaticAnalyzer:
        # A fresh analyzer per request; parsers are not shared between threads.
        return analyzer_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/analyze")
    async def analyze_files(
        payload: AnalyzeRequest,
        analyzer: StaticAnalyzer = Depends(get_analyzer),
    ) -> Dict[str, Any]:
        files = [FileInput(path=item.path, content=item.content) for item in payload.files]
        response = await analyzer.analyze_async(files)
        return response.to_dict()

    return app


def run_service(
    host: str = "127.0.0.1", port: int = 8000
) -> None:  # pragma: no cover - integration path
    app = create_app()
    uvicorn.run(app, host=host, port=port)
