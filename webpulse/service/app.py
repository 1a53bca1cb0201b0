"""FastAPI application entrypoint for webpulse service mode."""

from __future__ import annotations

import asyncio
import dataclasses
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import uvicorn
from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..aggregator import ProjectAggregator
from ..config import AnalysisConfig, load_config
from ..estimation import calculate_performance_impact, estimate_resources
from ..logging import get_logger
from ..models import ProjectRecord

logger = get_logger("service")


class AnalyzeRequest(BaseModel):
    path: str
    salesforce: bool = False


class PathRequest(BaseModel):
    path: str


class EstimationResponse(BaseModel):
    js_heap_size: int
    transferred_data: int
    resource_size: int
    dom_content_loaded: int
    largest_contentful_paint: int


class AnalyzeResponse(BaseModel):
    project: Dict[str, Any]
    estimation: EstimationResponse
    performance_impact: float


class ImpactResponse(BaseModel):
    score: float


class HealthResponse(BaseModel):
    status: str


AnalyzerFactory = Callable[[Optional[AnalysisConfig]], ProjectAggregator]


def _default_analyzer(config: Optional[AnalysisConfig]) -> ProjectAggregator:
    return ProjectAggregator(config)


def create_app(analyzer_factory: AnalyzerFactory = _default_analyzer) -> FastAPI:
    """Create the FastAPI application exposing webpulse analysis."""

    app = FastAPI(title="WebPulse Service", version="1.0.0")

    async def _analyze(path: str, *, salesforce: bool = False) -> ProjectRecord:
        def _run() -> Optional[ProjectRecord]:
            config: Optional[AnalysisConfig] = None
            root = Path(path).expanduser().resolve()
            if salesforce:
                config = load_config(root) if root.is_dir() else AnalysisConfig(root=root)
                config.salesforce = True
            return analyzer_factory(config).analyze(root)

        loop = asyncio.get_running_loop()
        project = await loop.run_in_executor(None, _run)
        if project is None:
            raise FileNotFoundError(f"Project path cannot be analysed: {path}")
        return project

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/analyze", response_model=AnalyzeResponse)
    async def analyze_project(payload: AnalyzeRequest) -> AnalyzeResponse:
        project = await _analyze(payload.path, salesforce=payload.salesforce)
        return AnalyzeResponse(
            project=project.to_dict(),
            estimation=EstimationResponse(**dataclasses.asdict(estimate_resources(project))),
            performance_impact=calculate_performance_impact(project),
        )

    @app.post("/estimate", response_model=EstimationResponse)
    async def estimate(payload: PathRequest) -> EstimationResponse:
        project = await _analyze(payload.path)
        return EstimationResponse(**dataclasses.asdict(estimate_resources(project)))

    @app.post("/impact", response_model=ImpactResponse)
    async def impact(payload: PathRequest) -> ImpactResponse:
        project = await _analyze(payload.path)
        return ImpactResponse(score=calculate_performance_impact(project))

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(_: Any, exc: FileNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(RuntimeError)
    async def runtime_error_handler(_: Any, exc: RuntimeError) -> JSONResponse:
        logger.debug("Request failed: %s", exc)
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(host: str = "0.0.0.0", port: int = 8000) -> None:  # pragma: no cover - integration path
    app = create_app()
    uvicorn.run(app, host=host, port=port)


__all__ = ["create_app", "run_service"]
