"""FastAPI application entry point for the VoTT backend."""
from __future__ import annotations

import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from prometheus_client import Counter, Histogram, generate_latest
from sqlalchemy.exc import SQLAlchemyError

from vott_server import __version__
from vott_server.api import api_router
from vott_server.db.session import create_schema
from vott_server.errors import VottServerError
from vott_server.logging_config import setup_logging
from vott_server.settings import settings

logger = structlog.get_logger(__name__)

REQUEST_COUNT = Counter("vott_requests_total", "Total number of API requests", ["method", "endpoint", "status"])
REQUEST_LATENCY = Histogram("vott_request_latency_seconds", "Latency of API requests", ["endpoint"])


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    setup_logging(settings.log_level, settings.log_json)
    if settings.create_schema:
        await create_schema()
    logger.info("startup", service=settings.service_name, asset_root=str(settings.asset_root))
    yield


app = FastAPI(title="VoTT Server", version=__version__, lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(api_router)


@app.middleware("http")
async def metrics_middleware(request: Request, call_next):  # type: ignore[override]
    start = time.perf_counter()
    response = await call_next(request)
    elapsed = time.perf_counter() - start
    route = request.scope.get("route")
    # Template path keeps label cardinality bounded.
    endpoint = getattr(route, "path", "unmatched")
    REQUEST_LATENCY.labels(endpoint=endpoint).observe(elapsed)
    REQUEST_COUNT.labels(method=request.method, endpoint=endpoint, status=response.status_code).inc()
    return response


@app.get("/healthz", include_in_schema=False)
async def healthcheck() -> dict:
    return {"status": "ok", "service": settings.service_name}


@app.get("/metrics", include_in_schema=False)
async def metrics() -> PlainTextResponse:
    return PlainTextResponse(generate_latest().decode("utf-8"), media_type="text/plain")


@app.exception_handler(VottServerError)
async def service_error_handler(request: Request, exc: VottServerError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("request.failed", path=request.url.path, error=exc.message)
    else:
        logger.info("request.rejected", path=request.url.path, status=exc.status_code, error=exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": jsonable_errors(exc)})


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(_: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("db.request_failed", error=str(exc))
    return JSONResponse(status_code=500, content={"detail": "Database operation failed"})


@app.exception_handler(Exception)
async def unhandled_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception", error=str(exc))
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    return [{"loc": list(error["loc"]), "msg": error["msg"]} for error in exc.errors()]


def run() -> None:
    uvicorn.run("vott_server.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
