# src/api/app.py — v1
"""HTTP surface: ``GET /``, ``GET /health``, ``POST /rerank``.

Run with ``uvicorn --factory smartrerank.api.app:create_app`` or
``smartrerank serve``.
"""

from __future__ import annotations

import logging
import time
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from smartrerank.api.models import (
    ErrorBody,
    HealthStatus,
    RerankRequest,
    RerankResponse,
    ServiceInfo,
)
from smartrerank.config.settings import Settings
from smartrerank.logging.context import clear_context, set_request_context
from smartrerank.rerank.service import RerankService

logger = logging.getLogger(__name__)

_MSG_REQUIRED = "Invalid request. Query and items array are required."
_MSG_EMPTY_ITEMS = "Items array cannot be empty."
_MSG_ITEM_FIELDS = "All items must have id and content fields."
_MSG_INTERNAL = "Internal server error"


def validation_message(errors: list[dict]) -> str:
    """Turn request validation errors into one caller-facing message."""
    for err in errors:
        loc = [p for p in err.get("loc", ()) if p != "body"]
        kind = err.get("type", "")
        if kind == "json_invalid":
            return "Request body is not valid JSON."
        if not loc or (loc[0] in ("query", "items") and len(loc) == 1):
            if loc == ["items"] and kind == "too_short":
                return _MSG_EMPTY_ITEMS
            return _MSG_REQUIRED
        if loc[0] == "items":
            return _MSG_ITEM_FIELDS
    first = errors[0] if errors else {}
    field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    return f"Invalid field '{field}': {first.get('msg', 'invalid value')}"


def get_service(request: Request) -> RerankService:
    return request.app.state.service


def create_app(
    settings: Settings | None = None,
    service: RerankService | None = None,
) -> FastAPI:
    """Build the FastAPI application around one long-lived RerankService."""
    settings = settings or Settings()
    service = service or RerankService.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await service.close()

    app = FastAPI(title=settings.service_name, version=settings.service_version, lifespan=lifespan)
    app.state.settings = settings
    app.state.service = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        request_id = request.headers.get("x-request-id") or uuid.uuid4().hex[:12]
        set_request_context(request_id)
        started = time.perf_counter()
        try:
            response = await call_next(request)
            response.headers["x-request-id"] = request_id
            logger.info(
                "%s %s -> %d (%.1f ms)",
                request.method, request.url.path, response.status_code,
                (time.perf_counter() - started) * 1000,
            )
            return response
        finally:
            clear_context()

    @app.exception_handler(RequestValidationError)
    async def on_validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse({"error": validation_message(list(exc.errors()))}, status_code=400)

    @app.exception_handler(StarletteHTTPException)
    async def on_http_error(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            message = "Endpoint not found"
        elif exc.status_code == 405:
            message = "Method not allowed"
        else:
            message = str(exc.detail)
        return JSONResponse({"error": message}, status_code=exc.status_code)

    @app.exception_handler(Exception)
    async def on_unhandled_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse({"error": _MSG_INTERNAL}, status_code=500)

    @app.get("/", response_model=ServiceInfo)
    async def root() -> ServiceInfo:
        return ServiceInfo(
            service=settings.service_name,
            version=settings.service_version,
            endpoints={"rerank": "POST /rerank", "health": "GET /health"},
        )

    @app.get("/health", response_model=HealthStatus)
    async def health() -> HealthStatus:
        return HealthStatus(status="healthy", timestamp=datetime.now(timezone.utc).isoformat())

    @app.post(
        "/rerank",
        response_model=RerankResponse,
        response_model_exclude_none=True,
        responses={400: {"model": ErrorBody}, 500: {"model": ErrorBody}},
    )
    async def rerank(
        payload: RerankRequest,
        svc: RerankService = Depends(get_service),
    ) -> RerankResponse:
        result = await svc.rerank(
            payload.query,
            [i.to_item() for i in payload.items],
            mode=payload.mode,
            top_k=payload.top_k,
            exclude_factors=payload.exclude_factors,
        )
        return RerankResponse.model_validate(result.model_dump())

    return app
