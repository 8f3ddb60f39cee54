# src/api/models.py — v1
"""API-level models: RerankRequest, ServiceInfo, HealthStatus, ErrorBody."""

from __future__ import annotations

from pydantic import BaseModel, Field

from smartrerank.core.models import CamelModel, ExcludeFactor, ItemInput, RankedResult, RerankMode


class RerankRequest(CamelModel):
    """Body of ``POST /rerank`` (camelCase keys on the wire)."""

    query: str = Field(..., min_length=1)
    items: list[ItemInput] = Field(..., min_length=1)
    mode: RerankMode = "math"
    top_k: int | None = None
    exclude_factors: list[ExcludeFactor] = Field(default_factory=list)


class RerankResponse(RankedResult):
    """Body of a successful ``POST /rerank``."""


class ServiceInfo(BaseModel):
    service: str
    version: str
    endpoints: dict[str, str]


class HealthStatus(BaseModel):
    status: str
    timestamp: str


class ErrorBody(BaseModel):
    error: str
