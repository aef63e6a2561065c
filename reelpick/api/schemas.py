"""Pydantic request/response schemas for the reelpick API.

The success body of ``POST /get-recommendations`` is
:class:`reelpick.models.recommendation.AggregateResponse`; everything
else on the wire is defined here.

``RecommendationRequest`` is deliberately lenient (both fields optional)
so that a missing title becomes our own 400 ``{"error": ...}`` body
instead of FastAPI's 422 validation report.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RecommendationRequest(BaseModel):
    """Body of ``POST /get-recommendations``."""

    title: str | None = None
    # Any JSON value; a non-string selector is rejected by the service as
    # an invalid provider, not as a malformed body.
    provider: Any = None


class ErrorResponse(BaseModel):
    """Standard error response body."""

    error: str


class HealthResponse(BaseModel):
    """Application health check response."""

    status: str
    version: str
    providers: dict[str, Any]


class ProviderInfo(BaseModel):
    """One registered LLM provider."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str
    display_name: str
    model: str
    available: bool


class ProvidersResponse(BaseModel):
    """Registered providers and the selectors a client may send."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    providers: list[ProviderInfo] = Field(default_factory=list)
    selectors: list[str] = Field(default_factory=list)
    default_selector: str
