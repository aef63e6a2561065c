"""FastAPI routes for reelpick.

# ─── API ROUTE MAP ────────────────────────────────────────────────────
#
# Endpoint                   Method  Description
# ─────────────────────────────────────────────────────────────────────
# /get-recommendations       POST    Title (+ provider) → recommendations
# /api/v1/health             GET     Health check + provider credentials
# /api/v1/providers          GET     Registered providers and selectors
#
# DEPENDENCY INJECTION PATTERN:
# Route functions declare their dependencies as Annotated params.  The
# helper functions below read them from app.state (populated at startup
# in main.py), so tests only need to put mocks on app.state.
#
# Route handlers never build error responses themselves: they raise
# ReelpickError subclasses and ErrorHandlingMiddleware translates them.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, Request

from reelpick import __version__
from reelpick.api.schemas import (
    ErrorResponse,
    HealthResponse,
    ProviderInfo,
    ProvidersResponse,
    RecommendationRequest,
)
from reelpick.models.recommendation import AggregateResponse
from reelpick.services.recommendation_service import RecommendationService
from reelpick.utils.errors import MissingTitleError
from reelpick.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

# The recommendation route keeps its historical path at the root; the
# auxiliary routes live under /api/v1.
router = APIRouter()
meta_router = APIRouter(prefix="/api/v1")


def _get_recommendation_service(request: Request) -> RecommendationService:
    """Return the recommendation service from application state."""
    return request.app.state.recommendation_service


RecommendationServiceDep = Annotated[
    RecommendationService, Depends(_get_recommendation_service)
]


@router.post(
    "/get-recommendations",
    response_model=AggregateResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
    summary="Recommend two movies similar to the given title",
)
async def get_recommendations(
    body: RecommendationRequest,
    service: RecommendationServiceDep,
) -> AggregateResponse:
    """Validate the request and delegate to the recommendation service.

    ``provider`` is optional; the service falls back to its default
    selector when it is missing.
    """
    if not body.title or not body.title.strip():
        raise MissingTitleError()

    result = await service.aggregate(body.title, body.provider)
    _logger.info(
        "recommendations_served",
        title=result.requested_movie,
        provider=body.provider or service.default_selector,
        count=len(result.recommendations),
    )
    return result


@meta_router.get(
    "/health",
    response_model=HealthResponse,
    summary="Application health check",
)
async def health_check(service: RecommendationServiceDep) -> HealthResponse:
    """Report which providers have credentials configured.

    ``healthy`` when all do, ``degraded`` when some do, ``unhealthy``
    when none do.  No provider is contacted.
    """
    providers = {p.get_provider_name(): p.is_available() for p in service.providers}
    available = sum(providers.values())

    if available == len(providers):
        status = "healthy"
    elif available:
        status = "degraded"
    else:
        status = "unhealthy"

    return HealthResponse(status=status, version=__version__, providers=providers)


@meta_router.get(
    "/providers",
    response_model=ProvidersResponse,
    summary="List configured providers",
)
async def list_providers(service: RecommendationServiceDep) -> ProvidersResponse:
    """List registered providers and the selectors a client may send."""
    return ProvidersResponse(
        providers=[
            ProviderInfo(
                name=p.get_provider_name(),
                display_name=p.get_display_name(),
                model=p.get_model(),
                available=p.is_available(),
            )
            for p in service.providers
        ],
        selectors=service.accepted_selectors,
        default_selector=service.default_selector,
    )
