"""reelpick API layer — routes, schemas, and middleware."""

from reelpick.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    install_error_handlers,
    translate_error,
)
from reelpick.api.routes import meta_router, router
from reelpick.api.schemas import (
    ErrorResponse,
    HealthResponse,
    ProviderInfo,
    ProvidersResponse,
    RecommendationRequest,
)

__all__ = [
    "ErrorHandlingMiddleware",
    "RequestLoggingMiddleware",
    "install_error_handlers",
    "translate_error",
    "meta_router",
    "router",
    "ErrorResponse",
    "HealthResponse",
    "ProviderInfo",
    "ProvidersResponse",
    "RecommendationRequest",
]
