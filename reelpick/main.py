"""reelpick FastAPI application entry point.

Builds every provider and service once from :class:`Settings`, stores them
on ``app.state`` for dependency injection, configures structured logging,
and serves the pre-built frontend from the static directory.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

import httpx
import structlog
import uvicorn
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from reelpick import __version__
from reelpick.api.middleware import (
    RequestLoggingMiddleware,
    install_error_handlers,
)
from reelpick.api.routes import meta_router
from reelpick.api.routes import router as api_router
from reelpick.config.settings import Settings
from reelpick.interfaces.llm_provider import ILLMProvider
from reelpick.providers.llm.anthropic_provider import AnthropicLLMProvider
from reelpick.providers.llm.openai_provider import OpenAILLMProvider
from reelpick.providers.search.duckduckgo_provider import DuckDuckGoSearchProvider
from reelpick.services.enrichment_service import SearchEnricher
from reelpick.services.recommendation_service import RecommendationService
from reelpick.utils.logging import configure_logging, get_logger

_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Dependency assembly
# ---------------------------------------------------------------------------


def _build_llm_providers(app_settings: Settings) -> list[ILLMProvider]:
    """Construct every LLM provider, in the order results are listed.

    Providers without an API key are still registered: requests routed to
    them fail with an "Invalid API key" error rather than an unknown
    selector.
    """
    return [
        OpenAILLMProvider(settings=app_settings),
        AnthropicLLMProvider(settings=app_settings),
    ]


def _build_all(app_settings: Settings) -> dict[str, Any]:
    """Construct every provider and service instance for the application.

    Returns a flat dict of named components to be stored on ``app.state``.
    """
    http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(app_settings.search_timeout_seconds),
        follow_redirects=True,
    )

    web_search = DuckDuckGoSearchProvider(
        http_client=http_client,
        timeout=app_settings.search_timeout_seconds,
    )
    enricher = SearchEnricher(
        web_search=web_search,
        query_suffix=app_settings.search_query_suffix,
        enabled=app_settings.search_enabled,
    )

    llm_providers = _build_llm_providers(app_settings)
    recommendation_service = RecommendationService(
        providers=llm_providers,
        enricher=enricher,
        all_providers_selector=app_settings.all_providers_selector,
        default_selector=app_settings.default_provider,
    )

    return {
        "settings": app_settings,
        "http_client": http_client,
        "recommendation_service": recommendation_service,
    }


# ---------------------------------------------------------------------------
# Application lifespan (startup / shutdown)
# ---------------------------------------------------------------------------


@asynccontextmanager
async def _lifespan(application: FastAPI):  # noqa: ANN201
    """Initialise all providers and services on startup, clean up on shutdown."""
    app_settings: Settings = application.state.settings
    components = _build_all(app_settings)

    for key, value in components.items():
        setattr(application.state, key, value)

    service: RecommendationService = components["recommendation_service"]
    _logger.info(
        "app_startup",
        version=__version__,
        environment=app_settings.app_env,
        port=app_settings.app_port,
        selectors=service.accepted_selectors,
        default_selector=service.default_selector,
        configured_providers=app_settings.get_available_llm_providers(),
        search_enabled=app_settings.search_enabled,
    )

    yield

    http_client: httpx.AsyncClient = components["http_client"]
    await http_client.aclose()
    _logger.info("app_shutdown", message="HTTP client closed")


# ---------------------------------------------------------------------------
# FastAPI application factory
# ---------------------------------------------------------------------------


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Build and configure the FastAPI application."""
    app_settings = app_settings or Settings()

    configure_logging(
        log_level=app_settings.log_level,
        json_output=(app_settings.app_env == "production"),
    )

    application = FastAPI(
        title="reelpick API",
        version=__version__,
        description=(
            "Send a movie title, get two recommendations from OpenAI, "
            "Anthropic, or both, grounded with a live web-search snippet."
        ),
        lifespan=_lifespan,
    )
    application.state.settings = app_settings

    # -- Middleware (last added = first executed) --
    install_error_handlers(application)
    application.add_middleware(RequestLoggingMiddleware)

    # -- API routes --
    application.include_router(api_router)
    application.include_router(meta_router)

    # -- Frontend static files (mounted last so API routes win) --
    static_dir = Path(app_settings.static_dir)
    if static_dir.is_dir():
        application.mount(
            "/",
            StaticFiles(directory=str(static_dir), html=True),
            name="static",
        )
    else:
        _logger.info("static_dir_missing", path=str(static_dir))

    return application


app = create_app()


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def run() -> None:
    """Start uvicorn on the configured host and port."""
    app_settings: Settings = app.state.settings
    uvicorn.run(
        app,
        host=app_settings.app_host,
        port=app_settings.app_port,
        log_config=None,
    )


if __name__ == "__main__":
    run()
