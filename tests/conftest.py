"""Shared pytest fixtures for the reelpick test suite."""

from __future__ import annotations

from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from reelpick.api.middleware import install_error_handlers
from reelpick.api.routes import meta_router
from reelpick.api.routes import router as api_router
from reelpick.config.settings import Settings
from reelpick.interfaces.llm_provider import ILLMProvider
from reelpick.interfaces.web_search_provider import InstantAnswer, IWebSearchProvider
from reelpick.models.recommendation import RecommendationResult
from reelpick.services.enrichment_service import SearchEnricher
from reelpick.services.recommendation_service import RecommendationService

SAMPLE_CONTENT = (
    "**Tenet (2020)** - Another Nolan puzzle box about time and perception.\n"
    "**Her (2013)** - A quieter film about memory, longing, and constructed realities."
)


def make_settings(**overrides: Any) -> Settings:
    """Build Settings that ignore any local ``.env`` file."""
    defaults: dict[str, Any] = {
        "openai_api_key": "sk-test",
        "anthropic_api_key": "test-anthropic",
        "openai_base_url": "",
        "search_enabled": True,
    }
    defaults.update(overrides)
    return Settings(_env_file=None, **defaults)


def make_llm_provider(
    name: str,
    display_name: str | None = None,
    *,
    content: str = SAMPLE_CONTENT,
    error: BaseException | None = None,
    available: bool = True,
) -> MagicMock:
    """Mock ILLMProvider whose ``recommend`` echoes the enrichment flag.

    Pass *error* to make every ``recommend`` call raise it instead.
    """
    label = display_name or name

    def _recommend(title: str, enrichment: str | None = None) -> RecommendationResult:
        if error is not None:
            raise error
        return RecommendationResult(
            provider_name=label,
            content=content,
            usage_metadata={"total_tokens": 42},
            search_enhanced=bool(enrichment),
        )

    mock = MagicMock(spec=ILLMProvider)
    mock.get_provider_name.return_value = name
    mock.get_display_name.return_value = label
    mock.get_model.return_value = f"{name}-model"
    mock.is_available.return_value = available
    mock.recommend = AsyncMock(side_effect=_recommend)
    return mock


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def mock_web_search() -> MagicMock:
    """Mock IWebSearchProvider that finds nothing by default.

    Override with ``mock_web_search.instant_answer.return_value = InstantAnswer(...)``
    or ``.side_effect = SomeError(...)``.
    """
    mock = MagicMock(spec=IWebSearchProvider)
    mock.get_provider_name.return_value = "mock-search"
    mock.is_available.return_value = True
    mock.instant_answer = AsyncMock(return_value=InstantAnswer())
    return mock


@pytest.fixture
def enricher(mock_web_search: MagicMock) -> SearchEnricher:
    return SearchEnricher(web_search=mock_web_search)


@pytest.fixture
def openai_provider() -> MagicMock:
    return make_llm_provider("openai", "OpenAI GPT-4o (Latest + Web Search)")


@pytest.fixture
def claude_provider() -> MagicMock:
    return make_llm_provider("claude", "Claude 3.5 Sonnet (Latest + Web Search)")


@pytest.fixture
def build_service(
    enricher: SearchEnricher,
) -> Callable[..., RecommendationService]:
    """Factory: ``build_service(provider_a, provider_b, ...)``."""

    def _build(*providers: MagicMock, default_selector: str | None = None) -> RecommendationService:
        return RecommendationService(
            providers=list(providers),
            enricher=enricher,
            all_providers_selector="both",
            default_selector=default_selector,
        )

    return _build


@pytest.fixture
def build_client() -> Callable[[RecommendationService], TestClient]:
    """Factory: a TestClient over the API routers with *service* injected."""

    def _build(service: RecommendationService) -> TestClient:
        app = FastAPI()
        install_error_handlers(app)
        app.include_router(api_router)
        app.include_router(meta_router)
        app.state.recommendation_service = service
        return TestClient(app)

    return _build
