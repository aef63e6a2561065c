"""Integration tests for the HTTP API.

A real RecommendationService and SearchEnricher sit behind the routes;
only the LLM providers and the web-search provider are mocked.
"""

from __future__ import annotations

from typing import Callable
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from reelpick.interfaces.web_search_provider import InstantAnswer
from reelpick.services.recommendation_service import RecommendationService
from reelpick.utils.errors import LLMError, ProviderErrorKind
from tests.conftest import SAMPLE_CONTENT, make_llm_provider

BuildService = Callable[..., RecommendationService]
BuildClient = Callable[[RecommendationService], TestClient]


@pytest.fixture
def client(
    build_service: BuildService,
    build_client: BuildClient,
    openai_provider: MagicMock,
    claude_provider: MagicMock,
) -> TestClient:
    return build_client(build_service(openai_provider, claude_provider))


def _failing(name: str, kind: ProviderErrorKind) -> MagicMock:
    return make_llm_provider(name, error=LLMError(f"{name} failed", provider_name=name, kind=kind))


# ======================================================================
# POST /get-recommendations: request validation
# ======================================================================


class TestRequestValidation:
    @pytest.mark.parametrize(
        "body",
        [{}, {"title": ""}, {"title": "   "}, {"title": None}, {"provider": "openai"}],
    )
    def test_missing_title(
        self,
        client: TestClient,
        openai_provider: MagicMock,
        mock_web_search: MagicMock,
        body: dict,
    ) -> None:
        response = client.post("/get-recommendations", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "Movie title is required"}
        openai_provider.recommend.assert_not_awaited()
        mock_web_search.instant_answer.assert_not_awaited()

    def test_invalid_provider(
        self,
        client: TestClient,
        openai_provider: MagicMock,
        claude_provider: MagicMock,
        mock_web_search: MagicMock,
    ) -> None:
        response = client.post(
            "/get-recommendations", json={"title": "Inception", "provider": "gemini"}
        )

        assert response.status_code == 400
        assert response.json() == {
            "error": 'Invalid provider. Use "openai", "claude", or "both".'
        }
        openai_provider.recommend.assert_not_awaited()
        claude_provider.recommend.assert_not_awaited()
        mock_web_search.instant_answer.assert_not_awaited()

    @pytest.mark.parametrize("provider", [7, True, ["openai"], {"name": "openai"}])
    def test_non_string_provider(
        self,
        client: TestClient,
        openai_provider: MagicMock,
        claude_provider: MagicMock,
        mock_web_search: MagicMock,
        provider: object,
    ) -> None:
        response = client.post(
            "/get-recommendations", json={"title": "Inception", "provider": provider}
        )

        assert response.status_code == 400
        assert response.json() == {
            "error": 'Invalid provider. Use "openai", "claude", or "both".'
        }
        openai_provider.recommend.assert_not_awaited()
        claude_provider.recommend.assert_not_awaited()
        mock_web_search.instant_answer.assert_not_awaited()

    def test_missing_title_wins_over_bad_provider(self, client: TestClient) -> None:
        response = client.post("/get-recommendations", json={"title": "", "provider": 7})

        assert response.status_code == 400
        assert response.json() == {"error": "Movie title is required"}

    def test_malformed_json(self, client: TestClient, openai_provider: MagicMock) -> None:
        response = client.post(
            "/get-recommendations",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert "error" in response.json()
        openai_provider.recommend.assert_not_awaited()

    def test_non_string_title(self, client: TestClient, openai_provider: MagicMock) -> None:
        response = client.post("/get-recommendations", json={"title": ["Inception"]})

        assert response.status_code == 400
        openai_provider.recommend.assert_not_awaited()


# ======================================================================
# POST /get-recommendations: success paths
# ======================================================================


class TestRecommendations:
    def test_single_provider(self, client: TestClient, claude_provider: MagicMock) -> None:
        response = client.post(
            "/get-recommendations", json={"title": "Inception", "provider": "openai"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body == {
            "success": True,
            "recommendations": [
                {
                    "providerName": "OpenAI GPT-4o (Latest + Web Search)",
                    "content": SAMPLE_CONTENT,
                    "usageMetadata": {"total_tokens": 42},
                    "searchEnhanced": False,
                }
            ],
            "requestedMovie": "Inception",
        }
        claude_provider.recommend.assert_not_awaited()

    def test_provider_defaults_to_openai(
        self, client: TestClient, openai_provider: MagicMock
    ) -> None:
        response = client.post("/get-recommendations", json={"title": "Inception"})

        assert response.status_code == 200
        openai_provider.recommend.assert_awaited_once()

    def test_search_enhanced(
        self, client: TestClient, openai_provider: MagicMock, mock_web_search: MagicMock
    ) -> None:
        mock_web_search.instant_answer.return_value = InstantAnswer(
            abstract="Inception is a 2010 film directed by Christopher Nolan."
        )

        response = client.post(
            "/get-recommendations", json={"title": "Inception", "provider": "openai"}
        )

        assert response.status_code == 200
        assert response.json()["recommendations"][0]["searchEnhanced"] is True
        _, enrichment = openai_provider.recommend.await_args.args
        assert enrichment.startswith("Current information about Inception: ")

    def test_search_failure_is_invisible(
        self, client: TestClient, mock_web_search: MagicMock
    ) -> None:
        mock_web_search.instant_answer.side_effect = RuntimeError("network down")

        response = client.post(
            "/get-recommendations", json={"title": "Inception", "provider": "claude"}
        )

        assert response.status_code == 200
        assert response.json()["recommendations"][0]["searchEnhanced"] is False

    def test_both_providers(self, client: TestClient) -> None:
        response = client.post(
            "/get-recommendations", json={"title": "Inception", "provider": "both"}
        )

        assert response.status_code == 200
        names = [r["providerName"] for r in response.json()["recommendations"]]
        assert names == [
            "OpenAI GPT-4o (Latest + Web Search)",
            "Claude 3.5 Sonnet (Latest + Web Search)",
        ]

    def test_both_partial_failure(
        self,
        build_service: BuildService,
        build_client: BuildClient,
        claude_provider: MagicMock,
    ) -> None:
        client = build_client(
            build_service(
                _failing("openai", ProviderErrorKind.RATE_LIMITED), claude_provider
            )
        )

        response = client.post(
            "/get-recommendations", json={"title": "Inception", "provider": "both"}
        )

        assert response.status_code == 200
        recommendations = response.json()["recommendations"]
        assert len(recommendations) == 1
        assert recommendations[0]["providerName"] == "Claude 3.5 Sonnet (Latest + Web Search)"


# ======================================================================
# POST /get-recommendations: provider failures
# ======================================================================


class TestProviderFailures:
    @pytest.mark.parametrize(
        ("kind", "status", "message"),
        [
            (ProviderErrorKind.UNAUTHORIZED, 401, "Invalid API key"),
            (ProviderErrorKind.RATE_LIMITED, 429, "Rate limit exceeded. Please try again later."),
            (
                ProviderErrorKind.UPSTREAM_UNAVAILABLE,
                502,
                "AI service unavailable. Please try again later.",
            ),
            (
                ProviderErrorKind.EMPTY_RESPONSE,
                500,
                "Error fetching recommendations: openai failed",
            ),
            (ProviderErrorKind.OTHER, 500, "Error fetching recommendations: openai failed"),
        ],
    )
    def test_single_provider_error_mapping(
        self,
        build_service: BuildService,
        build_client: BuildClient,
        claude_provider: MagicMock,
        kind: ProviderErrorKind,
        status: int,
        message: str,
    ) -> None:
        client = build_client(build_service(_failing("openai", kind), claude_provider))

        response = client.post(
            "/get-recommendations", json={"title": "Inception", "provider": "openai"}
        )

        assert response.status_code == status
        assert response.json() == {"error": message}

    def test_unexpected_exception_uses_error_envelope(
        self,
        build_service: BuildService,
        build_client: BuildClient,
        claude_provider: MagicMock,
    ) -> None:
        broken = make_llm_provider("openai", error=RuntimeError("boom"))
        client = build_client(build_service(broken, claude_provider))

        response = client.post(
            "/get-recommendations", json={"title": "Inception", "provider": "openai"}
        )

        assert response.status_code == 500
        assert response.headers["content-type"] == "application/json"
        assert response.json() == {"error": "Error fetching recommendations: boom"}

    def test_both_all_fail(self, build_service: BuildService, build_client: BuildClient) -> None:
        client = build_client(
            build_service(
                _failing("openai", ProviderErrorKind.UNAUTHORIZED),
                _failing("claude", ProviderErrorKind.RATE_LIMITED),
            )
        )

        response = client.post(
            "/get-recommendations", json={"title": "Inception", "provider": "both"}
        )

        assert response.status_code == 500
        assert response.json() == {
            "error": "Error fetching recommendations: All AI providers failed"
        }


# ======================================================================
# /api/v1 auxiliary routes
# ======================================================================


class TestMetaRoutes:
    def test_health_all_configured(self, client: TestClient) -> None:
        response = client.get("/api/v1/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["providers"] == {"openai": True, "claude": True}
        assert "version" in body

    def test_health_degraded(
        self,
        build_service: BuildService,
        build_client: BuildClient,
        openai_provider: MagicMock,
    ) -> None:
        client = build_client(
            build_service(openai_provider, make_llm_provider("claude", available=False))
        )

        assert client.get("/api/v1/health").json()["status"] == "degraded"

    def test_health_unhealthy(self, build_service: BuildService, build_client: BuildClient) -> None:
        client = build_client(build_service(make_llm_provider("openai", available=False)))

        assert client.get("/api/v1/health").json()["status"] == "unhealthy"

    def test_health_contacts_no_provider(
        self, client: TestClient, openai_provider: MagicMock, mock_web_search: MagicMock
    ) -> None:
        client.get("/api/v1/health")

        openai_provider.recommend.assert_not_awaited()
        mock_web_search.instant_answer.assert_not_awaited()

    def test_providers(self, client: TestClient) -> None:
        response = client.get("/api/v1/providers")

        assert response.status_code == 200
        body = response.json()
        assert body["selectors"] == ["openai", "claude", "both"]
        assert body["defaultSelector"] == "openai"
        assert body["providers"][1] == {
            "name": "claude",
            "displayName": "Claude 3.5 Sonnet (Latest + Web Search)",
            "model": "claude-model",
            "available": True,
        }
