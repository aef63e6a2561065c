"""Unit tests for the DuckDuckGo instant-answer provider."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from reelpick.providers.search.duckduckgo_provider import DuckDuckGoSearchProvider
from reelpick.utils.errors import ResearchError


def _json_response(payload: object) -> MagicMock:
    response = MagicMock()
    response.status_code = 200
    response.raise_for_status = MagicMock()
    response.json.return_value = payload
    return response


class TestDuckDuckGoSearchProvider:
    def test_get_provider_name(self) -> None:
        provider = DuckDuckGoSearchProvider(http_client=AsyncMock())
        assert provider.get_provider_name() == "duckduckgo"

    def test_is_available(self) -> None:
        provider = DuckDuckGoSearchProvider(http_client=AsyncMock())
        assert provider.is_available() is True

    @pytest.mark.asyncio
    async def test_abstract_is_preferred(self) -> None:
        mock_client = AsyncMock()
        mock_client.get = AsyncMock(
            return_value=_json_response(
                {
                    "Heading": "Inception",
                    "AbstractText": "Inception is a 2010 science fiction action film.",
                    "AbstractURL": "https://en.wikipedia.org/wiki/Inception",
                    "Answer": "ignored",
                }
            )
        )
        provider = DuckDuckGoSearchProvider(http_client=mock_client)

        answer = await provider.instant_answer("Inception movie")

        assert answer.text == "Inception is a 2010 science fiction action film."
        assert answer.heading == "Inception"
        assert answer.source_url == "https://en.wikipedia.org/wiki/Inception"

    @pytest.mark.asyncio
    async def test_answer_is_fallback(self) -> None:
        mock_client = AsyncMock()
        mock_client.get = AsyncMock(
            return_value=_json_response({"AbstractText": "", "Answer": "148 minutes"})
        )
        provider = DuckDuckGoSearchProvider(http_client=mock_client)

        answer = await provider.instant_answer("Inception runtime")

        assert answer.text == "148 minutes"

    @pytest.mark.asyncio
    async def test_nothing_usable(self) -> None:
        mock_client = AsyncMock()
        mock_client.get = AsyncMock(
            return_value=_json_response({"AbstractText": "  ", "Answer": {"type": "calc"}})
        )
        provider = DuckDuckGoSearchProvider(http_client=mock_client)

        answer = await provider.instant_answer("zzzz")

        assert answer.text is None

    @pytest.mark.asyncio
    async def test_sends_instant_answer_params(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"AbstractText": "A film."})

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            provider = DuckDuckGoSearchProvider(http_client=client, timeout=5.0)
            answer = await provider.instant_answer("Inception movie cast")

        assert answer.text == "A film."
        params = seen[0].url.params
        assert seen[0].url.host == "api.duckduckgo.com"
        assert params["q"] == "Inception movie cast"
        assert params["format"] == "json"
        assert params["no_html"] == "1"
        assert params["skip_disambig"] == "1"

    @pytest.mark.asyncio
    async def test_timeout_raises_research_error(self) -> None:
        mock_client = AsyncMock()
        mock_client.get = AsyncMock(side_effect=httpx.ReadTimeout("slow"))
        provider = DuckDuckGoSearchProvider(http_client=mock_client)

        with pytest.raises(ResearchError) as exc_info:
            await provider.instant_answer("Inception")

        assert exc_info.value.provider_name == "duckduckgo"
        assert "Timeout" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_http_status_raises_research_error(self) -> None:
        request = httpx.Request("GET", "https://api.duckduckgo.com/")
        response = MagicMock()
        response.raise_for_status = MagicMock(
            side_effect=httpx.HTTPStatusError(
                "boom", request=request, response=httpx.Response(503, request=request)
            )
        )
        mock_client = AsyncMock()
        mock_client.get = AsyncMock(return_value=response)
        provider = DuckDuckGoSearchProvider(http_client=mock_client)

        with pytest.raises(ResearchError) as exc_info:
            await provider.instant_answer("Inception")

        assert "HTTP 503" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_connect_error_raises_research_error(self) -> None:
        mock_client = AsyncMock()
        mock_client.get = AsyncMock(side_effect=httpx.ConnectError("refused"))
        provider = DuckDuckGoSearchProvider(http_client=mock_client)

        with pytest.raises(ResearchError):
            await provider.instant_answer("Inception")

    @pytest.mark.asyncio
    async def test_malformed_json_raises_research_error(self) -> None:
        response = _json_response(None)
        response.json.side_effect = ValueError("Expecting value")
        mock_client = AsyncMock()
        mock_client.get = AsyncMock(return_value=response)
        provider = DuckDuckGoSearchProvider(http_client=mock_client)

        with pytest.raises(ResearchError) as exc_info:
            await provider.instant_answer("Inception")

        assert "malformed" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_non_object_payload_raises_research_error(self) -> None:
        mock_client = AsyncMock()
        mock_client.get = AsyncMock(return_value=_json_response(["not", "a", "dict"]))
        provider = DuckDuckGoSearchProvider(http_client=mock_client)

        with pytest.raises(ResearchError):
            await provider.instant_answer("Inception")
