"""OpenAI-compatible LLM provider adapter.

Wraps the ``openai`` async client to implement :class:`ILLMProvider`.
When a custom ``openai_base_url`` is configured (e.g. TogetherAI, Groq,
Fireworks), the client points at that URL instead of the default OpenAI
endpoint.  Many hosted model services expose OpenAI-compatible REST APIs,
so this one adapter covers all of them.
"""

from __future__ import annotations

from typing import Any

import openai
import structlog

from reelpick.config.settings import Settings
from reelpick.interfaces.llm_provider import ILLMProvider
from reelpick.models.recommendation import RecommendationResult
from reelpick.prompts import build_openai_messages
from reelpick.utils.errors import LLMError, ProviderErrorKind, kind_for_status

logger = structlog.get_logger(logger_name=__name__)

_DISPLAY_NAME = "OpenAI GPT-4o (Latest + Web Search)"
_CONNECT_TIMEOUT = 5.0


def _usage_to_dict(usage: Any) -> dict[str, Any]:
    """Flatten the SDK usage object into a plain dict (empty if missing)."""
    if usage is None:
        return {}
    return usage.model_dump(exclude_none=True)


class OpenAILLMProvider(ILLMProvider):
    """LLM provider backed by an OpenAI-compatible chat completions API.

    Uses ``gpt-4o-2024-11-20`` by default; override with ``OPENAI_MODEL``.

    The SDK's built-in retries are disabled (``max_retries=0``): a failed
    call surfaces to the caller immediately with its error kind.
    """

    def __init__(self, settings: Settings) -> None:
        self._api_key = settings.openai_api_key
        self._selector = settings.openai_selector
        self._model = settings.openai_model
        self._max_tokens = settings.recommendation_max_tokens
        self._timeout = settings.llm_timeout_seconds

        client_kwargs: dict[str, Any] = {
            "api_key": self._api_key,
            "timeout": openai.Timeout(self._timeout, connect=_CONNECT_TIMEOUT),
            "max_retries": 0,
        }
        if settings.openai_base_url:
            client_kwargs["base_url"] = settings.openai_base_url

        self._client = openai.AsyncOpenAI(**client_kwargs)
        # Label used in logs and error messages to identify this backend.
        self._provider_label = (
            "openai-compatible" if settings.openai_base_url else "openai"
        )

    # ------------------------------------------------------------------
    # ILLMProvider implementation
    # ------------------------------------------------------------------

    async def recommend(
        self,
        title: str,
        enrichment: str | None = None,
    ) -> RecommendationResult:
        """Ask the chat completions API for two recommendations."""
        if not self.is_available():
            raise LLMError(
                message=f"{self._provider_label} API key is not configured",
                provider_name=self.get_provider_name(),
                kind=ProviderErrorKind.UNAUTHORIZED,
            )

        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=build_openai_messages(title, enrichment),
                max_tokens=self._max_tokens,
            )
        except openai.APIStatusError as exc:
            raise LLMError(
                message=f"{self._provider_label} API error: {exc.message}",
                provider_name=self.get_provider_name(),
                kind=kind_for_status(exc.status_code),
                status_code=exc.status_code,
            ) from exc
        except openai.APITimeoutError as exc:
            raise LLMError(
                message=f"{self._provider_label} timed out after {self._timeout:g}s",
                provider_name=self.get_provider_name(),
            ) from exc
        except openai.APIError as exc:
            # Connection failures and anything else the SDK raises.
            raise LLMError(
                message=f"{self._provider_label} API error: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        if not response.choices:
            raise LLMError(
                message=f"{self._provider_label} returned no content",
                provider_name=self.get_provider_name(),
                kind=ProviderErrorKind.EMPTY_RESPONSE,
            )
        content = response.choices[0].message.content
        if not content:
            raise LLMError(
                message=f"{self._provider_label} returned no content",
                provider_name=self.get_provider_name(),
                kind=ProviderErrorKind.EMPTY_RESPONSE,
            )

        usage = _usage_to_dict(response.usage)
        logger.info(
            "openai_recommendation",
            model=self._model,
            provider=self._provider_label,
            title=title,
            search_enhanced=bool(enrichment),
            tokens=usage.get("total_tokens"),
        )
        return RecommendationResult(
            provider_name=self.get_display_name(),
            content=content,
            usage_metadata=usage,
            search_enhanced=bool(enrichment),
        )

    def get_provider_name(self) -> str:
        return self._selector

    def get_display_name(self) -> str:
        return _DISPLAY_NAME

    def get_model(self) -> str:
        return self._model

    def is_available(self) -> bool:
        """Return ``True`` if an API key is configured (doesn't verify it works)."""
        return bool(self._api_key)
