"""Anthropic LLM provider adapter.

Wraps the ``anthropic`` async client to implement :class:`ILLMProvider`.

Key differences from the OpenAI adapter:
    - Uses Anthropic's Messages API (not chat.completions)
    - The role instructions travel inside the single user message
    - Response content is a list of blocks (may include text + tool_use),
      so we filter for text blocks and join them
    - Usage reports input/output tokens separately, with no total
"""

from __future__ import annotations

from typing import Any

import anthropic
import structlog

from reelpick.config.settings import Settings
from reelpick.interfaces.llm_provider import ILLMProvider
from reelpick.models.recommendation import RecommendationResult
from reelpick.prompts import build_anthropic_prompt
from reelpick.utils.errors import LLMError, ProviderErrorKind, kind_for_status

logger = structlog.get_logger(logger_name=__name__)

_DISPLAY_NAME = "Claude 3.5 Sonnet (Latest + Web Search)"


class AnthropicLLMProvider(ILLMProvider):
    """LLM provider backed by the Anthropic Claude API.

    Uses ``claude-3-5-sonnet-20241022`` by default; override with
    ``ANTHROPIC_MODEL``.
    """

    def __init__(self, settings: Settings) -> None:
        self._api_key = settings.anthropic_api_key
        self._selector = settings.anthropic_selector
        self._model = settings.anthropic_model
        self._max_tokens = settings.recommendation_max_tokens
        self._timeout = settings.llm_timeout_seconds
        self._client = anthropic.AsyncAnthropic(
            api_key=self._api_key,
            timeout=self._timeout,
            max_retries=0,
        )

    # ------------------------------------------------------------------
    # ILLMProvider implementation
    # ------------------------------------------------------------------

    async def recommend(
        self,
        title: str,
        enrichment: str | None = None,
    ) -> RecommendationResult:
        """Ask the Messages API for two recommendations."""
        if not self.is_available():
            raise LLMError(
                message="Anthropic API key is not configured",
                provider_name=self.get_provider_name(),
                kind=ProviderErrorKind.UNAUTHORIZED,
            )

        try:
            response = await self._client.messages.create(
                model=self._model,
                max_tokens=self._max_tokens,
                messages=[
                    {"role": "user", "content": build_anthropic_prompt(title, enrichment)},
                ],
            )
        except anthropic.APIStatusError as exc:
            raise LLMError(
                message=f"Anthropic API error: {exc.message}",
                provider_name=self.get_provider_name(),
                kind=kind_for_status(exc.status_code),
                status_code=exc.status_code,
            ) from exc
        except anthropic.APITimeoutError as exc:
            raise LLMError(
                message=f"Anthropic timed out after {self._timeout:g}s",
                provider_name=self.get_provider_name(),
            ) from exc
        except anthropic.APIError as exc:
            raise LLMError(
                message=f"Anthropic API error: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        text_blocks = [
            block.text for block in (response.content or []) if block.type == "text" and block.text
        ]
        if not text_blocks:
            raise LLMError(
                message="Anthropic returned no content",
                provider_name=self.get_provider_name(),
                kind=ProviderErrorKind.EMPTY_RESPONSE,
            )
        content = "\n".join(text_blocks)

        usage: dict[str, Any] = (
            response.usage.model_dump(exclude_none=True) if response.usage is not None else {}
        )
        logger.info(
            "anthropic_recommendation",
            model=self._model,
            title=title,
            search_enhanced=bool(enrichment),
            input_tokens=usage.get("input_tokens"),
            output_tokens=usage.get("output_tokens"),
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
        """Return ``True`` if an Anthropic API key is configured."""
        return bool(self._api_key)
