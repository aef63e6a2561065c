"""Multi-provider recommendation orchestration.

Resolves the caller's provider selector, fetches search enrichment once,
and asks the selected LLM provider(s) for recommendations.

Selector handling
-----------------
Each registered provider answers to its own selector (``"openai"``,
``"claude"``); one extra selector (``"both"``) means "every registered
provider".  Matching is case-insensitive.  An unknown selector is
rejected with :class:`InvalidProviderError` before any network call,
enrichment included.

Single provider
    The provider's result, or its :class:`LLMError`, passes straight
    through.

Every provider
    All providers run concurrently under ``settle_all``; the response
    waits until each one has succeeded or failed.  Successes are listed
    in registration order (not completion order), failures are logged,
    and only when every provider failed does the request fail with
    :class:`AllProvidersFailedError`.
"""

from __future__ import annotations

from reelpick.interfaces.llm_provider import ILLMProvider
from reelpick.models.recommendation import AggregateResponse, RecommendationResult
from reelpick.services.enrichment_service import SearchEnricher
from reelpick.utils.concurrency import settle_all, split_outcomes
from reelpick.utils.errors import (
    AllProvidersFailedError,
    ConfigurationError,
    InvalidProviderError,
    MissingTitleError,
)
from reelpick.utils.logging import get_logger


class RecommendationService:
    """Routes a title to one or all LLM providers and aggregates the answers."""

    def __init__(
        self,
        providers: list[ILLMProvider],
        enricher: SearchEnricher,
        all_providers_selector: str = "both",
        default_selector: str | None = None,
    ) -> None:
        """Initialise the service with injected dependencies.

        Parameters
        ----------
        providers:
            LLM providers in the order their results should be listed.
        enricher:
            Search enricher consulted once per request.
        all_providers_selector:
            The selector that fans out to every provider.
        default_selector:
            Selector used when the caller sends none.  Defaults to the
            first provider.

        Raises
        ------
        ConfigurationError
            If no providers are given, two providers share a selector, or
            the default selector is unknown.
        """
        if not providers:
            raise ConfigurationError("At least one LLM provider must be registered")

        self._providers: dict[str, ILLMProvider] = {}
        for provider in providers:
            key = _normalize(provider.get_provider_name())
            if key in self._providers:
                raise ConfigurationError(f"Duplicate provider selector: {key!r}")
            self._providers[key] = provider

        self._all_selector = _normalize(all_providers_selector)
        if self._all_selector in self._providers:
            raise ConfigurationError(
                f"Selector {all_providers_selector!r} is used by a provider"
            )

        self._default_selector = _normalize(default_selector or providers[0].get_provider_name())
        if not self._is_known(self._default_selector):
            raise ConfigurationError(f"Unknown default provider: {default_selector!r}")

        self._enricher = enricher
        self._logger = get_logger(__name__)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def providers(self) -> list[ILLMProvider]:
        """Registered providers in registration order."""
        return list(self._providers.values())

    @property
    def accepted_selectors(self) -> list[str]:
        """Every selector a caller may send, the fan-out selector last."""
        return [*self._providers, self._all_selector]

    @property
    def default_selector(self) -> str:
        return self._default_selector

    def resolve(self, selector: object) -> list[ILLMProvider]:
        """Return the providers *selector* refers to.

        Raises
        ------
        InvalidProviderError
            If *selector* matches no provider and is not the fan-out selector.
        """
        if selector is None:
            key = self._default_selector
        elif isinstance(selector, str):
            key = _normalize(selector)
        else:
            raise InvalidProviderError(selector=str(selector), accepted=self.accepted_selectors)
        if key == self._all_selector:
            return self.providers
        if key in self._providers:
            return [self._providers[key]]
        raise InvalidProviderError(selector=str(selector), accepted=self.accepted_selectors)

    async def aggregate(self, title: str, selector: object = None) -> AggregateResponse:
        """Produce recommendations for *title* from the selected provider(s).

        Raises
        ------
        MissingTitleError
            If *title* is blank.
        InvalidProviderError
            If *selector* is not recognised.
        LLMError
            If a single selected provider fails.
        AllProvidersFailedError
            If every provider failed in fan-out mode.
        """
        title = (title or "").strip()
        if not title:
            raise MissingTitleError()

        selected = self.resolve(selector)
        fan_out = len(selected) > 1 or (
            isinstance(selector, str) and _normalize(selector) == self._all_selector
        )

        enrichment = await self._enricher.enrich(title)

        if not fan_out:
            provider = selected[0]
            result = await provider.recommend(title, enrichment)
            self._logger.info(
                "recommendation_complete",
                title=title,
                provider=provider.get_provider_name(),
                search_enhanced=result.search_enhanced,
            )
            return AggregateResponse(recommendations=[result], requested_movie=title)

        recommendations = await self._recommend_all(selected, title, enrichment)
        return AggregateResponse(recommendations=recommendations, requested_movie=title)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _recommend_all(
        self,
        providers: list[ILLMProvider],
        title: str,
        enrichment: str | None,
    ) -> list[RecommendationResult]:
        names = [provider.get_provider_name() for provider in providers]
        outcomes = await settle_all(
            [provider.recommend(title, enrichment) for provider in providers]
        )
        successes, failures = split_outcomes(names, outcomes)

        for name, exc in failures:
            self._logger.warning(
                "provider_failed",
                title=title,
                provider=name,
                error=str(exc),
                error_type=type(exc).__name__,
            )

        if not successes:
            raise AllProvidersFailedError(
                failures={name: str(exc) for name, exc in failures},
            )

        self._logger.info(
            "recommendation_complete",
            title=title,
            providers=[name for name, _ in successes],
            failed=[name for name, _ in failures],
        )
        return [result for _, result in successes]

    def _is_known(self, key: str) -> bool:
        return key == self._all_selector or key in self._providers


def _normalize(selector: str) -> str:
    return selector.strip().lower()
