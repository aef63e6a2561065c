"""Abstract base class for LLM recommendation providers.

Defines the contract every large-language-model backend implements to turn
a movie title (plus optional search context) into a
:class:`~reelpick.models.recommendation.RecommendationResult`.  Concrete
adapters own their prompt wording, SDK client, and raw response payloads;
nothing outside an adapter ever sees a provider-specific object.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from reelpick.models.recommendation import RecommendationResult


# Concrete implementations: OpenAILLMProvider, AnthropicLLMProvider
# Located in: reelpick/providers/llm/
class ILLMProvider(ABC):
    """Contract for LLM services consulted by the recommendation service."""

    @abstractmethod
    async def recommend(
        self,
        title: str,
        enrichment: str | None = None,
    ) -> RecommendationResult:
        """Ask the model for two recommendations based on *title*.

        Parameters
        ----------
        title:
            The movie the user liked.
        enrichment:
            Optional search snippet about the title.  When present the
            prompt tells the model to treat it as current context, and the
            result's ``search_enhanced`` flag is set.

        Returns
        -------
        RecommendationResult
            The normalized result, including the backend's usage metadata.

        Raises
        ------
        reelpick.utils.errors.LLMError
            If the API call fails or returns no content.  The error's
            ``kind`` classifies the failure.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return the selector this provider is registered under.

        Example return values: ``"openai"``, ``"claude"``.
        """

    @abstractmethod
    def get_display_name(self) -> str:
        """Return the human-readable label placed in results."""

    @abstractmethod
    def get_model(self) -> str:
        """Return the model identifier sent to the backend."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if credentials are configured.

        Does not contact the backend.
        """
