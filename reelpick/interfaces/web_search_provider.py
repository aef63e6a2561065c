"""Abstract base class for web-search service providers.

Defines the contract for the instant-answer lookups used to enrich
recommendation prompts with a short factual snippet about a title.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class InstantAnswer:
    """A short answer returned by a search engine for one query.

    Attributes
    ----------
    abstract:
        Encyclopedia-style summary of the topic, if the engine had one.
    answer:
        Direct answer text, if the engine had one.
    heading:
        Topic heading the engine matched the query to.
    source_url:
        Where the abstract came from.
    """

    abstract: str | None = None
    answer: str | None = None
    heading: str | None = None
    source_url: str | None = None

    @property
    def text(self) -> str | None:
        """The abstract if present, otherwise the answer, otherwise ``None``."""
        return self.abstract or self.answer or None


# Concrete implementation: DuckDuckGoSearchProvider (reelpick/providers/search/)
class IWebSearchProvider(ABC):
    """Contract for web-search services used during prompt enrichment."""

    @abstractmethod
    async def instant_answer(self, query: str) -> InstantAnswer:
        """Look up a short answer for *query*.

        Parameters
        ----------
        query:
            Free-text search query.

        Returns
        -------
        InstantAnswer
            Possibly empty; check :attr:`InstantAnswer.text`.

        Raises
        ------
        reelpick.utils.errors.ResearchError
            If the search API call fails or returns an unreadable payload.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this search provider."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the provider is configured."""
