"""Search enrichment for recommendation prompts.

Looks a movie title up on the configured search provider and turns the
result into one line of context for the LLM prompt.

Enrichment is optional.  Any failure (network, timeout, bad payload, or
anything else the provider raises) is logged and turned into "no
enrichment"; :meth:`SearchEnricher.enrich` never raises.
"""

from __future__ import annotations

from reelpick.interfaces.web_search_provider import IWebSearchProvider
from reelpick.utils.logging import get_logger

DEFAULT_QUERY_SUFFIX = "movie cast director plot summary reviews"


class SearchEnricher:
    """Fetches a short factual snippet about a title, or nothing."""

    def __init__(
        self,
        web_search: IWebSearchProvider,
        query_suffix: str = DEFAULT_QUERY_SUFFIX,
        enabled: bool = True,
    ) -> None:
        self._web_search = web_search
        self._query_suffix = query_suffix.strip()
        self._enabled = enabled
        self._logger = get_logger(__name__)

    @property
    def enabled(self) -> bool:
        return self._enabled

    def build_query(self, title: str) -> str:
        """Append the context terms to *title*."""
        if not self._query_suffix:
            return title
        return f"{title} {self._query_suffix}"

    async def enrich(self, title: str) -> str | None:
        """Return ``"Current information about <title>: <text>"`` or ``None``."""
        if not self._enabled:
            return None

        query = self.build_query(title)
        try:
            answer = await self._web_search.instant_answer(query)
            text = answer.text
        except Exception as exc:  # noqa: BLE001
            self._logger.warning(
                "search_enrichment_failed",
                title=title,
                provider=self._web_search.get_provider_name(),
                error=str(exc),
                error_type=type(exc).__name__,
            )
            return None

        if not text:
            self._logger.info("search_enrichment_empty", title=title)
            return None

        self._logger.info(
            "search_enrichment_complete",
            title=title,
            chars=len(text),
        )
        return f"Current information about {title}: {text}"
