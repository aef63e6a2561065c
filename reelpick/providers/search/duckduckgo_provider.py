"""DuckDuckGo instant-answer provider implementing IWebSearchProvider.

Queries the DuckDuckGo Instant Answer API (free, no API key) for the
abstract or direct answer associated with a query.  The API returns JSON
with ``AbstractText``/``Answer`` fields that are empty strings when the
engine has nothing to say.

Failures are raised as :class:`ResearchError`; deciding whether a failed
lookup matters is left to the caller.
"""

from __future__ import annotations

import httpx
import structlog

from reelpick.interfaces.web_search_provider import InstantAnswer, IWebSearchProvider
from reelpick.utils.errors import ResearchError

logger = structlog.get_logger(logger_name=__name__)

_INSTANT_ANSWER_URL = "https://api.duckduckgo.com/"
_DEFAULT_TIMEOUT = 5.0
_DEFAULT_HEADERS = {
    "User-Agent": "Mozilla/5.0 (compatible; reelpick/0.1)",
    "Accept": "application/json",
}


class DuckDuckGoSearchProvider(IWebSearchProvider):
    """DuckDuckGo Instant Answer lookups over a shared ``httpx.AsyncClient``.

    When no client is injected the provider creates its own with the
    given *timeout*; ``main.py`` injects one so the connection pool is
    shared and closed on shutdown.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = _DEFAULT_TIMEOUT,
    ) -> None:
        self._timeout = timeout
        self._client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            headers=_DEFAULT_HEADERS,
            follow_redirects=True,
        )

    async def instant_answer(self, query: str) -> InstantAnswer:
        """Fetch the instant answer for *query*."""
        try:
            response = await self._client.get(
                _INSTANT_ANSWER_URL,
                params={
                    "q": query,
                    "format": "json",
                    "no_html": "1",
                    "skip_disambig": "1",
                },
                timeout=self._timeout,
            )
            response.raise_for_status()
            # DDG sometimes serves JSON as application/x-javascript.
            data = response.json()
        except httpx.TimeoutException as exc:
            raise ResearchError(
                message=f"Timeout after {self._timeout:g}s querying instant answers",
                provider_name=self.get_provider_name(),
            ) from exc
        except httpx.HTTPStatusError as exc:
            raise ResearchError(
                message=f"HTTP {exc.response.status_code} from instant answer API",
                provider_name=self.get_provider_name(),
            ) from exc
        except httpx.HTTPError as exc:
            raise ResearchError(
                message=f"HTTP error querying instant answers: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        except ValueError as exc:
            raise ResearchError(
                message="Instant answer API returned malformed JSON",
                provider_name=self.get_provider_name(),
            ) from exc

        if not isinstance(data, dict):
            raise ResearchError(
                message="Instant answer API returned an unexpected payload",
                provider_name=self.get_provider_name(),
            )

        answer = InstantAnswer(
            abstract=_clean(data.get("AbstractText")),
            answer=_clean(data.get("Answer")),
            heading=_clean(data.get("Heading")),
            source_url=_clean(data.get("AbstractURL")),
        )
        logger.debug(
            "duckduckgo_instant_answer",
            query=query,
            has_text=answer.text is not None,
        )
        return answer

    def get_provider_name(self) -> str:
        """Return the provider identifier."""
        return "duckduckgo"

    def is_available(self) -> bool:
        """DuckDuckGo is always available (no API key required)."""
        return True


def _clean(value: object) -> str | None:
    """Return a stripped non-empty string, or ``None``.

    ``Answer`` is occasionally an object rather than a string; anything
    that is not text is ignored.
    """
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None
