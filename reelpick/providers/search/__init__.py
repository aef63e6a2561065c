"""Web-search provider implementations.

Currently only DuckDuckGo's Instant Answer API (free, no API key).
"""

from reelpick.providers.search.duckduckgo_provider import DuckDuckGoSearchProvider

__all__ = ["DuckDuckGoSearchProvider"]
