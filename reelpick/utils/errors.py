"""Custom exception hierarchy for reelpick.

All application exceptions inherit from :class:`ReelpickError`, which
carries an optional ``provider_name`` so error handlers can identify which
external service (e.g. "openai", "claude", "duckduckgo") caused the failure.

The hierarchy is organized by request stage:

    ReelpickError  (base -- catch-all for any reelpick error)
    +-- RequestValidationError   (bad inbound request, HTTP 400)
    |   +-- MissingTitleError
    |   +-- InvalidProviderError
    +-- ResearchError            (search enrichment failure, never surfaced)
    +-- LLMError                 (any LLM API call failure, tagged by kind)
    +-- AllProvidersFailedError  (every provider in a fan-out failed)
    +-- ConfigurationError       (startup / invalid config)

HTTP status translation for these errors lives in exactly one place:
``reelpick.api.middleware``.
"""

from __future__ import annotations

from enum import Enum


class ReelpickError(Exception):
    """Base exception for all reelpick errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name`` identifying which external service triggered the
    error.  The ``__str__`` method prefixes the provider name in brackets
    for structured log output, e.g. ``[openai] Rate limit exceeded``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Inbound request errors
# ---------------------------------------------------------------------------

class RequestValidationError(ReelpickError):
    """Raised when an inbound request is rejected before any external call."""

    def __init__(
        self,
        message: str = "Invalid request",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class MissingTitleError(RequestValidationError):
    """Raised when the movie title is missing or blank."""

    def __init__(self, message: str = "Movie title is required") -> None:
        super().__init__(message=message)


class InvalidProviderError(RequestValidationError):
    """Raised when the provider selector names no registered provider."""

    def __init__(self, selector: str, accepted: list[str]) -> None:
        self._selector = selector
        self._accepted = list(accepted)
        super().__init__(message=f"Invalid provider. Use {_quoted_choices(accepted)}.")

    @property
    def selector(self) -> str:
        return self._selector

    @property
    def accepted(self) -> list[str]:
        return list(self._accepted)


def _quoted_choices(choices: list[str]) -> str:
    """Render ``["a", "b", "c"]`` as ``"a", "b", or "c"``."""
    quoted = [f'"{choice}"' for choice in choices]
    if len(quoted) <= 1:
        return "".join(quoted)
    if len(quoted) == 2:
        return f"{quoted[0]} or {quoted[1]}"
    return f"{', '.join(quoted[:-1])}, or {quoted[-1]}"


# ---------------------------------------------------------------------------
# Search enrichment errors
# ---------------------------------------------------------------------------

class ResearchError(ReelpickError):
    """Raised when a web-search lookup fails (network, HTTP status, payload)."""

    def __init__(
        self,
        message: str = "Web search failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# LLM provider errors
# ---------------------------------------------------------------------------

class ProviderErrorKind(str, Enum):
    """Closed set of failure classes an LLM adapter can report."""

    UNAUTHORIZED = "unauthorized"
    RATE_LIMITED = "rate_limited"
    UPSTREAM_UNAVAILABLE = "upstream_unavailable"
    EMPTY_RESPONSE = "empty_response"
    OTHER = "other"


class LLMError(ReelpickError):
    """Raised when an LLM API call fails or returns no usable content.

    ``kind`` is the only thing the HTTP layer looks at to pick a status
    code; ``status_code`` keeps the upstream HTTP status (when there was
    one) for logging.
    """

    def __init__(
        self,
        message: str = "LLM API call failed",
        provider_name: str | None = None,
        kind: ProviderErrorKind = ProviderErrorKind.OTHER,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
        self._kind = kind
        self._status_code = status_code

    @property
    def kind(self) -> ProviderErrorKind:
        return self._kind

    @property
    def status_code(self) -> int | None:
        return self._status_code


def kind_for_status(status_code: int | None) -> ProviderErrorKind:
    """Classify an upstream HTTP status code into a :class:`ProviderErrorKind`."""
    if status_code == 401:
        return ProviderErrorKind.UNAUTHORIZED
    if status_code == 429:
        return ProviderErrorKind.RATE_LIMITED
    if status_code is not None and status_code >= 500:
        return ProviderErrorKind.UPSTREAM_UNAVAILABLE
    return ProviderErrorKind.OTHER


class AllProvidersFailedError(ReelpickError):
    """Raised when every provider consulted for a request failed."""

    def __init__(
        self,
        message: str = "All AI providers failed",
        failures: dict[str, str] | None = None,
    ) -> None:
        super().__init__(message=message)
        self._failures = dict(failures or {})

    @property
    def failures(self) -> dict[str, str]:
        """Provider name -> error message, for logging only."""
        return dict(self._failures)


# ---------------------------------------------------------------------------
# Configuration errors
# ---------------------------------------------------------------------------

class ConfigurationError(ReelpickError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
