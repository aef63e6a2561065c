"""Utility modules for reelpick.

- **errors** -- Domain exception hierarchy rooted at ReelpickError, plus the
  closed ``ProviderErrorKind`` set the HTTP layer translates into status codes.
- **concurrency** -- ``settle_all`` fan-out used by the multi-provider path.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output in development, structured JSON in production.
"""

from reelpick.utils.concurrency import settle_all, split_outcomes
from reelpick.utils.errors import (
    AllProvidersFailedError,
    ConfigurationError,
    InvalidProviderError,
    LLMError,
    MissingTitleError,
    ProviderErrorKind,
    ReelpickError,
    RequestValidationError,
    ResearchError,
)
from reelpick.utils.logging import configure_logging, get_logger

__all__ = [
    "AllProvidersFailedError",
    "ConfigurationError",
    "InvalidProviderError",
    "LLMError",
    "MissingTitleError",
    "ProviderErrorKind",
    "ReelpickError",
    "RequestValidationError",
    "ResearchError",
    "configure_logging",
    "get_logger",
    "settle_all",
    "split_outcomes",
]
