"""Interface definitions for the external services reelpick talks to.

Every LLM backend and search engine is reached only through the abstract
base classes in this package.  Concrete adapters live in
``reelpick/providers/`` and are built once in ``reelpick/main.py``, then
injected into the recommendation service.  Tests substitute
``MagicMock(spec=ILLMProvider)`` objects for them.

    Interface            →  Concrete implementations
    ───────────────────────────────────────────────────────
    ILLMProvider         →  OpenAILLMProvider, AnthropicLLMProvider
    IWebSearchProvider   →  DuckDuckGoSearchProvider
"""

from reelpick.interfaces.llm_provider import ILLMProvider
from reelpick.interfaces.web_search_provider import InstantAnswer, IWebSearchProvider

__all__ = ["ILLMProvider", "IWebSearchProvider", "InstantAnswer"]
