"""LLM provider adapters.

Two concrete implementations of ILLMProvider (reelpick/interfaces/llm_provider.py):
    - OpenAILLMProvider    — gpt-4o (also supports OpenAI-compatible APIs)
    - AnthropicLLMProvider — Claude 3.5 Sonnet

main.py builds both at startup and registers them with the
RecommendationService under their selector names.
"""

from reelpick.providers.llm.anthropic_provider import AnthropicLLMProvider
from reelpick.providers.llm.openai_provider import OpenAILLMProvider

__all__ = ["OpenAILLMProvider", "AnthropicLLMProvider"]
