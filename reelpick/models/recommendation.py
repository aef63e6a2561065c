"""Recommendation models for reelpick.

Defines Pydantic v2 models for a single provider's recommendation and for
the aggregated response returned to the HTTP caller.  All models are frozen:
they are built once per request and never mutated afterwards.

Field names are snake_case in Python and camelCase on the wire
(``provider_name`` → ``providerName``) via the shared ``alias_generator``.
FastAPI serializes response models by alias, so route handlers can return
these objects directly.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_WIRE_CONFIG = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# RecommendationResult: one provider's answer for one title.
# ---------------------------------------------------------------------------
class RecommendationResult(BaseModel):
    """A normalized recommendation produced by a single LLM provider.

    ``content`` is free-form text.  The prompt asks for two bolded
    "Title (Year)" lines with a short rationale each, but nothing checks
    that the model complied.
    """

    model_config = _WIRE_CONFIG

    # Human-readable provider label, e.g. "Claude 3.5 Sonnet (Latest + Web Search)".
    provider_name: str
    # The model's text answer, passed through untouched.
    content: str
    # Token usage as reported by the backend.  Shape differs per provider.
    usage_metadata: dict[str, Any] = Field(default_factory=dict)
    # True when a search snippet was included in the prompt.
    search_enhanced: bool = False


# ---------------------------------------------------------------------------
# AggregateResponse: the success envelope for POST /get-recommendations.
# ---------------------------------------------------------------------------
class AggregateResponse(BaseModel):
    """Every successful provider result for one requested title."""

    model_config = _WIRE_CONFIG

    success: bool = True
    recommendations: list[RecommendationResult] = Field(default_factory=list)
    requested_movie: str
