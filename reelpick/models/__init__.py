"""reelpick domain models."""

from reelpick.models.recommendation import AggregateResponse, RecommendationResult

__all__ = ["AggregateResponse", "RecommendationResult"]
