"""Request-level services: search enrichment and multi-provider orchestration."""

from reelpick.services.enrichment_service import SearchEnricher
from reelpick.services.recommendation_service import RecommendationService

__all__ = ["RecommendationService", "SearchEnricher"]
