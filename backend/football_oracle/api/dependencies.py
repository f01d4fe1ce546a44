"""
API Dependencies Module

Provides dependency injection for FastAPI routes.
Contains factory functions for creating use case dependencies.
"""

from functools import lru_cache

from football_oracle.infrastructure.data_sources.football_data_org import FootballDataOrgSource
from football_oracle.infrastructure.ai.gemini_source import GeminiPredictionSource
from football_oracle.infrastructure.cache.cache_service import get_cache_service
from football_oracle.domain.services.stats_synthesizer import StatsSynthesizer
from football_oracle.application.use_cases.use_cases import DataSources


@lru_cache()
def get_football_data_org() -> FootballDataOrgSource:
    """Get Football-Data.org data source (cached)."""
    return FootballDataOrgSource(cache=get_cache_service())


@lru_cache()
def get_gemini() -> GeminiPredictionSource:
    """Get Gemini prediction source (cached)."""
    return GeminiPredictionSource()


def get_data_sources() -> DataSources:
    """Get all data sources container."""
    return DataSources(
        football_data_org=get_football_data_org(),
        gemini=get_gemini(),
    )


@lru_cache()
def get_stats_synthesizer() -> StatsSynthesizer:
    """Get stats synthesizer (cached)."""
    return StatsSynthesizer()
