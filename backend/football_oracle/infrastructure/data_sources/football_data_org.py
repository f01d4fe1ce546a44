"""
Football-Data.org Data Source

This module integrates with the Football-Data.org v4 API for upcoming
fixtures and match-center statistics. Every failure degrades to fallback
data: callers never see an exception from this module.

API Documentation: https://www.football-data.org/documentation/api
Free tier: 10 requests/minute
"""

import os
from datetime import datetime
from typing import Any, Optional
from dataclasses import dataclass
from urllib.parse import urlencode
import logging
import asyncio

import httpx

from football_oracle.domain.constants import build_fallback_matches
from football_oracle.domain.entities.entities import Match, MatchStats, Score, Team
from football_oracle.domain.services.statistics_service import StatisticsService
from football_oracle.infrastructure.cache.cache_service import CacheService, get_cache_service


logger = logging.getLogger(__name__)


@dataclass
class FootballDataOrgConfig:
    """Configuration for Football-Data.org."""
    api_key: Optional[str] = None
    base_url: str = "https://api.football-data.org/v4"
    competition: Optional[str] = None
    timeout: int = 30
    cache_ttl: int = CacheService.TTL_FIXTURES

    def __post_init__(self):
        if self.api_key is None:
            self.api_key = os.getenv("FOOTBALL_DATA_API_KEY")
        if self.competition is None:
            self.competition = os.getenv("FOOTBALL_DATA_COMPETITION", "PL")


class FootballDataOrgSource:
    """
    Data source for Football-Data.org.

    Provides scheduled fixtures for one competition and head-to-head/form
    statistics for a single match. Successful responses are cached for
    one hour.
    """

    FORM_MATCH_LIMIT = 5

    def __init__(
        self,
        config: Optional[FootballDataOrgConfig] = None,
        cache: Optional[CacheService] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the data source."""
        self.config = config or FootballDataOrgConfig()
        self.cache = cache or get_cache_service()
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        """Check if API key is configured."""
        return bool(self.config.api_key)

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.config.base_url,
            headers={"X-Auth-Token": self.config.api_key},
            timeout=self.config.timeout,
            transport=self._transport,
        )

    def _cache_key(self, endpoint: str, params: Optional[dict]) -> str:
        query = urlencode(sorted((params or {}).items()))
        return f"football_data:{endpoint}?{query}"

    async def _make_request(
        self,
        client: httpx.AsyncClient,
        endpoint: str,
        params: Optional[dict] = None,
    ) -> tuple[int, Any]:
        """
        Make authenticated GET request, serving successful responses from cache.

        Args:
            client: Open HTTP client carrying the auth header
            endpoint: API endpoint
            params: Query parameters

        Returns:
            Tuple of (status code, decoded JSON body). Error bodies that are not
            JSON decode to an empty dict.

        Raises:
            httpx.HTTPError: on transport failures
            ValueError: when a successful response body is not JSON
        """
        cache_key = self._cache_key(endpoint, params)
        cached = self.cache.get(cache_key)
        if cached is not None:
            return 200, cached

        response = await client.get(endpoint, params=params)

        if response.is_success:
            payload = response.json()
            self.cache.set(cache_key, payload, self.config.cache_ttl)
            return response.status_code, payload

        try:
            payload = response.json()
        except ValueError:
            payload = {}
        return response.status_code, payload

    async def get_upcoming_matches(self) -> list[Match]:
        """
        Get scheduled matches for the configured competition.

        Falls back to the built-in fixture list when no API key is configured,
        when the API rate limits or errors, or when the response is unusable.

        Returns:
            List of Match entities (never raises)
        """
        if not self.is_configured:
            logger.info("No Football-Data.org API key found, using fallback fixtures.")
            return build_fallback_matches()

        endpoint = f"/competitions/{self.config.competition}/matches"

        try:
            async with self._client() as client:
                status, data = await self._make_request(client, endpoint, {"status": "SCHEDULED"})

            if status == 429:
                logger.error("Football-Data.org rate limit exceeded. Using fallback fixtures.")
                return build_fallback_matches()

            if not 200 <= status < 300:
                logger.error(f"Football-Data.org API error ({status}): {data}")
                return build_fallback_matches()

            matches_data = data.get("matches")
            if matches_data is None:
                return build_fallback_matches()

            matches = []
            for match_data in matches_data:
                match = self._parse_match(match_data)
                if match:
                    matches.append(match)
            return matches

        except Exception as e:
            logger.error(f"Failed to fetch matches from Football-Data.org: {e}")
            return build_fallback_matches()

    async def get_match_stats(
        self,
        match_id: int,
        home_id: int,
        away_id: int,
    ) -> Optional[MatchStats]:
        """
        Get live head-to-head and form statistics for a match.

        Args:
            match_id: Football-Data.org match id
            home_id: Home team id
            away_id: Away team id

        Returns:
            MatchStats, or None when unconfigured or when any call fails
            (callers fall back to synthesized statistics)
        """
        if not self.is_configured:
            return None

        form_params = {"status": "FINISHED", "limit": self.FORM_MATCH_LIMIT}

        try:
            async with self._client() as client:
                (h2h_status, h2h_data), (home_status, home_data), (away_status, away_data) = (
                    await asyncio.gather(
                        self._make_request(client, f"/matches/{match_id}"),
                        self._make_request(client, f"/teams/{home_id}/matches", form_params),
                        self._make_request(client, f"/teams/{away_id}/matches", form_params),
                    )
                )

            statuses = (h2h_status, home_status, away_status)
            if any(not 200 <= status < 300 for status in statuses):
                logger.warning(
                    f"One or more stats calls failed {statuses}, falling back to synthesized stats"
                )
                return None

            return StatisticsService.build_live_stats(
                h2h_data, home_data, away_data, home_id, away_id
            )

        except Exception as e:
            logger.error(f"Error fetching live match stats for match {match_id}: {e}")
            return None

    def _parse_team(self, team_data: dict) -> Team:
        return Team(
            id=team_data.get("id"),
            name=team_data.get("name"),
            short_name=team_data.get("shortName"),
            tla=team_data.get("tla"),
            crest=team_data.get("crest"),
        )

    def _parse_match(self, match_data: dict) -> Optional[Match]:
        """Parse Football-Data.org match into Match entity."""
        try:
            utc_date = match_data.get("utcDate", "")
            kickoff = datetime.fromisoformat(utc_date.replace("Z", "+00:00"))

            score = None
            full_time = (match_data.get("score") or {}).get("fullTime")
            if full_time is not None:
                score = Score(home=full_time.get("home"), away=full_time.get("away"))

            return Match(
                id=match_data["id"],
                utc_date=kickoff,
                status=match_data.get("status", ""),
                matchday=match_data.get("matchday"),
                home_team=self._parse_team(match_data.get("homeTeam") or {}),
                away_team=self._parse_team(match_data.get("awayTeam") or {}),
                score=score,
            )

        except Exception as e:
            logger.debug(f"Failed to parse match: {e}")
            return None
