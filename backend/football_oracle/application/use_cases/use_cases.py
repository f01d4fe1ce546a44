"""
Application Use Cases Module

Use cases represent application-specific business rules and orchestrate
the flow of data between the domain layer and the infrastructure layer.
"""

from typing import Optional
from dataclasses import dataclass
import logging

from football_oracle.domain.entities.entities import Match, MatchStats, Prediction
from football_oracle.domain.services.stats_synthesizer import StatsSynthesizer
from football_oracle.infrastructure.data_sources.football_data_org import FootballDataOrgSource
from football_oracle.infrastructure.ai.gemini_source import GeminiPredictionSource
from football_oracle.application.dtos.dtos import (
    TeamDTO,
    ScoreDTO,
    MatchDTO,
    FixtureGroupDTO,
    FixturesByDateResponseDTO,
    HeadToHeadDTO,
    WinRateDTO,
    MatchStatsDTO,
    StatsSource,
    WinProbabilityDTO,
    SourceLinkDTO,
    PredictionDTO,
)
from football_oracle.utils.time_utils import to_local_date_str


logger = logging.getLogger(__name__)


@dataclass
class DataSources:
    """Container for all data sources."""
    football_data_org: FootballDataOrgSource
    gemini: GeminiPredictionSource


def _map_match_to_dto(match: Match) -> MatchDTO:
    """Convert domain Match object to MatchDTO."""
    return MatchDTO(
        id=match.id,
        utc_date=match.utc_date,
        status=match.status,
        phase=match.phase.value,
        matchday=match.matchday,
        home_team=TeamDTO.model_validate(match.home_team),
        away_team=TeamDTO.model_validate(match.away_team),
        score=ScoreDTO.model_validate(match.score) if match.score else None,
    )


def _map_stats_to_dto(match_id: int, stats: MatchStats, source: StatsSource) -> MatchStatsDTO:
    return MatchStatsDTO(
        match_id=match_id,
        source=source,
        home_form=[result.value for result in stats.home_form],
        away_form=[result.value for result in stats.away_form],
        h2h=HeadToHeadDTO.model_validate(stats.h2h),
        win_rate=WinRateDTO.model_validate(stats.win_rate),
    )


def _map_prediction_to_dto(home_team: str, away_team: str, prediction: Prediction) -> PredictionDTO:
    return PredictionDTO(
        home_team=home_team,
        away_team=away_team,
        winner=prediction.winner,
        scoreline=prediction.scoreline,
        win_probability=WinProbabilityDTO.model_validate(prediction.win_probability),
        tactical_breakdown=prediction.tactical_breakdown,
        sources=(
            [SourceLinkDTO.model_validate(link) for link in prediction.sources]
            if prediction.sources is not None
            else None
        ),
        search_html=prediction.search_html,
        created_at=prediction.created_at,
    )


async def _find_fixture(data_sources: DataSources, match_id: int) -> Optional[Match]:
    """Look a match up in the current fixture list."""
    matches = await data_sources.football_data_org.get_upcoming_matches()
    return next((m for m in matches if m.id == match_id), None)


class GetFixturesUseCase:
    """Use case for listing upcoming fixtures."""

    def __init__(self, data_sources: DataSources):
        self.data_sources = data_sources

    async def execute(self, limit: Optional[int] = None) -> list[MatchDTO]:
        matches = await self.data_sources.football_data_org.get_upcoming_matches()
        if limit is not None:
            matches = matches[:limit]
        return [_map_match_to_dto(m) for m in matches]


class GetFixturesByDateUseCase:
    """Use case for fixtures grouped by local kickoff date."""

    def __init__(self, data_sources: DataSources):
        self.data_sources = data_sources

    async def execute(self, limit: int) -> FixturesByDateResponseDTO:
        """
        Group the first ``limit`` fixtures by date.

        Groups keep the order in which their first match appears.
        """
        matches = await self.data_sources.football_data_org.get_upcoming_matches()
        visible = matches[:limit]

        groups: dict[str, list[MatchDTO]] = {}
        for match in visible:
            groups.setdefault(to_local_date_str(match.utc_date), []).append(
                _map_match_to_dto(match)
            )

        return FixturesByDateResponseDTO(
            groups=[FixtureGroupDTO(date=d, matches=ms) for d, ms in groups.items()],
            total_matches=len(matches),
            has_more=len(matches) > limit,
        )


class GetMatchStatsUseCase:
    """
    Use case for match-center statistics.

    Tries live statistics first and falls back to the deterministic
    synthesizer when they are unavailable.
    """

    def __init__(self, data_sources: DataSources, synthesizer: Optional[StatsSynthesizer] = None):
        self.data_sources = data_sources
        self.synthesizer = synthesizer or StatsSynthesizer()

    async def execute(self, match_id: int) -> Optional[MatchStatsDTO]:
        """
        Get statistics for a listed fixture.

        Returns:
            MatchStatsDTO, or None when the match is not in the fixture list
        """
        match = await _find_fixture(self.data_sources, match_id)
        if match is None:
            return None

        stats = await self.data_sources.football_data_org.get_match_stats(
            match.id, match.home_team.id, match.away_team.id
        )
        if stats is not None:
            return _map_stats_to_dto(match.id, stats, StatsSource.LIVE)

        logger.info(f"Using synthesized stats for match {match.id}")
        return _map_stats_to_dto(
            match.id, self.synthesizer.synthesize_for_match(match), StatsSource.SYNTHETIC
        )


class PredictMatchUseCase:
    """Use case for AI predictions."""

    def __init__(self, data_sources: DataSources):
        self.data_sources = data_sources

    async def execute(self, home_team: Optional[str], away_team: Optional[str]) -> PredictionDTO:
        """
        Predict a fixture between two named teams.

        Prediction exceptions propagate to the caller.
        """
        prediction = await self.data_sources.gemini.predict_match(home_team, away_team)
        return _map_prediction_to_dto(home_team, away_team, prediction)

    async def execute_for_match(self, match_id: int) -> Optional[PredictionDTO]:
        """
        Predict a listed fixture using its full team names.

        Returns:
            PredictionDTO, or None when the match is not in the fixture list
        """
        match = await _find_fixture(self.data_sources, match_id)
        if match is None:
            return None
        return await self.execute(match.home_team.name, match.away_team.name)
