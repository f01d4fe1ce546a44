"""
Fixtures API Routes

Upcoming fixtures and match-center statistics. These endpoints never fail
because of the sports-data vendor: fallback fixtures and synthesized
statistics are served instead.
"""
from typing import List, Optional
import logging
from fastapi import APIRouter, HTTPException, Depends, Query, Path
from football_oracle.application.dtos.dtos import (
    MatchDTO,
    MatchStatsDTO,
    FixturesByDateResponseDTO,
    ErrorResponseDTO,
)
from football_oracle.application.use_cases.use_cases import (
    DataSources,
    GetFixturesUseCase,
    GetFixturesByDateUseCase,
    GetMatchStatsUseCase,
)
from football_oracle.domain.services.stats_synthesizer import StatsSynthesizer
from football_oracle.api.dependencies import get_data_sources, get_stats_synthesizer

router = APIRouter(prefix="/fixtures", tags=["Fixtures"])
logger = logging.getLogger(__name__)

DEFAULT_VISIBLE_FIXTURES = 5


@router.get(
    "",
    response_model=List[MatchDTO],
    responses={
        500: {"model": ErrorResponseDTO, "description": "Internal server error"},
    },
    summary="Get upcoming fixtures",
    description="Returns scheduled matches for the configured competition, or the built-in fixture list when live data is unavailable.",
)
async def get_fixtures(
    limit: Optional[int] = Query(default=None, ge=1, description="Maximum matches to return"),
    data_sources: DataSources = Depends(get_data_sources),
) -> List[MatchDTO]:
    """Get upcoming fixtures."""
    use_case = GetFixturesUseCase(data_sources)
    return await use_case.execute(limit)


@router.get(
    "/by-date",
    response_model=FixturesByDateResponseDTO,
    summary="Get upcoming fixtures grouped by date",
    description="Returns the first `limit` fixtures grouped by local kickoff date. Increase `limit` to load more.",
)
async def get_fixtures_by_date(
    limit: int = Query(default=DEFAULT_VISIBLE_FIXTURES, ge=1, description="Number of fixtures to show"),
    data_sources: DataSources = Depends(get_data_sources),
) -> FixturesByDateResponseDTO:
    """Get fixtures grouped by date."""
    use_case = GetFixturesByDateUseCase(data_sources)
    return await use_case.execute(limit)


@router.get(
    "/{match_id}/stats",
    response_model=MatchStatsDTO,
    responses={
        404: {"model": ErrorResponseDTO, "description": "Match not found"},
        500: {"model": ErrorResponseDTO, "description": "Internal server error"},
    },
    summary="Get match-center statistics",
    description="Returns live form and head-to-head statistics, or deterministic placeholder statistics when live data is unavailable.",
)
async def get_match_stats(
    match_id: int = Path(..., description="Match identifier"),
    data_sources: DataSources = Depends(get_data_sources),
    synthesizer: StatsSynthesizer = Depends(get_stats_synthesizer),
) -> MatchStatsDTO:
    """Get statistics for a listed fixture."""
    try:
        use_case = GetMatchStatsUseCase(data_sources, synthesizer)
        result = await use_case.execute(match_id)
    except Exception as e:
        logger.error(f"Error retrieving stats for match {match_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error retrieving match stats: {str(e)}")

    if result is None:
        raise HTTPException(status_code=404, detail="Match not found")
    return result
