"""
Predictions Router

API endpoints for AI match predictions.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Path

from football_oracle.application.dtos.dtos import (
    PredictMatchRequest,
    PredictionDTO,
    ErrorResponseDTO,
)
from football_oracle.application.use_cases.use_cases import DataSources, PredictMatchUseCase
from football_oracle.api.dependencies import get_data_sources
from football_oracle.domain.exceptions import (
    PredictionException,
    PredictionUsageError,
    PredictionConfigurationError,
    PredictionRateLimitError,
)


router = APIRouter(prefix="/predictions", tags=["Predictions"])
logger = logging.getLogger(__name__)

PREDICTION_ERROR_RESPONSES = {
    400: {"model": ErrorResponseDTO, "description": "Missing team names"},
    429: {"model": ErrorResponseDTO, "description": "AI service rate limit exceeded"},
    502: {"model": ErrorResponseDTO, "description": "AI service failure"},
    503: {"model": ErrorResponseDTO, "description": "AI service not configured"},
}


def _to_http_exception(error: PredictionException) -> HTTPException:
    """Translate a prediction failure into an HTTP error."""
    if isinstance(error, PredictionUsageError):
        return HTTPException(status_code=400, detail=str(error))
    if isinstance(error, PredictionRateLimitError):
        return HTTPException(status_code=429, detail=str(error))
    if isinstance(error, PredictionConfigurationError):
        return HTTPException(status_code=503, detail=str(error))
    return HTTPException(status_code=502, detail=str(error))


@router.post(
    "",
    response_model=PredictionDTO,
    responses=PREDICTION_ERROR_RESPONSES,
    summary="Predict a match between two teams",
    description="Generates a search-grounded AI prediction with win probabilities, a scoreline, a tactical breakdown and cited sources.",
)
async def predict_match(
    request: PredictMatchRequest,
    data_sources: DataSources = Depends(get_data_sources),
) -> PredictionDTO:
    """Predict a match between two named teams."""
    use_case = PredictMatchUseCase(data_sources)
    try:
        return await use_case.execute(request.home_team, request.away_team)
    except PredictionException as e:
        raise _to_http_exception(e)


@router.post(
    "/match/{match_id}",
    response_model=PredictionDTO,
    responses={
        404: {"model": ErrorResponseDTO, "description": "Match not found"},
        **PREDICTION_ERROR_RESPONSES,
    },
    summary="Predict a listed fixture",
    description="Generates a prediction for a match from the fixture list, using the teams' full names.",
)
async def predict_fixture(
    match_id: int = Path(..., description="Match identifier"),
    data_sources: DataSources = Depends(get_data_sources),
) -> PredictionDTO:
    """Predict a listed fixture."""
    use_case = PredictMatchUseCase(data_sources)
    try:
        result = await use_case.execute_for_match(match_id)
    except PredictionException as e:
        raise _to_http_exception(e)

    if result is None:
        raise HTTPException(status_code=404, detail="Match not found")
    return result
