"""
Data Transfer Objects (DTOs) Module

DTOs are used to transfer data between layers and to/from the API.
They use Pydantic for validation and serialization.
"""

from datetime import datetime, timezone
from typing import Optional
from enum import Enum
from pydantic import BaseModel, Field


# ============================================================
# Enums
# ============================================================

class StatsSource(str, Enum):
    """Where match-center statistics came from."""
    LIVE = "live"
    SYNTHETIC = "synthetic"


# ============================================================
# Request DTOs
# ============================================================

class PredictMatchRequest(BaseModel):
    """Request for a prediction between two named teams."""
    home_team: Optional[str] = Field(default=None, description="Home team name")
    away_team: Optional[str] = Field(default=None, description="Away team name")


# ============================================================
# Response DTOs
# ============================================================

class TeamDTO(BaseModel):
    """Team data transfer object."""
    id: int
    name: str
    short_name: Optional[str] = None
    tla: Optional[str] = None
    crest: Optional[str] = None

    class Config:
        from_attributes = True


class ScoreDTO(BaseModel):
    """Full-time score."""
    home: Optional[int] = None
    away: Optional[int] = None

    class Config:
        from_attributes = True


class MatchDTO(BaseModel):
    """Match data transfer object."""
    id: int
    utc_date: datetime
    status: str
    phase: str
    matchday: Optional[int] = None
    home_team: TeamDTO
    away_team: TeamDTO
    score: Optional[ScoreDTO] = None


class FixtureGroupDTO(BaseModel):
    """Fixtures sharing a kickoff date."""
    date: str
    matches: list[MatchDTO]


class FixturesByDateResponseDTO(BaseModel):
    """Fixtures grouped by date."""
    groups: list[FixtureGroupDTO]
    total_matches: int
    has_more: bool


class HeadToHeadDTO(BaseModel):
    """Head-to-head summary."""
    home_wins: int
    away_wins: int
    draws: int
    last_result: str

    class Config:
        from_attributes = True


class WinRateDTO(BaseModel):
    """Win percentages."""
    home: int
    away: int

    class Config:
        from_attributes = True


class MatchStatsDTO(BaseModel):
    """Match-center statistics."""
    match_id: int
    source: StatsSource
    home_form: list[str]
    away_form: list[str]
    h2h: HeadToHeadDTO
    win_rate: WinRateDTO


class WinProbabilityDTO(BaseModel):
    """Model supplied probabilities, passed through without normalization."""
    home: float
    away: float
    draw: float

    class Config:
        from_attributes = True


class SourceLinkDTO(BaseModel):
    """Citation consulted by the model."""
    title: str
    uri: str

    class Config:
        from_attributes = True


class PredictionDTO(BaseModel):
    """Prediction data transfer object."""
    home_team: str
    away_team: str
    winner: str
    scoreline: str
    win_probability: WinProbabilityDTO
    tactical_breakdown: str
    sources: Optional[list[SourceLinkDTO]] = None
    search_html: Optional[str] = Field(
        default=None,
        description="Vendor rendered search attribution HTML, returned unsanitized",
    )
    created_at: datetime


class HealthResponseDTO(BaseModel):
    """Health check response."""
    status: str = "healthy"
    version: str = "1.0.0"
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    football_data_configured: bool = False
    gemini_configured: bool = False


class ErrorResponseDTO(BaseModel):
    """Error response."""
    error: str
    message: str
    details: Optional[dict] = None
