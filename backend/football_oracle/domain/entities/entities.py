"""
Domain Entities Module

This module contains the core domain entities for the fixtures dashboard.
These entities represent the core business concepts and are independent of any infrastructure.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional
from enum import Enum


class MatchPhase(Enum):
    """Coarse lifecycle phase of a match."""
    SCHEDULED = "scheduled"
    IN_PLAY = "in_play"
    FINISHED = "finished"
    OTHER = "other"


_PHASE_BY_STATUS = {
    "SCHEDULED": MatchPhase.SCHEDULED,
    "TIMED": MatchPhase.SCHEDULED,
    "IN_PLAY": MatchPhase.IN_PLAY,
    "PAUSED": MatchPhase.IN_PLAY,
    "LIVE": MatchPhase.IN_PLAY,
    "FINISHED": MatchPhase.FINISHED,
    "AWARDED": MatchPhase.FINISHED,
}


class FormResult(str, Enum):
    """Outcome of a single match from one team's point of view."""
    WIN = "W"
    DRAW = "D"
    LOSS = "L"


@dataclass(frozen=True)
class Team:
    """
    Represents a football team.

    Attributes:
        id: Vendor identifier for the team
        name: Full name of the team (e.g., "Manchester United FC")
        short_name: Display name (e.g., "Man United")
        tla: Three-letter code (e.g., "MUN")
        crest: URL of the crest image
    """
    id: int
    name: str
    short_name: Optional[str] = None
    tla: Optional[str] = None
    crest: Optional[str] = None

    def __post_init__(self):
        if not self.name:
            raise ValueError("Team name cannot be empty")

    @property
    def display_name(self) -> str:
        """Short name when available, full name otherwise."""
        return self.short_name or self.name


@dataclass(frozen=True)
class Score:
    """Full-time score. Either side is None until the match has a result."""
    home: Optional[int] = None
    away: Optional[int] = None


@dataclass(frozen=True)
class Match:
    """
    Represents a fixture between two teams.

    Attributes:
        id: Vendor identifier for the match
        utc_date: Kickoff time (timezone aware)
        status: Raw vendor status (SCHEDULED, TIMED, IN_PLAY, FINISHED, ...)
        matchday: Round number within the competition
        home_team: The home team
        away_team: The away team
        score: Full-time score, if any
    """
    id: int
    utc_date: datetime
    status: str
    matchday: Optional[int]
    home_team: Team
    away_team: Team
    score: Optional[Score] = None

    @property
    def phase(self) -> MatchPhase:
        """Map the vendor status onto the coarse match phase."""
        return _PHASE_BY_STATUS.get((self.status or "").upper(), MatchPhase.OTHER)

    @property
    def is_live(self) -> bool:
        return self.phase == MatchPhase.IN_PLAY


@dataclass(frozen=True)
class HeadToHead:
    """Aggregate results between the two teams of a fixture."""
    home_wins: int
    away_wins: int
    draws: int
    last_result: str


@dataclass(frozen=True)
class WinRate:
    """Win percentages (0-100) for each side."""
    home: int
    away: int


@dataclass
class MatchStats:
    """
    Match-center statistics for a fixture.

    Attributes:
        home_form: Last five results of the home team (most recent first)
        away_form: Last five results of the away team
        h2h: Head-to-head summary
        win_rate: Derived win percentages
    """
    home_form: list[FormResult]
    away_form: list[FormResult]
    h2h: HeadToHead
    win_rate: WinRate


@dataclass(frozen=True)
class SourceLink:
    """A web page the model consulted while grounding its answer."""
    title: str
    uri: str


@dataclass(frozen=True)
class WinProbability:
    """
    Model supplied probabilities, each 0-100.

    Values are passed through from the model as-is and are not required
    to add up to 100.
    """
    home: float
    away: float
    draw: float


@dataclass
class Prediction:
    """
    AI verdict for a fixture.

    Attributes:
        winner: Team name or "Draw"
        scoreline: Predicted score formatted "H-A"
        win_probability: Home/away/draw percentages
        tactical_breakdown: Free text analysis
        sources: Deduplicated citations, None when the model cited nothing
        search_html: Vendor rendered search attribution, passed through verbatim
        created_at: Timestamp when the prediction was produced
    """
    winner: str
    scoreline: str
    win_probability: WinProbability
    tactical_breakdown: str
    sources: Optional[list[SourceLink]] = None
    search_html: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def scoreline_parts(self) -> tuple[str, str]:
        """Split the scoreline on "-" into its home and away parts (not parsed)."""
        home, _, away = self.scoreline.partition("-")
        return home.strip(), away.strip()
