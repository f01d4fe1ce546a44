"""
Domain Constants

This module contains constant definitions valid across the domain layer.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from football_oracle.domain.entities.entities import FormResult, Match, Team


# Outcome cycle used by the synthesizer to derive placeholder form
SYNTHETIC_FORM_CYCLE = [
    FormResult.WIN,
    FormResult.DRAW,
    FormResult.LOSS,
    FormResult.WIN,
    FormResult.WIN,
    FormResult.DRAW,
    FormResult.WIN,
    FormResult.LOSS,
]

# Demo fixup: any team whose name contains this marker always shows this form
FIXED_FORM_MARKER = "Man United"
FIXED_FORM = [
    FormResult.WIN,
    FormResult.WIN,
    FormResult.WIN,
    FormResult.WIN,
    FormResult.DRAW,
]

FORM_LENGTH = 5
NO_HEAD_TO_HEAD = "N/A"


# Teams referenced by the built-in fixture list
FALLBACK_TEAMS = {
    "LIV": Team(id=64, name="Liverpool FC", short_name="Liverpool", tla="LIV",
                crest="https://crests.football-data.org/64.png"),
    "MCI": Team(id=65, name="Manchester City FC", short_name="Man City", tla="MCI",
                crest="https://crests.football-data.org/65.png"),
    "ARS": Team(id=57, name="Arsenal FC", short_name="Arsenal", tla="ARS",
                crest="https://crests.football-data.org/57.png"),
    "TOT": Team(id=73, name="Tottenham Hotspur FC", short_name="Tottenham", tla="TOT",
                crest="https://crests.football-data.org/73.svg"),
    "MUN": Team(id=66, name="Manchester United FC", short_name="Man United", tla="MUN",
                crest="https://crests.football-data.org/66.png"),
    "CHE": Team(id=61, name="Chelsea FC", short_name="Chelsea", tla="CHE",
                crest="https://crests.football-data.org/61.png"),
    "RMA": Team(id=76, name="Real Madrid CF", short_name="Real Madrid", tla="RMA",
                crest="https://crests.football-data.org/86.png"),
    "BAR": Team(id=81, name="FC Barcelona", short_name="Barcelona", tla="BAR",
                crest="https://crests.football-data.org/81.svg"),
}

# (match id, kickoff offset from now, status, matchday, home TLA, away TLA)
FALLBACK_FIXTURES = [
    (1, timedelta(days=1), "TIMED", 24, "LIV", "MCI"),
    (2, timedelta(days=2), "TIMED", 24, "ARS", "TOT"),
    (3, timedelta(0), "IN_PLAY", 25, "MUN", "CHE"),
    (4, timedelta(days=3), "TIMED", 25, "RMA", "BAR"),
]


def build_fallback_matches(now: Optional[datetime] = None) -> list[Match]:
    """
    Build the static fixture list served when live data is unavailable.

    Kickoff times are relative to ``now`` so the list always looks upcoming,
    with the Manchester United game shown as in play.
    """
    now = now or datetime.now(timezone.utc)
    return [
        Match(
            id=match_id,
            utc_date=now + offset,
            status=status,
            matchday=matchday,
            home_team=FALLBACK_TEAMS[home],
            away_team=FALLBACK_TEAMS[away],
        )
        for match_id, offset, status, matchday, home, away in FALLBACK_FIXTURES
    ]
