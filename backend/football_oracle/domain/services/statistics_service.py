"""
Statistics Domain Service

Derives match-center statistics from raw football-data.org payloads.
"""

import math
from typing import Any, Optional

from football_oracle.domain.constants import NO_HEAD_TO_HEAD
from football_oracle.domain.entities.entities import (
    FormResult,
    HeadToHead,
    MatchStats,
    WinRate,
)


class StatisticsService:
    @staticmethod
    def _full_time(match_data: dict) -> dict:
        return (match_data.get("score") or {}).get("fullTime") or {}

    @staticmethod
    def classify_result(match_data: dict, team_id: int) -> FormResult:
        """
        Classify a finished match from one team's point of view.

        A missing score on either side counts as a draw.
        """
        score = StatisticsService._full_time(match_data)
        home_goals = score.get("home")
        away_goals = score.get("away")
        if home_goals is None or away_goals is None:
            return FormResult.DRAW
        if home_goals == away_goals:
            return FormResult.DRAW

        is_home = (match_data.get("homeTeam") or {}).get("id") == team_id
        team_goals = home_goals if is_home else away_goals
        opponent_goals = away_goals if is_home else home_goals
        return FormResult.WIN if team_goals > opponent_goals else FormResult.LOSS

    @staticmethod
    def calculate_form(matches: list[dict], team_id: int) -> list[FormResult]:
        """Map a team's recent matches onto W/D/L."""
        return [StatisticsService.classify_result(m, team_id) for m in matches]

    @staticmethod
    def calculate_win_rate(home_wins: int, away_wins: int, draws: int) -> WinRate:
        """
        Win percentages over all head-to-head meetings.

        A zero total is replaced by 1 so the rate is 0 rather than undefined.
        Halves round up.
        """
        total = (home_wins + away_wins + draws) or 1
        return WinRate(
            home=StatisticsService._round_half_up(home_wins / total * 100),
            away=StatisticsService._round_half_up(away_wins / total * 100),
        )

    @staticmethod
    def _round_half_up(value: float) -> int:
        return int(math.floor(value + 0.5))

    @staticmethod
    def format_last_result(match_data: Optional[dict]) -> str:
        """Render a head-to-head match as "HOM 2-1 AWA"."""
        if not match_data:
            return NO_HEAD_TO_HEAD

        score = StatisticsService._full_time(match_data)
        home_tla = (match_data.get("homeTeam") or {}).get("tla")
        away_tla = (match_data.get("awayTeam") or {}).get("tla")
        home_goals = StatisticsService._goals_label(score.get("home"))
        away_goals = StatisticsService._goals_label(score.get("away"))
        return f"{home_tla} {home_goals}-{away_goals} {away_tla}"

    @staticmethod
    def _goals_label(goals: Optional[int]) -> str:
        return "?" if goals is None else str(goals)

    @staticmethod
    def build_live_stats(
        h2h_payload: dict[str, Any],
        home_matches_payload: dict[str, Any],
        away_matches_payload: dict[str, Any],
        home_id: int,
        away_id: int,
    ) -> MatchStats:
        """
        Assemble MatchStats from the three football-data.org responses.

        Args:
            h2h_payload: Response of /matches/{id}, carrying a "head2head" section
            home_matches_payload: Last finished matches of the home team
            away_matches_payload: Last finished matches of the away team
            home_id: Vendor id of the home team
            away_id: Vendor id of the away team

        Raises:
            KeyError, TypeError: when a payload lacks the expected sections
        """
        h2h = h2h_payload["head2head"]
        home_wins = h2h["homeTeam"]["wins"]
        away_wins = h2h["awayTeam"]["wins"]
        draws = h2h["draws"]

        h2h_matches = h2h.get("matches") or []
        last_match = h2h_matches[0] if h2h_matches else None

        return MatchStats(
            home_form=StatisticsService.calculate_form(home_matches_payload["matches"], home_id),
            away_form=StatisticsService.calculate_form(away_matches_payload["matches"], away_id),
            h2h=HeadToHead(
                home_wins=home_wins,
                away_wins=away_wins,
                draws=draws,
                last_result=StatisticsService.format_last_result(last_match),
            ),
            win_rate=StatisticsService.calculate_win_rate(home_wins, away_wins, draws),
        )
