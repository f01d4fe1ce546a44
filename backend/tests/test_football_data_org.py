"""
Unit Tests for the Football-Data.org Data Source

HTTP traffic is served by httpx.MockTransport; no network access.
"""

import asyncio

import httpx
import pytest

from football_oracle.domain.entities.entities import FormResult
from football_oracle.infrastructure.cache.cache_service import CacheService
from football_oracle.infrastructure.data_sources.football_data_org import (
    FootballDataOrgConfig,
    FootballDataOrgSource,
)


W, D, L = FormResult.WIN, FormResult.DRAW, FormResult.LOSS


def respond(status_code, **kwargs):
    """Response factory, so every request gets a fresh httpx.Response."""
    return lambda: httpx.Response(status_code, **kwargs)


class RecordingHandler:
    """MockTransport handler answering by request path."""

    def __init__(self, routes):
        self.routes = routes
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, json={"message": "not found"})
        if isinstance(route, Exception):
            raise route
        return route()


def make_source(handler, api_key="test-key"):
    return FootballDataOrgSource(
        config=FootballDataOrgConfig(api_key=api_key, competition="PL"),
        cache=CacheService(),
        transport=httpx.MockTransport(handler),
    )


def api_match(match_id, home, away, status="SCHEDULED", score=None):
    return {
        "id": match_id,
        "utcDate": "2026-10-18T14:00:00Z",
        "status": status,
        "matchday": 9,
        "homeTeam": {"id": home[0], "name": home[1], "shortName": home[1], "tla": home[2], "crest": None},
        "awayTeam": {"id": away[0], "name": away[1], "shortName": away[1], "tla": away[2], "crest": None},
        "score": {"fullTime": {"home": score[0], "away": score[1]}} if score else {"fullTime": {"home": None, "away": None}},
    }


MUN = (66, "Man United", "MUN")
CHE = (61, "Chelsea", "CHE")
OTHER = (1, "Other", "OTH")

FIXTURES_PATH = "/v4/competitions/PL/matches"


class TestGetUpcomingMatches:
    """Tests for fixture fetching and its fallback chain."""

    def test_no_api_key_returns_fallback_without_network(self):
        handler = RecordingHandler({})
        source = make_source(handler, api_key="")

        matches = asyncio.run(source.get_upcoming_matches())

        assert [m.id for m in matches] == [1, 2, 3, 4]
        assert handler.requests == []

    def test_success_parses_matches(self):
        handler = RecordingHandler({
            FIXTURES_PATH: respond(200, json={"matches": [api_match(500, MUN, CHE)]}),
        })
        source = make_source(handler)

        matches = asyncio.run(source.get_upcoming_matches())

        assert len(matches) == 1
        match = matches[0]
        assert match.id == 500
        assert match.home_team.tla == "MUN"
        assert match.away_team.id == 61
        assert match.matchday == 9
        assert match.utc_date.year == 2026
        assert match.utc_date.tzinfo is not None

    def test_request_is_authenticated_and_filtered(self):
        handler = RecordingHandler({FIXTURES_PATH: respond(200, json={"matches": []})})
        source = make_source(handler)

        asyncio.run(source.get_upcoming_matches())

        request = handler.requests[0]
        assert request.headers["X-Auth-Token"] == "test-key"
        assert request.url.params["status"] == "SCHEDULED"

    def test_empty_match_list_is_returned(self):
        handler = RecordingHandler({FIXTURES_PATH: respond(200, json={"matches": []})})
        source = make_source(handler)

        assert asyncio.run(source.get_upcoming_matches()) == []

    def test_rate_limit_returns_fallback(self):
        handler = RecordingHandler({FIXTURES_PATH: respond(429, json={"message": "slow down"})})
        source = make_source(handler)

        matches = asyncio.run(source.get_upcoming_matches())

        assert [m.id for m in matches] == [1, 2, 3, 4]
        assert [m.home_team.tla for m in matches] == ["LIV", "ARS", "MUN", "RMA"]

    def test_error_with_non_json_body_returns_fallback(self):
        handler = RecordingHandler({FIXTURES_PATH: respond(500, text="<html>oops</html>")})
        source = make_source(handler)

        assert [m.id for m in asyncio.run(source.get_upcoming_matches())] == [1, 2, 3, 4]

    def test_missing_matches_array_returns_fallback(self):
        handler = RecordingHandler({FIXTURES_PATH: respond(200, json={"count": 0})})
        source = make_source(handler)

        assert len(asyncio.run(source.get_upcoming_matches())) == 4

    def test_invalid_json_returns_fallback(self):
        handler = RecordingHandler({FIXTURES_PATH: respond(200, text="not json")})
        source = make_source(handler)

        assert len(asyncio.run(source.get_upcoming_matches())) == 4

    def test_network_error_returns_fallback(self):
        handler = RecordingHandler({FIXTURES_PATH: httpx.ConnectError("boom")})
        source = make_source(handler)

        assert len(asyncio.run(source.get_upcoming_matches())) == 4

    def test_unparseable_entries_are_skipped(self):
        broken = {"id": 7, "utcDate": "not a date"}
        handler = RecordingHandler({
            FIXTURES_PATH: respond(200, json={"matches": [broken, api_match(8, MUN, CHE)]}),
        })
        source = make_source(handler)

        assert [m.id for m in asyncio.run(source.get_upcoming_matches())] == [8]

    def test_successful_response_is_cached(self):
        handler = RecordingHandler({
            FIXTURES_PATH: respond(200, json={"matches": [api_match(500, MUN, CHE)]}),
        })
        source = make_source(handler)

        asyncio.run(source.get_upcoming_matches())
        matches = asyncio.run(source.get_upcoming_matches())

        assert len(handler.requests) == 1
        assert matches[0].id == 500

    def test_error_response_is_not_cached(self):
        handler = RecordingHandler({FIXTURES_PATH: respond(503, json={})})
        source = make_source(handler)

        asyncio.run(source.get_upcoming_matches())
        asyncio.run(source.get_upcoming_matches())

        assert len(handler.requests) == 2


def stats_routes(h2h_response=None, home_response=None, away_response=None):
    h2h_body = {
        "head2head": {
            "numberOfMatches": 20,
            "homeTeam": {"id": 66, "wins": 10},
            "awayTeam": {"id": 61, "wins": 5},
            "draws": 5,
            "matches": [api_match(90, MUN, CHE, "FINISHED", (2, 1))],
        }
    }
    home_body = {"matches": [
        api_match(10, MUN, OTHER, "FINISHED", (3, 0)),
        api_match(11, OTHER, MUN, "FINISHED", (1, 1)),
        api_match(12, OTHER, MUN, "FINISHED", (2, 0)),
        api_match(13, MUN, OTHER, "FINISHED", (0, 1)),
        api_match(14, OTHER, MUN, "FINISHED", (0, 4)),
    ]}
    away_body = {"matches": [
        api_match(20, CHE, OTHER, "FINISHED", (1, 0)),
        api_match(21, OTHER, CHE, "FINISHED", None),
    ]}
    return {
        "/v4/matches/3": h2h_response or respond(200, json=h2h_body),
        "/v4/teams/66/matches": home_response or respond(200, json=home_body),
        "/v4/teams/61/matches": away_response or respond(200, json=away_body),
    }


class TestGetMatchStats:
    """Tests for live match statistics."""

    def test_no_api_key_returns_none_without_network(self):
        handler = RecordingHandler(stats_routes())
        source = make_source(handler, api_key="")

        assert asyncio.run(source.get_match_stats(3, 66, 61)) is None
        assert handler.requests == []

    def test_live_stats(self):
        handler = RecordingHandler(stats_routes())
        source = make_source(handler)

        stats = asyncio.run(source.get_match_stats(3, 66, 61))

        assert stats.win_rate.home == 50
        assert stats.win_rate.away == 25
        assert stats.h2h.home_wins == 10
        assert stats.h2h.away_wins == 5
        assert stats.h2h.draws == 5
        assert stats.h2h.last_result == "MUN 2-1 CHE"
        assert stats.home_form == [W, D, L, L, W]
        assert stats.away_form == [W, D]

    def test_issues_three_requests(self):
        handler = RecordingHandler(stats_routes())
        source = make_source(handler)

        asyncio.run(source.get_match_stats(3, 66, 61))

        paths = sorted(r.url.path for r in handler.requests)
        assert paths == ["/v4/matches/3", "/v4/teams/61/matches", "/v4/teams/66/matches"]
        for request in handler.requests:
            if "/teams/" in request.url.path:
                assert request.url.params["status"] == "FINISHED"
                assert request.url.params["limit"] == "5"

    @pytest.mark.parametrize("failing", ["h2h_response", "home_response", "away_response"])
    def test_any_failed_call_returns_none(self, failing):
        handler = RecordingHandler(stats_routes(**{failing: respond(429, json={})}))
        source = make_source(handler)

        assert asyncio.run(source.get_match_stats(3, 66, 61)) is None

    def test_malformed_payload_returns_none(self):
        handler = RecordingHandler(stats_routes(h2h_response=respond(200, json={"id": 3})))
        source = make_source(handler)

        assert asyncio.run(source.get_match_stats(3, 66, 61)) is None

    def test_network_error_returns_none(self):
        handler = RecordingHandler(stats_routes(home_response=httpx.ReadTimeout("slow")))
        source = make_source(handler)

        assert asyncio.run(source.get_match_stats(3, 66, 61)) is None

    def test_stats_responses_are_cached(self):
        handler = RecordingHandler(stats_routes())
        source = make_source(handler)

        asyncio.run(source.get_match_stats(3, 66, 61))
        asyncio.run(source.get_match_stats(3, 66, 61))

        assert len(handler.requests) == 3


def test_config_reads_environment(monkeypatch):
    monkeypatch.setenv("FOOTBALL_DATA_API_KEY", "from-env")
    monkeypatch.setenv("FOOTBALL_DATA_COMPETITION", "PD")

    config = FootballDataOrgConfig()

    assert config.api_key == "from-env"
    assert config.competition == "PD"
    assert config.cache_ttl == 3600
