"""
Unit Tests for Time Utilities
"""

from datetime import datetime, timezone

from football_oracle.utils.time_utils import get_current_time, to_local_date_str


def test_local_date_crosses_midnight(monkeypatch):
    """Late UTC kickoffs belong to the next day east of UTC."""
    monkeypatch.setenv("APP_TIMEZONE", "Asia/Tokyo")
    kickoff = datetime(2024, 3, 1, 20, 0, tzinfo=timezone.utc)
    assert to_local_date_str(kickoff) == "2024-03-02"


def test_local_date_default_timezone(monkeypatch):
    monkeypatch.delenv("APP_TIMEZONE", raising=False)
    kickoff = datetime(2024, 3, 1, 20, 0, tzinfo=timezone.utc)
    assert to_local_date_str(kickoff) == "2024-03-01"


def test_current_time_is_aware(monkeypatch):
    monkeypatch.setenv("APP_TIMEZONE", "America/Bogota")
    now = get_current_time()
    assert now.tzinfo is not None
    assert now.utcoffset().total_seconds() == -5 * 3600
