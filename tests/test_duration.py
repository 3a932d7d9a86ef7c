from datetime import UTC, datetime, timedelta

from sprint_alloc.analytics.allocation.duration import resolve_hours, truncate_hours

START = datetime(2024, 3, 20, 10, 0, tzinfo=UTC)


def test_hours_between_start_and_end():
    assert resolve_hours("TEST-1", None, START, datetime(2024, 3, 21, 15, 0, tzinfo=UTC)) == 29.0


def test_same_instant_is_zero():
    assert resolve_hours("TEST-1", {}, START, START) == 0.0


def test_override_wins_verbatim():
    end = START + timedelta(hours=5)
    assert resolve_hours("TEST-1", {"TEST-1": 6}, START, end) == 6.0
    assert resolve_hours("TEST-1", {"TEST-1": 0}, START, end) == 0.0
    assert resolve_hours("TEST-1", {"TEST-1": -3.5}, START, end) == -3.5
    assert resolve_hours("TEST-1", {"TEST-1": 2.3456}, None, None) == 2.3456


def test_override_for_other_key_is_ignored():
    end = START + timedelta(hours=5)
    assert resolve_hours("TEST-1", {"TEST-2": 36}, START, end) == 5.0


def test_negative_duration_clamped_to_zero():
    assert resolve_hours("TEST-1", None, START, START - timedelta(hours=3)) == 0.0


def test_missing_end_counts_as_zero():
    assert resolve_hours("TEST-1", None, START, None) == 0.0


def test_truncates_instead_of_rounding():
    end = START + timedelta(hours=1, minutes=59, seconds=59)
    assert resolve_hours("TEST-1", None, START, end) == 1.99
    assert truncate_hours(0.129) == 0.12
    assert truncate_hours(7.5) == 7.5
