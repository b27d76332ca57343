"""
Unit tests for condition scoring and the synthesized readings.
"""
import random

from surftracker.weather import (
    condition_quality,
    condition_score,
    filter_conditions,
    five_day_forecast,
    quality_label,
    sample_conditions,
)


def test_score_ideal_conditions():
    """Waves in range, light offshore wind scores the maximum."""
    assert condition_score(4.5, 8, "offshore") == 6
    assert quality_label(6) == "excellent"


def test_score_onshore_blown_out():
    """In-range waves alone are not enough with strong onshore wind."""
    assert condition_score(3.2, 12, "onshore") == 2
    assert quality_label(2) == "fair"


def test_score_nothing_works():
    assert condition_score(1.0, 20, "onshore") == 0
    assert quality_label(0) == "poor"


def test_score_range_edges_inclusive():
    assert condition_score(3.0, 10, "onshore") == 4
    assert condition_score(6.0, 10.1, "onshore") == 2
    assert condition_score(6.1, 10.1, "onshore") == 0


def test_score_cross_shore():
    assert condition_score(3.8, 6, "cross-shore") == 5


def test_unknown_wind_direction_scores_nothing():
    assert condition_score(7.0, 15, "variable") == 0


def test_quality_thresholds():
    assert quality_label(5) == "excellent"
    assert quality_label(4) == "good"
    assert quality_label(3) == "good"
    assert quality_label(1) == "fair"


def test_sample_condition_quality():
    by_spot = {c.spotName: condition_quality(c) for c in sample_conditions()}

    assert by_spot == {
        "Malibu Beach": "excellent",
        "Venice Beach": "fair",
        "Manhattan Beach": "excellent",
    }


def test_filter_conditions():
    conditions = sample_conditions()

    assert len(filter_conditions(conditions)) == 3
    assert [c.spotName for c in filter_conditions(conditions, "Venice Beach")] == ["Venice Beach"]
    assert filter_conditions(conditions, "Nowhere") == []


def test_five_day_forecast_ranges():
    forecast = five_day_forecast(random.Random(7))

    assert [d["day"] for d in forecast] == ["Today", "Tomorrow", "Day 3", "Day 4", "Day 5"]
    for day in forecast:
        assert 3.0 <= day["wave_height_ft"] <= 6.0
        assert 5 <= day["wind_speed_mph"] <= 14
