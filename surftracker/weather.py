"""
Surf conditions placeholder and quality scoring.

There is no live conditions feed yet: readings are synthesized on the client
side. The quality score only looks at wave height, wind speed and whether
the wind blows offshore, cross-shore or onshore.
"""
import random
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

# Wave heights in feet that are worth paddling out for
IDEAL_WAVE_HEIGHT_FT = (3.0, 6.0)
MAX_LIGHT_WIND_MPH: float = 10.0

WIND_DIRECTION_POINTS: Dict[str, int] = {
    "offshore": 2,
    "cross-shore": 1,
    "onshore": 0,
}

FORECAST_DAYS: List[str] = ["Today", "Tomorrow", "Day 3", "Day 4", "Day 5"]


class WeatherCondition(BaseModel):
    """One reading at a spot. Heights in feet, wind in mph, water in °F."""
    id: int
    spotName: str
    waveHeight: float
    wavePeriod: float
    windSpeed: float
    windDirection: str
    tideHeight: float
    waterTemp: float
    timestamp: str


def condition_score(wave_height: float, wind_speed: float, wind_direction: str) -> int:
    """
    Score surf conditions on a 0-6 scale.

    Args:
        wave_height: Wave height in feet
        wind_speed: Wind speed in mph
        wind_direction: offshore, cross-shore or onshore

    Returns:
        +2 for waves within the ideal range, +2 for light wind, and up to
        +2 for wind direction
    """
    score = 0
    low, high = IDEAL_WAVE_HEIGHT_FT
    if low <= wave_height <= high:
        score += 2
    if wind_speed <= MAX_LIGHT_WIND_MPH:
        score += 2
    score += WIND_DIRECTION_POINTS.get(wind_direction, 0)
    return score


def quality_label(score: int) -> str:
    """Map a condition score to excellent, good, fair or poor."""
    if score >= 5:
        return "excellent"
    if score >= 3:
        return "good"
    if score >= 1:
        return "fair"
    return "poor"


def condition_quality(condition: WeatherCondition) -> str:
    return quality_label(
        condition_score(condition.waveHeight, condition.windSpeed, condition.windDirection)
    )


def sample_conditions() -> List[WeatherCondition]:
    return [
        WeatherCondition(
            id=1,
            spotName="Malibu Beach",
            waveHeight=4.5,
            wavePeriod=12,
            windSpeed=8,
            windDirection="offshore",
            tideHeight=2.3,
            waterTemp=68,
            timestamp="2025-06-27 08:00",
        ),
        WeatherCondition(
            id=2,
            spotName="Venice Beach",
            waveHeight=3.2,
            wavePeriod=10,
            windSpeed=12,
            windDirection="onshore",
            tideHeight=1.8,
            waterTemp=66,
            timestamp="2025-06-27 08:00",
        ),
        WeatherCondition(
            id=3,
            spotName="Manhattan Beach",
            waveHeight=3.8,
            wavePeriod=11,
            windSpeed=6,
            windDirection="cross-shore",
            tideHeight=2.1,
            waterTemp=67,
            timestamp="2025-06-27 08:00",
        ),
    ]


def filter_conditions(conditions: List[WeatherCondition], spot: str = "all") -> List[WeatherCondition]:
    if spot == "all":
        return list(conditions)
    return [c for c in conditions if c.spotName == spot]


def five_day_forecast(rng: Optional[random.Random] = None) -> List[Dict[str, Any]]:
    """
    Synthesize a 5-day forecast strip.

    Args:
        rng: Random source, a fresh unseeded one when omitted

    Returns:
        One dict per day with wave height (ft, 3-6) and wind speed (mph, 5-14)
    """
    rng = rng or random.Random()
    return [
        {
            "day": day,
            "wave_height_ft": round(3 + rng.random() * 3, 1),
            "wind_speed_mph": 5 + int(rng.random() * 10),
        }
        for day in FORECAST_DAYS
    ]
