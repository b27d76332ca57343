"""
Screen components: dashboard, spots, sessions and current conditions.

Each view keeps its own ``loading`` / ``error`` / payload state, fetches
once through ``SurfTrackerClient`` when loaded and renders plain text.
Fetch failures are turned into a static message, they never propagate.
Forms are controlled: every field lives on a form object, which is reset
after a successful submit, and the list is then fetched again.
"""
import logging
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, List, Optional

import httpx

from .client import SurfTrackerClient, describe_error
from .weather import (
    WeatherCondition,
    condition_quality,
    filter_conditions,
    five_day_forecast,
    sample_conditions,
)

logger = logging.getLogger(__name__)

# Errors a view swallows and shows as its message
FETCH_ERRORS = (httpx.HTTPError, ValueError)


class Form:
    """Mixin for dataclass forms bound field-by-field to user input."""

    def set(self, **values: Any) -> None:
        names = {f.name for f in fields(self)}
        for name, value in values.items():
            if name not in names:
                raise AttributeError(f"{type(self).__name__} has no field {name!r}")
            setattr(self, name, value)

    def reset(self) -> None:
        for f in fields(self):
            setattr(self, f.name, f.default)

    def payload(self) -> Dict[str, Any]:
        # Blank inputs are sent as missing values, not empty strings
        return {k: (None if v == "" else v) for k, v in asdict(self).items()}


@dataclass
class SpotForm(Form):
    name: str = ""
    latitude: str = ""
    longitude: str = ""
    breakType: str = "beach"
    skillRequirement: str = "beginner"
    description: str = ""


@dataclass
class SessionForm(Form):
    surfSpot: str = ""
    date: str = ""
    duration: str = ""
    waveCount: str = ""
    rating: str = ""
    conditionsRating: str = ""
    notes: str = ""


class View:
    error_message = "Something went wrong. Please try again."

    def __init__(self, client: Optional[SurfTrackerClient] = None):
        self.client = client
        self.loading = True
        self.error: Optional[str] = None
        self.save_error: Optional[str] = None

    async def fetch(self) -> None:
        raise NotImplementedError

    async def load(self) -> None:
        try:
            await self.fetch()
            self.error = None
        except FETCH_ERRORS as e:
            logger.warning("%s failed to load: %s", type(self).__name__, describe_error(e))
            self.error = self.error_message
        finally:
            self.loading = False

    def render(self) -> str:
        if self.loading:
            return "Loading..."
        if self.error:
            return self.error
        if self.save_error:
            return self.save_error + "\n" + self.render_body()
        return self.render_body()

    def render_body(self) -> str:
        raise NotImplementedError


class DashboardView(View):
    error_message = "Failed to load dashboard data. Please try again."

    def __init__(self, client: SurfTrackerClient):
        super().__init__(client)
        self.stats: Dict[str, Any] = {
            "totalSessions": 0,
            "avgRating": 0,
            "favoriteSpot": "",
            "recentSessions": [],
        }

    async def fetch(self) -> None:
        self.stats = await self.client.get_dashboard()

    def render_body(self) -> str:
        lines = [
            "Surf Dashboard",
            f"Total Sessions: {self.stats['totalSessions']}",
            f"Favorite Spot: {self.stats['favoriteSpot']}",
            f"Average Rating: {self.stats['avgRating']:.1f}/10",
            "",
            "Recent Sessions",
        ]
        for s in self.stats["recentSessions"]:
            lines.append(f"  {s['spot'] or 'Unknown spot'}  {s['date']}  Rating: {s['rating']}/10")
        return "\n".join(lines)


class SurfSpotsView(View):
    error_message = "Failed to load surf spots. Please try again."
    save_error_message = "Failed to save surf spot. Please try again."

    def __init__(self, client: SurfTrackerClient):
        super().__init__(client)
        self.spots: List[Dict[str, Any]] = []
        self.form = SpotForm()
        self.show_form = False

    async def fetch(self) -> None:
        self.spots = await self.client.list_spots()

    def toggle_form(self) -> None:
        self.show_form = not self.show_form

    async def submit(self) -> bool:
        try:
            await self.client.create_spot(self.form.payload())
        except FETCH_ERRORS as e:
            logger.warning("Saving surf spot failed: %s", describe_error(e))
            self.save_error = self.save_error_message
            return False
        self.save_error = None
        self.form.reset()
        self.show_form = False
        await self.load()
        return True

    def render_body(self) -> str:
        lines = ["Surf Spots"]
        if not self.spots:
            lines.append("  No surf spots yet.")
        for spot in self.spots:
            lines.append(
                f"  {spot['name']} ({spot['break_type']}, {spot['skill_requirement']})"
                f"  {spot['latitude']:.4f}, {spot['longitude']:.4f}"
                f"  sessions: {spot['total_sessions']}"
            )
            if spot.get("notes"):
                lines.append(f"    {spot['notes']}")
        return "\n".join(lines)


class SessionsView(View):
    error_message = "Failed to load surf sessions. Please try again."
    save_error_message = "Failed to save surf session. Please try again."

    def __init__(self, client: SurfTrackerClient):
        super().__init__(client)
        self.sessions: List[Dict[str, Any]] = []
        self.form = SessionForm()
        self.show_form = False

    async def fetch(self) -> None:
        self.sessions = await self.client.list_sessions()

    def toggle_form(self) -> None:
        self.show_form = not self.show_form

    async def submit(self) -> bool:
        try:
            await self.client.create_session(self.form.payload())
        except FETCH_ERRORS as e:
            logger.warning("Saving surf session failed: %s", describe_error(e))
            self.save_error = self.save_error_message
            return False
        self.save_error = None
        self.form.reset()
        self.show_form = False
        await self.load()
        return True

    def render_body(self) -> str:
        lines = ["Surf Sessions"]
        if not self.sessions:
            lines.append("  No sessions logged yet.")
        for s in self.sessions:
            lines.append(f"  {s.get('spot_name') or 'Unknown spot'}  {s['session_date']}")
            lines.append(
                f"    Duration: {s['duration_minutes']} min  Waves: {s['waves_caught']}"
                f"  Rating: {s['performance_rating']}/10  Conditions: {s['wave_quality_rating']}/10"
            )
            if s.get("session_notes"):
                lines.append(f"    {s['session_notes']}")
        return "\n".join(lines)


class WeatherConditionsView(View):
    """Current conditions per spot. Readings are synthesized locally."""

    def __init__(self, client: Optional[SurfTrackerClient] = None):
        super().__init__(client)
        self.conditions: List[WeatherCondition] = []
        self.forecast: List[Dict[str, Any]] = []
        self.selected_spot = "all"

    async def fetch(self) -> None:
        self.conditions = sample_conditions()
        self.forecast = five_day_forecast()

    @property
    def spot_options(self) -> List[str]:
        return ["all"] + [c.spotName for c in self.conditions]

    def select_spot(self, spot: str) -> None:
        self.selected_spot = spot

    @property
    def visible_conditions(self) -> List[WeatherCondition]:
        return filter_conditions(self.conditions, self.selected_spot)

    def render_body(self) -> str:
        lines = ["Current Conditions"]
        for c in self.visible_conditions:
            lines.extend([
                f"  {c.spotName} [{condition_quality(c).upper()}]",
                f"    Wave Height: {c.waveHeight} ft  Wave Period: {c.wavePeriod:g} sec",
                f"    Wind: {c.windSpeed:g} mph {c.windDirection}",
                f"    Tide: {c.tideHeight} ft  Water Temp: {c.waterTemp:g}°F",
                f"    Updated: {c.timestamp}",
            ])
        lines.append("")
        lines.append("5-Day Forecast")
        for day in self.forecast:
            lines.append(f"  {day['day']}: {day['wave_height_ft']} ft, {day['wind_speed_mph']} mph")
        return "\n".join(lines)
