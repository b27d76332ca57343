"""
Request and response bodies.

Request models accept the camelCase names the front end sends and dump to
the snake_case column names. Fields are typed but optional: whether a row
is complete is left to the table's NOT NULL constraints.
"""
import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .models import BreakType, SkillLevel


class RequestBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True, use_enum_values=True, validate_default=True)

    def to_columns(self) -> Dict[str, Any]:
        """Column values for the fields the client actually sent."""
        return self.model_dump(exclude_unset=True)


class SurfSpotCreate(RequestBody):
    name: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    break_type: BreakType = Field(BreakType.BEACH, alias="breakType")
    skill_requirement: SkillLevel = Field(SkillLevel.BEGINNER, alias="skillRequirement")
    notes: Optional[str] = Field(None, alias="description")

    def to_columns(self) -> Dict[str, Any]:
        # Defaults count for inserts even when the client left them out
        return self.model_dump()


class SurfSpotUpdate(RequestBody):
    name: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    break_type: Optional[BreakType] = Field(None, alias="breakType")
    skill_requirement: Optional[SkillLevel] = Field(None, alias="skillRequirement")
    notes: Optional[str] = Field(None, alias="description")

    def to_columns(self) -> Dict[str, Any]:
        # null leaves a required column unchanged; notes can be cleared
        return {
            k: v
            for k, v in self.model_dump(exclude_unset=True).items()
            if v is not None or k == "notes"
        }


class SurfSessionFields(RequestBody):
    surf_spot: Optional[str] = Field(None, alias="surfSpot")
    session_date: Optional[datetime.date] = Field(None, alias="date")
    start_time: Optional[datetime.time] = Field(None, alias="startTime")
    duration_minutes: Optional[int] = Field(None, alias="duration")
    waves_caught: Optional[int] = Field(None, alias="waveCount")
    performance_rating: Optional[int] = Field(None, alias="rating")
    wave_quality_rating: Optional[int] = Field(None, alias="conditionsRating")
    wind_direction: Optional[str] = Field(None, alias="windDirection")
    wind_speed: Optional[float] = Field(None, alias="windSpeed")
    wave_height: Optional[float] = Field(None, alias="waveHeight")
    session_notes: Optional[str] = Field(None, alias="notes")


class SurfSessionCreate(SurfSessionFields):
    def to_columns(self) -> Dict[str, Any]:
        return self.model_dump(exclude={"surf_spot"})


class SurfSessionUpdate(SurfSessionFields):
    def to_columns(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True, exclude={"surf_spot"})


class RecentSession(BaseModel):
    id: int
    spot: Optional[str] = None
    date: datetime.date
    rating: Optional[int] = None


class DashboardStats(BaseModel):
    totalSessions: int
    avgRating: float
    favoriteSpot: str
    recentSessions: List[RecentSession]
