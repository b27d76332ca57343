"""
SQLAlchemy database models.

Defines tables for surf spots and logged surf sessions.
"""
import enum

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    Time,
)
from sqlalchemy.sql import func
from .db import Base


class BreakType(str, enum.Enum):
    BEACH = "beach"
    POINT = "point"
    REEF = "reef"
    RIVER_MOUTH = "river_mouth"
    JETTY = "jetty"
    SHORE = "shore"
    SANDBAR = "sandbar"


class SkillLevel(str, enum.Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"


class SurfSpot(Base):
    """
    A named surf location.

    Spots are soft-deleted through ``is_active``. ``total_sessions`` and
    ``average_rating`` are recomputed by the server after every session write.
    """
    __tablename__ = "surf_spots"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, nullable=False, default=1, index=True)
    name = Column(String(255), nullable=False)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    break_type = Column(String(20), nullable=False, default=BreakType.BEACH.value)
    skill_requirement = Column(String(20), nullable=False, default=SkillLevel.BEGINNER.value)
    notes = Column(Text)
    total_sessions = Column(Integer, nullable=False, default=0)
    average_rating = Column(Float, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class SurfSession(Base):
    """
    A single logged outing.

    ``surf_spot_id`` is resolved from a spot name on write and stays NULL
    when no spot matched.
    """
    __tablename__ = "surf_sessions"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, nullable=False, default=1, index=True)
    surf_spot_id = Column(Integer, ForeignKey("surf_spots.id"), nullable=True, index=True)
    session_date = Column(Date, nullable=False)
    start_time = Column(Time)
    duration_minutes = Column(Integer)
    waves_caught = Column(Integer)
    performance_rating = Column(Integer)  # 1-10
    wave_quality_rating = Column(Integer)  # 1-10
    wind_direction = Column(String(20))
    wind_speed = Column(Float)
    wave_height = Column(Float)
    session_notes = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
