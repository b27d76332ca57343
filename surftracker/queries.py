"""
Parameterized statements behind the REST endpoints.

Each function builds one SQLAlchemy Core statement; ``Database.execute``
runs it. Values are always bound, never interpolated.
"""
from typing import Any, Dict

from sqlalchemy import delete, func, insert, select, update

from .models import SurfSession, SurfSpot

SPOT_COLUMNS = tuple(SurfSpot.__table__.c)
SESSION_COLUMNS = tuple(SurfSession.__table__.c)


# ---------- Spots ----------
def list_spots():
    return select(*SPOT_COLUMNS).where(SurfSpot.is_active.is_(True)).order_by(SurfSpot.id)


def get_spot(spot_id: int):
    return select(*SPOT_COLUMNS).where(SurfSpot.id == spot_id, SurfSpot.is_active.is_(True))


def create_spot(user_id: int, values: Dict[str, Any]):
    return insert(SurfSpot).values(user_id=user_id, **values).returning(*SPOT_COLUMNS)


def update_spot(spot_id: int, values: Dict[str, Any]):
    return (
        update(SurfSpot)
        .where(SurfSpot.id == spot_id, SurfSpot.is_active.is_(True))
        .values(**values)
        .returning(*SPOT_COLUMNS)
    )


def deactivate_spot(spot_id: int):
    return (
        update(SurfSpot)
        .where(SurfSpot.id == spot_id, SurfSpot.is_active.is_(True))
        .values(is_active=False)
        .returning(SurfSpot.id)
    )


def find_spot_id_by_name(name: str):
    """First spot with exactly this name, lowest id wins."""
    return select(SurfSpot.id).where(SurfSpot.name == name).order_by(SurfSpot.id).limit(1)


def refresh_spot_stats(spot_id: int):
    """Recompute a spot's session counter and average performance rating."""
    spot_sessions = SurfSession.surf_spot_id == spot_id
    return (
        update(SurfSpot)
        .where(SurfSpot.id == spot_id)
        .values(
            total_sessions=select(func.count(SurfSession.id))
            .where(spot_sessions)
            .scalar_subquery(),
            average_rating=select(func.coalesce(func.avg(SurfSession.performance_rating), 0))
            .where(spot_sessions)
            .scalar_subquery(),
        )
    )


# ---------- Sessions ----------
def _sessions_with_spot_name():
    return select(*SESSION_COLUMNS, SurfSpot.name.label("spot_name")).outerjoin(
        SurfSpot, SurfSession.surf_spot_id == SurfSpot.id
    )


def list_sessions():
    return _sessions_with_spot_name().order_by(
        SurfSession.session_date.desc(), SurfSession.id.desc()
    )


def list_sessions_for_spot(spot_id: int):
    return list_sessions().where(SurfSession.surf_spot_id == spot_id)


def get_session(session_id: int):
    return _sessions_with_spot_name().where(SurfSession.id == session_id)


def create_session(user_id: int, values: Dict[str, Any]):
    return insert(SurfSession).values(user_id=user_id, **values).returning(*SESSION_COLUMNS)


def update_session(session_id: int, values: Dict[str, Any]):
    return (
        update(SurfSession)
        .where(SurfSession.id == session_id)
        .values(**values)
        .returning(*SESSION_COLUMNS)
    )


def delete_session(session_id: int):
    return (
        delete(SurfSession)
        .where(SurfSession.id == session_id)
        .returning(SurfSession.id, SurfSession.surf_spot_id)
    )


# ---------- Dashboard ----------
def dashboard_stats(user_id: int):
    favorite_spot = (
        select(SurfSpot.name)
        .join(SurfSession, SurfSession.surf_spot_id == SurfSpot.id)
        .where(SurfSession.user_id == user_id)
        .group_by(SurfSpot.name)
        .order_by(func.count().desc())
        .limit(1)
        .correlate(None)
        .scalar_subquery()
    )
    return select(
        func.count(SurfSession.id).label("total_sessions"),
        func.avg(SurfSession.performance_rating).label("avg_rating"),
        favorite_spot.label("favorite_spot"),
    ).where(SurfSession.user_id == user_id)


def recent_sessions(user_id: int, limit: int = 3):
    return (
        _sessions_with_spot_name()
        .where(SurfSession.user_id == user_id)
        .order_by(SurfSession.session_date.desc(), SurfSession.id.desc())
        .limit(limit)
    )
