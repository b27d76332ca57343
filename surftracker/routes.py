import datetime
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from . import queries
from .db import Database, get_database
from .schemas import (
    DashboardStats,
    RecentSession,
    SurfSessionCreate,
    SurfSessionUpdate,
    SurfSpotCreate,
    SurfSpotUpdate,
)

logger = logging.getLogger(__name__)

health_router = APIRouter()
api_router = APIRouter(prefix="/api")

NO_FAVORITE_SPOT = "No sessions yet"


def get_current_user_id(request: Request) -> int:
    """Owner of every row written or summarized. Fixed until there is an auth layer."""
    return request.app.state.settings.DEFAULT_USER_ID


def store_failure(action: str) -> HTTPException:
    logger.exception("Error %s", action)
    return HTTPException(500, "Internal server error")


# ---------- Health ----------
@health_router.get("/health")
async def health(request: Request, db: Database = Depends(get_database)):
    try:
        database = await db.health_check()
    except Exception as e:
        database = {"status": "unhealthy", "error": str(e) or type(e).__name__}
    healthy = database.get("status") == "healthy"
    return JSONResponse(
        status_code=200 if healthy else 503,
        content={
            "status": "OK" if healthy else "ERROR",
            "timestamp": datetime.datetime.now(datetime.timezone.utc).isoformat(),
            "environment": request.app.state.settings.ENVIRONMENT,
            "database": database,
        },
    )


# ---------- Surf spots ----------
@api_router.get("/surf-spots")
async def list_surf_spots(db: Database = Depends(get_database)):
    try:
        return await db.execute(queries.list_spots())
    except SQLAlchemyError:
        raise store_failure("fetching surf spots")


@api_router.post("/surf-spots", status_code=201)
async def create_surf_spot(
    body: SurfSpotCreate,
    db: Database = Depends(get_database),
    user_id: int = Depends(get_current_user_id),
):
    try:
        rows = await db.execute(queries.create_spot(user_id, body.to_columns()))
    except SQLAlchemyError:
        raise store_failure("creating surf spot")
    return rows[0]


@api_router.get("/surf-spots/{spot_id}")
async def get_surf_spot(spot_id: int, db: Database = Depends(get_database)):
    try:
        rows = await db.execute(queries.get_spot(spot_id))
    except SQLAlchemyError:
        raise store_failure("fetching surf spot")
    if not rows:
        raise HTTPException(404, "Surf spot not found")
    return rows[0]


@api_router.put("/surf-spots/{spot_id}")
async def update_surf_spot(
    spot_id: int, body: SurfSpotUpdate, db: Database = Depends(get_database)
):
    values = body.to_columns()
    try:
        if values:
            rows = await db.execute(queries.update_spot(spot_id, values))
        else:
            rows = await db.execute(queries.get_spot(spot_id))
    except SQLAlchemyError:
        raise store_failure("updating surf spot")
    if not rows:
        raise HTTPException(404, "Surf spot not found")
    return rows[0]


@api_router.delete("/surf-spots/{spot_id}", status_code=204)
async def delete_surf_spot(spot_id: int, db: Database = Depends(get_database)):
    try:
        rows = await db.execute(queries.deactivate_spot(spot_id))
    except SQLAlchemyError:
        raise store_failure("deleting surf spot")
    if not rows:
        raise HTTPException(404, "Surf spot not found")
    return Response(status_code=204)


# ---------- Surf sessions ----------
async def resolve_spot_id(db: Database, name: Optional[str]) -> Optional[int]:
    """Look a spot up by exact name. Unknown names resolve to None."""
    if name is None:
        return None
    rows = await db.execute(queries.find_spot_id_by_name(name))
    if not rows:
        logger.warning("No surf spot named %r, storing session without a spot", name)
        return None
    return rows[0]["id"]


@api_router.get("/surf-sessions")
async def list_surf_sessions(db: Database = Depends(get_database)):
    try:
        return await db.execute(queries.list_sessions())
    except SQLAlchemyError:
        raise store_failure("fetching surf sessions")


@api_router.get("/surf-sessions/spot/{spot_id}")
async def list_surf_sessions_for_spot(spot_id: int, db: Database = Depends(get_database)):
    try:
        return await db.execute(queries.list_sessions_for_spot(spot_id))
    except SQLAlchemyError:
        raise store_failure("fetching surf sessions for spot")


@api_router.post("/surf-sessions", status_code=201)
async def create_surf_session(
    body: SurfSessionCreate,
    db: Database = Depends(get_database),
    user_id: int = Depends(get_current_user_id),
):
    try:
        spot_id = await resolve_spot_id(db, body.surf_spot)
        values = body.to_columns()
        values["surf_spot_id"] = spot_id
        rows = await db.execute(queries.create_session(user_id, values))
        if spot_id is not None:
            await db.execute(queries.refresh_spot_stats(spot_id))
    except SQLAlchemyError:
        raise store_failure("creating surf session")
    return rows[0]


@api_router.get("/surf-sessions/{session_id}")
async def get_surf_session(session_id: int, db: Database = Depends(get_database)):
    try:
        rows = await db.execute(queries.get_session(session_id))
    except SQLAlchemyError:
        raise store_failure("fetching surf session")
    if not rows:
        raise HTTPException(404, "Surf session not found")
    return rows[0]


@api_router.put("/surf-sessions/{session_id}")
async def update_surf_session(
    session_id: int, body: SurfSessionUpdate, db: Database = Depends(get_database)
):
    try:
        existing = await db.execute(queries.get_session(session_id))
        if not existing:
            raise HTTPException(404, "Surf session not found")
        old_spot_id = existing[0]["surf_spot_id"]

        values = body.to_columns()
        if "surf_spot" in body.model_fields_set:
            values["surf_spot_id"] = await resolve_spot_id(db, body.surf_spot)
        if not values:
            return existing[0]

        rows = await db.execute(queries.update_session(session_id, values))
        if not rows:
            raise HTTPException(404, "Surf session not found")
        for spot_id in {old_spot_id, rows[0]["surf_spot_id"]} - {None}:
            await db.execute(queries.refresh_spot_stats(spot_id))
    except SQLAlchemyError:
        raise store_failure("updating surf session")
    return rows[0]


@api_router.delete("/surf-sessions/{session_id}", status_code=204)
async def delete_surf_session(session_id: int, db: Database = Depends(get_database)):
    try:
        rows = await db.execute(queries.delete_session(session_id))
        if rows and rows[0]["surf_spot_id"] is not None:
            await db.execute(queries.refresh_spot_stats(rows[0]["surf_spot_id"]))
    except SQLAlchemyError:
        raise store_failure("deleting surf session")
    if not rows:
        raise HTTPException(404, "Surf session not found")
    return Response(status_code=204)


# ---------- Dashboard ----------
@api_router.get("/dashboard", response_model=DashboardStats)
async def dashboard(
    db: Database = Depends(get_database),
    user_id: int = Depends(get_current_user_id),
):
    try:
        stats = (await db.execute(queries.dashboard_stats(user_id)))[0]
        recent = await db.execute(queries.recent_sessions(user_id))
    except SQLAlchemyError:
        raise store_failure("fetching dashboard data")

    return DashboardStats(
        totalSessions=int(stats["total_sessions"] or 0),
        avgRating=float(stats["avg_rating"] or 0),
        favoriteSpot=stats["favorite_spot"] or NO_FAVORITE_SPOT,
        recentSessions=[
            RecentSession(
                id=r["id"],
                spot=r["spot_name"],
                date=r["session_date"],
                rating=r["performance_rating"],
            )
            for r in recent
        ],
    )
