"""Health endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, status

from ...db.session import unit_of_work
from ...errors import TrackerError
from ...persistence.locations import count_locations
from ...persistence.teams import count_teams
from ...persistence.visits import count_visits

router = APIRouter(tags=["health"])

logger = logging.getLogger(__name__)


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/database", status_code=status.HTTP_200_OK)
def check_database() -> dict:
    """Check database connectivity and report table sizes."""
    try:
        with unit_of_work() as session:
            locations = count_locations(session)
            teams = count_teams(session)
            visits = count_visits(session)
    except TrackerError as exc:
        logger.warning("Database health check failed: %s", exc.message)
        return {
            "connected": False,
            "error": exc.code,
            "message": f"Database connection error: {exc.message}",
        }

    return {
        "connected": True,
        "locations_count": locations,
        "teams_count": teams,
        "visits_count": visits,
        "message": f"Database connected. {locations} locations, {teams} teams, {visits} visits.",
    }
