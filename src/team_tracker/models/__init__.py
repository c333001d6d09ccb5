"""Domain models."""

from .domain import (
    Assignment,
    CatalogEntry,
    Location,
    LocationStatus,
    PlannedVisit,
    Statistics,
    Team,
    TeamDeleteCheck,
    Visit,
    VisitHistoryEntry,
)

__all__ = [
    "Assignment",
    "CatalogEntry",
    "Location",
    "LocationStatus",
    "PlannedVisit",
    "Statistics",
    "Team",
    "TeamDeleteCheck",
    "Visit",
    "VisitHistoryEntry",
]
