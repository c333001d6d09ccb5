"""Domain records returned by the tracker services."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(slots=True)
class Location:
    """Catalog location with its ledger-derived status."""

    id: int
    name: str
    latitude: float
    longitude: float
    is_preached: bool = False
    last_visited_at: Optional[datetime] = None


@dataclass(slots=True)
class LocationStatus:
    id: int
    name: str
    latitude: float
    longitude: float
    is_preached: bool
    last_visit: Optional[datetime]
    visit_count: int


@dataclass(slots=True)
class CatalogEntry:
    """A location parsed from a catalog file, before it has an id."""

    name: str
    latitude: float
    longitude: float


@dataclass(slots=True)
class Team:
    id: int
    name: str
    leader: str
    created_at: datetime
    current_location_id: Optional[int] = None


@dataclass(slots=True)
class TeamDeleteCheck:
    team_id: int
    can_delete: bool
    open_assignments: int


@dataclass(slots=True)
class Assignment:
    id: int
    team_id: int
    location_id: int
    location_name: str
    is_completed: bool
    assigned_date: datetime
    completed_date: Optional[datetime] = None


@dataclass(slots=True)
class PlannedVisit:
    id: int
    team_id: int
    location_id: int
    location_name: str
    planned_date: date
    status: str


@dataclass(slots=True)
class Visit:
    """A single check-in; immutable once recorded."""

    id: int
    team_id: int
    location_id: int
    visit_date: datetime
    is_preached: bool
    notes: Optional[str] = None


@dataclass(slots=True)
class VisitHistoryEntry:
    id: int
    visit_date: datetime
    team_id: int
    team_name: str
    location_id: int
    location_name: str
    is_preached: bool
    notes: Optional[str] = None


@dataclass(slots=True)
class Statistics:
    total_locations: int
    preached_locations: int
    active_teams: int
    total_teams: int
    teams_with_open_assignments: int
    total_visits: int
    progress_percent: int
