"""Location registry: read access to the fixed catalog."""

from __future__ import annotations

from ..db.session import unit_of_work
from ..models.domain import Location, LocationStatus, Visit
from ..persistence.locations import (
    list_location_rows,
    list_location_statuses,
    list_unassigned_location_rows,
    require_location_row,
    to_location,
)
from ..persistence.teams import require_team_row
from ..persistence.visits import list_visits_for_location


def list_locations() -> list[Location]:
    with unit_of_work() as session:
        return [to_location(row) for row in list_location_rows(session)]


def list_available_locations(team_id: int | None = None) -> list[Location]:
    """Locations without an open assignment for ``team_id`` (or for any team when omitted)."""

    with unit_of_work() as session:
        if team_id is not None:
            require_team_row(session, team_id)
        return [to_location(row) for row in list_unassigned_location_rows(session, team_id)]


def get_location(location_id: int) -> Location:
    with unit_of_work() as session:
        return to_location(require_location_row(session, location_id))


def list_statuses() -> list[LocationStatus]:
    with unit_of_work() as session:
        return list_location_statuses(session)


def list_location_visits(location_id: int) -> list[Visit]:
    with unit_of_work() as session:
        require_location_row(session, location_id)
        return list_visits_for_location(session, location_id)
