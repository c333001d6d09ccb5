"""Assignment tracker: which team works which location, and when.

An assignment is open until it is completed, either by the team ticking it
off or by a visit recorded for the same team and location. Completion can be
toggled back, which reopens the assignment and clears its completion date.
Planned visits are dated intentions; a location can be planned by only one
team on a given day.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timezone
from typing import Iterable

from ..db.models import AssignmentRow, PlannedVisitRow, utcnow
from ..db.session import unit_of_work
from ..errors import Conflict, InvalidArgument, NotFound
from ..models.domain import Assignment, PlannedVisit
from ..persistence.assignments import (
    find_open_assignment,
    get_assignment_row,
    has_completed_since,
    list_assignments_for_team,
    list_planned_for_team,
    mark_completed,
    mark_open,
    planned_visits_on,
    to_assignment,
    to_planned_visit,
)
from ..persistence.locations import location_names, missing_location_ids
from ..persistence.teams import require_team_row

logger = logging.getLogger(__name__)


def _distinct_ids(location_ids: Iterable[int]) -> list[int]:
    ids = list(dict.fromkeys(location_ids))
    if not ids:
        raise InvalidArgument("location_ids must contain at least one location id.")
    return ids


def _start_of_day(moment: datetime) -> datetime:
    return datetime.combine(moment.astimezone(timezone.utc).date(), time.min, tzinfo=timezone.utc)


def assign_locations(team_id: int, location_ids: Iterable[int]) -> list[Assignment]:
    """Open an assignment per location unless one is already open or was completed today.

    Returns only the assignments created by this call, so repeating a request
    returns an empty list and leaves the tracker unchanged.
    """
    ids = _distinct_ids(location_ids)
    now = utcnow()
    today = _start_of_day(now)

    with unit_of_work(write=True) as session:
        require_team_row(session, team_id)
        missing = missing_location_ids(session, ids)
        if missing:
            raise NotFound(f"Unknown location id(s): {', '.join(str(i) for i in missing)}.")

        created: list[AssignmentRow] = []
        for location_id in ids:
            if find_open_assignment(session, team_id, location_id) is not None:
                continue
            if has_completed_since(session, team_id, location_id, today):
                continue
            row = AssignmentRow(
                team_id=team_id,
                location_id=location_id,
                is_completed=False,
                assigned_date=now,
            )
            session.add(row)
            created.append(row)
        session.flush()

        names = location_names(session, ids)
        result = [to_assignment(row, names[row.location_id]) for row in created]

    logger.info(
        "Assigned %d new location(s) to team %s (%d requested)", len(result), team_id, len(ids)
    )
    return result


def list_team_assignments(team_id: int) -> list[Assignment]:
    with unit_of_work() as session:
        require_team_row(session, team_id)
        return list_assignments_for_team(session, team_id)


def set_assignment_completion(team_id: int, assignment_id: int, is_completed: bool) -> Assignment:
    with unit_of_work(write=True) as session:
        row = get_assignment_row(session, assignment_id)
        if row is None or row.team_id != team_id:
            raise NotFound(f"Assignment {assignment_id} not found for team {team_id}.")

        if bool(row.is_completed) != is_completed:
            if is_completed:
                mark_completed(row, utcnow())
            else:
                if find_open_assignment(session, row.team_id, row.location_id, exclude_id=row.id) is not None:
                    raise Conflict(
                        f"Team {team_id} already has an open assignment for location {row.location_id}."
                    )
                mark_open(row)
            session.flush()

        names = location_names(session, [row.location_id])
        assignment = to_assignment(row, names.get(row.location_id, ""))

    logger.info(
        "Assignment %s of team %s is now %s",
        assignment_id,
        team_id,
        "completed" if assignment.is_completed else "open",
    )
    return assignment


def plan_visits(team_id: int, location_ids: Iterable[int], planned_date: date) -> list[PlannedVisit]:
    """Plan locations for a work date. Locations the team already planned that day are skipped."""
    ids = _distinct_ids(location_ids)

    with unit_of_work(write=True) as session:
        require_team_row(session, team_id)
        missing = missing_location_ids(session, ids)
        if missing:
            raise NotFound(f"Unknown location id(s): {', '.join(str(i) for i in missing)}.")

        existing = planned_visits_on(session, ids, planned_date)
        taken = sorted(
            location_id for location_id, row in existing.items() if row.team_id != team_id
        )
        if taken:
            raise Conflict(
                f"Location(s) {', '.join(str(i) for i in taken)} already planned by another team "
                f"on {planned_date.isoformat()}."
            )

        created: list[PlannedVisitRow] = []
        for location_id in ids:
            if location_id in existing:
                continue
            row = PlannedVisitRow(
                team_id=team_id,
                location_id=location_id,
                planned_date=planned_date,
                status="planned",
                created_at=utcnow(),
            )
            session.add(row)
            created.append(row)
        session.flush()

        names = location_names(session, ids)
        result = [to_planned_visit(row, names[row.location_id]) for row in created]

    logger.info("Planned %d visit(s) for team %s on %s", len(result), team_id, planned_date.isoformat())
    return result


def list_planned_visits(team_id: int, today: date | None = None) -> list[PlannedVisit]:
    """Planned visits dated today or later."""
    from_date = today or utcnow().date()
    with unit_of_work() as session:
        require_team_row(session, team_id)
        return list_planned_for_team(session, team_id, from_date)
