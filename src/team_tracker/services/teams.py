"""Team registry."""

from __future__ import annotations

import logging

from ..db.models import TeamRow, utcnow
from ..db.session import unit_of_work
from ..errors import Conflict, InvalidArgument
from ..models.domain import Team, TeamDeleteCheck
from ..persistence.assignments import count_open_assignments
from ..persistence.teams import (
    current_location_ids,
    delete_team_cascade,
    list_team_rows,
    require_team_row,
    to_team,
)

logger = logging.getLogger(__name__)


def _require_text(value: str | None, field: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise InvalidArgument(f"Team {field} must not be empty.")
    return cleaned


def list_teams() -> list[Team]:
    with unit_of_work() as session:
        rows = list_team_rows(session)
        current = current_location_ids(session, (row.id for row in rows))
        return [to_team(row, current.get(row.id)) for row in rows]


def get_team(team_id: int) -> Team:
    with unit_of_work() as session:
        row = require_team_row(session, team_id)
        return to_team(row, current_location_ids(session, [row.id]).get(row.id))


def create_team(name: str, leader: str) -> Team:
    clean_name = _require_text(name, "name")
    clean_leader = _require_text(leader, "leader")
    with unit_of_work(write=True) as session:
        row = TeamRow(name=clean_name, leader=clean_leader, created_at=utcnow())
        session.add(row)
        session.flush()
        team = to_team(row)
    logger.info("Created team %s (%s, leader %s)", team.id, team.name, team.leader)
    return team


def update_team(team_id: int, name: str, leader: str) -> Team:
    clean_name = _require_text(name, "name")
    clean_leader = _require_text(leader, "leader")
    with unit_of_work(write=True) as session:
        row = require_team_row(session, team_id)
        row.name = clean_name
        row.leader = clean_leader
        session.flush()
        team = to_team(row, current_location_ids(session, [row.id]).get(row.id))
    logger.info("Updated team %s", team_id)
    return team


def check_team_delete(team_id: int) -> TeamDeleteCheck:
    """Dry run of :func:`delete_team`."""
    with unit_of_work() as session:
        require_team_row(session, team_id)
        open_count = count_open_assignments(session, team_id)
    return TeamDeleteCheck(team_id=team_id, can_delete=open_count == 0, open_assignments=open_count)


def delete_team(team_id: int) -> None:
    """Delete a team and its closed assignments.

    Raises:
        NotFound: unknown team.
        Conflict: the team still has open assignments; nothing is changed.
    """
    with unit_of_work(write=True) as session:
        row = require_team_row(session, team_id)
        open_count = count_open_assignments(session, team_id)
        if open_count:
            raise Conflict(
                f"Team {team_id} has {open_count} open assignment(s); complete them before deleting the team."
            )
        delete_team_cascade(session, row)
    logger.info("Deleted team %s", team_id)
