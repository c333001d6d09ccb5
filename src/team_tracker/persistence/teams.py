"""Team table queries."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from ..db.models import AssignmentRow, PlannedVisitRow, TeamRow, VisitRow
from ..errors import NotFound
from ..models.domain import Team


def to_team(row: TeamRow, current_location_id: int | None = None) -> Team:
    return Team(
        id=row.id,
        name=row.name,
        leader=row.leader,
        created_at=row.created_at,
        current_location_id=current_location_id,
    )


def get_team_row(session: Session, team_id: int) -> TeamRow | None:
    return session.get(TeamRow, team_id)


def require_team_row(session: Session, team_id: int) -> TeamRow:
    row = get_team_row(session, team_id)
    if row is None:
        raise NotFound(f"Team {team_id} not found.")
    return row


def list_team_rows(session: Session) -> list[TeamRow]:
    stmt = select(TeamRow).order_by(TeamRow.created_at, TeamRow.id)
    return list(session.execute(stmt).scalars())


def count_teams(session: Session) -> int:
    return session.execute(select(func.count()).select_from(TeamRow)).scalar_one()


def current_location_ids(session: Session, team_ids: Iterable[int]) -> dict[int, int]:
    """Latest open assignment per team, falling back to the latest visit."""
    ids = set(team_ids)
    if not ids:
        return {}

    current: dict[int, int] = {}
    open_rows = session.execute(
        select(AssignmentRow.team_id, AssignmentRow.location_id)
        .where(AssignmentRow.team_id.in_(ids), AssignmentRow.is_completed.is_(False))
        .order_by(AssignmentRow.assigned_date.desc(), AssignmentRow.id.desc())
    )
    for team_id, location_id in open_rows:
        current.setdefault(team_id, location_id)

    remaining = ids - current.keys()
    if remaining:
        visit_rows = session.execute(
            select(VisitRow.team_id, VisitRow.location_id)
            .where(VisitRow.team_id.in_(remaining))
            .order_by(VisitRow.visit_date.desc(), VisitRow.id.desc())
        )
        for team_id, location_id in visit_rows:
            current.setdefault(team_id, location_id)
    return current


def team_ids_with_visits_since(session: Session, since: datetime) -> set[int]:
    """Existing teams with at least one visit at or after ``since``."""
    stmt = (
        select(VisitRow.team_id)
        .join(TeamRow, TeamRow.id == VisitRow.team_id)
        .where(VisitRow.visit_date >= since)
        .distinct()
    )
    return set(session.execute(stmt).scalars())


def delete_team_cascade(session: Session, row: TeamRow) -> None:
    """Delete a team with its assignments and planned visits. Visits stay in the ledger."""
    session.execute(delete(AssignmentRow).where(AssignmentRow.team_id == row.id))
    session.execute(delete(PlannedVisitRow).where(PlannedVisitRow.team_id == row.id))
    session.delete(row)
    session.flush()
