"""Assignment and planned-visit table queries."""

from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..db.models import AssignmentRow, LocationRow, PlannedVisitRow
from ..models.domain import Assignment, PlannedVisit


def to_assignment(row: AssignmentRow, location_name: str) -> Assignment:
    return Assignment(
        id=row.id,
        team_id=row.team_id,
        location_id=row.location_id,
        location_name=location_name,
        is_completed=bool(row.is_completed),
        assigned_date=row.assigned_date,
        completed_date=row.completed_date,
    )


def to_planned_visit(row: PlannedVisitRow, location_name: str) -> PlannedVisit:
    return PlannedVisit(
        id=row.id,
        team_id=row.team_id,
        location_id=row.location_id,
        location_name=location_name,
        planned_date=row.planned_date,
        status=row.status,
    )


def get_assignment_row(session: Session, assignment_id: int) -> AssignmentRow | None:
    return session.get(AssignmentRow, assignment_id)


def find_open_assignment(
    session: Session,
    team_id: int,
    location_id: int,
    *,
    exclude_id: int | None = None,
) -> AssignmentRow | None:
    stmt = select(AssignmentRow).where(
        AssignmentRow.team_id == team_id,
        AssignmentRow.location_id == location_id,
        AssignmentRow.is_completed.is_(False),
    )
    if exclude_id is not None:
        stmt = stmt.where(AssignmentRow.id != exclude_id)
    return session.execute(stmt.limit(1)).scalar_one_or_none()


def has_completed_since(session: Session, team_id: int, location_id: int, since: datetime) -> bool:
    stmt = select(func.count()).select_from(AssignmentRow).where(
        AssignmentRow.team_id == team_id,
        AssignmentRow.location_id == location_id,
        AssignmentRow.is_completed.is_(True),
        AssignmentRow.completed_date >= since,
    )
    return session.execute(stmt).scalar_one() > 0


def list_assignments_for_team(session: Session, team_id: int) -> list[Assignment]:
    stmt = (
        select(AssignmentRow, LocationRow.name)
        .join(LocationRow, LocationRow.id == AssignmentRow.location_id)
        .where(AssignmentRow.team_id == team_id)
        .order_by(AssignmentRow.assigned_date, AssignmentRow.id)
    )
    return [to_assignment(row, name) for row, name in session.execute(stmt)]


def count_open_assignments(session: Session, team_id: int) -> int:
    stmt = select(func.count()).select_from(AssignmentRow).where(
        AssignmentRow.team_id == team_id,
        AssignmentRow.is_completed.is_(False),
    )
    return session.execute(stmt).scalar_one()


def team_ids_with_open_assignments(session: Session) -> set[int]:
    stmt = select(AssignmentRow.team_id).where(AssignmentRow.is_completed.is_(False)).distinct()
    return set(session.execute(stmt).scalars())


def mark_completed(row: AssignmentRow, completed_at: datetime) -> None:
    row.is_completed = True
    row.completed_date = completed_at


def mark_open(row: AssignmentRow) -> None:
    row.is_completed = False
    row.completed_date = None


def planned_visits_on(session: Session, location_ids: list[int], planned_date: date) -> dict[int, PlannedVisitRow]:
    if not location_ids:
        return {}
    stmt = select(PlannedVisitRow).where(
        PlannedVisitRow.location_id.in_(location_ids),
        PlannedVisitRow.planned_date == planned_date,
    )
    return {row.location_id: row for row in session.execute(stmt).scalars()}


def list_planned_for_team(session: Session, team_id: int, from_date: date) -> list[PlannedVisit]:
    stmt = (
        select(PlannedVisitRow, LocationRow.name)
        .join(LocationRow, LocationRow.id == PlannedVisitRow.location_id)
        .where(PlannedVisitRow.team_id == team_id, PlannedVisitRow.planned_date >= from_date)
        .order_by(PlannedVisitRow.planned_date, LocationRow.name)
    )
    return [to_planned_visit(row, name) for row, name in session.execute(stmt)]
