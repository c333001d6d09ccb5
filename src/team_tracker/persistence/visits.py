"""Visit ledger queries. The ledger is append-only: there is no update or delete here."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..db.models import LocationRow, TeamRow, VisitRow
from ..models.domain import Visit, VisitHistoryEntry


def deleted_team_label(team_id: int) -> str:
    return f"Team #{team_id} (deleted)"


def unknown_location_label(location_id: int) -> str:
    return f"Location #{location_id} (unknown)"


def to_visit(row: VisitRow) -> Visit:
    return Visit(
        id=row.id,
        team_id=row.team_id,
        location_id=row.location_id,
        visit_date=row.visit_date,
        is_preached=bool(row.is_preached),
        notes=row.notes,
    )


def append_visit(
    session: Session,
    *,
    team_id: int,
    location_id: int,
    visit_date: datetime,
    is_preached: bool,
    notes: str | None,
) -> VisitRow:
    row = VisitRow(
        team_id=team_id,
        location_id=location_id,
        visit_date=visit_date,
        is_preached=is_preached,
        notes=notes,
    )
    session.add(row)
    session.flush()
    return row


def list_history(session: Session) -> list[VisitHistoryEntry]:
    stmt = (
        select(
            VisitRow,
            TeamRow.name.label("team_name"),
            LocationRow.name.label("location_name"),
        )
        .outerjoin(TeamRow, TeamRow.id == VisitRow.team_id)
        .outerjoin(LocationRow, LocationRow.id == VisitRow.location_id)
        .order_by(VisitRow.visit_date.desc(), VisitRow.id.desc())
    )
    entries: list[VisitHistoryEntry] = []
    for row, team_name, location_name in session.execute(stmt):
        entries.append(
            VisitHistoryEntry(
                id=row.id,
                visit_date=row.visit_date,
                team_id=row.team_id,
                team_name=team_name if team_name is not None else deleted_team_label(row.team_id),
                location_id=row.location_id,
                location_name=(
                    location_name if location_name is not None else unknown_location_label(row.location_id)
                ),
                is_preached=bool(row.is_preached),
                notes=row.notes,
            )
        )
    return entries


def list_visits_for_location(session: Session, location_id: int) -> list[Visit]:
    stmt = (
        select(VisitRow)
        .where(VisitRow.location_id == location_id)
        .order_by(VisitRow.visit_date.desc(), VisitRow.id.desc())
    )
    return [to_visit(row) for row in session.execute(stmt).scalars()]


def count_visits(session: Session) -> int:
    return session.execute(select(func.count()).select_from(VisitRow)).scalar_one()
