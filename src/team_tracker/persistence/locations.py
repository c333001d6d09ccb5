"""Location table queries."""

from __future__ import annotations

from typing import Iterable, Sequence

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..db.models import AssignmentRow, LocationRow, VisitRow
from ..errors import NotFound
from ..models.domain import CatalogEntry, Location, LocationStatus


def to_location(row: LocationRow) -> Location:
    return Location(
        id=row.id,
        name=row.name,
        latitude=row.latitude,
        longitude=row.longitude,
        is_preached=bool(row.is_preached),
        last_visited_at=row.last_visited_at,
    )


def get_location_row(session: Session, location_id: int, *, for_update: bool = False) -> LocationRow | None:
    stmt = select(LocationRow).where(LocationRow.id == location_id)
    if for_update:
        stmt = stmt.with_for_update()
    return session.execute(stmt).scalar_one_or_none()


def require_location_row(session: Session, location_id: int, *, for_update: bool = False) -> LocationRow:
    row = get_location_row(session, location_id, for_update=for_update)
    if row is None:
        raise NotFound(f"Location {location_id} not found.")
    return row


def list_location_rows(session: Session) -> list[LocationRow]:
    return list(session.execute(select(LocationRow).order_by(LocationRow.id)).scalars())


def location_names(session: Session, location_ids: Iterable[int]) -> dict[int, str]:
    ids = set(location_ids)
    if not ids:
        return {}
    stmt = select(LocationRow.id, LocationRow.name).where(LocationRow.id.in_(ids))
    return {location_id: name for location_id, name in session.execute(stmt)}


def missing_location_ids(session: Session, location_ids: Sequence[int]) -> list[int]:
    known = location_names(session, location_ids)
    return [location_id for location_id in location_ids if location_id not in known]


def list_unassigned_location_rows(session: Session, team_id: int | None = None) -> list[LocationRow]:
    """Locations with no open assignment, for one team or for any team."""
    open_assigned = select(AssignmentRow.location_id).where(AssignmentRow.is_completed.is_(False))
    if team_id is not None:
        open_assigned = open_assigned.where(AssignmentRow.team_id == team_id)

    stmt = (
        select(LocationRow)
        .where(LocationRow.id.not_in(open_assigned))
        .order_by(LocationRow.name, LocationRow.id)
    )
    return list(session.execute(stmt).scalars())


def list_location_statuses(session: Session) -> list[LocationStatus]:
    stmt = (
        select(
            LocationRow,
            func.count(VisitRow.id).label("visit_count"),
            func.max(VisitRow.visit_date).label("last_visit"),
        )
        .outerjoin(VisitRow, VisitRow.location_id == LocationRow.id)
        .group_by(LocationRow.id)
        .order_by(LocationRow.id)
    )
    statuses: list[LocationStatus] = []
    for row, visit_count, last_visit in session.execute(stmt):
        statuses.append(
            LocationStatus(
                id=row.id,
                name=row.name,
                latitude=row.latitude,
                longitude=row.longitude,
                is_preached=bool(row.is_preached),
                last_visit=last_visit,
                visit_count=int(visit_count or 0),
            )
        )
    return statuses


def count_locations(session: Session) -> int:
    return session.execute(select(func.count()).select_from(LocationRow)).scalar_one()


def count_preached_locations(session: Session) -> int:
    stmt = select(func.count()).select_from(LocationRow).where(LocationRow.is_preached.is_(True))
    return session.execute(stmt).scalar_one()


def refresh_location_status(session: Session, row: LocationRow) -> None:
    """Recompute the derived columns of ``row`` from the visit ledger.

    Pending visits must be flushed first; the session does not autoflush.
    """
    preached_visits = session.execute(
        select(func.count())
        .select_from(VisitRow)
        .where(VisitRow.location_id == row.id, VisitRow.is_preached.is_(True))
    ).scalar_one()
    last_visit = session.execute(
        select(func.max(VisitRow.visit_date)).where(VisitRow.location_id == row.id)
    ).scalar_one()

    row.is_preached = preached_visits > 0
    row.last_visited_at = last_visit


def insert_catalog(session: Session, entries: Iterable[CatalogEntry]) -> int:
    inserted = 0
    for entry in entries:
        session.add(LocationRow(name=entry.name, latitude=entry.latitude, longitude=entry.longitude))
        inserted += 1
    session.flush()
    return inserted
