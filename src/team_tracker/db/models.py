"""ORM tables for the tracker database."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    TypeDecorator,
    UniqueConstraint,
    false,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    """Timezone-aware UTC timestamps, also on backends that store naive values (SQLite)."""

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def process_result_value(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class Base(DeclarativeBase):
    pass


class LocationRow(Base):
    """Catalog entry. Only the derived columns change after seeding."""

    __tablename__ = "locations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    is_preached: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    last_visited_at: Mapped[Optional[datetime]] = mapped_column(UTCDateTime, nullable=True)


class TeamRow(Base):
    __tablename__ = "teams"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    leader: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utcnow)


class AssignmentRow(Base):
    __tablename__ = "team_assignments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    team_id: Mapped[int] = mapped_column(ForeignKey("teams.id"), nullable=False, index=True)
    location_id: Mapped[int] = mapped_column(ForeignKey("locations.id"), nullable=False, index=True)
    is_completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    assigned_date: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utcnow)
    completed_date: Mapped[Optional[datetime]] = mapped_column(UTCDateTime, nullable=True)


# At most one open assignment per (team, location).
Index(
    "uq_team_assignments_open",
    AssignmentRow.team_id,
    AssignmentRow.location_id,
    unique=True,
    sqlite_where=AssignmentRow.is_completed == false(),
    postgresql_where=AssignmentRow.is_completed == false(),
)


class VisitRow(Base):
    """Append-only ledger entry.

    ``team_id`` carries no foreign key: visits outlive the teams that made them.
    """

    __tablename__ = "location_visits"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    location_id: Mapped[int] = mapped_column(ForeignKey("locations.id"), nullable=False, index=True)
    team_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    visit_date: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, index=True)
    is_preached: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


class PlannedVisitRow(Base):
    __tablename__ = "planned_visits"
    __table_args__ = (UniqueConstraint("location_id", "planned_date", name="uq_planned_visits_location_date"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    location_id: Mapped[int] = mapped_column(ForeignKey("locations.id"), nullable=False)
    team_id: Mapped[int] = mapped_column(ForeignKey("teams.id"), nullable=False, index=True)
    planned_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="planned")
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utcnow)


__all__ = [
    "Base",
    "LocationRow",
    "TeamRow",
    "AssignmentRow",
    "VisitRow",
    "PlannedVisitRow",
    "UTCDateTime",
    "utcnow",
]
