"""Visit API schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from . import EntityId


class VisitCreateRequest(BaseModel):
    location_id: EntityId
    team_id: EntityId
    notes: str | None = None
    is_preached: bool = True


class VisitModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    team_id: int
    location_id: int
    visit_date: datetime
    is_preached: bool
    notes: str | None = None


class VisitHistoryModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    visit_date: datetime
    team_id: int
    team_name: str
    location_id: int
    location_name: str
    is_preached: bool
    notes: str | None = None
