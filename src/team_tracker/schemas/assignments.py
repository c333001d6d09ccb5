"""Assignment and planned-visit API schemas."""

from __future__ import annotations

from datetime import date, datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from . import EntityId


class AssignmentCreateRequest(BaseModel):
    location_ids: List[EntityId]


class AssignmentUpdateRequest(BaseModel):
    is_completed: bool


class AssignmentModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    team_id: int
    location_id: int
    location_name: str
    is_completed: bool
    assigned_date: datetime
    completed_date: datetime | None = None


class PlanRequest(BaseModel):
    location_ids: List[EntityId]
    planned_date: date = Field(..., alias="date")

    model_config = ConfigDict(populate_by_name=True)


class PlannedVisitModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    team_id: int
    location_id: int
    location_name: str
    planned_date: date
    status: str
