"""Team API schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class TeamPayload(BaseModel):
    name: str
    leader: str


class TeamModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    leader: str
    created_at: datetime
    current_location_id: int | None = None


class TeamDeleteCheckModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    team_id: int
    can_delete: bool
    open_assignments: int
