"""Location API schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class LocationModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    latitude: float
    longitude: float
    is_preached: bool
    last_visited_at: datetime | None = None


class LocationStatusModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    latitude: float
    longitude: float
    is_preached: bool
    last_visit: datetime | None = None
    visit_count: int
