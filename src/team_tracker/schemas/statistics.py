"""Statistics API schema."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class StatisticsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_locations: int
    preached_locations: int
    active_teams: int
    total_teams: int
    teams_with_open_assignments: int
    total_visits: int
    progress_percent: int
