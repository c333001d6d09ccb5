"""Location catalog endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Path, Query, status

from ...schemas import MAX_ID
from ...schemas.locations import LocationModel, LocationStatusModel
from ...schemas.visits import VisitModel
from ...services.locations import (
    get_location,
    list_available_locations,
    list_location_visits,
    list_locations,
    list_statuses,
)

router = APIRouter(prefix="/locations", tags=["locations"])


@router.get("", response_model=List[LocationModel], status_code=status.HTTP_200_OK)
def get_locations() -> List[LocationModel]:
    return [LocationModel.model_validate(location) for location in list_locations()]


@router.get("/available", response_model=List[LocationModel], status_code=status.HTTP_200_OK)
def get_available_locations(
    team_id: int | None = Query(
        default=None,
        ge=1,
        le=MAX_ID,
        description="Exclude locations with an open assignment for this team",
    ),
) -> List[LocationModel]:
    return [LocationModel.model_validate(location) for location in list_available_locations(team_id)]


@router.get("/status", response_model=List[LocationStatusModel], status_code=status.HTTP_200_OK)
def get_location_statuses() -> List[LocationStatusModel]:
    return [LocationStatusModel.model_validate(entry) for entry in list_statuses()]


@router.get("/{location_id}", response_model=LocationModel, status_code=status.HTTP_200_OK)
def get_single_location(location_id: int = Path(..., ge=1, le=MAX_ID)) -> LocationModel:
    return LocationModel.model_validate(get_location(location_id))


@router.get("/{location_id}/visits", response_model=List[VisitModel], status_code=status.HTTP_200_OK)
def get_location_visits(location_id: int = Path(..., ge=1, le=MAX_ID)) -> List[VisitModel]:
    return [VisitModel.model_validate(visit) for visit in list_location_visits(location_id)]
