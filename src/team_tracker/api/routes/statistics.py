"""Dashboard statistics endpoint."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...schemas.statistics import StatisticsResponse
from ...services.statistics import compute_statistics

router = APIRouter(tags=["statistics"])


@router.get("/statistics", response_model=StatisticsResponse, status_code=status.HTTP_200_OK)
def get_statistics() -> StatisticsResponse:
    return StatisticsResponse.model_validate(compute_statistics())
