"""Check-in endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, status

from ...schemas.visits import VisitCreateRequest, VisitHistoryModel, VisitModel
from ...services.visits import record_visit, visit_history

router = APIRouter(prefix="/visits", tags=["visits"])


@router.post("", response_model=VisitModel, status_code=status.HTTP_201_CREATED)
def post_visit(payload: VisitCreateRequest) -> VisitModel:
    """Record a check-in.

    Submissions are not deduplicated: retrying a request that already
    succeeded records a second visit.
    """
    visit = record_visit(
        team_id=payload.team_id,
        location_id=payload.location_id,
        notes=payload.notes,
        is_preached=payload.is_preached,
    )
    return VisitModel.model_validate(visit)


@router.get("/history", response_model=List[VisitHistoryModel], status_code=status.HTTP_200_OK)
def get_visit_history() -> List[VisitHistoryModel]:
    return [VisitHistoryModel.model_validate(entry) for entry in visit_history()]
