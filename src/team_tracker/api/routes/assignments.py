"""Team assignment and planning endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Path, status

from ...schemas import MAX_ID
from ...schemas.assignments import (
    AssignmentCreateRequest,
    AssignmentModel,
    AssignmentUpdateRequest,
    PlannedVisitModel,
    PlanRequest,
)
from ...services.assignments import (
    assign_locations,
    list_planned_visits,
    list_team_assignments,
    plan_visits,
    set_assignment_completion,
)

router = APIRouter(prefix="/teams/{team_id}", tags=["assignments"])


@router.get("/assignments", response_model=List[AssignmentModel], status_code=status.HTTP_200_OK)
def get_assignments(team_id: int = Path(..., ge=1, le=MAX_ID)) -> List[AssignmentModel]:
    return [AssignmentModel.model_validate(item) for item in list_team_assignments(team_id)]


@router.post("/assignments", response_model=List[AssignmentModel], status_code=status.HTTP_201_CREATED)
def post_assignments(payload: AssignmentCreateRequest, team_id: int = Path(..., ge=1, le=MAX_ID)) -> List[AssignmentModel]:
    """Assign locations to the team. Already-open locations are skipped, so retries are safe."""
    created = assign_locations(team_id, payload.location_ids)
    return [AssignmentModel.model_validate(item) for item in created]


@router.put(
    "/assignments/{assignment_id}",
    response_model=AssignmentModel,
    status_code=status.HTTP_200_OK,
)
def put_assignment(
    payload: AssignmentUpdateRequest,
    team_id: int = Path(..., ge=1, le=MAX_ID),
    assignment_id: int = Path(..., ge=1, le=MAX_ID),
) -> AssignmentModel:
    return AssignmentModel.model_validate(set_assignment_completion(team_id, assignment_id, payload.is_completed))


@router.post("/plan", response_model=List[PlannedVisitModel], status_code=status.HTTP_201_CREATED)
def post_plan(payload: PlanRequest, team_id: int = Path(..., ge=1, le=MAX_ID)) -> List[PlannedVisitModel]:
    planned = plan_visits(team_id, payload.location_ids, payload.planned_date)
    return [PlannedVisitModel.model_validate(item) for item in planned]


@router.get("/planned", response_model=List[PlannedVisitModel], status_code=status.HTTP_200_OK)
def get_planned(team_id: int = Path(..., ge=1, le=MAX_ID)) -> List[PlannedVisitModel]:
    return [PlannedVisitModel.model_validate(item) for item in list_planned_visits(team_id)]
