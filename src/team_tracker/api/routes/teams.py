"""Team endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Path, Response, status

from ...schemas import MAX_ID
from ...schemas.teams import TeamDeleteCheckModel, TeamModel, TeamPayload
from ...services.teams import (
    check_team_delete,
    create_team,
    delete_team,
    get_team,
    list_teams,
    update_team,
)

router = APIRouter(prefix="/teams", tags=["teams"])


@router.get("", response_model=List[TeamModel], status_code=status.HTTP_200_OK)
def get_teams() -> List[TeamModel]:
    return [TeamModel.model_validate(team) for team in list_teams()]


@router.post("", response_model=TeamModel, status_code=status.HTTP_201_CREATED)
def post_team(payload: TeamPayload) -> TeamModel:
    return TeamModel.model_validate(create_team(payload.name, payload.leader))


@router.get("/{team_id}", response_model=TeamModel, status_code=status.HTTP_200_OK)
def get_single_team(team_id: int = Path(..., ge=1, le=MAX_ID)) -> TeamModel:
    return TeamModel.model_validate(get_team(team_id))


@router.put("/{team_id}", response_model=TeamModel, status_code=status.HTTP_200_OK)
def put_team(payload: TeamPayload, team_id: int = Path(..., ge=1, le=MAX_ID)) -> TeamModel:
    return TeamModel.model_validate(update_team(team_id, payload.name, payload.leader))


@router.get("/{team_id}/delete-check", response_model=TeamDeleteCheckModel, status_code=status.HTTP_200_OK)
def get_team_delete_check(team_id: int = Path(..., ge=1, le=MAX_ID)) -> TeamDeleteCheckModel:
    """Report whether ``DELETE /teams/{team_id}`` would succeed, without changing anything."""
    return TeamDeleteCheckModel.model_validate(check_team_delete(team_id))


@router.delete("/{team_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def remove_team(team_id: int = Path(..., ge=1, le=MAX_ID)) -> Response:
    delete_team(team_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
