from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from gearguard.database import get_db
from gearguard.schemas.team import TeamCreateRequest, TeamUpdateRequest
from gearguard.schemas.common import success_response, paginated_response
from gearguard.services.team_service import team_service

router = APIRouter(prefix="/teams")


@router.get("", summary="List active teams")
def list_teams(
    page:  int     = Query(1, ge=1),
    limit: int     = Query(100, ge=1, le=500),
    db:    Session = Depends(get_db),
):
    data, total = team_service.list_teams(db, page, limit)
    return paginated_response("Teams retrieved", data, total, page, limit)


@router.get("/{team_id}", summary="Get team with its active members")
def get_team(team_id: int, db: Session = Depends(get_db)):
    return success_response("Team retrieved", team_service.get_team(db, team_id))


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create team")
def create_team(body: TeamCreateRequest, db: Session = Depends(get_db)):
    return success_response("Team created successfully", team_service.create_team(db, body))


@router.patch("/{team_id}", summary="Update team (set isActive=false to deactivate)")
def update_team(team_id: int, body: TeamUpdateRequest, db: Session = Depends(get_db)):
    return success_response("Team updated successfully", team_service.update_team(db, team_id, body))


@router.delete("/{team_id}", summary="Delete team")
def delete_team(team_id: int, db: Session = Depends(get_db)):
    team_service.delete_team(db, team_id)
    return success_response("Team deleted successfully", None)
