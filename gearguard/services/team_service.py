import logging

from sqlalchemy.orm import Session

from gearguard.models.maintenance_request import MaintenanceRequest
from gearguard.models.team import Team
from gearguard.models.technician import Technician
from gearguard.schemas.team import TeamCreateRequest, TeamUpdateRequest
from gearguard.utils.exceptions import NotFoundException, DuplicateEntryException, ValidationException
from gearguard.utils.timeutils import isoformat

logger = logging.getLogger(__name__)


def _serialize(t: Team) -> dict:
    return {
        "id":             t.id,
        "name":           t.name,
        "description":    t.description,
        "specialization": t.specialization.value,
        "isActive":       t.isActive,
        "createdAt":      isoformat(t.createdAt),
        "updatedAt":      isoformat(t.updatedAt),
    }


def _serialize_member(m: Technician) -> dict:
    return {
        "id":             m.id,
        "name":           m.name,
        "email":          m.email,
        "phone":          m.phone,
        "avatar":         m.avatar,
        "specialization": list(m.specialization or []),
    }


class TeamService:

    def list_teams(self, db: Session, page: int, limit: int) -> tuple[list[dict], int]:
        q = db.query(Team).filter(Team.isActive == True)  # noqa: E712
        total = q.count()
        items = q.order_by(Team.name).offset((page - 1) * limit).limit(limit).all()
        return [_serialize(t) for t in items], total

    def get_team(self, db: Session, team_id: int) -> dict:
        t = db.query(Team).filter(Team.id == team_id).first()
        if not t:
            raise NotFoundException("Team")
        members = (
            db.query(Technician)
            .filter(Technician.teamId == team_id, Technician.isActive == True)  # noqa: E712
            .order_by(Technician.name)
            .all()
        )
        return {**_serialize(t), "members": [_serialize_member(m) for m in members]}

    def create_team(self, db: Session, data: TeamCreateRequest) -> dict:
        if db.query(Team).filter(Team.name == data.name).first():
            raise DuplicateEntryException("Team name already exists", field="name")

        team = Team(
            name=data.name,
            description=data.description,
            specialization=data.specialization,
            isActive=data.isActive,
        )
        db.add(team)
        db.commit()
        db.refresh(team)
        logger.info(f"Created team #{team.id} '{team.name}'")
        return _serialize(team)

    def update_team(self, db: Session, team_id: int, data: TeamUpdateRequest) -> dict:
        t = db.query(Team).filter(Team.id == team_id).first()
        if not t:
            raise NotFoundException("Team")

        if data.name and data.name != t.name:
            if db.query(Team).filter(Team.name == data.name, Team.id != team_id).first():
                raise DuplicateEntryException("Team name already exists", field="name")

        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(t, field, value)

        db.commit()
        db.refresh(t)
        return _serialize(t)

    def delete_team(self, db: Session, team_id: int) -> None:
        t = db.query(Team).filter(Team.id == team_id).first()
        if not t:
            raise NotFoundException("Team")
        if db.query(MaintenanceRequest).filter(MaintenanceRequest.teamId == team_id).first():
            raise ValidationException("Team is referenced by maintenance requests; deactivate it instead")
        db.delete(t)
        db.commit()
        logger.info(f"Deleted team #{team_id}")


team_service = TeamService()
