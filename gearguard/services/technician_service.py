import logging

from sqlalchemy.orm import Session

from gearguard.models.team import Team
from gearguard.models.technician import Technician, initials
from gearguard.schemas.technician import TechnicianCreateRequest, TechnicianUpdateRequest
from gearguard.utils.exceptions import NotFoundException, DuplicateEntryException
from gearguard.utils.security import hash_password
from gearguard.utils.timeutils import isoformat

logger = logging.getLogger(__name__)


def serialize_technician(t: Technician) -> dict:
    return {
        "id":             t.id,
        "name":           t.name,
        "email":          t.email,
        "phone":          t.phone,
        "team": {
            "id":   t.team.id,
            "name": t.team.name,
        } if t.team else None,
        "specialization": list(t.specialization or []),
        "avatar":         t.avatar,
        "role":           t.role.value,
        "canLogin":       t.password is not None,
        "isActive":       t.isActive,
        "createdAt":      isoformat(t.createdAt),
        "updatedAt":      isoformat(t.updatedAt),
    }


def _ensure_team(db: Session, team_id: int) -> None:
    if not db.query(Team).filter(Team.id == team_id).first():
        raise NotFoundException("Team")


class TechnicianService:

    def list_technicians(
        self, db: Session, page: int, limit: int, team_id: int | None,
    ) -> tuple[list[dict], int]:
        q = db.query(Technician).filter(Technician.isActive == True)  # noqa: E712
        if team_id:
            q = q.filter(Technician.teamId == team_id)

        total = q.count()
        items = q.order_by(Technician.name).offset((page - 1) * limit).limit(limit).all()
        return [serialize_technician(t) for t in items], total

    def get_technician(self, db: Session, technician_id: int) -> dict:
        t = db.query(Technician).filter(Technician.id == technician_id).first()
        if not t:
            raise NotFoundException("Technician")
        return serialize_technician(t)

    def create_technician(self, db: Session, data: TechnicianCreateRequest) -> dict:
        _ensure_team(db, data.teamId)
        if db.query(Technician).filter(Technician.email == data.email).first():
            raise DuplicateEntryException("Email already registered", field="email")

        technician = Technician(
            name=data.name,
            email=data.email,
            phone=data.phone,
            teamId=data.teamId,
            specialization=data.specialization,
            avatar=initials(data.name),
            role=data.role,
            password=hash_password(data.password) if data.password else None,
            isActive=data.isActive,
        )
        db.add(technician)
        db.commit()
        db.refresh(technician)
        logger.info(f"Created technician #{technician.id} <{technician.email}>")
        return serialize_technician(technician)

    def update_technician(self, db: Session, technician_id: int, data: TechnicianUpdateRequest) -> dict:
        t = db.query(Technician).filter(Technician.id == technician_id).first()
        if not t:
            raise NotFoundException("Technician")

        if data.email and data.email != t.email:
            if db.query(Technician).filter(Technician.email == data.email, Technician.id != technician_id).first():
                raise DuplicateEntryException("Email already registered", field="email")
        if data.teamId is not None:
            _ensure_team(db, data.teamId)

        updates = data.model_dump(exclude_unset=True)
        if updates.get("password"):
            updates["password"] = hash_password(updates["password"])
        # avatar stays as computed at creation, even on rename
        for field, value in updates.items():
            setattr(t, field, value)

        db.commit()
        db.refresh(t)
        return serialize_technician(t)

    def delete_technician(self, db: Session, technician_id: int) -> None:
        t = db.query(Technician).filter(Technician.id == technician_id).first()
        if not t:
            raise NotFoundException("Technician")
        db.delete(t)
        db.commit()
        logger.info(f"Deleted technician #{technician_id}")


technician_service = TechnicianService()
