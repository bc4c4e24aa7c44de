import logging

from sqlalchemy import or_
from sqlalchemy.orm import Session

from gearguard.models.equipment import Equipment
from gearguard.models.maintenance_request import MaintenanceRequest, CLOSED_STAGES
from gearguard.models.team import Team
from gearguard.models.technician import Technician
from gearguard.schemas.equipment import EquipmentCreateRequest, EquipmentUpdateRequest
from gearguard.services.request_service import serialize_request
from gearguard.utils.exceptions import NotFoundException, DuplicateEntryException
from gearguard.utils.timeutils import isoformat

logger = logging.getLogger(__name__)


def _serialize(e: Equipment) -> dict:
    return {
        "id":             e.id,
        "name":           e.name,
        "serialNumber":   e.serialNumber,
        "department":     e.department.value,
        "assignedTo":     e.assignedTo,
        "purchaseDate":   isoformat(e.purchaseDate),
        "warrantyExpiry": isoformat(e.warrantyExpiry),
        "location":       e.location,
        "category":       e.category.value,
        "team": {
            "id":   e.team.id,
            "name": e.team.name,
        },
        "defaultTechnician": {
            "id":     e.default_technician.id,
            "name":   e.default_technician.name,
            "avatar": e.default_technician.avatar,
        } if e.default_technician else None,
        "status":    e.status.value,
        "notes":     e.notes,
        "createdAt": isoformat(e.createdAt),
        "updatedAt": isoformat(e.updatedAt),
    }


def _get_or_404(db: Session, equipment_id: int) -> Equipment:
    e = db.query(Equipment).filter(Equipment.id == equipment_id).first()
    if not e:
        raise NotFoundException("Equipment")
    return e


def _check_references(db: Session, team_id: int | None, technician_id: int | None) -> None:
    if team_id is not None and not db.query(Team).filter(Team.id == team_id).first():
        raise NotFoundException("Team")
    if technician_id is not None and not db.query(Technician).filter(Technician.id == technician_id).first():
        raise NotFoundException("Technician")


class EquipmentService:

    def list_equipment(
        self, db: Session, page: int, limit: int,
        department: str | None, status: str | None, search: str | None,
    ) -> tuple[list[dict], int]:
        q = db.query(Equipment)

        if department and department != "All":
            q = q.filter(Equipment.department == department)
        if status:
            q = q.filter(Equipment.status == status)
        if search:
            kw = f"%{search}%"
            q = q.filter(or_(
                Equipment.name.ilike(kw),
                Equipment.serialNumber.ilike(kw),
                Equipment.assignedTo.ilike(kw),
            ))

        total = q.count()
        items = q.order_by(Equipment.createdAt.desc(), Equipment.id.desc())\
                 .offset((page - 1) * limit).limit(limit).all()
        return [_serialize(e) for e in items], total

    def get_equipment(self, db: Session, equipment_id: int) -> dict:
        return _serialize(_get_or_404(db, equipment_id))

    def list_requests(self, db: Session, equipment_id: int) -> list[dict]:
        """Maintenance history of one piece of equipment, newest first."""
        _get_or_404(db, equipment_id)
        items = (
            db.query(MaintenanceRequest)
            .filter(MaintenanceRequest.equipmentId == equipment_id)
            .order_by(MaintenanceRequest.createdAt.desc(), MaintenanceRequest.id.desc())
            .all()
        )
        return [serialize_request(r) for r in items]

    def count_open_requests(self, db: Session, equipment_id: int) -> int:
        _get_or_404(db, equipment_id)
        return (
            db.query(MaintenanceRequest)
            .filter(
                MaintenanceRequest.equipmentId == equipment_id,
                MaintenanceRequest.stage.notin_(CLOSED_STAGES),
            )
            .count()
        )

    def create_equipment(self, db: Session, data: EquipmentCreateRequest) -> dict:
        if db.query(Equipment).filter(Equipment.serialNumber == data.serialNumber).first():
            raise DuplicateEntryException("Serial number already registered", field="serialNumber")
        _check_references(db, data.teamId, data.defaultTechnicianId)

        equipment = Equipment(**data.model_dump())
        db.add(equipment)
        db.commit()
        db.refresh(equipment)
        logger.info(f"Created equipment #{equipment.id} ({equipment.serialNumber})")
        return _serialize(equipment)

    def update_equipment(self, db: Session, equipment_id: int, data: EquipmentUpdateRequest) -> dict:
        e = _get_or_404(db, equipment_id)

        if data.serialNumber and data.serialNumber != e.serialNumber:
            if db.query(Equipment).filter(
                Equipment.serialNumber == data.serialNumber, Equipment.id != equipment_id,
            ).first():
                raise DuplicateEntryException("Serial number already used", field="serialNumber")
        _check_references(db, data.teamId, data.defaultTechnicianId)

        # Existing requests keep the team/category they were opened with
        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(e, field, value)

        db.commit()
        db.refresh(e)
        return _serialize(e)

    def delete_equipment(self, db: Session, equipment_id: int) -> None:
        e = _get_or_404(db, equipment_id)
        db.delete(e)
        db.commit()
        logger.info(f"Deleted equipment #{equipment_id}")


equipment_service = EquipmentService()
