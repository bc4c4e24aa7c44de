import logging
from datetime import datetime

from sqlalchemy.orm import Session

from gearguard.config import settings
from gearguard.models.equipment import Equipment
from gearguard.models.maintenance_request import MaintenanceRequest, RequestStage, RequestType
from gearguard.models.team import Team
from gearguard.models.technician import Technician
from gearguard.schemas.maintenance_request import (
    RequestCreateRequest, RequestUpdateRequest, StageChangeRequest, AssignRequest,
)
from gearguard.services import lifecycle
from gearguard.utils.exceptions import NotFoundException, ValidationException
from gearguard.utils.timeutils import isoformat, as_utc

logger = logging.getLogger(__name__)


def current_overdue(r: MaintenanceRequest) -> bool:
    if settings.OVERDUE_EVALUATION == "write":
        return bool(r.isOverdue)
    return lifecycle.is_overdue(r.stage, r.scheduledDate)


def serialize_request(r: MaintenanceRequest) -> dict:
    return {
        "id":          r.id,
        "subject":     r.subject,
        "description": r.description,
        "equipment": {
            "id":           r.equipment.id,
            "name":         r.equipment.name,
            "serialNumber": r.equipment.serialNumber,
            "category":     r.equipment.category.value,
            "location":     r.equipment.location,
        } if r.equipment else None,
        "type":     r.type.value,
        "priority": r.priority.value,
        "stage":    r.stage.value,
        "assignedTechnician": {
            "id":     r.assigned_technician.id,
            "name":   r.assigned_technician.name,
            "avatar": r.assigned_technician.avatar,
        } if r.assigned_technician else None,
        "team": {
            "id":   r.team.id,
            "name": r.team.name,
        } if r.team else None,
        "category":      r.category.value if r.category else None,
        "scheduledDate": isoformat(r.scheduledDate),
        "completedDate": isoformat(r.completedDate),
        "duration":      r.duration,
        "createdBy":     r.createdBy,
        "notes":         r.notes,
        "isOverdue":     current_overdue(r),
        "createdAt":     isoformat(r.createdAt),
        "updatedAt":     isoformat(r.updatedAt),
    }


def _get_or_404(db: Session, request_id: int) -> MaintenanceRequest:
    r = db.query(MaintenanceRequest).filter(MaintenanceRequest.id == request_id).first()
    if not r:
        raise NotFoundException("Request")
    return r


def _ensure_technician(db: Session, technician_id: int | None) -> None:
    if technician_id is not None and not db.query(Technician).filter(Technician.id == technician_id).first():
        raise NotFoundException("Technician")


def _state(r: MaintenanceRequest) -> dict:
    return {"stage": r.stage, "scheduledDate": r.scheduledDate}


def _persist(db: Session, r: MaintenanceRequest, values: dict) -> dict:
    for field, value in values.items():
        setattr(r, field, value)
    db.commit()
    db.refresh(r)
    return serialize_request(r)


class RequestService:

    def list_requests(
        self, db: Session, page: int, limit: int,
        stage: RequestStage | None, type_: RequestType | None,
        equipment_id: int | None, technician_id: int | None,
        start_date: datetime | None, end_date: datetime | None,
    ) -> tuple[list[dict], int]:
        q = db.query(MaintenanceRequest)

        if stage:         q = q.filter(MaintenanceRequest.stage == stage)
        if type_:         q = q.filter(MaintenanceRequest.type == type_)
        if equipment_id:  q = q.filter(MaintenanceRequest.equipmentId == equipment_id)
        if technician_id: q = q.filter(MaintenanceRequest.assignedTechnicianId == technician_id)
        if start_date:    q = q.filter(MaintenanceRequest.scheduledDate >= as_utc(start_date))
        if end_date:      q = q.filter(MaintenanceRequest.scheduledDate <= as_utc(end_date))

        total = q.count()
        items = q.order_by(MaintenanceRequest.createdAt.desc(), MaintenanceRequest.id.desc())\
                 .offset((page - 1) * limit).limit(limit).all()
        return [serialize_request(r) for r in items], total

    def list_preventive(self, db: Session) -> list[dict]:
        """Calendar feed: preventive requests by scheduled date."""
        items = (
            db.query(MaintenanceRequest)
            .filter(MaintenanceRequest.type == RequestType.PREVENTIVE)
            .order_by(MaintenanceRequest.scheduledDate.asc(), MaintenanceRequest.id.asc())
            .all()
        )
        return [serialize_request(r) for r in items]

    def get_request(self, db: Session, request_id: int) -> dict:
        return serialize_request(_get_or_404(db, request_id))

    def create_request(self, db: Session, data: RequestCreateRequest, actor: Technician | None) -> dict:
        equipment = db.query(Equipment).filter(Equipment.id == data.equipmentId).first()

        fields = data.model_dump()
        created_by = (fields.get("createdBy") or "").strip() or (actor.name if actor else None)
        values = lifecycle.prepare_create({**fields, "createdBy": created_by}, equipment)

        if not created_by:
            raise ValidationException("createdBy is required", field="createdBy")
        if data.teamId is not None and not db.query(Team).filter(Team.id == data.teamId).first():
            raise NotFoundException("Team")
        _ensure_technician(db, data.assignedTechnicianId)

        r = MaintenanceRequest(**values)
        db.add(r)
        db.commit()
        db.refresh(r)
        logger.info(f"Created request #{r.id} for equipment #{r.equipmentId} (team={r.teamId})")
        return serialize_request(r)

    def update_request(self, db: Session, request_id: int, data: RequestUpdateRequest) -> dict:
        r = _get_or_404(db, request_id)
        updates = data.model_dump(exclude_unset=True)
        _ensure_technician(db, updates.get("assignedTechnicianId"))

        values = lifecycle.apply_update(
            _state(r), updates,
            clear_completed_on_reopen=settings.CLEAR_COMPLETED_DATE_ON_REOPEN,
        )
        return _persist(db, r, values)

    def change_stage(self, db: Session, request_id: int, data: StageChangeRequest) -> dict:
        r = _get_or_404(db, request_id)
        old_stage = r.stage
        values = lifecycle.apply_stage_change(
            _state(r), data.stage,
            clear_completed_on_reopen=settings.CLEAR_COMPLETED_DATE_ON_REOPEN,
        )
        logger.info(f"Request #{r.id} stage {old_stage.value} -> {values['stage'].value}")
        return _persist(db, r, values)

    def assign_technician(self, db: Session, request_id: int, data: AssignRequest) -> dict:
        r = _get_or_404(db, request_id)
        _ensure_technician(db, data.technicianId)
        values = lifecycle.apply_assignment(_state(r), data.technicianId)
        return _persist(db, r, values)

    def delete_request(self, db: Session, request_id: int) -> None:
        r = _get_or_404(db, request_id)
        db.delete(r)
        db.commit()
        logger.info(f"Deleted request #{request_id}")


request_service = RequestService()
