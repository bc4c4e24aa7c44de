from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional

from gearguard.database import get_db
from gearguard.models.equipment import Department, EquipmentStatus
from gearguard.schemas.equipment import EquipmentCreateRequest, EquipmentUpdateRequest
from gearguard.schemas.common import success_response, paginated_response
from gearguard.services.equipment_service import equipment_service
from gearguard.utils.exceptions import ValidationException

router = APIRouter(prefix="/equipment")


def _department_filter(value: str | None) -> Department | None:
    if not value or value == "All":
        return None
    try:
        return Department(value)
    except ValueError:
        raise ValidationException(f"Invalid department '{value}'", field="department")


@router.get("", summary="List equipment")
def list_equipment(
    page:       int                       = Query(1, ge=1),
    limit:      int                       = Query(100, ge=1, le=500),
    department: Optional[str]             = Query(None, description="Production | IT | ... | All"),
    status:     Optional[EquipmentStatus] = Query(None),
    search:     Optional[str]             = Query(None, description="Matches name, serial number, assignedTo"),
    db:         Session                   = Depends(get_db),
):
    data, total = equipment_service.list_equipment(
        db, page, limit, _department_filter(department), status, search,
    )
    return paginated_response("Equipment retrieved", data, total, page, limit)


@router.get("/{equipment_id}", summary="Get equipment by ID")
def get_equipment(equipment_id: int, db: Session = Depends(get_db)):
    return success_response("Equipment retrieved", equipment_service.get_equipment(db, equipment_id))


@router.get("/{equipment_id}/requests", summary="Maintenance history of equipment")
def list_equipment_requests(equipment_id: int, db: Session = Depends(get_db)):
    return success_response("Requests retrieved", equipment_service.list_requests(db, equipment_id))


@router.get("/{equipment_id}/requests/count", summary="Number of open requests on equipment")
def count_equipment_requests(equipment_id: int, db: Session = Depends(get_db)):
    count = equipment_service.count_open_requests(db, equipment_id)
    return success_response("Open request count retrieved", {"count": count})


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create equipment")
def create_equipment(body: EquipmentCreateRequest, db: Session = Depends(get_db)):
    return success_response("Equipment created successfully", equipment_service.create_equipment(db, body))


@router.patch("/{equipment_id}", summary="Update equipment")
def update_equipment(equipment_id: int, body: EquipmentUpdateRequest, db: Session = Depends(get_db)):
    data = equipment_service.update_equipment(db, equipment_id, body)
    return success_response("Equipment updated successfully", data)


@router.delete("/{equipment_id}", summary="Delete equipment")
def delete_equipment(equipment_id: int, db: Session = Depends(get_db)):
    equipment_service.delete_equipment(db, equipment_id)
    return success_response("Equipment deleted successfully", None)
