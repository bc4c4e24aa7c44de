from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional

from gearguard.database import get_db
from gearguard.schemas.technician import TechnicianCreateRequest, TechnicianUpdateRequest
from gearguard.schemas.common import success_response, paginated_response
from gearguard.services.technician_service import technician_service

router = APIRouter(prefix="/technicians")


@router.get("", summary="List active technicians")
def list_technicians(
    page:   int           = Query(1, ge=1),
    limit:  int           = Query(100, ge=1, le=500),
    teamId: Optional[int] = Query(None),
    db:     Session       = Depends(get_db),
):
    data, total = technician_service.list_technicians(db, page, limit, teamId)
    return paginated_response("Technicians retrieved", data, total, page, limit)


@router.get("/{technician_id}", summary="Get technician by ID")
def get_technician(technician_id: int, db: Session = Depends(get_db)):
    return success_response("Technician retrieved", technician_service.get_technician(db, technician_id))


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create technician")
def create_technician(body: TechnicianCreateRequest, db: Session = Depends(get_db)):
    data = technician_service.create_technician(db, body)
    return success_response("Technician created successfully", data)


@router.patch("/{technician_id}", summary="Update technician")
def update_technician(technician_id: int, body: TechnicianUpdateRequest, db: Session = Depends(get_db)):
    data = technician_service.update_technician(db, technician_id, body)
    return success_response("Technician updated successfully", data)


@router.delete("/{technician_id}", summary="Delete technician")
def delete_technician(technician_id: int, db: Session = Depends(get_db)):
    technician_service.delete_technician(db, technician_id)
    return success_response("Technician deleted successfully", None)
