from datetime import datetime
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional

from gearguard.database import get_db
from gearguard.dependencies import get_optional_technician
from gearguard.models.maintenance_request import RequestStage, RequestType
from gearguard.models.technician import Technician
from gearguard.schemas.maintenance_request import (
    RequestCreateRequest, RequestUpdateRequest, StageChangeRequest, AssignRequest,
)
from gearguard.schemas.common import success_response, paginated_response
from gearguard.services.request_service import request_service

router = APIRouter(prefix="/requests")


@router.get("", summary="List maintenance requests")
def list_requests(
    page:         int                    = Query(1, ge=1),
    limit:        int                    = Query(100, ge=1, le=500),
    stage:        Optional[RequestStage] = Query(None),
    type:         Optional[RequestType]  = Query(None),
    equipmentId:  Optional[int]          = Query(None),
    technicianId: Optional[int]          = Query(None),
    startDate:    Optional[datetime]     = Query(None, description="scheduledDate >= startDate"),
    endDate:      Optional[datetime]     = Query(None, description="scheduledDate <= endDate"),
    db:           Session                = Depends(get_db),
):
    data, total = request_service.list_requests(
        db, page, limit, stage, type, equipmentId, technicianId, startDate, endDate,
    )
    return paginated_response("Requests retrieved", data, total, page, limit)


# Declared before /{request_id} so "type" is not parsed as an id
@router.get("/type/preventive", summary="Preventive requests for the calendar view")
def list_preventive(db: Session = Depends(get_db)):
    return success_response("Preventive requests retrieved", request_service.list_preventive(db))


@router.get("/{request_id}", summary="Get request by ID")
def get_request(request_id: int, db: Session = Depends(get_db)):
    return success_response("Request retrieved", request_service.get_request(db, request_id))


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create request (team/category copied from equipment)")
def create_request(
    body:  RequestCreateRequest,
    db:    Session              = Depends(get_db),
    actor: Technician | None    = Depends(get_optional_technician),
):
    data = request_service.create_request(db, body, actor)
    return success_response("Request created successfully", data)


@router.patch("/{request_id}", summary="Update request")
def update_request(request_id: int, body: RequestUpdateRequest, db: Session = Depends(get_db)):
    data = request_service.update_request(db, request_id, body)
    return success_response("Request updated successfully", data)


@router.patch("/{request_id}/stage", summary="Move request to another stage (kanban)")
def change_stage(request_id: int, body: StageChangeRequest, db: Session = Depends(get_db)):
    data = request_service.change_stage(db, request_id, body)
    return success_response("Request stage updated", data)


@router.patch("/{request_id}/assign", summary="Assign technician to request")
def assign_technician(request_id: int, body: AssignRequest, db: Session = Depends(get_db)):
    data = request_service.assign_technician(db, request_id, body)
    return success_response("Technician assigned", data)


@router.delete("/{request_id}", summary="Delete request")
def delete_request(request_id: int, db: Session = Depends(get_db)):
    request_service.delete_request(db, request_id)
    return success_response("Request deleted successfully", None)
