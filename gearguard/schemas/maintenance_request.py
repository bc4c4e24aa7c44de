from pydantic import BaseModel, field_validator, model_validator
from typing import Optional
from datetime import datetime
from gearguard.models.equipment import EquipmentCategory
from gearguard.models.maintenance_request import RequestType, RequestPriority, RequestStage
from gearguard.schemas.common import reject_nulls
from gearguard.utils.timeutils import as_utc


def _check_duration(v):
    if v is not None and v < 0: raise ValueError("Duration cannot be negative")
    return v


class RequestCreateRequest(BaseModel):
    subject:              str
    description:          Optional[str]               = None
    equipmentId:          int
    type:                 RequestType
    priority:             RequestPriority             = RequestPriority.MEDIUM
    stage:                RequestStage                = RequestStage.NEW
    assignedTechnicianId: Optional[int]               = None
    scheduledDate:        datetime
    completedDate:        Optional[datetime]          = None
    duration:             float                       = 0
    # Normally left out: copied from the equipment when missing
    teamId:               Optional[int]               = None
    category:             Optional[EquipmentCategory] = None
    createdBy:            Optional[str]               = None
    notes:                Optional[str]               = None

    @field_validator("subject")
    @classmethod
    def check_subject(cls, v):
        if not v.strip(): raise ValueError("Subject cannot be empty")
        return v.strip()

    @field_validator("duration")
    @classmethod
    def check_duration(cls, v):
        return _check_duration(v)

    @field_validator("scheduledDate", "completedDate")
    @classmethod
    def to_utc(cls, v):
        return as_utc(v)


class RequestUpdateRequest(BaseModel):
    subject:              Optional[str]               = None
    description:          Optional[str]               = None
    type:                 Optional[RequestType]       = None
    priority:             Optional[RequestPriority]   = None
    stage:                Optional[RequestStage]      = None
    assignedTechnicianId: Optional[int]               = None
    scheduledDate:        Optional[datetime]          = None
    completedDate:        Optional[datetime]          = None
    duration:             Optional[float]             = None
    notes:                Optional[str]               = None

    @field_validator("subject")
    @classmethod
    def check_subject(cls, v):
        if v is not None and not v.strip(): raise ValueError("Subject cannot be empty")
        return v.strip() if v else v

    @field_validator("duration")
    @classmethod
    def check_duration(cls, v):
        return _check_duration(v)

    @field_validator("scheduledDate", "completedDate")
    @classmethod
    def to_utc(cls, v):
        return as_utc(v)

    @model_validator(mode="after")
    def check_nulls(self) -> "RequestUpdateRequest":
        reject_nulls(self, "subject", "type", "priority", "stage", "scheduledDate", "duration")
        return self


class StageChangeRequest(BaseModel):
    stage: RequestStage


class AssignRequest(BaseModel):
    technicianId: int
