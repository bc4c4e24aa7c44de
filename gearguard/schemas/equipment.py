from pydantic import BaseModel, field_validator, model_validator
from typing import Optional
from datetime import date
from gearguard.models.equipment import Department, EquipmentCategory, EquipmentStatus
from gearguard.schemas.common import reject_nulls


class EquipmentCreateRequest(BaseModel):
    name:                str
    serialNumber:        str
    department:          Department
    assignedTo:          Optional[str]   = None
    purchaseDate:        date
    warrantyExpiry:      date
    location:            str
    category:            EquipmentCategory
    teamId:              int
    defaultTechnicianId: Optional[int]   = None
    status:              EquipmentStatus = EquipmentStatus.ACTIVE
    notes:               Optional[str]   = None

    @field_validator("name", "location")
    @classmethod
    def check_not_empty(cls, v):
        if not v.strip(): raise ValueError("Value cannot be empty")
        return v.strip()

    @field_validator("serialNumber")
    @classmethod
    def check_serial(cls, v):
        if not v.strip(): raise ValueError("Serial number cannot be empty")
        return v.strip()


class EquipmentUpdateRequest(BaseModel):
    name:                Optional[str]               = None
    serialNumber:        Optional[str]               = None
    department:          Optional[Department]        = None
    assignedTo:          Optional[str]               = None
    purchaseDate:        Optional[date]              = None
    warrantyExpiry:      Optional[date]              = None
    location:            Optional[str]               = None
    category:            Optional[EquipmentCategory] = None
    teamId:              Optional[int]               = None
    defaultTechnicianId: Optional[int]               = None
    status:              Optional[EquipmentStatus]   = None
    notes:               Optional[str]               = None

    @field_validator("name", "location", "serialNumber")
    @classmethod
    def check_not_empty(cls, v):
        if v is not None and not v.strip(): raise ValueError("Value cannot be empty")
        return v.strip() if v else v

    @model_validator(mode="after")
    def check_nulls(self) -> "EquipmentUpdateRequest":
        reject_nulls(
            self, "name", "serialNumber", "department", "purchaseDate",
            "warrantyExpiry", "location", "category", "teamId", "status",
        )
        return self
