from pydantic import BaseModel, field_validator, model_validator
from typing import Optional
from gearguard.models.team import TeamSpecialization
from gearguard.schemas.common import reject_nulls


class TeamCreateRequest(BaseModel):
    name:           str
    description:    Optional[str]      = None
    specialization: TeamSpecialization = TeamSpecialization.GENERAL
    isActive:       bool               = True

    @field_validator("name")
    @classmethod
    def check_name(cls, v):
        if not v.strip(): raise ValueError("Team name cannot be empty")
        return v.strip()


class TeamUpdateRequest(BaseModel):
    name:           Optional[str]                = None
    description:    Optional[str]                = None
    specialization: Optional[TeamSpecialization] = None
    isActive:       Optional[bool]               = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v):
        if v is not None and not v.strip(): raise ValueError("Team name cannot be empty")
        return v.strip() if v else v

    @model_validator(mode="after")
    def check_nulls(self) -> "TeamUpdateRequest":
        reject_nulls(self, "name", "specialization", "isActive")
        return self
