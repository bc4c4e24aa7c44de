from pydantic import BaseModel, EmailStr, field_validator, model_validator
from typing import Optional
from gearguard.models.technician import TechnicianRole
from gearguard.schemas.common import reject_nulls


def _clean_tags(v: list[str] | None) -> list[str] | None:
    if v is None:
        return v
    seen: list[str] = []
    for tag in v:
        tag = tag.strip()
        if tag and tag not in seen:
            seen.append(tag)
    return seen


class TechnicianCreateRequest(BaseModel):
    name:           str
    email:          EmailStr
    phone:          Optional[str]  = None
    teamId:         int
    specialization: list[str]      = []
    role:           TechnicianRole = TechnicianRole.EMPLOYEE
    password:       Optional[str]  = None
    isActive:       bool           = True

    @field_validator("name")
    @classmethod
    def check_name(cls, v):
        if not v.strip(): raise ValueError("Name cannot be empty")
        return v.strip()

    @field_validator("email")
    @classmethod
    def lower_email(cls, v):
        return str(v).strip().lower()

    @field_validator("specialization")
    @classmethod
    def check_tags(cls, v):
        return _clean_tags(v)

    @field_validator("password")
    @classmethod
    def check_password(cls, v):
        if v is not None and len(v) < 8: raise ValueError("Password must be at least 8 characters")
        return v


class TechnicianUpdateRequest(BaseModel):
    name:           Optional[str]            = None
    email:          Optional[EmailStr]       = None
    phone:          Optional[str]            = None
    teamId:         Optional[int]            = None
    specialization: Optional[list[str]]      = None
    role:           Optional[TechnicianRole] = None
    password:       Optional[str]            = None
    isActive:       Optional[bool]           = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v):
        if v is not None and not v.strip(): raise ValueError("Name cannot be empty")
        return v.strip() if v else v

    @field_validator("email")
    @classmethod
    def lower_email(cls, v):
        return str(v).strip().lower() if v else v

    @field_validator("specialization")
    @classmethod
    def check_tags(cls, v):
        return _clean_tags(v)

    @field_validator("password")
    @classmethod
    def check_password(cls, v):
        if v is not None and len(v) < 8: raise ValueError("Password must be at least 8 characters")
        return v

    @model_validator(mode="after")
    def check_nulls(self) -> "TechnicianUpdateRequest":
        reject_nulls(self, "name", "email", "teamId", "specialization", "role", "isActive")
        return self
