"""
Import all models here so that:
1. Alembic can auto-detect them when generating migrations
2. Relationships between models resolve correctly

Order matters: import parent tables before child tables.
"""

from gearguard.models.team import Team, TeamSpecialization
from gearguard.models.technician import Technician, TechnicianRole
from gearguard.models.equipment import Equipment, Department, EquipmentCategory, EquipmentStatus
from gearguard.models.maintenance_request import (
    MaintenanceRequest, RequestType, RequestPriority, RequestStage,
)

__all__ = [
    "Team",
    "TeamSpecialization",
    "Technician",
    "TechnicianRole",
    "Equipment",
    "Department",
    "EquipmentCategory",
    "EquipmentStatus",
    "MaintenanceRequest",
    "RequestType",
    "RequestPriority",
    "RequestStage",
]
