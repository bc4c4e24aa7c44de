import enum
from sqlalchemy import Column, Integer, String, Text, Date, ForeignKey, Enum, TIMESTAMP
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from gearguard.database import Base


class Department(str, enum.Enum):
    PRODUCTION  = "Production"
    IT          = "IT"
    WAREHOUSE   = "Warehouse"
    MAINTENANCE = "Maintenance"
    ADMIN       = "Admin"
    OTHER       = "Other"


class EquipmentCategory(str, enum.Enum):
    MACHINERY   = "Machinery"
    ELECTRONICS = "Electronics"
    VEHICLES    = "Vehicles"
    TOOLS       = "Tools"
    OTHER       = "Other"


class EquipmentStatus(str, enum.Enum):
    ACTIVE            = "Active"
    UNDER_MAINTENANCE = "Under Maintenance"
    SCRAPPED          = "Scrapped"
    INACTIVE          = "Inactive"


class Equipment(Base):
    __tablename__ = "equipment"

    id                  = Column(Integer, primary_key=True, index=True)
    name                = Column(String(200), nullable=False)
    serialNumber        = Column(String(100), unique=True, nullable=False, index=True)
    department          = Column(Enum(Department, name="department"), nullable=False, index=True)
    assignedTo          = Column(String(150), nullable=True)      # free text: person using it
    purchaseDate        = Column(Date, nullable=False)
    warrantyExpiry      = Column(Date, nullable=False)
    location            = Column(String(200), nullable=False)
    category            = Column(Enum(EquipmentCategory, name="equipment_category"), nullable=False)
    teamId              = Column(Integer, ForeignKey("teams.id"), nullable=False)
    defaultTechnicianId = Column(Integer, ForeignKey("technicians.id"), nullable=True)
    status              = Column(Enum(EquipmentStatus, name="equipment_status"),
                                 default=EquipmentStatus.ACTIVE, nullable=False, index=True)
    notes               = Column(Text, nullable=True)
    createdAt           = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)
    updatedAt           = Column(TIMESTAMP(timezone=True), server_default=func.now(),
                                 onupdate=func.now(), nullable=False)

    # ─── Relationships ─────────────────────────────────────────────────────────
    team               = relationship("Team", back_populates="equipment")
    default_technician = relationship("Technician", back_populates="default_equipment")
    requests           = relationship("MaintenanceRequest", back_populates="equipment")

    def __repr__(self):
        return f"<Equipment id={self.id} serial={self.serialNumber} status={self.status}>"
