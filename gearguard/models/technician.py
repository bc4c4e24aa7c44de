import enum
from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, Enum, JSON, TIMESTAMP
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from gearguard.database import Base


class TechnicianRole(str, enum.Enum):
    EMPLOYEE   = "Employee"
    TECHNICIAN = "Technician"


def initials(name: str) -> str:
    """First letter of the first two words, upper-cased: "Tom Wilson" -> "TW"."""
    return "".join(part[0] for part in name.split()).upper()[:2]


class Technician(Base):
    __tablename__ = "technicians"

    id             = Column(Integer, primary_key=True, index=True)
    name           = Column(String(150), nullable=False)
    email          = Column(String(255), unique=True, nullable=False, index=True)
    phone          = Column(String(50), nullable=True)
    teamId         = Column(Integer, ForeignKey("teams.id"), nullable=False, index=True)
    specialization = Column(JSON, default=list, nullable=False)   # free-form skill tags
    avatar         = Column(String(4), nullable=True)             # set once at creation
    role           = Column(Enum(TechnicianRole, name="technician_role"),
                            default=TechnicianRole.EMPLOYEE, nullable=False)
    password       = Column(String(255), nullable=True)           # NULL = cannot log in
    isActive       = Column(Boolean, default=True, nullable=False)
    createdAt      = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)
    updatedAt      = Column(TIMESTAMP(timezone=True), server_default=func.now(),
                            onupdate=func.now(), nullable=False)

    # ─── Relationships ─────────────────────────────────────────────────────────
    team              = relationship("Team", back_populates="technicians")
    default_equipment = relationship("Equipment", back_populates="default_technician")
    assigned_requests = relationship("MaintenanceRequest", back_populates="assigned_technician")

    def __repr__(self):
        return f"<Technician id={self.id} email={self.email} teamId={self.teamId}>"
