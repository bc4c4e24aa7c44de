import enum
from sqlalchemy import Column, Integer, String, Text, Float, Boolean, ForeignKey, Enum, TIMESTAMP, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from gearguard.database import Base
from gearguard.models.equipment import EquipmentCategory


class RequestType(str, enum.Enum):
    CORRECTIVE = "Corrective"
    PREVENTIVE = "Preventive"


class RequestPriority(str, enum.Enum):
    LOW      = "Low"
    MEDIUM   = "Medium"
    HIGH     = "High"
    CRITICAL = "Critical"


class RequestStage(str, enum.Enum):
    NEW         = "New"
    IN_PROGRESS = "In Progress"
    REPAIRED    = "Repaired"
    SCRAP       = "Scrap"


CLOSED_STAGES = (RequestStage.REPAIRED, RequestStage.SCRAP)


class MaintenanceRequest(Base):
    __tablename__ = "maintenance_requests"
    __table_args__ = (
        CheckConstraint("duration >= 0", name="ck_request_duration_non_negative"),
    )

    id                   = Column(Integer, primary_key=True, index=True)
    subject              = Column(String(255), nullable=False)
    description          = Column(Text, nullable=True)
    equipmentId          = Column(Integer, ForeignKey("equipment.id"), nullable=False, index=True)
    type                 = Column(Enum(RequestType, name="request_type"), nullable=False)
    priority             = Column(Enum(RequestPriority, name="request_priority"),
                                  default=RequestPriority.MEDIUM, nullable=False)
    stage                = Column(Enum(RequestStage, name="request_stage"),
                                  default=RequestStage.NEW, nullable=False, index=True)
    assignedTechnicianId = Column(Integer, ForeignKey("technicians.id"), nullable=True, index=True)
    scheduledDate        = Column(TIMESTAMP(timezone=True), nullable=False, index=True)
    completedDate        = Column(TIMESTAMP(timezone=True), nullable=True)
    duration             = Column(Float, default=0, nullable=False)  # hours of work
    # Snapshots of the equipment's team/category taken at creation; never cascaded
    teamId               = Column(Integer, ForeignKey("teams.id"), nullable=True, index=True)
    category             = Column(Enum(EquipmentCategory, name="equipment_category"), nullable=True)
    createdBy            = Column(String(150), nullable=False)
    notes                = Column(Text, nullable=True)
    isOverdue            = Column(Boolean, default=False, nullable=False)
    createdAt            = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)
    updatedAt            = Column(TIMESTAMP(timezone=True), server_default=func.now(),
                                  onupdate=func.now(), nullable=False)

    # ─── Relationships ─────────────────────────────────────────────────────────
    equipment           = relationship("Equipment", back_populates="requests")
    assigned_technician = relationship("Technician", back_populates="assigned_requests")
    team                = relationship("Team", back_populates="requests")

    def __repr__(self):
        return f"<MaintenanceRequest id={self.id} stage={self.stage} equipmentId={self.equipmentId}>"
