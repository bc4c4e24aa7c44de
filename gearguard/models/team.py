import enum
from sqlalchemy import Column, Integer, String, Text, Boolean, Enum, TIMESTAMP
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from gearguard.database import Base


class TeamSpecialization(str, enum.Enum):
    MECHANICAL = "Mechanical"
    ELECTRICAL = "Electrical"
    IT         = "IT"
    GENERAL    = "General"
    OTHER      = "Other"


class Team(Base):
    __tablename__ = "teams"

    id             = Column(Integer, primary_key=True, index=True)
    name           = Column(String(150), unique=True, nullable=False, index=True)
    description    = Column(Text, nullable=True)
    specialization = Column(Enum(TeamSpecialization, name="team_specialization"),
                            default=TeamSpecialization.GENERAL, nullable=False)
    isActive       = Column(Boolean, default=True, nullable=False)
    createdAt      = Column(TIMESTAMP(timezone=True), server_default=func.now(), nullable=False)
    updatedAt      = Column(TIMESTAMP(timezone=True), server_default=func.now(),
                            onupdate=func.now(), nullable=False)

    # ─── Relationships ─────────────────────────────────────────────────────────
    technicians = relationship("Technician", back_populates="team")
    equipment   = relationship("Equipment", back_populates="team")
    # Requests hold a snapshot of the team; the ORM never rewrites it
    requests    = relationship("MaintenanceRequest", back_populates="team", passive_deletes="all")

    def __repr__(self):
        return f"<Team id={self.id} name={self.name} specialization={self.specialization}>"
