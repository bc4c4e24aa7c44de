"""
Demo data set.

    python -m gearguard.seed

Wipes every table and loads three teams, three technicians, three pieces of
equipment and three requests. Requests go through the same lifecycle code as
the API so their team/category snapshots and overdue flags are consistent.
"""
import logging
from datetime import date, datetime, timezone

from sqlalchemy.orm import Session

from gearguard.config import settings
from gearguard.database import SessionLocal, create_tables
from gearguard.models import (
    Team, TeamSpecialization, Technician, TechnicianRole,
    Equipment, Department, EquipmentCategory,
    MaintenanceRequest, RequestType, RequestPriority, RequestStage,
)
from gearguard.models.technician import initials
from gearguard.services import lifecycle
from gearguard.utils.security import hash_password

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "gearguard123"


def _utc(y: int, m: int, d: int) -> datetime:
    return datetime(y, m, d, tzinfo=timezone.utc)


def _technician(team: Team, name: str, email: str, phone: str, tags: list[str], **extra) -> Technician:
    return Technician(
        name=name, email=email, phone=phone, team=team,
        specialization=tags, avatar=initials(name), **extra,
    )


def _request(equipment: Equipment, **fields) -> MaintenanceRequest:
    return MaintenanceRequest(**lifecycle.prepare_create(fields, equipment))


def seed(db: Session) -> dict:
    for model in (MaintenanceRequest, Equipment, Technician, Team):
        db.query(model).delete()
    db.flush()

    # ─── Teams ────────────────────────────────────────────────────────────────
    mechanics = Team(name="Mechanics", specialization=TeamSpecialization.MECHANICAL,
                     description="Handles all mechanical equipment repairs")
    it_support = Team(name="IT Support", specialization=TeamSpecialization.IT,
                      description="Manages IT equipment and systems")
    electricians = Team(name="Electricians", specialization=TeamSpecialization.ELECTRICAL,
                        description="Handles electrical repairs and installations")
    db.add_all([mechanics, it_support, electricians])
    db.flush()

    # ─── Technicians ──────────────────────────────────────────────────────────
    tom = _technician(mechanics, "Tom Wilson", "tom.wilson@company.com", "555-0101",
                      ["CNC Machines", "Heavy Machinery"],
                      role=TechnicianRole.TECHNICIAN, password=hash_password(DEMO_PASSWORD))
    sarah = _technician(mechanics, "Sarah Connor", "sarah.connor@company.com", "555-0102",
                        ["Forklifts", "Vehicles"])
    alex = _technician(it_support, "Alex Chen", "alex.chen@company.com", "555-0103",
                       ["Computers", "Networking"])
    db.add_all([tom, sarah, alex])
    db.flush()

    # ─── Equipment ────────────────────────────────────────────────────────────
    cnc = Equipment(
        name="CNC Machine 001", serialNumber="CNC-2023-001", department=Department.PRODUCTION,
        assignedTo="John Doe", purchaseDate=date(2023, 1, 15), warrantyExpiry=date(2025, 1, 15),
        location="Factory Floor A", category=EquipmentCategory.MACHINERY,
        teamId=mechanics.id, defaultTechnicianId=tom.id,
    )
    laptop = Equipment(
        name="Laptop Dell XPS", serialNumber="LPT-2023-045", department=Department.IT,
        assignedTo="Jane Smith", purchaseDate=date(2023, 6, 20), warrantyExpiry=date(2024, 6, 20),
        location="Office 3rd Floor", category=EquipmentCategory.ELECTRONICS,
        teamId=it_support.id, defaultTechnicianId=alex.id,
    )
    forklift = Equipment(
        name="Forklift Toyota", serialNumber="FRK-2022-012", department=Department.WAREHOUSE,
        assignedTo="Mike Johnson", purchaseDate=date(2022, 3, 10), warrantyExpiry=date(2025, 3, 10),
        location="Warehouse B", category=EquipmentCategory.VEHICLES,
        teamId=mechanics.id, defaultTechnicianId=sarah.id,
    )
    db.add_all([cnc, laptop, forklift])
    db.flush()

    # ─── Requests ─────────────────────────────────────────────────────────────
    db.add_all([
        _request(
            cnc, subject="Oil Leak Detected", equipmentId=cnc.id,
            description="Machine is leaking oil from the hydraulic system",
            type=RequestType.CORRECTIVE, priority=RequestPriority.HIGH, stage=RequestStage.NEW,
            scheduledDate=_utc(2024, 12, 28), createdBy="System Admin",
        ),
        _request(
            forklift, subject="Routine Inspection", equipmentId=forklift.id,
            description="Monthly preventive maintenance check",
            type=RequestType.PREVENTIVE, priority=RequestPriority.MEDIUM, stage=RequestStage.IN_PROGRESS,
            scheduledDate=_utc(2024, 12, 29), assignedTechnicianId=sarah.id,
            createdBy="Maintenance Manager", duration=2,
        ),
        _request(
            laptop, subject="Screen Replacement", equipmentId=laptop.id,
            description="Laptop screen is cracked and needs replacement",
            type=RequestType.CORRECTIVE, priority=RequestPriority.LOW, stage=RequestStage.REPAIRED,
            scheduledDate=_utc(2024, 12, 26), completedDate=_utc(2024, 12, 27),
            assignedTechnicianId=alex.id, createdBy="Jane Smith", duration=3,
        ),
    ])
    db.commit()

    counts = {
        "teams":       db.query(Team).count(),
        "technicians": db.query(Technician).count(),
        "equipment":   db.query(Equipment).count(),
        "requests":    db.query(MaintenanceRequest).count(),
    }
    logger.info(f"Database seeded: {counts}")
    return counts


def main() -> None:
    logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    create_tables()
    db = SessionLocal()
    try:
        seed(db)
    finally:
        db.close()
    logger.info(f"Demo login: tom.wilson@company.com / {DEMO_PASSWORD}")


if __name__ == "__main__":
    main()
