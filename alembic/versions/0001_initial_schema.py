"""initial schema: teams, technicians, equipment, maintenance requests

Revision ID: 0001
Revises:
Create Date: 2026-10-19 09:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# Enum types store member names, matching sqlalchemy.Enum(<PyEnum>) defaults
team_specialization = sa.Enum("MECHANICAL", "ELECTRICAL", "IT", "GENERAL", "OTHER", name="team_specialization")
technician_role     = sa.Enum("EMPLOYEE", "TECHNICIAN", name="technician_role")
department          = sa.Enum("PRODUCTION", "IT", "WAREHOUSE", "MAINTENANCE", "ADMIN", "OTHER", name="department")
equipment_category  = sa.Enum("MACHINERY", "ELECTRONICS", "VEHICLES", "TOOLS", "OTHER", name="equipment_category")
equipment_status    = sa.Enum("ACTIVE", "UNDER_MAINTENANCE", "SCRAPPED", "INACTIVE", name="equipment_status")
request_type        = sa.Enum("CORRECTIVE", "PREVENTIVE", name="request_type")
request_priority    = sa.Enum("LOW", "MEDIUM", "HIGH", "CRITICAL", name="request_priority")
request_stage       = sa.Enum("NEW", "IN_PROGRESS", "REPAIRED", "SCRAP", name="request_stage")
# Second column on the same type; the type itself is created with the equipment table
equipment_category_ref = postgresql.ENUM(
    "MACHINERY", "ELECTRONICS", "VEHICLES", "TOOLS", "OTHER", name="equipment_category", create_type=False,
)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("createdAt", sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updatedAt", sa.TIMESTAMP(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "teams",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(150), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("specialization", team_specialization, nullable=False),
        sa.Column("isActive", sa.Boolean(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_teams_id", "teams", ["id"])
    op.create_index("ix_teams_name", "teams", ["name"], unique=True)

    op.create_table(
        "technicians",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(150), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("teamId", sa.Integer(), sa.ForeignKey("teams.id"), nullable=False),
        sa.Column("specialization", sa.JSON(), nullable=False),
        sa.Column("avatar", sa.String(4), nullable=True),
        sa.Column("role", technician_role, nullable=False),
        sa.Column("password", sa.String(255), nullable=True),
        sa.Column("isActive", sa.Boolean(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_technicians_id", "technicians", ["id"])
    op.create_index("ix_technicians_email", "technicians", ["email"], unique=True)
    op.create_index("ix_technicians_teamId", "technicians", ["teamId"])

    op.create_table(
        "equipment",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("serialNumber", sa.String(100), nullable=False),
        sa.Column("department", department, nullable=False),
        sa.Column("assignedTo", sa.String(150), nullable=True),
        sa.Column("purchaseDate", sa.Date(), nullable=False),
        sa.Column("warrantyExpiry", sa.Date(), nullable=False),
        sa.Column("location", sa.String(200), nullable=False),
        sa.Column("category", equipment_category, nullable=False),
        sa.Column("teamId", sa.Integer(), sa.ForeignKey("teams.id"), nullable=False),
        sa.Column("defaultTechnicianId", sa.Integer(), sa.ForeignKey("technicians.id"), nullable=True),
        sa.Column("status", equipment_status, nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_equipment_id", "equipment", ["id"])
    op.create_index("ix_equipment_serialNumber", "equipment", ["serialNumber"], unique=True)
    op.create_index("ix_equipment_department", "equipment", ["department"])
    op.create_index("ix_equipment_status", "equipment", ["status"])

    op.create_table(
        "maintenance_requests",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("subject", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("equipmentId", sa.Integer(), sa.ForeignKey("equipment.id"), nullable=False),
        sa.Column("type", request_type, nullable=False),
        sa.Column("priority", request_priority, nullable=False),
        sa.Column("stage", request_stage, nullable=False),
        sa.Column("assignedTechnicianId", sa.Integer(), sa.ForeignKey("technicians.id"), nullable=True),
        sa.Column("scheduledDate", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("completedDate", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("duration", sa.Float(), nullable=False),
        sa.Column("teamId", sa.Integer(), sa.ForeignKey("teams.id"), nullable=True),
        sa.Column("category", equipment_category_ref, nullable=True),
        sa.Column("createdBy", sa.String(150), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("isOverdue", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("duration >= 0", name="ck_request_duration_non_negative"),
    )
    op.create_index("ix_maintenance_requests_id", "maintenance_requests", ["id"])
    op.create_index("ix_maintenance_requests_equipmentId", "maintenance_requests", ["equipmentId"])
    op.create_index("ix_maintenance_requests_stage", "maintenance_requests", ["stage"])
    op.create_index("ix_maintenance_requests_assignedTechnicianId", "maintenance_requests", ["assignedTechnicianId"])
    op.create_index("ix_maintenance_requests_scheduledDate", "maintenance_requests", ["scheduledDate"])
    op.create_index("ix_maintenance_requests_teamId", "maintenance_requests", ["teamId"])


def downgrade() -> None:
    op.drop_table("maintenance_requests")
    op.drop_table("equipment")
    op.drop_table("technicians")
    op.drop_table("teams")
    bind = op.get_bind()
    for enum_type in (
        request_stage, request_priority, request_type, equipment_status,
        equipment_category, department, technician_role, team_specialization,
    ):
        enum_type.drop(bind, checkfirst=True)
