"""Shared fixtures for the HTTP tests: a fresh in-memory SQLite database per test."""
import unittest
from datetime import datetime, timedelta

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import gearguard.models  # noqa: F401 (registers models on Base.metadata)
from gearguard.database import Base, get_db
from gearguard.main import app
from gearguard.utils.timeutils import utcnow


def iso(value: datetime) -> str:
    return value.isoformat()


def parse(value: str) -> datetime:
    return datetime.fromisoformat(value)


class ApiTestCase(unittest.TestCase):

    def setUp(self):
        self.engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(self.engine)
        self.Session = sessionmaker(bind=self.engine, autocommit=False, autoflush=False, expire_on_commit=False)

        def override_get_db():
            db = self.Session()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()
        Base.metadata.drop_all(self.engine)
        self.engine.dispose()

    # ─── Builders ─────────────────────────────────────────────────────────────
    def ok(self, response, status_code: int = 200):
        self.assertEqual(response.status_code, status_code, response.text)
        body = response.json()
        self.assertTrue(body["success"])
        return body["data"]

    def create_team(self, name: str = "Mechanics", **extra) -> dict:
        payload = {"name": name, "specialization": "Mechanical", **extra}
        return self.ok(self.client.post("/api/teams", json=payload), 201)

    def create_technician(self, team_id: int, name: str = "Tom Wilson",
                          email: str = "tom.wilson@company.com", **extra) -> dict:
        payload = {"name": name, "email": email, "teamId": team_id, **extra}
        return self.ok(self.client.post("/api/technicians", json=payload), 201)

    def create_equipment(self, team_id: int, serial: str = "CNC-2023-001", **extra) -> dict:
        payload = {
            "name":           "CNC Machine 001",
            "serialNumber":   serial,
            "department":     "Production",
            "assignedTo":     "John Doe",
            "purchaseDate":   "2023-01-15",
            "warrantyExpiry": "2025-01-15",
            "location":       "Factory Floor A",
            "category":       "Machinery",
            "teamId":         team_id,
            **extra,
        }
        return self.ok(self.client.post("/api/equipment", json=payload), 201)

    def create_request(self, equipment_id: int, scheduled: datetime | None = None, **extra) -> dict:
        payload = {
            "subject":       "Oil Leak Detected",
            "equipmentId":   equipment_id,
            "type":          "Corrective",
            "scheduledDate": iso(scheduled or utcnow() + timedelta(days=1)),
            "createdBy":     "System Admin",
            **extra,
        }
        return self.ok(self.client.post("/api/requests", json=payload), 201)
