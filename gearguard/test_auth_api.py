import unittest
from unittest.mock import patch

from gearguard.config import settings
from gearguard.testing import ApiTestCase
from gearguard.utils.security import create_access_token


class TestAuth(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.team = self.create_team("Mechanics")
        self.tech = self.create_technician(
            self.team["id"], role="Technician", password="gearguard123",
        )
        self.equipment = self.create_equipment(self.team["id"])

    def login(self, email="tom.wilson@company.com", password="gearguard123"):
        return self.client.post("/api/auth/login", json={"email": email, "password": password})

    def auth(self, token: str) -> dict:
        return {"Authorization": f"Bearer {token}"}

    def test_login(self):
        data = self.ok(self.login())
        self.assertEqual(data["tokenType"], "Bearer")
        self.assertEqual(data["expiresIn"], settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60)
        self.assertEqual(data["technician"]["role"], "Technician")
        self.assertTrue(self.tech["canLogin"])

    def test_login_is_case_insensitive_on_email(self):
        self.ok(self.login(email="Tom.Wilson@Company.com"))

    def test_wrong_password(self):
        r = self.login(password="not-the-password")
        self.assertEqual(r.status_code, 401)
        self.assertEqual(r.json()["code"], "UNAUTHORIZED")

    def test_technician_without_password_cannot_login(self):
        self.create_technician(self.team["id"], "Sarah Connor", "sarah.connor@company.com")
        self.assertEqual(self.login("sarah.connor@company.com", "whatever123").status_code, 401)

    def test_inactive_account(self):
        self.ok(self.client.patch(f"/api/technicians/{self.tech['id']}", json={"isActive": False}))
        r = self.login()
        self.assertEqual(r.status_code, 403)
        self.assertEqual(r.json()["code"], "ACCOUNT_INACTIVE")

    def test_me(self):
        token = self.ok(self.login())["accessToken"]
        data = self.ok(self.client.get("/api/auth/me", headers=self.auth(token)))
        self.assertEqual(data["id"], self.tech["id"])
        self.assertEqual(data["email"], "tom.wilson@company.com")

    def test_me_requires_token(self):
        self.assertEqual(self.client.get("/api/auth/me").status_code, 401)
        r = self.client.get("/api/auth/me", headers=self.auth("garbage"))
        self.assertEqual(r.status_code, 401)

    def test_expired_token(self):
        with patch.object(settings, "ACCESS_TOKEN_EXPIRE_MINUTES", -1):
            token = create_access_token(self.tech["id"], "Technician")
        r = self.client.get("/api/auth/me", headers=self.auth(token))
        self.assertEqual(r.status_code, 401)
        self.assertEqual(r.json()["code"], "TOKEN_EXPIRED")

    def test_created_by_filled_from_token(self):
        token = self.ok(self.login())["accessToken"]
        r = self.client.post("/api/requests", headers=self.auth(token), json={
            "subject": "Oil Leak Detected", "equipmentId": self.equipment["id"],
            "type": "Corrective", "scheduledDate": "2030-01-01T09:00:00+00:00",
        })
        self.assertEqual(self.ok(r, 201)["createdBy"], "Tom Wilson")

    def test_explicit_created_by_wins_over_token(self):
        token = self.ok(self.login())["accessToken"]
        r = self.client.post("/api/requests", headers=self.auth(token), json={
            "subject": "Oil Leak Detected", "equipmentId": self.equipment["id"],
            "type": "Corrective", "scheduledDate": "2030-01-01T09:00:00+00:00",
            "createdBy": "Maintenance Manager",
        })
        self.assertEqual(self.ok(r, 201)["createdBy"], "Maintenance Manager")


if __name__ == "__main__":
    unittest.main()
