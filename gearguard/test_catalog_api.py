import unittest

from gearguard.testing import ApiTestCase


class TestTeams(ApiTestCase):

    def test_create_and_list(self):
        self.create_team("Mechanics")
        self.create_team("Electricians", specialization="Electrical")
        body = self.client.get("/api/teams").json()
        self.assertEqual([t["name"] for t in body["data"]], ["Electricians", "Mechanics"])
        self.assertEqual(body["meta"]["total"], 2)

    def test_duplicate_name_is_400(self):
        self.create_team("Mechanics")
        r = self.client.post("/api/teams", json={"name": "Mechanics"})
        self.assertEqual(r.status_code, 400)
        self.assertEqual(r.json()["code"], "DUPLICATE_ENTRY")
        self.assertEqual(r.json()["field"], "name")

    def test_invalid_specialization(self):
        r = self.client.post("/api/teams", json={"name": "Plumbers", "specialization": "Plumbing"})
        self.assertEqual(r.status_code, 400)

    def test_deactivated_team_hidden_from_list(self):
        team = self.create_team("Mechanics")
        self.ok(self.client.patch(f"/api/teams/{team['id']}", json={"isActive": False}))
        self.assertEqual(self.client.get("/api/teams").json()["data"], [])
        self.assertFalse(self.ok(self.client.get(f"/api/teams/{team['id']}"))["isActive"])

    def test_get_team_lists_active_members(self):
        team = self.create_team("Mechanics")
        self.create_technician(team["id"], "Tom Wilson", "tom.wilson@company.com")
        sarah = self.create_technician(team["id"], "Sarah Connor", "sarah.connor@company.com")
        self.ok(self.client.patch(f"/api/technicians/{sarah['id']}", json={"isActive": False}))

        data = self.ok(self.client.get(f"/api/teams/{team['id']}"))
        self.assertEqual([m["name"] for m in data["members"]], ["Tom Wilson"])

    def test_unknown_team(self):
        r = self.client.get("/api/teams/42")
        self.assertEqual(r.status_code, 404)
        self.assertEqual(r.json(), {
            "success": False, "error": "Team not found", "code": "NOT_FOUND",
            "details": None, "field": None,
        })

    def test_delete(self):
        team = self.create_team("Mechanics")
        self.ok(self.client.delete(f"/api/teams/{team['id']}"))
        self.assertEqual(self.client.get(f"/api/teams/{team['id']}").status_code, 404)

    def test_delete_refused_while_requests_keep_team_snapshot(self):
        mechanics = self.create_team("Mechanics")
        other = self.create_team("Other", specialization="Other")
        eq = self.create_equipment(mechanics["id"])
        req = self.create_request(eq["id"], teamId=other["id"])

        r = self.client.delete(f"/api/teams/{other['id']}")
        self.assertEqual(r.status_code, 400)
        self.assertEqual(r.json()["code"], "VALIDATION_ERROR")

        data = self.ok(self.client.get(f"/api/requests/{req['id']}"))
        self.assertEqual(data["team"], {"id": other["id"], "name": "Other"})
        by_team = self.ok(self.client.get("/api/reports/by-team"))
        self.assertIn({"teamId": other["id"], "teamName": "Other", "count": 1}, by_team)


class TestTechnicians(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.team = self.create_team("Mechanics")

    def test_create_computes_avatar_and_cleans_tags(self):
        data = self.create_technician(
            self.team["id"], "sarah jane connor", "Sarah.Connor@Company.com",
            specialization=[" Forklifts ", "Vehicles", "Forklifts", ""],
        )
        self.assertEqual(data["avatar"], "SJ")
        self.assertEqual(data["email"], "sarah.connor@company.com")
        self.assertEqual(data["specialization"], ["Forklifts", "Vehicles"])
        self.assertEqual(data["team"], {"id": self.team["id"], "name": "Mechanics"})
        self.assertEqual(data["role"], "Employee")
        self.assertFalse(data["canLogin"])
        self.assertNotIn("password", data)

    def test_avatar_kept_on_rename(self):
        tech = self.create_technician(self.team["id"])
        data = self.ok(self.client.patch(f"/api/technicians/{tech['id']}", json={"name": "Thomas Anderson"}))
        self.assertEqual(data["name"], "Thomas Anderson")
        self.assertEqual(data["avatar"], "TW")

    def test_duplicate_email_is_400(self):
        self.create_technician(self.team["id"])
        r = self.client.post("/api/technicians", json={
            "name": "Tom W", "email": "TOM.WILSON@company.com", "teamId": self.team["id"],
        })
        self.assertEqual(r.status_code, 400)
        self.assertEqual(r.json()["code"], "DUPLICATE_ENTRY")

    def test_invalid_email_and_short_password(self):
        for payload in (
            {"name": "Tom", "email": "not-an-email", "teamId": self.team["id"]},
            {"name": "Tom", "email": "tom@company.com", "teamId": self.team["id"], "password": "short"},
        ):
            with self.subTest(payload=payload):
                self.assertEqual(self.client.post("/api/technicians", json=payload).status_code, 400)

    def test_unknown_team_is_404(self):
        r = self.client.post("/api/technicians", json={"name": "Tom", "email": "tom@company.com", "teamId": 99})
        self.assertEqual(r.status_code, 404)
        self.assertEqual(r.json()["error"], "Team not found")

    def test_list_filters_by_team(self):
        other = self.create_team("IT Support", specialization="IT")
        self.create_technician(self.team["id"])
        alex = self.create_technician(other["id"], "Alex Chen", "alex.chen@company.com")

        body = self.client.get("/api/technicians", params={"teamId": other["id"]}).json()
        self.assertEqual([t["id"] for t in body["data"]], [alex["id"]])
        self.assertEqual(len(self.client.get("/api/technicians").json()["data"]), 2)


class TestEquipment(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.team = self.create_team("Mechanics")
        self.tech = self.create_technician(self.team["id"])

    def test_create(self):
        data = self.create_equipment(self.team["id"], defaultTechnicianId=self.tech["id"])
        self.assertEqual(data["serialNumber"], "CNC-2023-001")
        self.assertEqual(data["purchaseDate"], "2023-01-15")
        self.assertEqual(data["status"], "Active")
        self.assertEqual(data["team"]["name"], "Mechanics")
        self.assertEqual(data["defaultTechnician"]["avatar"], "TW")

    def test_duplicate_serial_is_400(self):
        self.create_equipment(self.team["id"])
        r = self.client.post("/api/equipment", json={
            "name": "Another CNC", "serialNumber": "CNC-2023-001", "department": "Production",
            "purchaseDate": "2024-01-01", "warrantyExpiry": "2026-01-01",
            "location": "Factory Floor B", "category": "Machinery", "teamId": self.team["id"],
        })
        self.assertEqual(r.status_code, 400)
        self.assertEqual(r.json()["field"], "serialNumber")

    def test_missing_fields_and_bad_enum(self):
        r = self.client.post("/api/equipment", json={"name": "Drill", "serialNumber": "DRL-1"})
        self.assertEqual(r.status_code, 400)
        r = self.client.post("/api/equipment", json={
            "name": "Drill", "serialNumber": "DRL-1", "department": "Kitchen",
            "purchaseDate": "2024-01-01", "warrantyExpiry": "2026-01-01",
            "location": "Shed", "category": "Tools", "teamId": self.team["id"],
        })
        self.assertEqual(r.status_code, 400)

    def test_default_technician_zero_is_404(self):
        r = self.client.post("/api/equipment", json={
            "name": "Drill", "serialNumber": "DRL-1", "department": "Maintenance",
            "purchaseDate": "2024-01-01", "warrantyExpiry": "2026-01-01",
            "location": "Shed", "category": "Tools", "teamId": self.team["id"],
            "defaultTechnicianId": 0,
        })
        self.assertEqual(r.status_code, 404)
        self.assertEqual(r.json()["error"], "Technician not found")

    def test_unknown_references_are_404(self):
        r = self.client.post("/api/equipment", json={
            "name": "Drill", "serialNumber": "DRL-1", "department": "Maintenance",
            "purchaseDate": "2024-01-01", "warrantyExpiry": "2026-01-01",
            "location": "Shed", "category": "Tools", "teamId": 77,
        })
        self.assertEqual(r.status_code, 404)

    def test_search_and_department_filter(self):
        cnc = self.create_equipment(self.team["id"])
        laptop = self.create_equipment(
            self.team["id"], "LPT-2023-045", name="Laptop Dell XPS",
            department="IT", assignedTo="Jane Smith", category="Electronics",
        )

        def ids(**params):
            return [e["id"] for e in self.client.get("/api/equipment", params=params).json()["data"]]

        self.assertEqual(ids(search="jane"), [laptop["id"]])
        self.assertEqual(ids(search="cnc-2023"), [cnc["id"]])
        self.assertEqual(ids(department="IT"), [laptop["id"]])
        self.assertEqual(set(ids(department="All")), {cnc["id"], laptop["id"]})
        self.assertEqual(self.client.get("/api/equipment", params={"department": "Kitchen"}).status_code, 400)

    def test_history_and_open_count(self):
        eq = self.create_equipment(self.team["id"])
        first = self.create_request(eq["id"])
        second = self.create_request(eq["id"], subject="Spindle noise")
        self.ok(self.client.patch(f"/api/requests/{first['id']}/stage", json={"stage": "Repaired"}))

        history = self.ok(self.client.get(f"/api/equipment/{eq['id']}/requests"))
        self.assertEqual([r["id"] for r in history], [second["id"], first["id"]])
        count = self.ok(self.client.get(f"/api/equipment/{eq['id']}/requests/count"))
        self.assertEqual(count, {"count": 1})

    def test_history_of_unknown_equipment(self):
        self.assertEqual(self.client.get("/api/equipment/5/requests").status_code, 404)
        self.assertEqual(self.client.get("/api/equipment/5/requests/count").status_code, 404)

    def test_update_rejects_null_required_field(self):
        eq = self.create_equipment(self.team["id"])
        r = self.client.patch(f"/api/equipment/{eq['id']}", json={"location": None})
        self.assertEqual(r.status_code, 400)


class TestHealth(ApiTestCase):

    def test_health(self):
        r = self.client.get("/health")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json()["status"], "ok")

    def test_error_body_documented(self):
        schema = self.client.get("/openapi.json").json()
        self.assertIn("ErrorResponse", schema["components"]["schemas"])
        responses = schema["paths"]["/api/requests/{request_id}"]["get"]["responses"]
        self.assertEqual(responses["404"]["content"]["application/json"]["schema"],
                         {"$ref": "#/components/schemas/ErrorResponse"})


if __name__ == "__main__":
    unittest.main()
