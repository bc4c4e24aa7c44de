import unittest
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

from gearguard.models.equipment import EquipmentCategory
from gearguard.models.maintenance_request import RequestStage
from gearguard.services import lifecycle
from gearguard.utils.exceptions import NotFoundException, ValidationException

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)
PAST = NOW - timedelta(days=1)
FUTURE = NOW + timedelta(days=1)

EQUIPMENT = SimpleNamespace(teamId=7, category=EquipmentCategory.MACHINERY)


class TestIsOverdue(unittest.TestCase):

    def test_closed_stages_never_overdue(self):
        for stage in (RequestStage.REPAIRED, RequestStage.SCRAP):
            for scheduled in (PAST - timedelta(days=365), PAST, NOW, FUTURE, None):
                with self.subTest(stage=stage, scheduled=scheduled):
                    self.assertFalse(lifecycle.is_overdue(stage, scheduled, NOW))

    def test_open_stages_overdue_only_when_scheduled_in_past(self):
        cases = [
            (PAST, True),
            (NOW - timedelta(microseconds=1), True),
            (NOW, False),  # strictly before now
            (FUTURE, False),
            (None, False),
        ]
        for stage in (RequestStage.NEW, RequestStage.IN_PROGRESS):
            for scheduled, expected in cases:
                with self.subTest(stage=stage, scheduled=scheduled):
                    self.assertIs(lifecycle.is_overdue(stage, scheduled, NOW), expected)

    def test_accepts_stage_strings_and_naive_datetimes(self):
        naive_past = PAST.replace(tzinfo=None)
        self.assertTrue(lifecycle.is_overdue("In Progress", naive_past, NOW))
        self.assertFalse(lifecycle.is_overdue("Scrap", naive_past, NOW))

    def test_unknown_stage_rejected(self):
        with self.assertRaises(ValidationException):
            lifecycle.is_overdue("Done", PAST, NOW)


class TestPrepareCreate(unittest.TestCase):

    def test_team_and_category_copied_from_equipment(self):
        values = lifecycle.prepare_create({"subject": "Leak", "scheduledDate": FUTURE}, EQUIPMENT, NOW)
        self.assertEqual(values["teamId"], 7)
        self.assertEqual(values["category"], EquipmentCategory.MACHINERY)
        self.assertEqual(values["stage"], RequestStage.NEW)
        self.assertFalse(values["isOverdue"])

    def test_explicit_team_and_category_are_kept(self):
        fields = {"scheduledDate": FUTURE, "teamId": 3, "category": EquipmentCategory.TOOLS}
        values = lifecycle.prepare_create(fields, EQUIPMENT, NOW)
        self.assertEqual(values["teamId"], 3)
        self.assertEqual(values["category"], EquipmentCategory.TOOLS)

    def test_missing_equipment(self):
        with self.assertRaises(NotFoundException) as ctx:
            lifecycle.prepare_create({"scheduledDate": FUTURE}, None, NOW)
        self.assertEqual(ctx.exception.status_code, 404)
        self.assertEqual(ctx.exception.message, "Equipment not found")

    def test_past_schedule_is_overdue_at_creation(self):
        values = lifecycle.prepare_create({"scheduledDate": PAST}, EQUIPMENT, NOW)
        self.assertTrue(values["isOverdue"])

    def test_creation_does_not_auto_advance_or_complete(self):
        fields = {"scheduledDate": PAST, "assignedTechnicianId": 4, "stage": RequestStage.REPAIRED}
        values = lifecycle.prepare_create(fields, EQUIPMENT, NOW)
        self.assertEqual(values["stage"], RequestStage.REPAIRED)
        self.assertNotIn("completedDate", values)
        self.assertFalse(values["isOverdue"])

    def test_input_not_mutated(self):
        fields = {"scheduledDate": FUTURE}
        lifecycle.prepare_create(fields, EQUIPMENT, NOW)
        self.assertEqual(fields, {"scheduledDate": FUTURE})


class TestApplyUpdate(unittest.TestCase):

    def current(self, stage=RequestStage.NEW, scheduled=FUTURE):
        return {"stage": stage, "scheduledDate": scheduled}

    def test_repaired_sets_completed_date(self):
        values = lifecycle.apply_update(self.current(RequestStage.IN_PROGRESS), {"stage": "Repaired"}, NOW)
        self.assertEqual(values["stage"], RequestStage.REPAIRED)
        self.assertEqual(values["completedDate"], NOW)
        self.assertFalse(values["isOverdue"])

    def test_supplied_completed_date_wins(self):
        supplied = NOW - timedelta(hours=3)
        values = lifecycle.apply_update(
            self.current(RequestStage.IN_PROGRESS),
            {"stage": RequestStage.REPAIRED, "completedDate": supplied}, NOW,
        )
        self.assertEqual(values["completedDate"], supplied)

    def test_assignment_advances_new_request(self):
        values = lifecycle.apply_update(self.current(), {"assignedTechnicianId": 5}, NOW)
        self.assertEqual(values["stage"], RequestStage.IN_PROGRESS)
        self.assertEqual(values["assignedTechnicianId"], 5)

    def test_assignment_overrides_requested_stage_on_new_request(self):
        values = lifecycle.apply_update(
            self.current(), {"assignedTechnicianId": 5, "stage": RequestStage.REPAIRED}, NOW,
        )
        self.assertEqual(values["stage"], RequestStage.IN_PROGRESS)
        # completion date was already stamped from the requested stage
        self.assertEqual(values["completedDate"], NOW)

    def test_assignment_leaves_later_stages_alone(self):
        for stage in (RequestStage.IN_PROGRESS, RequestStage.REPAIRED, RequestStage.SCRAP):
            with self.subTest(stage=stage):
                values = lifecycle.apply_update(self.current(stage), {"assignedTechnicianId": 5}, NOW)
                self.assertNotIn("stage", values)

    def test_empty_assignment_does_not_advance(self):
        values = lifecycle.apply_update(self.current(), {"assignedTechnicianId": None}, NOW)
        self.assertNotIn("stage", values)

    def test_overdue_recomputed_on_unrelated_field_change(self):
        values = lifecycle.apply_update(self.current(scheduled=PAST), {"notes": "checked"}, NOW)
        self.assertTrue(values["isOverdue"])

    def test_overdue_uses_updated_schedule(self):
        values = lifecycle.apply_update(self.current(scheduled=PAST), {"scheduledDate": FUTURE}, NOW)
        self.assertFalse(values["isOverdue"])
        values = lifecycle.apply_update(self.current(scheduled=FUTURE), {"scheduledDate": PAST}, NOW)
        self.assertTrue(values["isOverdue"])

    def test_completed_date_kept_when_reopened(self):
        values = lifecycle.apply_update(
            self.current(RequestStage.REPAIRED, PAST), {"stage": RequestStage.IN_PROGRESS}, NOW,
        )
        self.assertNotIn("completedDate", values)
        self.assertTrue(values["isOverdue"])

    def test_completed_date_cleared_when_reopened_if_enabled(self):
        values = lifecycle.apply_update(
            self.current(RequestStage.REPAIRED), {"stage": RequestStage.IN_PROGRESS}, NOW,
            clear_completed_on_reopen=True,
        )
        self.assertIsNone(values["completedDate"])

    def test_invalid_stage(self):
        with self.assertRaises(ValidationException):
            lifecycle.apply_update(self.current(), {"stage": "Closed"}, NOW)


class TestStageChangeAndAssignment(unittest.TestCase):

    def test_stage_change_to_repaired(self):
        current = {"stage": RequestStage.IN_PROGRESS, "scheduledDate": PAST}
        values = lifecycle.apply_stage_change(current, RequestStage.REPAIRED, NOW)
        self.assertEqual(values, {
            "stage": RequestStage.REPAIRED, "completedDate": NOW, "isOverdue": False,
        })

    def test_stage_change_does_not_touch_technician(self):
        current = {"stage": RequestStage.NEW, "scheduledDate": PAST}
        values = lifecycle.apply_stage_change(current, "Scrap", NOW)
        self.assertNotIn("assignedTechnicianId", values)
        self.assertEqual(values["stage"], RequestStage.SCRAP)
        self.assertNotIn("completedDate", values)
        self.assertFalse(values["isOverdue"])

    def test_stage_change_back_to_new_becomes_overdue(self):
        current = {"stage": RequestStage.REPAIRED, "scheduledDate": PAST}
        values = lifecycle.apply_stage_change(current, RequestStage.NEW, NOW)
        self.assertTrue(values["isOverdue"])

    def test_assignment_on_new(self):
        current = {"stage": RequestStage.NEW, "scheduledDate": FUTURE}
        values = lifecycle.apply_assignment(current, 9, NOW)
        self.assertEqual(values, {
            "assignedTechnicianId": 9, "stage": RequestStage.IN_PROGRESS, "isOverdue": False,
        })

    def test_assignment_on_repaired_keeps_stage(self):
        current = {"stage": RequestStage.REPAIRED, "scheduledDate": PAST}
        values = lifecycle.apply_assignment(current, 9, NOW)
        self.assertNotIn("stage", values)
        self.assertFalse(values["isOverdue"])


if __name__ == "__main__":
    unittest.main()
