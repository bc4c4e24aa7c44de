"""
Maintenance request lifecycle.

Pure functions that turn (current record, proposed change) into the field
values to persist. Nothing in here touches the database; the request service
loads the record, calls one of these and writes the result back.

Rules, applied in this order:

1. On create, ``teamId``/``category`` not supplied by the caller are copied
   from the referenced equipment. The copy is a snapshot.
2. An update that sets ``stage`` to Repaired without a ``completedDate``
   gets ``completedDate = now``.
3. An update carrying a non-empty ``assignedTechnicianId`` while the record
   is still New moves it to In Progress, whatever stage the caller asked for.
4. ``isOverdue`` is recomputed on every write.
"""
import logging
from datetime import datetime
from typing import Any

from gearguard.models.maintenance_request import RequestStage, CLOSED_STAGES
from gearguard.utils.exceptions import NotFoundException, ValidationException
from gearguard.utils.timeutils import utcnow, as_utc

logger = logging.getLogger(__name__)


def _coerce_stage(value: Any) -> RequestStage:
    if isinstance(value, RequestStage):
        return value
    try:
        return RequestStage(value)
    except ValueError:
        allowed = ", ".join(s.value for s in RequestStage)
        raise ValidationException(f"Invalid stage '{value}'. Allowed: {allowed}", field="stage")


def is_overdue(stage: Any, scheduled_date: datetime | None, now: datetime | None = None) -> bool:
    """An open request (not Repaired/Scrap) whose scheduled date is strictly in the past."""
    if _coerce_stage(stage) in CLOSED_STAGES:
        return False
    if scheduled_date is None:
        return False
    return as_utc(scheduled_date) < as_utc(now or utcnow())


def prepare_create(fields: dict, equipment, now: datetime | None = None) -> dict:
    """
    Field values for a new request.

    ``equipment`` is the referenced Equipment (anything exposing ``teamId`` and
    ``category``) or None when the id did not resolve.
    """
    if equipment is None:
        raise NotFoundException("Equipment")

    result = dict(fields)
    if result.get("teamId") is None:
        result["teamId"] = equipment.teamId
    if result.get("category") is None:
        result["category"] = equipment.category

    result["stage"] = _coerce_stage(result.get("stage") or RequestStage.NEW)
    result["isOverdue"] = is_overdue(result["stage"], result.get("scheduledDate"), now)
    return result


def apply_update(
    current: dict,
    updates: dict,
    now: datetime | None = None,
    clear_completed_on_reopen: bool = False,
) -> dict:
    """
    Field values to persist for a general update.

    ``current`` holds at least ``stage`` and ``scheduledDate`` as stored before
    the update; ``updates`` holds only the fields the caller sent.
    """
    now = now or utcnow()
    result = dict(updates)

    if "stage" in result:
        result["stage"] = _coerce_stage(result["stage"])
        if result["stage"] == RequestStage.REPAIRED and not result.get("completedDate"):
            result["completedDate"] = now

    current_stage = _coerce_stage(current["stage"])
    if result.get("assignedTechnicianId") and current_stage == RequestStage.NEW:
        if result.get("stage") not in (None, RequestStage.IN_PROGRESS):
            logger.info(f"Requested stage {result['stage'].value} overridden by technician assignment")
        result["stage"] = RequestStage.IN_PROGRESS
        logger.info("Technician assigned to a New request, advancing to In Progress")

    _maybe_clear_completed(current_stage, result, clear_completed_on_reopen)
    return _with_overdue(current, result, now)


def apply_stage_change(
    current: dict,
    stage: Any,
    now: datetime | None = None,
    clear_completed_on_reopen: bool = False,
) -> dict:
    """Field values for a bare stage move (kanban drag and drop). The technician is left alone."""
    now = now or utcnow()
    result = {"stage": _coerce_stage(stage)}
    if result["stage"] == RequestStage.REPAIRED:
        result["completedDate"] = now

    _maybe_clear_completed(_coerce_stage(current["stage"]), result, clear_completed_on_reopen)
    return _with_overdue(current, result, now)


def apply_assignment(current: dict, technician_id: int, now: datetime | None = None) -> dict:
    """Field values for assigning a technician."""
    now = now or utcnow()
    result: dict = {"assignedTechnicianId": technician_id}
    if technician_id and _coerce_stage(current["stage"]) == RequestStage.NEW:
        result["stage"] = RequestStage.IN_PROGRESS
        logger.info("Technician assigned to a New request, advancing to In Progress")
    return _with_overdue(current, result, now)


# ─── Helpers ──────────────────────────────────────────────────────────────────
def _maybe_clear_completed(current_stage: RequestStage, result: dict, enabled: bool) -> None:
    new_stage = result.get("stage")
    if not enabled or new_stage is None:
        return
    if current_stage == RequestStage.REPAIRED and new_stage != RequestStage.REPAIRED:
        result["completedDate"] = None


def _with_overdue(current: dict, result: dict, now: datetime) -> dict:
    stage = result.get("stage", current["stage"])
    scheduled = result["scheduledDate"] if "scheduledDate" in result else current.get("scheduledDate")
    result["isOverdue"] = is_overdue(stage, scheduled, now)
    return result
