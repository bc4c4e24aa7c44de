from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from gearguard.database import get_db
from gearguard.schemas.common import success_response
from gearguard.services.report_service import report_service

router = APIRouter(prefix="/reports")


# ─── Dashboard ────────────────────────────────────────────────────────────────
@router.get("/dashboard", summary="Request counts for the dashboard cards")
def report_dashboard(db: Session = Depends(get_db)):
    return success_response("Dashboard statistics generated", report_service.dashboard(db))


# ─── Grouped Counts ───────────────────────────────────────────────────────────
@router.get("/by-team", summary="Requests per active team")
def report_by_team(db: Session = Depends(get_db)):
    return success_response("Team report generated", report_service.by_team(db))


@router.get("/by-category", summary="Requests per equipment category")
def report_by_category(db: Session = Depends(get_db)):
    return success_response("Category report generated", report_service.by_category(db))


@router.get("/by-stage", summary="Requests per stage")
def report_by_stage(db: Session = Depends(get_db)):
    return success_response("Stage report generated", report_service.by_stage(db))


# ─── Completion Time ──────────────────────────────────────────────────────────
@router.get("/completion-time", summary="Average duration of repaired requests")
def report_completion_time(db: Session = Depends(get_db)):
    return success_response("Completion time report generated", report_service.completion_time(db))
