from sqlalchemy import func
from sqlalchemy.orm import Session

from gearguard.config import settings
from gearguard.models.maintenance_request import MaintenanceRequest, RequestStage, CLOSED_STAGES
from gearguard.models.team import Team
from gearguard.utils.timeutils import utcnow


def _count_stage(db: Session, stage: RequestStage) -> int:
    return db.query(MaintenanceRequest).filter(MaintenanceRequest.stage == stage).count()


class ReportService:

    def dashboard(self, db: Session) -> dict:
        overdue_q = db.query(MaintenanceRequest).filter(MaintenanceRequest.stage.notin_(CLOSED_STAGES))
        if settings.OVERDUE_EVALUATION == "write":
            overdue_q = overdue_q.filter(MaintenanceRequest.isOverdue == True)  # noqa: E712
        else:
            overdue_q = overdue_q.filter(MaintenanceRequest.scheduledDate < utcnow())

        return {
            "totalRequests":      db.query(MaintenanceRequest).count(),
            "newRequests":        _count_stage(db, RequestStage.NEW),
            "inProgressRequests": _count_stage(db, RequestStage.IN_PROGRESS),
            "completedRequests":  _count_stage(db, RequestStage.REPAIRED),
            "overdueRequests":    overdue_q.count(),
        }

    def by_team(self, db: Session) -> list[dict]:
        counts = dict(
            db.query(MaintenanceRequest.teamId, func.count(MaintenanceRequest.id))
            .group_by(MaintenanceRequest.teamId)
            .all()
        )
        teams = db.query(Team).filter(Team.isActive == True).order_by(Team.name).all()  # noqa: E712
        return [{"teamId": t.id, "teamName": t.name, "count": counts.get(t.id, 0)} for t in teams]

    def by_category(self, db: Session) -> list[dict]:
        rows = (
            db.query(MaintenanceRequest.category, func.count(MaintenanceRequest.id))
            .filter(MaintenanceRequest.category != None)  # noqa: E711
            .group_by(MaintenanceRequest.category)
            .all()
        )
        result = [{"category": c.value, "count": n} for c, n in rows]
        result.sort(key=lambda x: -x["count"])
        return result

    def by_stage(self, db: Session) -> list[dict]:
        return [{"stage": s.value, "count": _count_stage(db, s)} for s in RequestStage]

    def completion_time(self, db: Session) -> dict:
        completed = (
            db.query(MaintenanceRequest)
            .filter(
                MaintenanceRequest.stage == RequestStage.REPAIRED,
                MaintenanceRequest.completedDate != None,  # noqa: E711
            )
            .all()
        )
        total = len(completed)
        average = sum(r.duration or 0 for r in completed) / total if total else 0
        return {
            "averageDuration": round(average, 2),
            "totalCompleted":  total,
        }


report_service = ReportService()
