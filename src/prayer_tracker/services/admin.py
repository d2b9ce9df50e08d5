"""Admin service for roster overviews."""

import logging
from dataclasses import dataclass

from prayer_tracker.domain.models import StudentRecord
from prayer_tracker.domain.stats import RiskStatus, Score
from prayer_tracker.services.compliance import ComplianceService
from prayer_tracker.services.records import RecordService
from prayer_tracker.services.students import StudentService

logger = logging.getLogger(__name__)


@dataclass
class AdminService:
    """Service for admin dashboards."""

    student_service: StudentService
    compliance_service: ComplianceService
    record_service: RecordService

    def list_students(
        self, year: int, month: int, query: str = ""
    ) -> list[dict[str, object]]:
        """Return students with their monthly score and risk."""
        summaries = []
        for student in self.student_service.search(query):
            score = self.compliance_service.month_score(student.id, year, month)
            risk = self.compliance_service.check_risk(student.id)
            summaries.append(_serialize_summary(student, score, risk))
        return summaries

    def at_risk_students(self) -> list[dict[str, object]]:
        """Return students flagged for consecutive inactivity."""
        flagged = []
        for student in self.student_service.list_students():
            risk = self.compliance_service.check_risk(student.id)
            if risk.is_at_risk:
                flagged.append(
                    {
                        **_serialize_student(student),
                        "consecutive_inactive_days": risk.consecutive_inactive_days,
                    }
                )
        return flagged

    def reset_student(self, student_id: str) -> None:
        """Delete all prayer records for an existing student."""
        student = self.student_service.get_student(student_id)
        self.record_service.reset(student.id)
        logger.info("Admin reset records for %s", student.username)


def _serialize_student(student: StudentRecord) -> dict[str, object]:
    return {"id": student.id, "username": student.username, "name": student.name}


def _serialize_summary(
    student: StudentRecord, score: Score, risk: RiskStatus
) -> dict[str, object]:
    return {
        **_serialize_student(student),
        "month_points": score.total_points,
        "month_max_points": score.max_points,
        "month_percentage": score.percentage,
        "month_score": score.normalized_score,
        "is_at_risk": risk.is_at_risk,
        "consecutive_inactive_days": risk.consecutive_inactive_days,
    }
