"""
Result reporting for students: result list, detailed result and dashboard summary.

Read-only; builds on the stored session scores and the RankingService.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from django.db.models import Count, Q, Sum

from ...catalog.models import ExamSubject
from ...exceptions import NotCompleted
from ..models import AnswerRecord, ExamSession
from .ranking import RankingService, RankResult, annotate_cohort_counts, compute_rank
from .registry import SessionRegistry


@dataclass(frozen=True)
class StudentSummary:
    progress_percent: float
    total_sessions: int
    completed_sessions: int
    latest_rank: Optional[RankResult] = None


@dataclass(frozen=True)
class ExamResult:
    session: ExamSession
    rank: RankResult
    subjects: List[Dict] = field(default_factory=list)


class ResultService:
    def __init__(
        self,
        registry: Optional[SessionRegistry] = None,
        ranking: Optional[RankingService] = None,
    ):
        self.registry = registry or SessionRegistry()
        self.ranking = ranking or RankingService(self.registry)

    def my_results(self, student) -> List[Dict]:
        """
        Completed sessions of the student, newest first, each with rank and percentile.

        Rank data for all rows comes from one query (correlated subquery counts).
        """
        sessions = annotate_cohort_counts(
            ExamSession.objects.filter(student=student, status=ExamSession.Status.COMPLETED)
            .select_related("exam")
            .order_by("-completed_at")
        )

        results = []
        for session in sessions:
            rank, percentile = compute_rank(session.cohort_size, session.below_count)
            results.append(
                {
                    "session_id": session.pk,
                    "exam_id": session.exam_id,
                    "title": session.exam.title,
                    "date": session.exam.starts_at,
                    "completed_at": session.completed_at,
                    "score": session.score,
                    "percentage": session.percentage,
                    "rank": rank,
                    "percentile": percentile,
                    "cohort_size": session.cohort_size,
                }
            )
        return results

    def exam_result(self, student, exam_id: int) -> ExamResult:
        """
        Detailed result of one exam including the subject-wise breakdown.

        Raises:
            NotRegistered: No session for this exam
            NotCompleted: Session not submitted yet
        """
        session = self.registry.get_session(student, exam_id)
        if session.status != ExamSession.Status.COMPLETED:
            raise NotCompleted(details={"session_id": session.pk})

        rank = self.ranking.rank_for_session(session)
        return ExamResult(session=session, rank=rank, subjects=self._subject_scores(session))

    def _subject_scores(self, session: ExamSession) -> List[Dict]:
        earned = dict(
            AnswerRecord.objects.filter(
                session=session, is_correct=True, question__subject__isnull=False
            )
            .values("question__subject")
            .annotate(score=Sum("question__marks"))
            .values_list("question__subject", "score")
        )
        return [
            {
                "subject": subject.subject,
                "score": earned.get(subject.pk, 0),
                "total": subject.marks,
            }
            for subject in ExamSubject.objects.filter(exam_id=session.exam_id).order_by("subject")
        ]

    def ongoing(self, student) -> List[Dict]:
        """
        Registered and started sessions of the student, earliest exam window first.

        Completed sessions are listed by my_results instead.
        """
        sessions = (
            ExamSession.objects.filter(student=student)
            .exclude(status=ExamSession.Status.COMPLETED)
            .select_related("exam")
            .order_by("exam__starts_at", "pk")
        )
        return [
            {
                "session_id": session.pk,
                "exam_id": session.exam_id,
                "title": session.exam.title,
                "starts_at": session.exam.starts_at,
                "ends_at": session.exam.ends_at,
                "duration": session.exam.duration,
                "status": session.status,
            }
            for session in sessions
        ]

    def summary(self, student) -> StudentSummary:
        """
        Dashboard summary: share of completed sessions and rank in the latest completed exam.
        """
        counts = ExamSession.objects.filter(student=student).aggregate(
            total=Count("pk"),
            completed=Count("pk", filter=Q(status=ExamSession.Status.COMPLETED)),
        )
        total, completed = counts["total"], counts["completed"]
        progress = round(completed / total * 100, 2) if total > 0 else 0.0

        latest = (
            ExamSession.objects.filter(student=student, status=ExamSession.Status.COMPLETED)
            .order_by("-completed_at", "-pk")
            .first()
        )
        latest_rank = self.ranking.rank_for_session(latest) if latest else None

        return StudentSummary(
            progress_percent=progress,
            total_sessions=total,
            completed_sessions=completed,
            latest_rank=latest_rank,
        )
