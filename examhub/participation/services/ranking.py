"""
Ranking Service für die ExamHub Plattform

Berechnet Rang und Perzentil einer abgeschlossenen Session innerhalb ihrer
Kohorte (alle abgeschlossenen Sessions derselben Prüfung):

    below_count = Anzahl Sessions mit strikt geringerer Punktzahl
    rank        = cohort_size - below_count    (beste Punktzahl: Rang 1, Gleichstand teilt den Rang)
    percentile  = below_count / cohort_size * 100    (0 bei leerer Kohorte)

Werte werden bei jedem Aufruf neu berechnet und nicht zwischengespeichert.

Author: ExamHub Development Team
Version: 1.0.0
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional, Tuple

from django.conf import settings
from django.db.models import Count, F, IntegerField, OuterRef, Q, QuerySet, Subquery, Window
from django.db.models.functions import Coalesce, Rank

from ...exceptions import NotCompleted
from ..models import ExamSession
from .registry import SessionRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RankResult:
    session_id: int
    exam_id: int
    score: Optional[Decimal]
    rank: int
    percentile: float
    cohort_size: int
    below_count: int


def compute_rank(cohort_size: int, below_count: int) -> Tuple[int, float]:
    """Return (rank, percentile) for a cohort; never divides by zero."""
    rank = cohort_size - below_count
    percentile = round(below_count / cohort_size * 100, 2) if cohort_size > 0 else 0.0
    return rank, percentile


def completed_cohort(exam_id) -> QuerySet[ExamSession]:
    return ExamSession.objects.filter(exam_id=exam_id, status=ExamSession.Status.COMPLETED)


def _count_subquery(queryset: QuerySet) -> Coalesce:
    counts = queryset.order_by().values("exam").annotate(total=Count("pk")).values("total")
    return Coalesce(Subquery(counts, output_field=IntegerField()), 0)


def annotate_cohort_counts(sessions: QuerySet[ExamSession]) -> QuerySet[ExamSession]:
    """
    Annotate cohort_size and below_count on every session in a single query.

    Used for result lists spanning several exams.
    """
    cohort = ExamSession.objects.filter(
        exam=OuterRef("exam"), status=ExamSession.Status.COMPLETED
    )
    return sessions.annotate(
        cohort_size=_count_subquery(cohort),
        below_count=_count_subquery(cohort.filter(score__lt=OuterRef("score"))),
    )


class RankingService:
    """Service für Rang- und Perzentilberechnung."""

    def __init__(self, registry: Optional[SessionRegistry] = None):
        self.registry = registry or SessionRegistry()
        self.logger = logger

    def rank_of(self, student, session_id: int) -> RankResult:
        """
        Rang der eigenen Session.

        Raises:
            NotRegistered: Session gehört nicht dem Studenten
            NotCompleted: Session ist noch nicht abgeschlossen
        """
        session = self.registry.get_owned_session(student, session_id)
        return self.rank_for_session(session)

    def rank_for_session(self, session: ExamSession) -> RankResult:
        if session.status != ExamSession.Status.COMPLETED:
            raise NotCompleted(details={"session_id": session.pk})

        stats = completed_cohort(session.exam_id).aggregate(
            cohort_size=Count("pk"),
            below_count=Count("pk", filter=Q(score__lt=session.score)),
        )
        return self._result(session, stats["cohort_size"], stats["below_count"])

    def leaderboard(
        self, exam_id: int, limit: Optional[int] = None
    ) -> List[Tuple[ExamSession, RankResult]]:
        """
        Rangliste einer Prüfung, berechnet mit Window-Funktionen in einer Abfrage.

        Der aufsteigende RANK() ist 1 + Anzahl strikt schlechterer Sessions.
        """
        limit = limit or getattr(settings, "EXAMHUB_LEADERBOARD_LIMIT", 100)
        sessions = (
            completed_cohort(exam_id)
            .select_related("student")
            .annotate(
                cohort_size=Window(expression=Count("pk")),
                ascending_rank=Window(expression=Rank(), order_by=F("score").asc()),
            )
            .order_by("-score", "completed_at", "pk")[:limit]
        )

        entries = []
        for session in sessions:
            entry = self._result(session, session.cohort_size, session.ascending_rank - 1)
            entries.append((session, entry))
        return entries

    @staticmethod
    def _result(session: ExamSession, cohort_size: int, below_count: int) -> RankResult:
        rank, percentile = compute_rank(cohort_size, below_count)
        return RankResult(
            session_id=session.pk,
            exam_id=session.exam_id,
            score=session.score,
            rank=rank,
            percentile=percentile,
            cohort_size=cohort_size,
            below_count=below_count,
        )
