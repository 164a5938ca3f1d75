"""
Scoring Engine für die ExamHub Plattform

Schließt eine Session genau einmal ab:
1. Versiegeln (active -> completed) per Compare-and-Swap
2. Punkte aus den korrekten Antworten summieren
3. Prozentwert gegen die aktuelle Gesamtpunktzahl der Prüfung berechnen

Alle Schritte laufen in einer Transaktion. Eine wiederholte Abgabe liefert
das gespeicherte Ergebnis unverändert zurück und rechnet nicht neu.

Author: ExamHub Development Team
Version: 1.0.0
"""

import datetime
import logging
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from django.db import transaction
from django.db.models import Sum

from ...catalog.services import ExamCatalog
from ...exceptions import SessionNotStarted
from .. import transitions
from ..models import AnswerRecord, ExamSession
from .registry import SessionRegistry

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")


@dataclass(frozen=True)
class SubmissionResult:
    session_id: int
    score: Decimal
    percentage: Decimal
    status: str
    completed_at: datetime.datetime


def compute_percentage(score, total_marks) -> Decimal:
    """score / total_marks * 100, rounded to two places; 0 when total_marks is not positive."""
    if not total_marks or total_marks <= 0:
        return Decimal("0.00")
    return (Decimal(score) * 100 / Decimal(total_marks)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


class ScoringEngine:
    """Service für die einmalige Abgabe und Punkteberechnung."""

    def __init__(
        self,
        catalog: Optional[ExamCatalog] = None,
        registry: Optional[SessionRegistry] = None,
    ):
        self.catalog = catalog or ExamCatalog()
        self.registry = registry or SessionRegistry(self.catalog)
        self.logger = logger

    def submit(self, student, session_id: int, moment: Optional[datetime.datetime] = None) -> SubmissionResult:
        """
        Gibt eine Session ab und berechnet Punkte und Prozentwert.

        Idempotent: für eine bereits abgeschlossene Session wird das
        gespeicherte Ergebnis zurückgegeben.

        Raises:
            NotRegistered: Session gehört nicht dem Studenten
            SessionNotStarted: Session wurde nie gestartet
        """
        with transaction.atomic():
            session = self.registry.get_owned_session(student, session_id)

            if not transitions.seal(session.pk, moment):
                session.refresh_from_db()
                if session.status == ExamSession.Status.COMPLETED:
                    self.logger.info(f"Session {session.pk} already completed, returning stored result")
                    return self._result(session)
                raise SessionNotStarted(details={"session_id": session.pk})

            # Ab hier ist die Session versiegelt; neue Antworten werden abgewiesen
            score = self._aggregate_score(session.pk)
            total_marks = self.catalog.get_total_marks(session.exam_id)
            percentage = compute_percentage(score, total_marks)

            ExamSession.objects.filter(pk=session.pk).update(score=score, percentage=percentage)
            session.refresh_from_db()

        self.logger.info(
            f"Session {session.pk} submitted: score={session.score}, percentage={session.percentage}"
        )
        return self._result(session)

    def _aggregate_score(self, session_id: int) -> Decimal:
        total = AnswerRecord.objects.filter(session_id=session_id, is_correct=True).aggregate(
            total=Sum("question__marks")
        )["total"]
        return Decimal(total or 0).quantize(TWO_PLACES)

    @staticmethod
    def _result(session: ExamSession) -> SubmissionResult:
        return SubmissionResult(
            session_id=session.pk,
            score=session.score,
            percentage=session.percentage,
            status=session.status,
            completed_at=session.completed_at,
        )
