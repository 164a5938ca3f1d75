"""
Exam Catalog Service für die ExamHub Plattform

Lesender Zugriff auf den Prüfungskatalog für die Session-Services:
- Prüfungsfenster und Verfügbarkeit
- Fragen inklusive korrekter Optionen und Punkte
- Gesamtpunktzahl einer Prüfung

Die Session-Services greifen ausschließlich über diesen Service auf den
Katalog zu, damit Bewertung und Punkteberechnung immer den aktuellen
Katalogstand lesen.

Author: ExamHub Development Team
Version: 1.0.0
"""

import datetime
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from django.conf import settings
from django.db.models import Count, Prefetch, Q, QuerySet
from django.utils import timezone

from ..exceptions import ExamNotFound, UnknownQuestion
from .models import Exam, Question, QuestionOption

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExamWindow:
    """Time window in which an exam can be started."""

    exam_id: int
    status: str
    opens_at: datetime.datetime
    closes_at: datetime.datetime

    def is_open(self, moment: Optional[datetime.datetime] = None) -> bool:
        moment = moment or timezone.now()
        if self.status not in Exam.PUBLISHED_STATUSES:
            return False
        return self.opens_at <= moment < self.closes_at


class ExamCatalog:
    """
    Service für den lesenden Zugriff auf Prüfungen und Fragen.

    Kapselt alle Katalog-Abfragen, die von Registrierung, Bewertung
    und Punkteberechnung benötigt werden.
    """

    def __init__(self):
        self.logger = logger

    def get_exam(self, exam_id: int) -> Exam:
        """
        Holt eine Prüfung anhand ihrer ID.

        Args:
            exam_id: ID der Prüfung

        Returns:
            Exam Objekt

        Raises:
            ExamNotFound: Wenn keine Prüfung mit dieser ID existiert
        """
        try:
            return Exam.objects.get(pk=exam_id)
        except Exam.DoesNotExist:
            raise ExamNotFound(details={"exam_id": exam_id})

    def get_exam_window(self, exam_id: int) -> ExamWindow:
        exam = self.get_exam(exam_id)
        return ExamWindow(
            exam_id=exam.pk,
            status=exam.status,
            opens_at=exam.starts_at,
            closes_at=exam.ends_at,
        )

    def is_exam_active(self, exam_id: int, moment: Optional[datetime.datetime] = None) -> bool:
        return self.get_exam_window(exam_id).is_open(moment)

    def get_total_marks(self, exam_id: int) -> int:
        """
        Liest die Gesamtpunktzahl einer Prüfung direkt aus der Datenbank.

        Wird bei der Abgabe aufgerufen, nicht vorher zwischengespeichert.
        """
        total_marks = (
            Exam.objects.filter(pk=exam_id).values_list("total_marks", flat=True).first()
        )
        if total_marks is None:
            raise ExamNotFound(details={"exam_id": exam_id})
        return total_marks

    def get_questions(self, exam_id: int) -> QuerySet[Question]:
        """Alle Fragen einer Prüfung mit vorgeladenen Optionen."""
        return (
            Question.objects.filter(exam_id=exam_id)
            .select_related("subject")
            .prefetch_related(
                Prefetch("options", queryset=QuestionOption.objects.order_by("option_order", "id"))
            )
        )

    def get_question(self, exam_id: int, question_id: int) -> Question:
        """
        Holt eine Frage, die zur angegebenen Prüfung gehören muss.

        Raises:
            UnknownQuestion: Wenn die Frage nicht existiert oder zu einer anderen Prüfung gehört
        """
        try:
            return Question.objects.get(pk=question_id, exam_id=exam_id)
        except Question.DoesNotExist:
            raise UnknownQuestion(details={"exam_id": exam_id, "question_id": question_id})

    def list_questions(self, exam_id: int, page: int = 1, limit: Optional[int] = None) -> List[Question]:
        """
        Paginierte Fragenliste (Seiten beginnen bei 1).

        Args:
            exam_id: ID der Prüfung
            page: Seitennummer, Werte kleiner 1 werden als 1 behandelt
            limit: Fragen pro Seite, begrenzt durch EXAMHUB_QUESTIONS_MAX_PAGE_SIZE

        Returns:
            Liste der Fragen dieser Seite
        """
        page, limit = self.normalize_page(page, limit)
        offset = (page - 1) * limit

        return list(self.get_questions(exam_id)[offset : offset + limit])

    @staticmethod
    def normalize_page(page: Optional[int], limit: Optional[int]) -> Tuple[int, int]:
        default_limit = getattr(settings, "EXAMHUB_QUESTIONS_PAGE_SIZE", 10)
        max_limit = getattr(settings, "EXAMHUB_QUESTIONS_MAX_PAGE_SIZE", 100)
        return max(page or 1, 1), min(max(limit or default_limit, 1), max_limit)

    def count_questions(self, exam_id: int) -> int:
        return Question.objects.filter(exam_id=exam_id).count()

    def get_subjects(self, exam_id: int) -> List[Dict]:
        exam = self.get_exam(exam_id)
        return list(exam.subjects.values("subject", "marks"))

    def list_published_exams(self, filter_value: str = "ALL") -> QuerySet[Exam]:
        """
        Veröffentlichte Prüfungen (scheduled/active) für die Studierendenansicht.

        Args:
            filter_value: "ALL" oder ein Wert, der mit exam_type oder category verglichen wird
        """
        exams = Exam.objects.filter(status__in=Exam.PUBLISHED_STATUSES).annotate(
            question_count=Count("questions")
        )
        if filter_value and filter_value != "ALL":
            exams = exams.filter(Q(exam_type=filter_value) | Q(category=filter_value))
        return exams.order_by("starts_at", "title")
