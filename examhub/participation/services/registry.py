"""
Session Registry für die ExamHub Plattform

Verwaltet die Prüfungsversuche (ExamSession) der Studierenden:
- Registrierung für eine Prüfung (genau eine Session pro Student und Prüfung)
- Start einer Prüfung innerhalb des Prüfungsfensters
- Sammelregistrierung durch Administratoren
- Auflösen von Sessions für den aufrufenden Studenten

Der aufrufende Student wird immer explizit übergeben und nie aus dem
Request-Kontext gelesen.

Author: ExamHub Development Team
Version: 1.0.0
"""

import datetime
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction

from ...catalog.services import ExamCatalog
from ...exceptions import (
    DuplicateRegistration,
    ExamNotActive,
    InvalidState,
    NotRegistered,
    SessionNotStarted,
)
from .. import transitions
from ..models import ExamSession

logger = logging.getLogger(__name__)

User = get_user_model()


@dataclass(frozen=True)
class ExamAttemptView:
    """Everything a client needs to render a started exam attempt."""

    session_id: int
    status: str
    exam_id: int
    title: str
    duration: int
    total_marks: int
    starts_at: datetime.datetime
    ends_at: datetime.datetime
    question_count: int
    subjects: List[Dict] = field(default_factory=list)


class SessionRegistry:
    """
    Service für Registrierung und Start von Prüfungsversuchen.

    Zustandsübergänge laufen ausschließlich über participation.transitions.
    """

    def __init__(self, catalog: Optional[ExamCatalog] = None):
        self.catalog = catalog or ExamCatalog()
        self.logger = logger

    # --- Lookup ---

    def get_session(self, student, exam_id: int) -> ExamSession:
        """
        Holt die Session des Studenten für eine Prüfung.

        Raises:
            NotRegistered: Wenn der Student nicht registriert ist
        """
        try:
            return ExamSession.objects.select_related("exam").get(student=student, exam_id=exam_id)
        except ExamSession.DoesNotExist:
            raise NotRegistered(details={"exam_id": exam_id})

    def get_started_session(self, student, exam_id: int) -> ExamSession:
        """
        Holt die Session des Studenten, sofern sie gestartet wurde (active oder completed).

        Voraussetzung für den Abruf der Prüfungsfragen.

        Raises:
            NotRegistered: Wenn der Student nicht registriert ist
            SessionNotStarted: Wenn die Session noch nicht gestartet wurde
        """
        session = self.get_session(student, exam_id)
        if session.status == ExamSession.Status.REGISTERED:
            raise SessionNotStarted(details={"session_id": session.pk})
        return session

    def get_owned_session(self, student, session_id: int, lock: bool = False) -> ExamSession:
        """
        Holt eine Session anhand ihrer ID, sofern sie dem Studenten gehört.

        Args:
            student: Aufrufender Student
            session_id: ID der Session
            lock: Sperrt die Zeile (SELECT ... FOR UPDATE), nur innerhalb einer Transaktion

        Raises:
            NotRegistered: Wenn die Session nicht existiert oder einem anderen Studenten gehört
        """
        sessions = ExamSession.objects.filter(pk=session_id, student=student)
        if lock:
            sessions = sessions.select_for_update()
        session = sessions.first()
        if session is None:
            raise NotRegistered(
                message="Exam session not found for this student",
                details={"session_id": session_id},
            )
        return session

    # --- Registration ---

    def register(self, student, exam_id: int) -> ExamSession:
        """
        Registriert einen Studenten für eine Prüfung.

        Nicht idempotent: eine zweite Registrierung liefert DuplicateRegistration.

        Raises:
            ExamNotFound: Wenn die Prüfung nicht existiert
            DuplicateRegistration: Wenn bereits eine Session existiert
        """
        exam = self.catalog.get_exam(exam_id)

        if ExamSession.objects.filter(student=student, exam=exam).exists():
            raise DuplicateRegistration(details={"exam_id": exam.pk})

        try:
            with transaction.atomic():
                session = ExamSession.objects.create(student=student, exam=exam)
        except IntegrityError:
            # Paralleler Insert hat den Unique-Constraint zuerst erreicht
            raise DuplicateRegistration(details={"exam_id": exam.pk})

        self.logger.info(f"Student {student.pk} registered for exam {exam.pk} (session {session.pk})")
        return session

    def register_many(self, exam_id: int, student_ids: Iterable[int]) -> Dict[str, List[int]]:
        """
        Sammelregistrierung durch Administratoren.

        Bestehende Sessions bleiben unverändert, auch abgeschlossene.

        Returns:
            Dict mit den Listen "registered", "skipped" und "unknown" (Student-IDs)
        """
        exam = self.catalog.get_exam(exam_id)
        requested = list(dict.fromkeys(student_ids))

        known_ids = set(User.objects.filter(pk__in=requested).values_list("pk", flat=True))
        existing_ids = set(
            ExamSession.objects.filter(exam=exam, student_id__in=known_ids).values_list(
                "student_id", flat=True
            )
        )
        new_ids = [pk for pk in requested if pk in known_ids and pk not in existing_ids]

        with transaction.atomic():
            ExamSession.objects.bulk_create(
                [ExamSession(student_id=pk, exam=exam) for pk in new_ids],
                ignore_conflicts=True,
            )

        self.logger.info(
            f"Bulk registration for exam {exam.pk}: {len(new_ids)} registered, "
            f"{len(existing_ids)} already registered"
        )
        return {
            "registered": new_ids,
            "skipped": [pk for pk in requested if pk in existing_ids],
            "unknown": [pk for pk in requested if pk not in known_ids],
        }

    # --- Start ---

    def start(self, student, exam_id: int, moment: Optional[datetime.datetime] = None) -> ExamAttemptView:
        """
        Startet den Prüfungsversuch (registered -> active).

        Idempotent: ein erneuter Aufruf für eine aktive Session liefert dieselbe Ansicht.

        Raises:
            NotRegistered: Keine Session für diese Prüfung
            InvalidState: Session ist bereits abgeschlossen
            ExamNotActive: Prüfung ist nicht veröffentlicht oder außerhalb des Zeitfensters
        """
        session = self.get_session(student, exam_id)

        if session.status == ExamSession.Status.COMPLETED:
            raise InvalidState(details={"session_id": session.pk})

        if not self.catalog.is_exam_active(exam_id, moment):
            raise ExamNotActive(details={"exam_id": exam_id})

        if session.status == ExamSession.Status.REGISTERED:
            transitions.activate(session.pk, moment)
            session.refresh_from_db()
            # Zwischenzeitlich abgegeben (nur bei parallelem Start + Submit möglich)
            if session.status == ExamSession.Status.COMPLETED:
                raise InvalidState(details={"session_id": session.pk})

        return self._attempt_view(session)

    def _attempt_view(self, session: ExamSession) -> ExamAttemptView:
        exam = session.exam
        return ExamAttemptView(
            session_id=session.pk,
            status=session.status,
            exam_id=exam.pk,
            title=exam.title,
            duration=exam.duration,
            total_marks=exam.total_marks,
            starts_at=exam.starts_at,
            ends_at=exam.ends_at,
            question_count=self.catalog.count_questions(exam.pk),
            subjects=self.catalog.get_subjects(exam.pk),
        )
