"""
Answer Ledger für die ExamHub Plattform

Speichert genau eine bewertete Antwort pro Session und Frage:
- Validierung der Antwortdaten vor jeder Schreiboperation
- Bewertung von Multiple-Choice-Antworten über exakte Mengengleichheit
- Upsert auf (session, question): eine spätere Antwort ersetzt die frühere vollständig

Die Session-Zeile wird während des Schreibens gesperrt. Dadurch landet eine
Antwort, die parallel zur Abgabe eintrifft, entweder vor der Versiegelung
(und zählt) oder wird mit SessionClosed abgewiesen.

Author: ExamHub Development Team
Version: 1.0.0
"""

import collections.abc
import logging
from dataclasses import dataclass
from typing import Any, FrozenSet, Mapping, Optional, Union

from django.db import transaction

from ...catalog.models import Question
from ...catalog.services import ExamCatalog
from ...exceptions import InvalidAnswer, SessionClosed, SessionNotStarted
from ..models import AnswerRecord, ExamSession
from .registry import SessionRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnswerPayload:
    """
    Validated answer: exactly one of selected_option_ids or answer_text is set.

    selected_option_ids is a set, so order and duplicates of the submitted ids
    do not matter.
    """

    selected_option_ids: Optional[FrozenSet[int]] = None
    answer_text: Optional[str] = None

    @property
    def is_objective(self) -> bool:
        return self.selected_option_ids is not None

    @classmethod
    def parse(cls, data: Optional[Mapping[str, Any]]) -> "AnswerPayload":
        """
        Build a payload from request data.

        Args:
            data: Mapping with "selected_option_ids" (list of ids) or "answer_text" (string)

        Raises:
            InvalidAnswer: If data is not an object, both or neither are given, or a value is
                empty or malformed
        """
        if data is None:
            raise InvalidAnswer()
        if not isinstance(data, collections.abc.Mapping):
            raise InvalidAnswer("Answer data must be an object")
        selected = data.get("selected_option_ids")
        text = data.get("answer_text")

        if selected is None and text is None:
            raise InvalidAnswer()
        if selected is not None and text is not None:
            raise InvalidAnswer("Provide either selected_option_ids or answer_text, not both")

        if selected is not None:
            if not isinstance(selected, (list, tuple, set, frozenset)) or not selected:
                raise InvalidAnswer("selected_option_ids must be a non-empty list of option ids")
            option_ids = set()
            for value in selected:
                if isinstance(value, bool) or not isinstance(value, (int, str)):
                    raise InvalidAnswer("selected_option_ids must contain integer ids")
                try:
                    option_ids.add(int(value))
                except ValueError:
                    raise InvalidAnswer("selected_option_ids must contain integer ids")
            return cls(selected_option_ids=frozenset(option_ids))

        if not isinstance(text, str) or not text.strip():
            raise InvalidAnswer("answer_text must be a non-empty string")
        return cls(answer_text=text)


def grade(question: Question, payload: AnswerPayload) -> Optional[bool]:
    """
    Grade an answer against a question.

    Objective questions: exact set equality of selected and correct option ids,
    no partial credit. Subjective questions: always None (ungraded).

    Raises:
        InvalidAnswer: If the answer kind does not match the question type or
            references options of another question
    """
    if not question.is_objective:
        if payload.is_objective:
            raise InvalidAnswer(
                "This question expects answer_text",
                details={"question_id": question.pk},
            )
        return None

    if not payload.is_objective:
        raise InvalidAnswer(
            "This question expects selected_option_ids",
            details={"question_id": question.pk},
        )

    option_ids = set(question.options.values_list("id", flat=True))
    foreign_ids = payload.selected_option_ids - option_ids
    if foreign_ids:
        raise InvalidAnswer(
            "Selected options do not belong to this question",
            details={"question_id": question.pk, "option_ids": sorted(foreign_ids)},
        )

    return payload.selected_option_ids == question.correct_option_ids()


class AnswerLedger:
    """Service zum Speichern und Bewerten von Antworten."""

    def __init__(
        self,
        catalog: Optional[ExamCatalog] = None,
        registry: Optional[SessionRegistry] = None,
    ):
        self.catalog = catalog or ExamCatalog()
        self.registry = registry or SessionRegistry(self.catalog)
        self.logger = logger

    def record_answer(
        self,
        student,
        session_id: int,
        question_id: int,
        payload: Union[AnswerPayload, Mapping[str, Any], None],
    ) -> AnswerRecord:
        """
        Speichert (oder ersetzt) die Antwort einer Session auf eine Frage.

        Args:
            student: Aufrufender Student
            session_id: ID der Session
            question_id: ID der Frage
            payload: AnswerPayload oder Request-Daten

        Returns:
            Das gespeicherte AnswerRecord

        Raises:
            InvalidAnswer: Ungültige Antwortdaten
            NotRegistered: Session gehört nicht dem Studenten
            SessionClosed: Session ist nicht aktiv (nicht gestartet oder abgegeben)
            UnknownQuestion: Frage gehört nicht zur Prüfung der Session
        """
        if not isinstance(payload, AnswerPayload):
            payload = AnswerPayload.parse(payload)

        with transaction.atomic():
            session = self.registry.get_owned_session(student, session_id, lock=True)

            if session.status == ExamSession.Status.REGISTERED:
                raise SessionNotStarted(details={"session_id": session.pk})
            if session.status != ExamSession.Status.ACTIVE:
                raise SessionClosed(details={"session_id": session.pk})

            question = self.catalog.get_question(session.exam_id, question_id)
            is_correct = grade(question, payload)

            selected = (
                sorted(payload.selected_option_ids) if payload.is_objective else None
            )
            record, created = AnswerRecord.objects.update_or_create(
                session=session,
                question=question,
                defaults={
                    "selected_option_ids": selected,
                    "answer_text": payload.answer_text,
                    "is_correct": is_correct,
                },
            )

        self.logger.info(
            f"Answer {'saved' if created else 'replaced'} for question {question.pk} "
            f"in session {session.pk}"
        )
        return record
