import datetime

from django.test import TestCase

from examhub.catalog.models import Exam
from examhub.exceptions import (
    DuplicateRegistration,
    ExamNotActive,
    ExamNotFound,
    InvalidState,
    NotRegistered,
    SessionNotStarted,
)
from examhub.participation.models import ExamSession
from examhub.participation.services import ScoringEngine, SessionRegistry
from examhub.tests.fixtures import create_demo_exam, create_exam, create_student


class RegisterTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.student = create_student("Max")
        cls.exam = create_exam()

    def setUp(self):
        self.registry = SessionRegistry()

    def test_register_creates_registered_session(self):
        session = self.registry.register(self.student, self.exam.pk)

        self.assertEqual(session.status, ExamSession.Status.REGISTERED)
        self.assertIsNone(session.score)
        self.assertIsNone(session.started_at)

    def test_second_registration_is_rejected(self):
        self.registry.register(self.student, self.exam.pk)

        with self.assertRaises(DuplicateRegistration):
            self.registry.register(self.student, self.exam.pk)
        self.assertEqual(ExamSession.objects.filter(student=self.student, exam=self.exam).count(), 1)

    def test_unknown_exam(self):
        with self.assertRaises(ExamNotFound):
            self.registry.register(self.student, 999999)

    def test_register_many_skips_existing_sessions(self):
        other = create_student("Erika")
        existing = self.registry.register(self.student, self.exam.pk)
        ExamSession.objects.filter(pk=existing.pk).update(status=ExamSession.Status.COMPLETED)

        outcome = self.registry.register_many(self.exam.pk, [self.student.pk, other.pk, other.pk, 999999])

        self.assertEqual(outcome["registered"], [other.pk])
        self.assertEqual(outcome["skipped"], [self.student.pk])
        self.assertEqual(outcome["unknown"], [999999])
        existing.refresh_from_db()
        self.assertEqual(existing.status, ExamSession.Status.COMPLETED)


class StartTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.student = create_student("Max")
        cls.exam, *_ = create_demo_exam()
        cls.future_exam = create_exam(title="Future", status=Exam.Status.SCHEDULED, opens_in_minutes=60)

    def setUp(self):
        self.registry = SessionRegistry()

    def test_start_without_registration(self):
        with self.assertRaises(NotRegistered):
            self.registry.start(self.student, self.exam.pk)

    def test_start_activates_session(self):
        session = self.registry.register(self.student, self.exam.pk)

        attempt = self.registry.start(self.student, self.exam.pk)

        session.refresh_from_db()
        self.assertEqual(session.status, ExamSession.Status.ACTIVE)
        self.assertIsNotNone(session.started_at)
        self.assertEqual(attempt.session_id, session.pk)
        self.assertEqual(attempt.total_marks, 10)
        self.assertEqual(attempt.question_count, 2)
        self.assertEqual(attempt.subjects, [{"subject": "General", "marks": 10}])

    def test_start_is_idempotent(self):
        session = self.registry.register(self.student, self.exam.pk)
        self.registry.start(self.student, self.exam.pk)
        session.refresh_from_db()
        started_at = session.started_at

        attempt = self.registry.start(self.student, self.exam.pk)

        session.refresh_from_db()
        self.assertEqual(attempt.status, ExamSession.Status.ACTIVE)
        self.assertEqual(session.started_at, started_at)

    def test_start_outside_window(self):
        session = self.registry.register(self.student, self.future_exam.pk)

        with self.assertRaises(ExamNotActive):
            self.registry.start(self.student, self.future_exam.pk)
        session.refresh_from_db()
        self.assertEqual(session.status, ExamSession.Status.REGISTERED)

    def test_start_at_explicit_moment(self):
        self.registry.register(self.student, self.future_exam.pk)
        moment = self.future_exam.starts_at + datetime.timedelta(minutes=1)

        attempt = self.registry.start(self.student, self.future_exam.pk, moment=moment)

        self.assertEqual(attempt.status, ExamSession.Status.ACTIVE)

    def test_start_after_submit(self):
        session = self.registry.register(self.student, self.exam.pk)
        self.registry.start(self.student, self.exam.pk)
        ScoringEngine().submit(self.student, session.pk)

        with self.assertRaises(InvalidState):
            self.registry.start(self.student, self.exam.pk)


class StartedSessionTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.student = create_student("Max")
        cls.exam, *_ = create_demo_exam()

    def setUp(self):
        self.registry = SessionRegistry()

    def test_not_registered(self):
        with self.assertRaises(NotRegistered):
            self.registry.get_started_session(self.student, self.exam.pk)

    def test_registered_session_is_not_started(self):
        self.registry.register(self.student, self.exam.pk)

        with self.assertRaises(SessionNotStarted):
            self.registry.get_started_session(self.student, self.exam.pk)

    def test_active_and_completed_sessions(self):
        session = self.registry.register(self.student, self.exam.pk)
        self.registry.start(self.student, self.exam.pk)
        self.assertEqual(self.registry.get_started_session(self.student, self.exam.pk).pk, session.pk)

        ScoringEngine().submit(self.student, session.pk)
        started = self.registry.get_started_session(self.student, self.exam.pk)
        self.assertEqual(started.status, ExamSession.Status.COMPLETED)
