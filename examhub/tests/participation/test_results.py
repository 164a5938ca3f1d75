from decimal import Decimal

from django.test import TestCase

from examhub.exceptions import NotCompleted, NotRegistered
from examhub.participation.models import ExamSession
from examhub.participation.services import (
    AnswerLedger,
    ResultService,
    ScoringEngine,
    SessionRegistry,
)
from examhub.tests.fixtures import (
    create_completed_session,
    create_demo_exam,
    create_exam,
    create_student,
)


class ResultServiceTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.student = create_student("Max")
        cls.rival = create_student("Erika")
        cls.exam, cls.q1, cls.q1_options, cls.q2, cls.q2_options = create_demo_exam()
        cls.older_exam = create_exam(title="Older", total_marks=100)
        cls.open_exam = create_exam(title="Open")

        create_completed_session(cls.student, cls.older_exam, 60, minutes_ago=60 * 24)
        create_completed_session(cls.rival, cls.older_exam, 80, minutes_ago=60 * 24)
        create_completed_session(cls.rival, cls.exam, 10)

    def setUp(self):
        registry = SessionRegistry()
        self.session = registry.register(self.student, self.exam.pk)
        registry.start(self.student, self.exam.pk)
        AnswerLedger().record_answer(
            self.student, self.session.pk, self.q1.pk, {"selected_option_ids": [self.q1_options["A"]]}
        )
        ScoringEngine().submit(self.student, self.session.pk)
        registry.register(self.student, self.open_exam.pk)
        self.results = ResultService()

    def test_my_results_newest_first(self):
        results = self.results.my_results(self.student)

        self.assertEqual([r["title"] for r in results], ["Demo Exam", "Older"])
        latest, older = results
        self.assertEqual(latest["score"], Decimal("5.00"))
        self.assertEqual((latest["rank"], latest["percentile"], latest["cohort_size"]), (2, 0.0, 2))
        self.assertEqual((older["rank"], older["percentile"]), (2, 0.0))

    def test_my_results_empty(self):
        self.assertEqual(self.results.my_results(create_student("Neu")), [])

    def test_exam_result_with_subjects(self):
        result = self.results.exam_result(self.student, self.exam.pk)

        self.assertEqual(result.session.pk, self.session.pk)
        self.assertEqual(result.rank.rank, 2)
        self.assertEqual(result.subjects, [{"subject": "General", "score": 5, "total": 10}])

    def test_exam_result_not_completed(self):
        with self.assertRaises(NotCompleted):
            self.results.exam_result(self.student, self.open_exam.pk)

    def test_exam_result_not_registered(self):
        with self.assertRaises(NotRegistered):
            self.results.exam_result(create_student("Neu"), self.exam.pk)

    def test_summary(self):
        summary = self.results.summary(self.student)

        self.assertEqual(summary.total_sessions, 3)
        self.assertEqual(summary.completed_sessions, 2)
        self.assertEqual(summary.progress_percent, 66.67)
        self.assertEqual(summary.latest_rank.session_id, self.session.pk)
        self.assertEqual(summary.latest_rank.cohort_size, 2)

    def test_summary_without_sessions(self):
        summary = self.results.summary(create_student("Neu"))

        self.assertEqual(summary.progress_percent, 0.0)
        self.assertEqual(summary.total_sessions, 0)
        self.assertIsNone(summary.latest_rank)

    def test_ongoing_lists_registered_and_active_sessions(self):
        later_exam = create_exam(title="Later", opens_in_minutes=-5, duration=45)
        registry = SessionRegistry()
        later_session = registry.register(self.student, later_exam.pk)
        registry.start(self.student, later_exam.pk)

        ongoing = self.results.ongoing(self.student)

        self.assertEqual([item["title"] for item in ongoing], ["Open", "Later"])
        self.assertEqual(ongoing[0]["status"], ExamSession.Status.REGISTERED)
        self.assertEqual(ongoing[1]["session_id"], later_session.pk)
        self.assertEqual(ongoing[1]["status"], ExamSession.Status.ACTIVE)
        self.assertEqual(ongoing[1]["duration"], 45)
        self.assertEqual(ongoing[1]["starts_at"], later_exam.starts_at)

    def test_ongoing_without_sessions(self):
        self.assertEqual(self.results.ongoing(create_student("Neu")), [])
