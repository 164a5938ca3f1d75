from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

from examhub.catalog.models import Exam
from examhub.participation.models import AnswerRecord, ExamSession
from examhub.tests.fixtures import create_demo_exam, create_exam, create_student

BASE_URL = "/api/examhub"


class ExamSessionApiTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.student = create_student("Max")
        cls.exam, cls.q1, cls.q1_options, cls.q2, cls.q2_options = create_demo_exam()

    def setUp(self):
        self.client = APIClient()
        self.client.force_authenticate(user=self.student)

    def _register_and_start(self):
        self.client.post(f"{BASE_URL}/exams/{self.exam.pk}/register/")
        response = self.client.post(f"{BASE_URL}/exams/{self.exam.pk}/start/")
        return response.json()["session_id"]

    def test_authentication_required(self):
        response = APIClient().post(f"{BASE_URL}/exams/{self.exam.pk}/register/")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_exam_list(self):
        create_exam(title="Draft", status=Exam.Status.DRAFT)

        response = self.client.get(f"{BASE_URL}/exams/")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([e["title"] for e in response.json()], ["Demo Exam"])
        self.assertEqual(response.json()[0]["question_count"], 2)

    def test_register(self):
        response = self.client.post(f"{BASE_URL}/exams/{self.exam.pk}/register/")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.json()["session"]["status"], "registered")

    def test_register_twice(self):
        self.client.post(f"{BASE_URL}/exams/{self.exam.pk}/register/")
        response = self.client.post(f"{BASE_URL}/exams/{self.exam.pk}/register/")

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.json()["error_code"], "DuplicateRegistration")

    def test_register_unknown_exam(self):
        response = self.client.post(f"{BASE_URL}/exams/999999/register/")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_start_without_registration(self):
        response = self.client.post(f"{BASE_URL}/exams/{self.exam.pk}/start/")

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.json()["error"], "Not registered for this exam")

    def test_start_before_window(self):
        future = create_exam(title="Future", status=Exam.Status.SCHEDULED, opens_in_minutes=60)
        self.client.post(f"{BASE_URL}/exams/{future.pk}/register/")

        response = self.client.post(f"{BASE_URL}/exams/{future.pk}/start/")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.json()["error_code"], "ExamNotActive")

    def test_start_returns_attempt(self):
        self.client.post(f"{BASE_URL}/exams/{self.exam.pk}/register/")

        response = self.client.post(f"{BASE_URL}/exams/{self.exam.pk}/start/")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        body = response.json()
        self.assertEqual(body["status"], "active")
        self.assertEqual(body["total_marks"], 10)
        self.assertEqual(body["subjects"], [{"subject": "General", "marks": 10}])

    def test_questions_require_started_session(self):
        self.client.post(f"{BASE_URL}/exams/{self.exam.pk}/register/")

        response = self.client.get(f"{BASE_URL}/exams/{self.exam.pk}/questions/")

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

    def test_questions_hide_correct_options(self):
        self._register_and_start()

        response = self.client.get(f"{BASE_URL}/exams/{self.exam.pk}/questions/", {"page": 1, "limit": 1})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        body = response.json()
        self.assertEqual((body["page"], body["limit"], body["total"]), (1, 1, 2))
        question = body["questions"][0]
        self.assertEqual(question["question_id"], self.q1.pk)
        self.assertEqual(len(question["options"]), 4)
        self.assertNotIn("is_correct", question["options"][0])

    def test_answer_without_data(self):
        session_id = self._register_and_start()

        response = self.client.post(
            f"{BASE_URL}/sessions/{session_id}/answers/{self.q1.pk}/", {}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.json()["error"], "Answer data is required")

    def test_answer_with_list_body(self):
        session_id = self._register_and_start()

        response = self.client.post(
            f"{BASE_URL}/sessions/{session_id}/answers/{self.q1.pk}/", [self.q1_options["A"]], format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.json()["error_code"], "InvalidAnswer")
        self.assertFalse(AnswerRecord.objects.filter(session_id=session_id).exists())

    def test_full_exam_flow(self):
        session_id = self._register_and_start()
        answers_url = f"{BASE_URL}/sessions/{session_id}/answers"

        response = self.client.post(
            f"{answers_url}/{self.q1.pk}/", {"selected_option_ids": [self.q1_options["A"]]}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.client.post(
            f"{answers_url}/{self.q2.pk}/", {"selected_option_ids": [self.q2_options["B"]]}, format="json"
        )

        response = self.client.post(f"{BASE_URL}/sessions/{session_id}/submit/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()["score"], 5.0)
        self.assertEqual(response.json()["percentage"], 50.0)

        response = self.client.post(
            f"{answers_url}/{self.q2.pk}/",
            {"selected_option_ids": [self.q2_options["B"], self.q2_options["C"]]},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.json()["error_code"], "SessionClosed")

        response = self.client.post(f"{BASE_URL}/sessions/{session_id}/submit/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()["score"], 5.0)

        response = self.client.get(f"{BASE_URL}/sessions/{session_id}/rank/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()["rank"], 1)
        self.assertEqual(response.json()["percentile"], 0.0)
        self.assertEqual(response.json()["cohort_size"], 1)

        response = self.client.get(f"{BASE_URL}/results/{self.exam.pk}/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()["subjects"], [{"subject": "General", "score": 5, "total": 10}])

        response = self.client.get(f"{BASE_URL}/results/my/")
        self.assertEqual([r["exam_id"] for r in response.json()], [self.exam.pk])

        response = self.client.get(f"{BASE_URL}/dashboard/summary/")
        self.assertEqual(response.json()["progress_percent"], 100.0)
        self.assertEqual(response.json()["latest_rank"]["session_id"], session_id)

    def test_dashboard_ongoing(self):
        session_id = self._register_and_start()
        other_exam = create_exam(title="Mock Test", opens_in_minutes=60)
        self.client.post(f"{BASE_URL}/exams/{other_exam.pk}/register/")

        response = self.client.get(f"{BASE_URL}/dashboard/ongoing/")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        ongoing = response.json()
        self.assertEqual([item["exam_id"] for item in ongoing], [self.exam.pk, other_exam.pk])
        self.assertEqual(ongoing[0]["session_id"], session_id)
        self.assertEqual(ongoing[0]["status"], "active")
        self.assertEqual(ongoing[0]["title"], "Demo Exam")
        self.assertEqual(ongoing[0]["duration"], self.exam.duration)
        self.assertEqual(ongoing[1]["status"], "registered")

        self.client.post(f"{BASE_URL}/sessions/{session_id}/submit/")
        response = self.client.get(f"{BASE_URL}/dashboard/ongoing/")
        self.assertEqual([item["exam_id"] for item in response.json()], [other_exam.pk])

    def test_rank_before_submit(self):
        session_id = self._register_and_start()

        response = self.client.get(f"{BASE_URL}/sessions/{session_id}/rank/")

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.json()["error_code"], "NotCompleted")

    def test_foreign_session(self):
        session_id = self._register_and_start()
        other = APIClient()
        other.force_authenticate(user=create_student("Erika"))

        response = other.post(f"{BASE_URL}/sessions/{session_id}/submit/")

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(
            ExamSession.objects.get(pk=session_id).status, ExamSession.Status.ACTIVE
        )


class StaffApiTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.staff = create_student("admin", is_staff=True)
        cls.student = create_student("Max")
        cls.other = create_student("Erika")
        cls.exam, *_ = create_demo_exam()

    def setUp(self):
        self.client = APIClient()
        self.client.force_authenticate(user=self.staff)

    def test_students_cannot_see_leaderboard(self):
        client = APIClient()
        client.force_authenticate(user=self.student)

        response = client.get(f"{BASE_URL}/exams/{self.exam.pk}/leaderboard/")

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_bulk_registration_and_leaderboard(self):
        response = self.client.post(
            f"{BASE_URL}/exams/{self.exam.pk}/registrations/",
            {"user_ids": [self.student.pk, self.other.pk]},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(sorted(response.json()["registered"]), sorted([self.student.pk, self.other.pk]))

        for user in (self.student, self.other):
            client = APIClient()
            client.force_authenticate(user=user)
            session_id = client.post(f"{BASE_URL}/exams/{self.exam.pk}/start/").json()["session_id"]
            client.post(f"{BASE_URL}/sessions/{session_id}/submit/")

        response = self.client.get(f"{BASE_URL}/exams/{self.exam.pk}/leaderboard/")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        results = response.json()["results"]
        # Gleichstand bei 0 Punkten: beide teilen den letzten Rang
        self.assertEqual([r["rank"] for r in results], [2, 2])
        self.assertEqual({r["username"] for r in results}, {"Max", "Erika"})

    def test_bulk_registration_requires_user_ids(self):
        response = self.client.post(
            f"{BASE_URL}/exams/{self.exam.pk}/registrations/", {"user_ids": []}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
