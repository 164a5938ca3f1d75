from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from ...catalog.serializers import QuestionPublicSerializer
from ...catalog.services import ExamCatalog
from ..serializers import (
    ExamAttemptViewSerializer,
    ExamSessionSerializer,
    RankResultSerializer,
    SubmissionResultSerializer,
)
from ..services import AnswerLedger, RankingService, ScoringEngine, SessionRegistry


def _int_param(request, name, default=None):
    try:
        return int(request.query_params.get(name, default))
    except (TypeError, ValueError):
        return default


class RegisterExamView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, exam_id):
        session = SessionRegistry().register(request.user, exam_id)
        return Response(
            {
                "message": "Registered successfully",
                "session": ExamSessionSerializer(session).data,
            },
            status=status.HTTP_201_CREATED,
        )


class StartExamView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, exam_id):
        attempt = SessionRegistry().start(request.user, exam_id)
        return Response(ExamAttemptViewSerializer(attempt).data, status=status.HTTP_200_OK)


class ExamQuestionsView(APIView):
    """Paginierte Fragen einer Prüfung (?page=1&limit=10), nur für gestartete Sessions."""

    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, exam_id):
        catalog = ExamCatalog()
        SessionRegistry(catalog).get_started_session(request.user, exam_id)

        page, limit = catalog.normalize_page(
            _int_param(request, "page", 1), _int_param(request, "limit")
        )
        questions = catalog.list_questions(exam_id, page, limit)
        return Response(
            {
                "exam_id": exam_id,
                "page": page,
                "limit": limit,
                "total": catalog.count_questions(exam_id),
                "questions": QuestionPublicSerializer(questions, many=True).data,
            }
        )


class RecordAnswerView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, session_id, question_id):
        record = AnswerLedger().record_answer(request.user, session_id, question_id, request.data)
        return Response(
            {
                "message": "Answer saved successfully",
                "session_id": record.session_id,
                "question_id": record.question_id,
            },
            status=status.HTTP_200_OK,
        )


class SubmitExamView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, session_id):
        result = ScoringEngine().submit(request.user, session_id)
        return Response(
            {"message": "Exam submitted", **SubmissionResultSerializer(result).data},
            status=status.HTTP_200_OK,
        )


class SessionRankView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, session_id):
        result = RankingService().rank_of(request.user, session_id)
        return Response(RankResultSerializer(result).data)
