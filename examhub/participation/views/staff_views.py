from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from ...catalog.services import ExamCatalog
from ..serializers import BulkRegistrationSerializer, LeaderboardEntrySerializer
from ..services import RankingService, SessionRegistry


class ExamLeaderboardView(APIView):
    """Rangliste aller abgeschlossenen Sessions einer Prüfung (nur Staff)."""

    permission_classes = [permissions.IsAdminUser]

    def get(self, request, exam_id):
        exam = ExamCatalog().get_exam(exam_id)
        entries = [
            {
                "session_id": session.pk,
                "student_id": session.student_id,
                "username": session.student.get_username(),
                "score": session.score,
                "percentage": session.percentage,
                "completed_at": session.completed_at,
                "rank": rank.rank,
                "percentile": rank.percentile,
                "cohort_size": rank.cohort_size,
            }
            for session, rank in RankingService().leaderboard(exam.pk)
        ]
        return Response(
            {
                "exam_id": exam.pk,
                "title": exam.title,
                "results": LeaderboardEntrySerializer(entries, many=True).data,
            }
        )


class BulkRegistrationView(APIView):
    permission_classes = [permissions.IsAdminUser]

    def post(self, request, exam_id):
        serializer = BulkRegistrationSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        outcome = SessionRegistry().register_many(exam_id, serializer.validated_data["user_ids"])
        return Response({"message": "Students registered", **outcome}, status=status.HTTP_200_OK)
