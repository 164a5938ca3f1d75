from rest_framework import permissions
from rest_framework.response import Response
from rest_framework.views import APIView

from ..serializers import (
    ExamResultSerializer,
    OngoingExamSerializer,
    StudentResultSerializer,
    StudentSummarySerializer,
)
from ..services import ResultService


class MyResultsView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        results = ResultService().my_results(request.user)
        return Response(StudentResultSerializer(results, many=True).data)


class ExamResultView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, exam_id):
        result = ResultService().exam_result(request.user, exam_id)
        return Response(ExamResultSerializer(result).data)


class DashboardSummaryView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        summary = ResultService().summary(request.user)
        return Response(StudentSummarySerializer(summary).data)


class OngoingExamsView(APIView):
    """Registrierte und laufende Prüfungen für das Dashboard."""

    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        sessions = ResultService().ongoing(request.user)
        return Response(OngoingExamSerializer(sessions, many=True).data)
