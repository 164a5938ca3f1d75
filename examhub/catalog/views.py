from rest_framework import generics, permissions

from .serializers import ExamListSerializer
from .services import ExamCatalog


class PublishedExamsView(generics.ListAPIView):
    """Veröffentlichte Prüfungen, optional gefiltert über ?filter=<exam_type|category>."""

    serializer_class = ExamListSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):
        filter_value = self.request.query_params.get("filter", "ALL")
        return ExamCatalog().list_published_exams(filter_value)
