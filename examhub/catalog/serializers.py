from rest_framework import serializers

from .models import Exam, Question, QuestionOption


class ExamListSerializer(serializers.ModelSerializer):
    exam_id = serializers.IntegerField(source="id", read_only=True)
    ends_at = serializers.DateTimeField(read_only=True)
    question_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = Exam
        fields = [
            "exam_id",
            "title",
            "exam_type",
            "category",
            "duration",
            "total_marks",
            "starts_at",
            "ends_at",
            "status",
            "question_count",
        ]


class QuestionOptionPublicSerializer(serializers.ModelSerializer):
    """Option ohne Korrektheits-Flag für Studierende."""

    option_id = serializers.IntegerField(source="id", read_only=True)

    class Meta:
        model = QuestionOption
        fields = ["option_id", "option_text", "option_order"]


class QuestionPublicSerializer(serializers.ModelSerializer):
    """
    Question as shown during an exam attempt.

    Multiple-choice questions include their options; correctness is never exposed.
    """

    question_id = serializers.IntegerField(source="id", read_only=True)
    subject = serializers.CharField(source="subject.subject", read_only=True, default=None)
    options = serializers.SerializerMethodField()

    class Meta:
        model = Question
        fields = [
            "question_id",
            "question_text",
            "question_type",
            "difficulty",
            "marks",
            "subject",
            "options",
        ]

    def get_options(self, obj):
        if not obj.is_objective:
            return None
        return QuestionOptionPublicSerializer(obj.options.all(), many=True).data
