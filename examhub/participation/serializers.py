from rest_framework import serializers

from .models import ExamSession


class ExamSessionSerializer(serializers.ModelSerializer):
    session_id = serializers.IntegerField(source="id", read_only=True)
    exam_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = ExamSession
        fields = [
            "session_id",
            "exam_id",
            "status",
            "score",
            "percentage",
            "registered_at",
            "started_at",
            "completed_at",
        ]
        read_only_fields = fields


class SubjectMarksSerializer(serializers.Serializer):
    subject = serializers.CharField()
    marks = serializers.IntegerField()


class ExamAttemptViewSerializer(serializers.Serializer):
    session_id = serializers.IntegerField()
    status = serializers.CharField()
    exam_id = serializers.IntegerField()
    title = serializers.CharField()
    duration = serializers.IntegerField()
    total_marks = serializers.IntegerField()
    starts_at = serializers.DateTimeField()
    ends_at = serializers.DateTimeField()
    question_count = serializers.IntegerField()
    subjects = SubjectMarksSerializer(many=True)


class SubmissionResultSerializer(serializers.Serializer):
    session_id = serializers.IntegerField()
    score = serializers.DecimalField(max_digits=7, decimal_places=2)
    percentage = serializers.DecimalField(max_digits=9, decimal_places=2)
    status = serializers.CharField()
    completed_at = serializers.DateTimeField()


class RankResultSerializer(serializers.Serializer):
    session_id = serializers.IntegerField()
    exam_id = serializers.IntegerField()
    score = serializers.DecimalField(max_digits=7, decimal_places=2)
    rank = serializers.IntegerField()
    percentile = serializers.FloatField()
    cohort_size = serializers.IntegerField()
    below_count = serializers.IntegerField()


class StudentResultSerializer(serializers.Serializer):
    session_id = serializers.IntegerField()
    exam_id = serializers.IntegerField()
    title = serializers.CharField()
    date = serializers.DateTimeField()
    completed_at = serializers.DateTimeField()
    score = serializers.DecimalField(max_digits=7, decimal_places=2)
    percentage = serializers.DecimalField(max_digits=9, decimal_places=2)
    rank = serializers.IntegerField()
    percentile = serializers.FloatField()
    cohort_size = serializers.IntegerField()


class OngoingExamSerializer(serializers.Serializer):
    session_id = serializers.IntegerField()
    exam_id = serializers.IntegerField()
    title = serializers.CharField()
    starts_at = serializers.DateTimeField()
    ends_at = serializers.DateTimeField()
    duration = serializers.IntegerField()
    status = serializers.CharField()


class SubjectScoreSerializer(serializers.Serializer):
    subject = serializers.CharField()
    score = serializers.IntegerField()
    total = serializers.IntegerField()


class ExamResultSerializer(serializers.Serializer):
    """Detailergebnis: Session, Rang und Fächerauswertung."""

    session_id = serializers.IntegerField(source="session.id")
    exam_id = serializers.IntegerField(source="session.exam_id")
    title = serializers.CharField(source="session.exam.title")
    date = serializers.DateTimeField(source="session.exam.starts_at")
    score = serializers.DecimalField(source="session.score", max_digits=7, decimal_places=2)
    percentage = serializers.DecimalField(source="session.percentage", max_digits=9, decimal_places=2)
    rank = serializers.IntegerField(source="rank.rank")
    percentile = serializers.FloatField(source="rank.percentile")
    cohort_size = serializers.IntegerField(source="rank.cohort_size")
    subjects = SubjectScoreSerializer(many=True)


class StudentSummarySerializer(serializers.Serializer):
    progress_percent = serializers.FloatField()
    total_sessions = serializers.IntegerField()
    completed_sessions = serializers.IntegerField()
    latest_rank = RankResultSerializer(allow_null=True)


class LeaderboardEntrySerializer(serializers.Serializer):
    session_id = serializers.IntegerField()
    student_id = serializers.IntegerField()
    username = serializers.CharField()
    score = serializers.DecimalField(max_digits=7, decimal_places=2)
    percentage = serializers.DecimalField(max_digits=9, decimal_places=2)
    completed_at = serializers.DateTimeField()
    rank = serializers.IntegerField()
    percentile = serializers.FloatField()
    cohort_size = serializers.IntegerField()


class BulkRegistrationSerializer(serializers.Serializer):
    user_ids = serializers.ListField(child=serializers.IntegerField(min_value=1), allow_empty=False)
