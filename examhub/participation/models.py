from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from ..catalog.models import Exam, Question

User = settings.AUTH_USER_MODEL


class ExamSession(models.Model):
    """
    One student's attempt at one exam.

    Status wird ausschließlich über die Übergangsfunktionen in
    participation/transitions.py geändert (registered -> active -> completed).
    """

    class Status(models.TextChoices):
        REGISTERED = "registered", _("Registriert")
        ACTIVE = "active", _("Gestartet")
        COMPLETED = "completed", _("Abgeschlossen")

    student = models.ForeignKey(User, on_delete=models.CASCADE, related_name="exam_sessions")
    exam = models.ForeignKey(Exam, on_delete=models.CASCADE, related_name="sessions")
    status = models.CharField(
        max_length=15, choices=Status.choices, default=Status.REGISTERED
    )
    score = models.DecimalField(
        max_digits=7,
        decimal_places=2,
        null=True,
        blank=True,
        help_text=_("Gesamtpunktzahl. Wird bei der Abgabe einmalig berechnet."),
    )
    percentage = models.DecimalField(
        max_digits=9,
        decimal_places=2,
        null=True,
        blank=True,
        help_text=_("score / total_marks * 100. Kann 100 übersteigen, wenn total_marks kleiner als die Summe der Fragepunkte ist."),
    )
    registered_at = models.DateTimeField(auto_now_add=True)
    started_at = models.DateTimeField(null=True, blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        verbose_name = _("Exam Session")
        verbose_name_plural = _("Exam Sessions")
        ordering = ["-registered_at"]
        db_table = "examhub_exam_session"
        constraints = [
            models.UniqueConstraint(
                fields=["student", "exam"], name="unique_session_per_student_exam"
            ),
        ]
        indexes = [
            models.Index(fields=["exam", "status", "score"], name="examhub_sess_exam_status_idx"),
            models.Index(
                fields=["student", "status", "completed_at"], name="examhub_sess_student_idx"
            ),
        ]

    def __str__(self):
        return f"Session for {self.exam.title} by {self.student.username}"

    @property
    def is_completed(self) -> bool:
        return self.status == self.Status.COMPLETED


class AnswerRecord(models.Model):
    """
    Graded answer of one session to one question.

    is_correct: True/False für Multiple-Choice, None (ungraded) für freie Antworten.
    """

    session = models.ForeignKey(
        ExamSession, on_delete=models.CASCADE, related_name="answers"
    )
    question = models.ForeignKey(
        Question, on_delete=models.CASCADE, related_name="answers"
    )
    selected_option_ids = models.JSONField(null=True, blank=True)
    answer_text = models.TextField(null=True, blank=True)
    is_correct = models.BooleanField(null=True, blank=True)
    answered_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Answer Record")
        verbose_name_plural = _("Answer Records")
        ordering = ["session", "question"]
        db_table = "examhub_answer_record"
        constraints = [
            models.UniqueConstraint(
                fields=["session", "question"], name="unique_answer_per_session_question"
            ),
        ]

    def __str__(self):
        return f"Answer to question {self.question_id} in session {self.session_id}"
