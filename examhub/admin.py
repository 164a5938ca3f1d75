"""
ExamHub Django Admin Configuration

This module provides the Django admin interface for the ExamHub models.
Administrators author exams, subjects, questions and options here and can
inspect exam sessions and answers.

The admin interface is organized into logical sections:
- Catalog: Exams with inline subjects, questions with inline options
- Participation: Exam sessions and answer records (lifecycle fields read-only)

Exam sessions are never created or transitioned through the admin. Status,
score and timestamps change only through the session services.

Author: ExamHub Development Team
Version: 1.0.0
"""

from typing import Optional
from django.contrib import admin
from django.db.models import Count, QuerySet
from django.http import HttpRequest
from django.utils.translation import gettext_lazy as _

from .models import (
    Exam,
    ExamSubject,
    Question,
    QuestionOption,
    ExamSession,
    AnswerRecord,
)

# --- Catalog Administration ---


class ExamSubjectInline(admin.TabularInline):
    model = ExamSubject
    extra = 0
    fields = ("subject", "marks")


@admin.register(Exam)
class ExamAdmin(admin.ModelAdmin):
    """
    Administration interface for exam management.

    Shows the exam window, total marks and the number of questions and
    participants for each exam.
    """

    list_display = (
        "title",
        "exam_type",
        "category",
        "status",
        "starts_at",
        "duration",
        "total_marks",
        "question_count",
        "participant_count",
    )
    list_filter = ("status", "exam_type", "category", "starts_at")
    search_fields = ("title", "exam_type", "category")
    inlines = [ExamSubjectInline]
    fieldsets = (
        (
            _("Basic Information"),
            {"fields": ("title", "exam_type", "category", "description")},
        ),
        (
            _("Schedule"),
            {"fields": ("status", "starts_at", "duration")},
        ),
        (_("Scoring"), {"fields": ("total_marks",)}),
        (
            _("Timestamps"),
            {"fields": ("created_at", "updated_at"), "classes": ("collapse",)},
        ),
    )
    readonly_fields = ("created_at", "updated_at")

    @admin.display(description=_("Questions"))
    def question_count(self, obj: Exam) -> int:
        return obj.question_total

    @admin.display(description=_("Participants"))
    def participant_count(self, obj: Exam) -> int:
        return obj.participant_total

    def get_queryset(self, request: HttpRequest) -> QuerySet:
        """Annotate question and participant counts."""
        return (
            super()
            .get_queryset(request)
            .annotate(
                question_total=Count("questions", distinct=True),
                participant_total=Count("sessions", distinct=True),
            )
        )


class QuestionOptionInline(admin.TabularInline):
    """Inline admin for the options of a multiple-choice question."""

    model = QuestionOption
    extra = 0
    fields = ("option_order", "option_text", "is_correct")

    def get_extra(
        self, request: HttpRequest, obj: Optional[Question] = None, **kwargs
    ) -> int:
        """Offer four empty option rows for new questions."""
        return 4 if obj is None else 0


@admin.register(Question)
class QuestionAdmin(admin.ModelAdmin):
    list_display = ("__str__", "exam", "question_type", "difficulty", "marks", "order")
    list_filter = ("question_type", "difficulty", "exam")
    search_fields = ("question_text", "exam__title")
    autocomplete_fields = ("exam",)
    inlines = [QuestionOptionInline]
    ordering = ("exam", "order")

    def get_queryset(self, request: HttpRequest) -> QuerySet:
        return super().get_queryset(request).select_related("exam", "subject")


# --- Participation Administration ---


class AnswerRecordInline(admin.TabularInline):
    model = AnswerRecord
    extra = 0
    can_delete = False
    fields = ("question", "selected_option_ids", "answer_text", "is_correct", "answered_at")
    readonly_fields = fields

    def has_add_permission(self, request: HttpRequest, obj=None) -> bool:
        return False


@admin.register(ExamSession)
class ExamSessionAdmin(admin.ModelAdmin):
    """
    Administration interface for exam sessions.

    Read-only view of the session lifecycle and the final score.
    """

    list_display = (
        "student",
        "exam",
        "status",
        "score",
        "percentage",
        "started_at",
        "completed_at",
    )
    list_filter = ("status", "exam")
    search_fields = ("student__username", "student__email", "exam__title")
    readonly_fields = (
        "student",
        "exam",
        "status",
        "score",
        "percentage",
        "registered_at",
        "started_at",
        "completed_at",
    )
    fieldsets = (
        (_("Session Information"), {"fields": ("student", "exam", "status")}),
        (
            _("Timestamps"),
            {
                "fields": ("registered_at", "started_at", "completed_at"),
                "classes": ("collapse",),
            },
        ),
        (_("Result"), {"fields": ("score", "percentage")}),
    )
    inlines = [AnswerRecordInline]

    def has_add_permission(self, request: HttpRequest) -> bool:
        """
        Prevent manual creation of exam sessions.

        Sessions are created through registration only.
        """
        return False

    def get_queryset(self, request: HttpRequest) -> QuerySet:
        return super().get_queryset(request).select_related("student", "exam")
