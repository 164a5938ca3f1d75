"""
ExamHub Catalog Models

This module defines the exam catalog: exams, their subjects, questions and
answer options. The catalog is authored through the Django admin and is
read-only for the exam session services.

Models:
- Exam: Exam metadata, total marks and the time window in which it can be taken
- ExamSubject: Subject sections of an exam with their marks
- Question: Objective (multiple choice) or subjective (descriptive) questions
- QuestionOption: Answer options of multiple-choice questions

Author: ExamHub Development Team
Version: 1.0.0
"""

import datetime
from typing import FrozenSet, Optional

from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class Exam(models.Model):
    """
    An exam students can register for and take once.

    Attributes:
        title: Exam title shown to students
        exam_type: Free-form exam type used for filtering (e.g. "NEET", "JEE")
        category: Optional category used for filtering
        total_marks: Maximum achievable marks, used for the percentage
        duration: Length of the exam window in minutes
        starts_at: Opening time of the exam window
        status: Publication status set by administrators

    Availability:
        An exam can be started only while it is published (scheduled or
        active) and the current time lies within [starts_at, starts_at + duration).
    """

    class Status(models.TextChoices):
        DRAFT = "draft", _("Draft")
        SCHEDULED = "scheduled", _("Scheduled")
        ACTIVE = "active", _("Active")
        CLOSED = "closed", _("Closed")

    PUBLISHED_STATUSES = (Status.SCHEDULED, Status.ACTIVE)

    title = models.CharField(
        max_length=255,
        verbose_name=_("Exam Title"),
    )
    exam_type = models.CharField(
        max_length=50,
        verbose_name=_("Exam Type"),
        help_text=_("Exam type used for filtering, e.g. 'NEET' or 'JEE'"),
    )
    category = models.CharField(
        max_length=100,
        blank=True,
        verbose_name=_("Category"),
    )
    description = models.TextField(blank=True)
    total_marks = models.PositiveIntegerField(
        verbose_name=_("Total Marks"),
        help_text=_("Maximum achievable marks. Used to compute the percentage."),
    )
    duration = models.PositiveIntegerField(
        verbose_name=_("Duration (minutes)"),
        help_text=_("Length of the exam window in minutes."),
    )
    starts_at = models.DateTimeField(
        verbose_name=_("Starts At"),
        help_text=_("Opening time of the exam window."),
    )
    status = models.CharField(
        max_length=10,
        choices=Status.choices,
        default=Status.DRAFT,
        db_index=True,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Exam")
        verbose_name_plural = _("Exams")
        ordering = ["-starts_at", "title"]
        db_table = "examhub_exam"

    def __str__(self) -> str:
        return self.title

    @property
    def ends_at(self) -> datetime.datetime:
        """Closing time of the exam window."""
        return self.starts_at + datetime.timedelta(minutes=self.duration)

    def is_open_at(self, moment: Optional[datetime.datetime] = None) -> bool:
        """
        Check whether the exam can be started at the given moment.

        Args:
            moment: Point in time to check, defaults to now

        Returns:
            True if the exam is published and the moment lies in its window
        """
        moment = moment or timezone.now()
        if self.status not in self.PUBLISHED_STATUSES:
            return False
        return self.starts_at <= moment < self.ends_at


class ExamSubject(models.Model):
    """Subject section of an exam (e.g. Physics 180 marks)."""

    exam = models.ForeignKey(
        Exam,
        on_delete=models.CASCADE,
        related_name="subjects",
    )
    subject = models.CharField(max_length=100)
    marks = models.PositiveIntegerField(default=0)

    class Meta:
        verbose_name = _("Exam Subject")
        verbose_name_plural = _("Exam Subjects")
        unique_together = ("exam", "subject")
        ordering = ["exam", "subject"]
        db_table = "examhub_exam_subject"

    def __str__(self) -> str:
        return f"{self.subject} ({self.marks} marks)"


class Question(models.Model):
    """
    A question of an exam.

    Objective questions (multiple choice) are graded automatically by exact
    set equality of the selected and the correct options. Subjective questions
    (descriptive) are never graded automatically.

    Attributes:
        exam: Parent exam
        subject: Optional subject section the question counts towards
        question_text: The question itself
        question_type: mcq or descriptive
        marks: Marks awarded for a correct answer
        order: Display order within the exam
    """

    class QuestionType(models.TextChoices):
        MCQ = "mcq", _("Multiple Choice")
        DESCRIPTIVE = "descriptive", _("Descriptive")

    class Difficulty(models.TextChoices):
        EASY = "easy", _("Easy")
        MEDIUM = "medium", _("Medium")
        HARD = "hard", _("Hard")

    OBJECTIVE_TYPES = (QuestionType.MCQ,)

    exam = models.ForeignKey(
        Exam,
        on_delete=models.CASCADE,
        related_name="questions",
    )
    subject = models.ForeignKey(
        ExamSubject,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="questions",
    )
    question_text = models.TextField()
    question_type = models.CharField(
        max_length=20,
        choices=QuestionType.choices,
        default=QuestionType.MCQ,
    )
    difficulty = models.CharField(
        max_length=10,
        choices=Difficulty.choices,
        default=Difficulty.MEDIUM,
    )
    marks = models.PositiveIntegerField(default=1)
    explanation = models.TextField(blank=True)
    order = models.PositiveIntegerField(default=0)

    class Meta:
        verbose_name = _("Question")
        verbose_name_plural = _("Questions")
        ordering = ["exam", "order", "id"]
        db_table = "examhub_question"

    def __str__(self) -> str:
        return f"{self.exam.title} - Q{self.order}: {self.question_text[:40]}"

    @property
    def is_objective(self) -> bool:
        return self.question_type in self.OBJECTIVE_TYPES

    def correct_option_ids(self) -> FrozenSet[int]:
        """Return the ids of all options marked as correct."""
        return frozenset(
            self.options.filter(is_correct=True).values_list("id", flat=True)
        )


class QuestionOption(models.Model):
    question = models.ForeignKey(
        Question,
        on_delete=models.CASCADE,
        related_name="options",
    )
    option_text = models.CharField(max_length=500)
    is_correct = models.BooleanField(default=False)
    option_order = models.PositiveSmallIntegerField(default=0)

    class Meta:
        verbose_name = _("Question Option")
        verbose_name_plural = _("Question Options")
        ordering = ["question", "option_order", "id"]
        db_table = "examhub_question_option"

    def __str__(self) -> str:
        return self.option_text
