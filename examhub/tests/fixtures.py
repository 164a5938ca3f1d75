"""
Gemeinsame Testdaten für die ExamHub Tests.

Die Demo-Prüfung entspricht dem Beispiel aus dem Seed Command:
10 Punkte, Q1 (5 Punkte, korrekt {A}) und Q2 (5 Punkte, korrekt {B, C}).
"""

import datetime
from decimal import Decimal

from django.contrib.auth.models import User
from django.utils import timezone

from examhub.catalog.models import Exam, ExamSubject, Question, QuestionOption
from examhub.participation.models import ExamSession


def create_student(username, **extra):
    return User.objects.create_user(
        username=username,
        password="Musterpassword",
        email=f"{username}@test.com",
        **extra,
    )


def create_exam(title="Demo Exam", total_marks=10, status=Exam.Status.ACTIVE, opens_in_minutes=-10, duration=120):
    """Exam whose window opened ten minutes ago (by default) and lasts two hours."""
    return Exam.objects.create(
        title=title,
        exam_type="DEMO",
        category="General",
        total_marks=total_marks,
        duration=duration,
        starts_at=timezone.now() + datetime.timedelta(minutes=opens_in_minutes),
        status=status,
    )


def create_mcq(exam, marks, options, order=0, subject=None):
    """
    Create a multiple-choice question.

    Args:
        options: Mapping label -> is_correct, e.g. {"A": True, "B": False}

    Returns:
        (question, {label: option_id})
    """
    question = Question.objects.create(
        exam=exam,
        subject=subject,
        question_text=f"Question {order}",
        question_type=Question.QuestionType.MCQ,
        marks=marks,
        order=order,
    )
    option_ids = {}
    for index, (label, is_correct) in enumerate(options.items()):
        option = QuestionOption.objects.create(
            question=question, option_text=label, is_correct=is_correct, option_order=index
        )
        option_ids[label] = option.pk
    return question, option_ids


def create_descriptive(exam, marks=5, order=0):
    return Question.objects.create(
        exam=exam,
        question_text="Explain your reasoning.",
        question_type=Question.QuestionType.DESCRIPTIVE,
        marks=marks,
        order=order,
    )


def create_demo_exam():
    """
    Returns:
        (exam, q1, q1_options, q2, q2_options)
    """
    exam = create_exam()
    subject = ExamSubject.objects.create(exam=exam, subject="General", marks=10)
    q1, q1_options = create_mcq(
        exam, 5, {"A": True, "B": False, "C": False, "D": False}, order=1, subject=subject
    )
    q2, q2_options = create_mcq(
        exam, 5, {"A": False, "B": True, "C": True, "D": False}, order=2, subject=subject
    )
    return exam, q1, q1_options, q2, q2_options


def create_completed_session(student, exam, score, minutes_ago=0):
    """Completed session with a stored score, bypassing the submission flow."""
    moment = timezone.now() - datetime.timedelta(minutes=minutes_ago)
    score = Decimal(score)
    percentage = (score * 100 / exam.total_marks).quantize(Decimal("0.01")) if exam.total_marks else Decimal("0.00")
    return ExamSession.objects.create(
        student=student,
        exam=exam,
        status=ExamSession.Status.COMPLETED,
        score=score,
        percentage=percentage,
        started_at=moment - datetime.timedelta(minutes=30),
        completed_at=moment,
    )
