import logging

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from ...catalog.models import Exam, ExamSubject, Question, QuestionOption
from ...participation.services import SessionRegistry

logger = logging.getLogger(__name__)

DEMO_EXAM_TITLE = "Demo Exam"

# (Fragetext, Punkte, [(Option, korrekt), ...])
DEMO_QUESTIONS = [
    (
        "Which planet is known as the red planet?",
        5,
        [("Mars", True), ("Venus", False), ("Jupiter", False), ("Mercury", False)],
    ),
    (
        "Which of the following numbers are prime?",
        5,
        [("9", False), ("7", True), ("13", True), ("21", False)],
    ),
]


class Command(BaseCommand):
    help = "Erzeugt eine aktive Demo-Prüfung (10 Punkte, zwei Multiple-Choice-Fragen) und optional Demo-Studenten."

    def add_arguments(self, parser):
        parser.add_argument(
            "--duration",
            type=int,
            default=120,
            help="Dauer des Prüfungsfensters in Minuten (Standard: 120).",
        )
        parser.add_argument(
            "--students",
            type=int,
            default=0,
            help="Anzahl Demo-Studenten, die angelegt und registriert werden.",
        )
        parser.add_argument(
            "--reset",
            action="store_true",
            help="Löscht eine vorhandene Demo-Prüfung inklusive Sessions vor dem Anlegen.",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options["reset"]:
            deleted, _ = Exam.objects.filter(title=DEMO_EXAM_TITLE).delete()
            if deleted:
                self.stdout.write(self.style.WARNING(f"{deleted} Objekte der alten Demo-Prüfung gelöscht."))

        exam = Exam.objects.filter(title=DEMO_EXAM_TITLE).first()
        if exam is None:
            exam = self._create_exam(options["duration"])
            self.stdout.write(self.style.SUCCESS(f"Demo-Prüfung '{exam.title}' (ID {exam.pk}) angelegt."))
        else:
            self.stdout.write(f"Demo-Prüfung '{exam.title}' (ID {exam.pk}) existiert bereits.")

        if options["students"] > 0:
            students = self._create_students(options["students"])
            outcome = SessionRegistry().register_many(exam.pk, [s.pk for s in students])
            self.stdout.write(
                self.style.SUCCESS(
                    f"{len(outcome['registered'])} Studenten registriert, "
                    f"{len(outcome['skipped'])} bereits registriert."
                )
            )

    def _create_exam(self, duration):
        exam = Exam.objects.create(
            title=DEMO_EXAM_TITLE,
            exam_type="DEMO",
            category="General Knowledge",
            description="Two multiple-choice questions worth 5 marks each.",
            total_marks=sum(marks for _, marks, _ in DEMO_QUESTIONS),
            duration=duration,
            starts_at=timezone.now(),
            status=Exam.Status.ACTIVE,
        )
        subject = ExamSubject.objects.create(exam=exam, subject="General", marks=exam.total_marks)

        for order, (text, marks, options) in enumerate(DEMO_QUESTIONS, start=1):
            question = Question.objects.create(
                exam=exam,
                subject=subject,
                question_text=text,
                question_type=Question.QuestionType.MCQ,
                marks=marks,
                order=order,
            )
            QuestionOption.objects.bulk_create(
                QuestionOption(
                    question=question,
                    option_text=option_text,
                    is_correct=is_correct,
                    option_order=index,
                )
                for index, (option_text, is_correct) in enumerate(options, start=1)
            )
        logger.info(f"Seeded demo exam {exam.pk} with {len(DEMO_QUESTIONS)} questions")
        return exam

    def _create_students(self, count):
        User = get_user_model()
        students = []
        for index in range(1, count + 1):
            user, created = User.objects.get_or_create(
                username=f"demo_student_{index}",
                defaults={"email": f"demo_student_{index}@example.com"},
            )
            if created:
                user.set_password("demo-password")
                user.save(update_fields=["password"])
            students.append(user)
        return students
