import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Exam",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=255, verbose_name="Exam Title")),
                ("exam_type", models.CharField(help_text="Exam type used for filtering, e.g. 'NEET' or 'JEE'", max_length=50, verbose_name="Exam Type")),
                ("category", models.CharField(blank=True, max_length=100, verbose_name="Category")),
                ("description", models.TextField(blank=True)),
                ("total_marks", models.PositiveIntegerField(help_text="Maximum achievable marks. Used to compute the percentage.", verbose_name="Total Marks")),
                ("duration", models.PositiveIntegerField(help_text="Length of the exam window in minutes.", verbose_name="Duration (minutes)")),
                ("starts_at", models.DateTimeField(help_text="Opening time of the exam window.", verbose_name="Starts At")),
                ("status", models.CharField(choices=[("draft", "Draft"), ("scheduled", "Scheduled"), ("active", "Active"), ("closed", "Closed")], db_index=True, default="draft", max_length=10)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Exam",
                "verbose_name_plural": "Exams",
                "ordering": ["-starts_at", "title"],
                "db_table": "examhub_exam",
            },
        ),
        migrations.CreateModel(
            name="ExamSubject",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("subject", models.CharField(max_length=100)),
                ("marks", models.PositiveIntegerField(default=0)),
                ("exam", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="subjects", to="examhub.exam")),
            ],
            options={
                "verbose_name": "Exam Subject",
                "verbose_name_plural": "Exam Subjects",
                "ordering": ["exam", "subject"],
                "db_table": "examhub_exam_subject",
                "unique_together": {("exam", "subject")},
            },
        ),
        migrations.CreateModel(
            name="Question",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("question_text", models.TextField()),
                ("question_type", models.CharField(choices=[("mcq", "Multiple Choice"), ("descriptive", "Descriptive")], default="mcq", max_length=20)),
                ("difficulty", models.CharField(choices=[("easy", "Easy"), ("medium", "Medium"), ("hard", "Hard")], default="medium", max_length=10)),
                ("marks", models.PositiveIntegerField(default=1)),
                ("explanation", models.TextField(blank=True)),
                ("order", models.PositiveIntegerField(default=0)),
                ("exam", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="questions", to="examhub.exam")),
                ("subject", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="questions", to="examhub.examsubject")),
            ],
            options={
                "verbose_name": "Question",
                "verbose_name_plural": "Questions",
                "ordering": ["exam", "order", "id"],
                "db_table": "examhub_question",
            },
        ),
        migrations.CreateModel(
            name="QuestionOption",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("option_text", models.CharField(max_length=500)),
                ("is_correct", models.BooleanField(default=False)),
                ("option_order", models.PositiveSmallIntegerField(default=0)),
                ("question", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="options", to="examhub.question")),
            ],
            options={
                "verbose_name": "Question Option",
                "verbose_name_plural": "Question Options",
                "ordering": ["question", "option_order", "id"],
                "db_table": "examhub_question_option",
            },
        ),
        migrations.CreateModel(
            name="ExamSession",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("status", models.CharField(choices=[("registered", "Registriert"), ("active", "Gestartet"), ("completed", "Abgeschlossen")], default="registered", max_length=15)),
                ("score", models.DecimalField(blank=True, decimal_places=2, help_text="Gesamtpunktzahl. Wird bei der Abgabe einmalig berechnet.", max_digits=7, null=True)),
                ("percentage", models.DecimalField(blank=True, decimal_places=2, max_digits=6, null=True)),
                ("registered_at", models.DateTimeField(auto_now_add=True)),
                ("started_at", models.DateTimeField(blank=True, null=True)),
                ("completed_at", models.DateTimeField(blank=True, null=True)),
                ("exam", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="sessions", to="examhub.exam")),
                ("student", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="exam_sessions", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "verbose_name": "Exam Session",
                "verbose_name_plural": "Exam Sessions",
                "ordering": ["-registered_at"],
                "db_table": "examhub_exam_session",
                "indexes": [
                    models.Index(fields=["exam", "status", "score"], name="examhub_sess_exam_status_idx"),
                    models.Index(fields=["student", "status", "completed_at"], name="examhub_sess_student_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("student", "exam"), name="unique_session_per_student_exam"),
                ],
            },
        ),
        migrations.CreateModel(
            name="AnswerRecord",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("selected_option_ids", models.JSONField(blank=True, null=True)),
                ("answer_text", models.TextField(blank=True, null=True)),
                ("is_correct", models.BooleanField(blank=True, null=True)),
                ("answered_at", models.DateTimeField(auto_now=True)),
                ("question", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="answers", to="examhub.question")),
                ("session", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="answers", to="examhub.examsession")),
            ],
            options={
                "verbose_name": "Answer Record",
                "verbose_name_plural": "Answer Records",
                "ordering": ["session", "question"],
                "db_table": "examhub_answer_record",
                "constraints": [
                    models.UniqueConstraint(fields=("session", "question"), name="unique_answer_per_session_question"),
                ],
            },
        ),
    ]
