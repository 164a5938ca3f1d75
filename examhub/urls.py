"""
ExamHub Application URL Configuration

This module defines the URL routing structure for the ExamHub application.
Each functional area has its own URL namespace.

URL Structure:
- /api/examhub/token/: Authentication endpoints (JWT token management)
- /api/examhub/exams/: Exam listing, registration, start and questions
- /api/examhub/sessions/: Answers, submission and rank of an exam session
- /api/examhub/results/: Student results
- /api/examhub/dashboard/: Student dashboard summary and ongoing exams

Author: ExamHub Development Team
Version: 1.0.0
"""

from typing import List
from django.urls import path, include, URLPattern
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView, TokenVerifyView

from .catalog import views as catalog_views
from .participation import views as participation_views

app_name = "examhub"

# --- Exam URL Patterns ---

exams_urlpatterns: List[URLPattern] = [
    # Student exam endpoints
    path("", catalog_views.PublishedExamsView.as_view(), name="exam-list"),
    path("<int:exam_id>/register/", participation_views.RegisterExamView.as_view(), name="register-exam"),
    path("<int:exam_id>/start/", participation_views.StartExamView.as_view(), name="start-exam"),
    path("<int:exam_id>/questions/", participation_views.ExamQuestionsView.as_view(), name="exam-questions"),

    # Staff endpoints (requires staff privileges)
    path("<int:exam_id>/leaderboard/", participation_views.ExamLeaderboardView.as_view(), name="exam-leaderboard"),
    path("<int:exam_id>/registrations/", participation_views.BulkRegistrationView.as_view(), name="exam-registrations"),
]

# --- Session URL Patterns ---

sessions_urlpatterns: List[URLPattern] = [
    path(
        "<int:session_id>/answers/<int:question_id>/",
        participation_views.RecordAnswerView.as_view(),
        name="record-answer",
    ),
    path("<int:session_id>/submit/", participation_views.SubmitExamView.as_view(), name="submit-session"),
    path("<int:session_id>/rank/", participation_views.SessionRankView.as_view(), name="session-rank"),
]

# --- Result URL Patterns ---

results_urlpatterns: List[URLPattern] = [
    path("my/", participation_views.MyResultsView.as_view(), name="my-results"),
    path("<int:exam_id>/", participation_views.ExamResultView.as_view(), name="exam-result"),
]

# --- Main URL Configuration for ExamHub Application ---

urlpatterns: List[URLPattern] = [
    # Authentication endpoints (JWT token management)
    path("token/", TokenObtainPairView.as_view(), name="token_obtain_pair"),
    path("token/refresh/", TokenRefreshView.as_view(), name="token_refresh"),
    path("token/verify/", TokenVerifyView.as_view(), name="token_verify"),

    path("exams/", include((exams_urlpatterns, "exams"))),
    path("sessions/", include((sessions_urlpatterns, "sessions"))),
    path("results/", include((results_urlpatterns, "results"))),
    path("dashboard/summary/", participation_views.DashboardSummaryView.as_view(), name="dashboard-summary"),
    path("dashboard/ongoing/", participation_views.OngoingExamsView.as_view(), name="dashboard-ongoing"),
]
