"""
URL configuration for examhub_backend project.

- /admin/: Django admin (Jazzmin theme)
- /api/examhub/: ExamHub REST API
"""

from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/examhub/", include("examhub.urls")),
]
