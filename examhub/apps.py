"""
ExamHub Application Configuration

This module contains the Django application configuration for the ExamHub system.
It defines the application's metadata and default field configuration.

The ExamHub application provides the exam catalog, the exam session lifecycle
and the scoring and ranking of completed attempts.

Author: ExamHub Development Team
Version: 1.0.0
"""

from django.apps import AppConfig


class ExamhubConfig(AppConfig):
    """
    Configuration class for the ExamHub Django application.

    Attributes:
        default_auto_field: Default primary key field type for models
        name: Application name for Django registration
        verbose_name: Human-readable application name for admin interface
    """

    default_auto_field: str = "django.db.models.BigAutoField"
    name: str = "examhub"
    verbose_name: str = "ExamHub"
