"""
ExamHub Application Models Registry

This module serves as the central models registry for the ExamHub application.
It imports and exposes all models from the logical submodules (catalog, participation)
to ensure they are properly registered with Django's ORM system.

Architecture:
- catalog/: Exams, subjects, questions and options
- participation/: Exam sessions and answer records

Author: ExamHub Development Team
Version: 1.0.0
"""

# Import all catalog models for registration with Django ORM
from .catalog.models import *

# Import all participation models for registration with Django ORM
from .participation.models import *
