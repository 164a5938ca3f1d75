"""
ExamHub Catalog Package

Prüfungskatalog mit Prüfungen, Fächern, Fragen und Antwortoptionen.
Wird über den Django Admin gepflegt und von den Session-Services nur gelesen.

Struktur:
- models.py: Exam, ExamSubject, Question, QuestionOption
- services.py: ExamCatalog für den lesenden Zugriff
- serializers.py / views.py: Prüfungsliste und Fragenabruf für Studierende

Author: ExamHub Development Team
Created: 14.08.2025
Version: 1.0.0
"""
