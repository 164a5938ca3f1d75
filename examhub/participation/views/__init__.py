"""
ExamHub Participation Views Package

Dieses Paket enthält alle Views für die Prüfungsdurchführung.

Features:
- Session-Views: Registrierung, Start, Fragen, Antworten, Abgabe, Rang
- Ergebnis-Views: Ergebnisliste, Detailergebnis, Dashboard
- Staff-Views: Rangliste und Sammelregistrierung

Author: ExamHub Development Team
Created: 14.08.2025
Version: 1.0.0
"""

from .session_views import *
from .result_views import *
from .staff_views import *
