"""
ExamHub Participation Services

Services für den Lebenszyklus eines Prüfungsversuchs:
- SessionRegistry: Registrierung und Start
- AnswerLedger: Speichern und Bewerten von Antworten
- ScoringEngine: Einmalige Abgabe und Punkteberechnung
- RankingService: Rang und Perzentil in der Kohorte
- ResultService: Ergebnisliste, Detailergebnis und Dashboard

Author: ExamHub Development Team
Version: 1.0.0
"""

from .registry import SessionRegistry, ExamAttemptView
from .ledger import AnswerLedger, AnswerPayload, grade
from .scoring import ScoringEngine, SubmissionResult, compute_percentage
from .ranking import RankingService, RankResult, compute_rank
from .results import ResultService, StudentSummary, ExamResult
