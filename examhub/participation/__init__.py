"""
ExamHub Participation Package

Dieses Paket enthält den Lebenszyklus der Prüfungsversuche:
Registrierung, Start, Antworten, Abgabe, Bewertung und Ranking.

Struktur:
- models.py: ExamSession und AnswerRecord
- transitions.py: Zustandsmaschine registered -> active -> completed
- services/: Registry, Ledger, Scoring, Ranking und Ergebnisse
- serializers.py: API-Serialisierung
- views/: Studierenden- und Staff-Views

Author: ExamHub Development Team
Created: 14.08.2025
Version: 1.0.0
"""
