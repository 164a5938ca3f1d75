"""
ExamHub Package - Prüfungsverwaltung und Prüfungsdurchführung

Dieses Paket enthält alle Module für die Prüfungsplattform.
Ermöglicht die Verwaltung von Prüfungen im Admin-Bereich sowie die
Durchführung, Bewertung und Auswertung von Prüfungsversuchen über die API.

Features:
- Prüfungskatalog mit Fächern, Fragen und Antwortoptionen
- Registrierung und Start von Prüfungsversuchen
- Automatische Bewertung von Multiple-Choice-Antworten
- Einmalige, nebenläufigkeitssichere Abgabe mit Punkteberechnung
- Rang- und Perzentilberechnung über die Prüfungskohorte

Struktur:
- catalog/: Prüfungen, Fächer, Fragen und Optionen
- participation/: Prüfungsversuche, Antworten, Bewertung und Ranking
- management/: Django Management Commands

Author: ExamHub Development Team
Created: 14.08.2025
Version: 1.0.0
"""
