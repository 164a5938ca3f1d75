"""
ExamHub Custom Exceptions

This module provides the exception classes raised by the exam catalog and the
exam session services. The exceptions follow a hierarchical structure so that
callers can handle a whole class of outcomes (for example every state conflict)
at once, and so that the API layer can render them uniformly.

State-conflict exceptions (DuplicateRegistration, SessionClosed, NotCompleted,
InvalidState) are deterministic results of the session state machine. They are
expected outcomes for API clients, not defects.

Author: ExamHub Development Team
Version: 1.0.0
"""

import logging
from typing import Optional, Dict, Any

from django.db import DatabaseError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class ExamHubException(Exception):
    """
    Base exception class for all ExamHub errors.

    Attributes:
        message (str): Human-readable error message
        status_code (int): HTTP status code used by the API layer
        error_code (str): Stable machine-readable error identifier
        details (Dict[str, Any]): Additional error details

    Example:
        >>> try:
        ...     scoring.submit(student, session_id)
        ... except ExamHubException as e:
        ...     logger.info(f"Submission rejected: {e.error_code}")
    """

    default_message = "ExamHub error"
    default_status_code = status.HTTP_400_BAD_REQUEST
    default_error_code = "ExamHubError"

    def __init__(
        self,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message or self.default_message
        self.status_code = status_code or self.default_status_code
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary for serialization.

        Returns:
            Dictionary representation of the exception
        """
        return {
            "error": self.message,
            "error_code": self.error_code,
            "details": self.details,
        }


# --- Validation ---


class InvalidAnswer(ExamHubException):
    """Raised when an answer payload is missing, malformed or does not fit the question."""

    default_message = "Answer data is required"
    default_status_code = status.HTTP_400_BAD_REQUEST
    default_error_code = "InvalidAnswer"


# --- Ownership / lookup ---


class NotRegistered(ExamHubException):
    """Raised when the caller has no session for the requested exam or session id."""

    default_message = "Not registered for this exam"
    default_status_code = status.HTTP_403_FORBIDDEN
    default_error_code = "NotRegistered"


class ExamNotFound(ExamHubException):
    default_message = "Exam not found"
    default_status_code = status.HTTP_404_NOT_FOUND
    default_error_code = "ExamNotFound"


class UnknownQuestion(ExamHubException):
    """Raised when a question id does not belong to the session's exam."""

    default_message = "Question does not belong to this exam"
    default_status_code = status.HTTP_404_NOT_FOUND
    default_error_code = "UnknownQuestion"


# --- State conflicts ---


class StateConflict(ExamHubException):
    """
    Base class for outcomes of the session state machine.

    These are returned with HTTP 409 and logged at INFO level only.
    """

    default_message = "Session state does not allow this operation"
    default_status_code = status.HTTP_409_CONFLICT
    default_error_code = "StateConflict"


class DuplicateRegistration(StateConflict):
    default_message = "Already registered for this exam"
    default_error_code = "DuplicateRegistration"


class SessionClosed(StateConflict):
    """Raised when a session does not accept answers (not started or already completed)."""

    default_message = "This exam session does not accept answers"
    default_error_code = "SessionClosed"


class SessionNotStarted(SessionClosed):
    default_message = "This exam session has not been started"
    default_error_code = "SessionNotStarted"


class InvalidState(StateConflict):
    default_message = "This exam session is already completed"
    default_error_code = "InvalidState"


class NotCompleted(StateConflict):
    default_message = "This exam session is not completed yet"
    default_error_code = "NotCompleted"


class InvalidTransition(StateConflict):
    """Raised by the transition guards when an edge is not part of the state machine."""

    default_message = "Illegal session state transition"
    default_error_code = "InvalidTransition"


# --- Temporal precondition ---


class ExamNotActive(ExamHubException):
    default_message = "Exam not active yet"
    default_status_code = status.HTTP_400_BAD_REQUEST
    default_error_code = "ExamNotActive"


# --- Storage ---


class ServerError(ExamHubException):
    """Raised (or rendered) when the storage layer fails or times out."""

    default_message = "Server error"
    default_status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_error_code = "ServerError"


def examhub_exception_handler(exc, context):
    """
    DRF exception handler rendering ExamHub exceptions and storage failures.

    Everything else is delegated to DRF's default handler.

    Args:
        exc: The raised exception
        context: DRF handler context (view, request, ...)

    Returns:
        Response or None (None lets Django handle the exception)
    """
    if isinstance(exc, DatabaseError):
        view = context.get("view")
        logger.error(f"Storage failure in {view.__class__.__name__}: {exc}")
        exc = ServerError()

    if isinstance(exc, ExamHubException):
        if isinstance(exc, StateConflict):
            logger.info(f"State conflict: {exc.error_code} - {exc.message}")
        elif exc.status_code >= 500:
            logger.error(f"{exc.error_code}: {exc.message}")
        return Response(exc.to_dict(), status=exc.status_code)

    return exception_handler(exc, context)
