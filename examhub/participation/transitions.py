"""
Exam Session State Machine

Explicit transition table and guarded transition functions for ExamSession:

    registered --activate--> active --seal--> completed

Every transition is a conditional UPDATE (compare-and-swap on status) that
affects at most one row. A transition function returns True if it moved the
session and False if the stored status did not match the expected source
state. No other code writes ExamSession.status.

Author: ExamHub Development Team
Version: 1.0.0
"""

import datetime
import logging
from typing import Optional

from django.utils import timezone

from ..exceptions import InvalidTransition
from .models import ExamSession

logger = logging.getLogger(__name__)

Status = ExamSession.Status

ALLOWED_TRANSITIONS = {
    Status.REGISTERED: frozenset({Status.ACTIVE}),
    Status.ACTIVE: frozenset({Status.COMPLETED}),
    Status.COMPLETED: frozenset(),
}


def _compare_and_swap(session_id: int, source: str, target: str, **changes) -> bool:
    if target not in ALLOWED_TRANSITIONS[source]:
        raise InvalidTransition(details={"from": source, "to": target})

    updated = ExamSession.objects.filter(pk=session_id, status=source).update(
        status=target, **changes
    )
    if updated:
        logger.info(f"Session {session_id}: {source} -> {target}")
    return updated == 1


def activate(session_id: int, moment: Optional[datetime.datetime] = None) -> bool:
    """registered -> active. The only transition into active."""
    return _compare_and_swap(
        session_id,
        Status.REGISTERED,
        Status.ACTIVE,
        started_at=moment or timezone.now(),
    )


def seal(session_id: int, moment: Optional[datetime.datetime] = None) -> bool:
    """
    active -> completed. The only transition into completed.

    Must run inside the submitting transaction, before answers are read.
    """
    return _compare_and_swap(
        session_id,
        Status.ACTIVE,
        Status.COMPLETED,
        completed_at=moment or timezone.now(),
    )
