"""Status transitions and scoring rules for test sessions."""

from collections.abc import Iterable
from datetime import datetime
from enum import Enum
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.orm import Session

from quizbank.core.app_exceptions import invalid_state
from quizbank.models.test_session import TestSession, TestStatus


class TestEvent(str, Enum):
    """Events that move a test out of ACTIVE."""

    __test__ = False

    LAST_SLOT_ANSWERED = "last_slot_answered"
    ABANDON = "abandon"


TRANSITIONS: dict[tuple[TestStatus, TestEvent], TestStatus] = {
    (TestStatus.ACTIVE, TestEvent.LAST_SLOT_ANSWERED): TestStatus.COMPLETED,
    (TestStatus.ACTIVE, TestEvent.ABANDON): TestStatus.ABANDONED,
}


def next_status(current: TestStatus, event: TestEvent) -> TestStatus:
    """Target status for an event, or INVALID_STATE if the move is not allowed."""
    try:
        return TRANSITIONS[(current, event)]
    except KeyError:
        raise invalid_state(
            f"Cannot apply {event.value} to a {current.value} test",
            status=current.value,
        ) from None


def ensure_active(test: TestSession) -> None:
    if test.status is not TestStatus.ACTIVE:
        raise invalid_state("Test is not active", status=test.status.value)


def score_percent(correct: int, denominator: int) -> int:
    """floor(correct / denominator * 100); truncates, never rounds."""
    if denominator <= 0:
        return 0
    return correct * 100 // denominator


def is_exact_match(submitted: Iterable[UUID], correct: Iterable[UUID]) -> bool:
    """A slot scores only when the chosen set equals the correct set."""
    return set(submitted) == set(correct)


def finish_test(
    db: Session,
    test: TestSession,
    event: TestEvent,
    score: int,
    now: datetime,
) -> TestStatus:
    """Move an ACTIVE test to its terminal status inside the caller's transaction.

    The update is conditioned on the row still being ACTIVE, so a concurrent
    terminal transition makes this one fail with INVALID_STATE.
    """
    target = next_status(test.status, event)
    result = db.execute(
        update(TestSession)
        .where(TestSession.id == test.id, TestSession.status == TestStatus.ACTIVE)
        .values(status=target, score_percent=score, completed_at=now)
    )
    if result.rowcount != 1:
        raise invalid_state("Test is no longer active")
    db.refresh(test)
    return target
