"""Explicit termination (abandon) of an active test."""

from uuid import UUID

from sqlalchemy.orm import Session

from quizbank.common.time import utcnow
from quizbank.core.logging import get_logger
from quizbank.schemas.test_session import CompleteTestOut
from quizbank.services.test_engine.access import answered_count, get_owned_test
from quizbank.services.test_engine.state import TestEvent, finish_test, next_status, score_percent

logger = get_logger(__name__)


def abandon_score(correct: int, answered: int) -> int:
    """Score of an abandoned test, over the answered slots only."""
    if answered == 0:
        return 0
    return score_percent(correct, answered)


def abandon_test(db: Session, test_id: UUID, user_id: UUID) -> CompleteTestOut:
    """
    Terminate an active test and score what was answered so far.

    Raises:
        AppError: NOT_FOUND, FORBIDDEN, or INVALID_STATE when the test is
            already completed or abandoned
    """
    try:
        test = get_owned_test(db, test_id, user_id, for_update=True)
        next_status(test.status, TestEvent.ABANDON)

        answered = answered_count(db, test.id)
        score = abandon_score(test.correct_count, answered)
        status = finish_test(db, test, TestEvent.ABANDON, score, utcnow())
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(
        "Test abandoned",
        extra={
            "event": "test_abandoned",
            "test_id": str(test.id),
            "user_id": str(user_id),
            "answered_count": answered,
            "score_percent": score,
        },
    )
    return CompleteTestOut(
        status=status,
        answered_count=answered,
        correct_count=test.correct_count,
        score_percent=score,
    )
