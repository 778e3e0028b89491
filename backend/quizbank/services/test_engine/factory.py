"""Test creation: dedup check, pool sampling and slot materialization."""

import random
from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from quizbank.core.app_exceptions import already_exists, invalid_input
from quizbank.core.logging import get_logger
from quizbank.models.test_session import TestQuestion, TestSession, TestStatus
from quizbank.schemas.test_session import TestCreate
from quizbank.services.test_engine.filters import parse_filter, resolve_pool

logger = get_logger(__name__)


def sample_questions(pool: Sequence[UUID], count: int, rng: random.Random) -> list[UUID]:
    """
    Draw ``count`` distinct IDs from the pool uniformly without replacement.

    The pool is shuffled in a copy and the prefix is taken, so the returned
    order is the slot order.
    """
    shuffled = list(pool)
    rng.shuffle(shuffled)
    return shuffled[:count]


def has_active_test(db: Session, user_id: UUID, fingerprint: str) -> bool:
    stmt = select(TestSession.id).where(
        TestSession.user_id == user_id,
        TestSession.filter_fingerprint == fingerprint,
        TestSession.status == TestStatus.ACTIVE,
        TestSession.is_deleted.is_(False),
    )
    return db.scalars(stmt).first() is not None


def create_test(
    db: Session,
    user_id: UUID,
    params: TestCreate,
    rng: random.Random,
) -> TestSession:
    """
    Create a new active test for the user.

    Args:
        db: Database session
        user_id: Owner of the new test
        params: Filter descriptor, language and question count
        rng: Random source for sampling

    Returns:
        The persisted test with its slots

    Raises:
        AppError: INVALID_FIELD_VALUE / MISSING_FIELD for a bad filter,
            ALREADY_EXISTS when an active test with the same filter exists,
            NOT_FOUND for an unknown category or topic,
            INVALID_INPUT when the pool is smaller than questions_count
    """
    test_filter = parse_filter(params.filter_type, params.filter_id, params.lang)
    fingerprint = test_filter.fingerprint

    if has_active_test(db, user_id, fingerprint):
        raise already_exists("An active test with the same filter already exists")

    pool = resolve_pool(db, user_id, test_filter)
    if len(pool) < params.questions_count:
        raise invalid_input(
            "Not enough questions available for this filter",
            available_count=len(pool),
            requested_count=params.questions_count,
        )

    selected = sample_questions(pool, params.questions_count, rng)

    test = TestSession(
        user_id=user_id,
        filter_type=test_filter.filter_type,
        filter_id=test_filter.filter_id,
        lang=test_filter.lang,
        filter_fingerprint=fingerprint,
        total_questions=len(selected),
        correct_count=0,
        status=TestStatus.ACTIVE,
        score_percent=None,
    )
    test.questions = [
        TestQuestion(question_id=question_id, question_order=order)
        for order, question_id in enumerate(selected, start=1)
    ]
    db.add(test)

    try:
        db.commit()
    except IntegrityError:
        # Lost a race against a concurrent create for the same filter
        db.rollback()
        raise already_exists("An active test with the same filter already exists") from None

    db.refresh(test)
    logger.info(
        "Test created",
        extra={
            "event": "test_created",
            "test_id": str(test.id),
            "user_id": str(user_id),
            "filter_fingerprint": fingerprint,
            "total_questions": test.total_questions,
        },
    )
    return test
