"""Peek-next and answer submission for active tests."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from quizbank.common.time import utcnow
from quizbank.core.app_exceptions import conflict, not_found
from quizbank.core.logging import get_logger
from quizbank.models.test_session import TestQuestion, TestQuestionAnswer, TestSession
from quizbank.schemas.test_session import (
    AnswerOption,
    AnswerResultOut,
    CurrentQuestionOut,
    QuestionInfo,
)
from quizbank.services import content
from quizbank.services.test_engine.access import (
    answered_count,
    get_owned_test,
    unanswered_count,
)
from quizbank.services.test_engine.state import (
    TestEvent,
    ensure_active,
    finish_test,
    is_exact_match,
    score_percent,
)

logger = get_logger(__name__)


def get_current_question(db: Session, test_id: UUID, user_id: UUID) -> CurrentQuestionOut:
    """Lowest-order unanswered slot of an active test."""
    test = get_owned_test(db, test_id, user_id)
    ensure_active(test)

    stmt = (
        select(TestQuestion)
        .where(TestQuestion.test_id == test.id, TestQuestion.answered_at.is_(None))
        .order_by(TestQuestion.question_order)
        .limit(1)
    )
    slot = db.scalars(stmt).first()
    if slot is None:
        raise not_found("No unanswered questions left in this test")

    question = content.get_question(db, slot.question_id)
    if question is None:
        raise not_found("Question not found")

    options = content.answers_for_question(db, question.id)
    correct_total = sum(1 for option in options if option.is_correct)

    return CurrentQuestionOut(
        order=slot.question_order,
        question=QuestionInfo(
            id=question.id,
            name=question.name,
            content=question.content,
            lang=question.lang,
        ),
        answers=[AnswerOption(id=option.id, value=option.value) for option in options],
        multiple_answers=correct_total > 1,
    )


def claim_slot(
    db: Session,
    test_id: UUID,
    question_id: UUID,
    is_correct: bool,
    now: datetime,
) -> bool:
    """
    Mark a slot answered if nobody has answered it yet.

    Returns False when the slot was already answered; exactly one caller can
    win this update for a given slot.
    """
    result = db.execute(
        update(TestQuestion)
        .where(
            TestQuestion.test_id == test_id,
            TestQuestion.question_id == question_id,
            TestQuestion.answered_at.is_(None),
        )
        .values(is_correct=is_correct, answered_at=now)
    )
    return result.rowcount == 1


def submit_answer(
    db: Session,
    test_id: UUID,
    user_id: UUID,
    question_id: UUID,
    answer_ids: list[UUID],
) -> AnswerResultOut:
    """
    Record the answer for one slot and auto-complete the test on the last slot.

    Everything happens in one transaction; any error rolls it back.

    Raises:
        AppError: NOT_FOUND (test or slot), FORBIDDEN, INVALID_STATE,
            CONFLICT (slot already answered)
    """
    try:
        test = get_owned_test(db, test_id, user_id, for_update=True)
        ensure_active(test)

        slot = db.get(TestQuestion, (test.id, question_id))
        if slot is None:
            raise not_found("Question is not part of this test", question_id=str(question_id))

        question = content.get_question(db, question_id)
        options = content.answers_for_question(db, question_id)
        correct_ids = {option.id for option in options if option.is_correct}

        # Options of other questions make the selection wrong; unknown IDs are not stored
        submitted = list(dict.fromkeys(answer_ids))
        is_correct = is_exact_match(submitted, correct_ids)
        stored = content.existing_answer_ids(db, submitted)
        now = utcnow()

        if not claim_slot(db, test.id, question_id, is_correct, now):
            logger.warning(
                "Answer rejected: question already answered",
                extra={
                    "event": "test_answer_conflict",
                    "test_id": str(test.id),
                    "question_id": str(question_id),
                },
            )
            raise conflict("Question has already been answered")

        db.add_all(
            TestQuestionAnswer(test_id=test.id, question_id=question_id, answer_id=answer_id)
            for answer_id in submitted
            if answer_id in stored
        )
        if is_correct:
            db.execute(
                update(TestSession)
                .where(TestSession.id == test.id)
                .values(correct_count=TestSession.correct_count + 1)
            )
        db.flush()
        db.refresh(test)

        completed = False
        final_score = None
        if unanswered_count(db, test.id) == 0:
            final_score = score_percent(test.correct_count, test.total_questions)
            finish_test(db, test, TestEvent.LAST_SLOT_ANSWERED, final_score, now)
            completed = True

        answered = answered_count(db, test.id)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(
        "Answer recorded",
        extra={
            "event": "test_answer_recorded",
            "test_id": str(test.id),
            "user_id": str(user_id),
            "question_id": str(question_id),
            "is_correct": is_correct,
        },
    )
    if completed:
        logger.info(
            "Test completed",
            extra={
                "event": "test_completed",
                "test_id": str(test.id),
                "user_id": str(user_id),
                "score_percent": final_score,
            },
        )

    return AnswerResultOut(
        is_correct=is_correct,
        correct_answer_ids=sorted(correct_ids, key=str),
        explanation=question.explanation if question is not None else "",
        test_completed=completed,
        answered_count=answered,
        correct_count=test.correct_count,
        score_percent=final_score,
    )
