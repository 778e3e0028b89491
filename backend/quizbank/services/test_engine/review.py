"""Read-only reconstruction of a finished test."""

from collections import defaultdict
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from quizbank.core.app_exceptions import invalid_state, not_found
from quizbank.models.test_session import TestQuestion, TestQuestionAnswer
from quizbank.schemas.test_session import (
    AnswerOptionWithCorrectness,
    QuestionInfoWithExplanation,
    ReviewQuestionOut,
    TestReviewOut,
)
from quizbank.services import content
from quizbank.services.test_engine.access import get_owned_test


def selected_answers(db: Session, test_id: UUID) -> dict[UUID, list[UUID]]:
    """Chosen answer IDs per question for a test."""
    stmt = select(TestQuestionAnswer.question_id, TestQuestionAnswer.answer_id).where(
        TestQuestionAnswer.test_id == test_id
    )
    grouped: dict[UUID, list[UUID]] = defaultdict(list)
    for question_id, answer_id in db.execute(stmt):
        grouped[question_id].append(answer_id)
    return grouped


def review_test(db: Session, test_id: UUID, user_id: UUID) -> TestReviewOut:
    """
    Full per-slot review of a completed or abandoned test.

    Raises:
        AppError: NOT_FOUND (test or one of its questions), FORBIDDEN, or
            INVALID_STATE while the test is active
    """
    test = get_owned_test(db, test_id, user_id)
    if not test.status.is_terminal:
        raise invalid_state("Test must be completed or abandoned to review", status=test.status.value)

    slots = list(
        db.scalars(
            select(TestQuestion)
            .where(TestQuestion.test_id == test.id)
            .order_by(TestQuestion.question_order)
        )
    )
    question_ids = [slot.question_id for slot in slots]
    questions = content.get_questions(db, question_ids)
    options = content.answers_for_questions(db, question_ids)
    selections = selected_answers(db, test.id)

    items = []
    for slot in slots:
        question = questions.get(slot.question_id)
        if question is None:
            raise not_found("Question not found", question_id=str(slot.question_id))
        items.append(
            ReviewQuestionOut(
                order=slot.question_order,
                question=QuestionInfoWithExplanation(
                    id=question.id,
                    name=question.name,
                    content=question.content,
                    lang=question.lang,
                    explanation=question.explanation or "",
                ),
                answers=[
                    AnswerOptionWithCorrectness(
                        id=option.id, value=option.value, is_correct=option.is_correct
                    )
                    for option in options.get(slot.question_id, [])
                ],
                selected_answer_ids=sorted(selections.get(slot.question_id, []), key=str),
                is_correct=bool(slot.is_correct),
            )
        )

    return TestReviewOut(
        id=test.id,
        filter_type=test.filter_type,
        filter_id=test.filter_id,
        lang=test.lang,
        total_questions=test.total_questions,
        correct_count=test.correct_count,
        score_percent=test.score_percent or 0,
        status=test.status,
        questions=items,
    )
