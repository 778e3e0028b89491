"""Tests for peek-next and answer submission."""

import uuid

import pytest
from sqlalchemy import func, select

from quizbank.common.time import utcnow
from quizbank.core.app_exceptions import AppError
from quizbank.models.test_session import TestQuestionAnswer, TestStatus
from quizbank.services.test_engine import (
    abandon_test,
    get_current_question,
    get_test_detail,
    submit_answer,
)
from quizbank.services.test_engine.answers import claim_slot
from tests.helpers.seed import correct_ids, start_topic_test, wrong_ids


def selected_rows(db, test_id) -> int:
    return db.scalar(
        select(func.count())
        .select_from(TestQuestionAnswer)
        .where(TestQuestionAnswer.test_id == test_id)
    )


# ============================================================================
# Peek-next
# ============================================================================


def test_current_question_is_lowest_unanswered_slot(db, test_user):
    test, slots, questions = start_topic_test(db, test_user, pool_size=3)

    current = get_current_question(db, test.id, test_user.id)
    assert current.order == 1
    assert current.question.id == slots[0].question_id

    first = questions[slots[0].question_id]
    submit_answer(db, test.id, test_user.id, first.id, correct_ids(first))

    current = get_current_question(db, test.id, test_user.id)
    assert current.order == 2
    assert current.question.id == slots[1].question_id


def test_current_question_hides_correctness_and_explanation(db, test_user):
    test, slots, questions = start_topic_test(db, test_user, pool_size=1)

    current = get_current_question(db, test.id, test_user.id)
    payload = current.model_dump()

    assert "explanation" not in payload["question"]
    assert all(set(option) == {"id", "value"} for option in payload["answers"])
    assert {a["id"] for a in payload["answers"]} == {
        a.id for a in questions[slots[0].question_id].answers
    }


@pytest.mark.parametrize("correct, expected", [(1, False), (2, True)])
def test_multiple_answers_hint(db, test_user, correct, expected):
    test, _, _ = start_topic_test(db, test_user, pool_size=1, correct=correct)

    assert get_current_question(db, test.id, test_user.id).multiple_answers is expected


def test_current_question_of_finished_test_is_invalid_state(db, test_user):
    test, _, _ = start_topic_test(db, test_user, pool_size=2)
    abandon_test(db, test.id, test_user.id)

    with pytest.raises(AppError) as exc_info:
        get_current_question(db, test.id, test_user.id)
    assert exc_info.value.code == "INVALID_STATE"


def test_current_question_ownership(db, test_user, other_user):
    test, _, _ = start_topic_test(db, test_user)

    with pytest.raises(AppError) as exc_info:
        get_current_question(db, test.id, other_user.id)
    assert exc_info.value.code == "FORBIDDEN"

    with pytest.raises(AppError) as exc_info:
        get_current_question(db, uuid.uuid4(), test_user.id)
    assert exc_info.value.code == "NOT_FOUND"


# ============================================================================
# Submit
# ============================================================================


def test_correct_answer(db, test_user):
    test, slots, questions = start_topic_test(db, test_user, pool_size=3)
    question = questions[slots[0].question_id]

    result = submit_answer(db, test.id, test_user.id, question.id, correct_ids(question))

    assert result.is_correct is True
    assert set(result.correct_answer_ids) == set(correct_ids(question))
    assert result.explanation == "Because it is right"
    assert result.test_completed is False
    assert result.answered_count == 1
    assert result.correct_count == 1
    assert result.score_percent is None


def test_wrong_answer_does_not_count(db, test_user):
    test, slots, questions = start_topic_test(db, test_user, pool_size=3)
    question = questions[slots[0].question_id]

    result = submit_answer(db, test.id, test_user.id, question.id, wrong_ids(question)[:1])

    assert result.is_correct is False
    assert result.correct_count == 0
    assert result.answered_count == 1


def test_subset_of_correct_answers_is_wrong(db, test_user):
    test, slots, questions = start_topic_test(db, test_user, pool_size=1, correct=2)
    question = questions[slots[0].question_id]

    result = submit_answer(db, test.id, test_user.id, question.id, correct_ids(question)[:1])

    assert result.is_correct is False


def test_superset_of_correct_answers_is_wrong(db, test_user):
    test, slots, questions = start_topic_test(db, test_user, pool_size=1, correct=2)
    question = questions[slots[0].question_id]
    answer_ids = correct_ids(question) + wrong_ids(question)[:1]

    result = submit_answer(db, test.id, test_user.id, question.id, answer_ids)

    assert result.is_correct is False


def test_exact_multi_select_is_correct(db, test_user):
    test, slots, questions = start_topic_test(db, test_user, pool_size=1, correct=2)
    question = questions[slots[0].question_id]

    result = submit_answer(
        db, test.id, test_user.id, question.id, list(reversed(correct_ids(question)))
    )

    assert result.is_correct is True


def test_duplicate_answer_ids_are_collapsed(db, test_user):
    test, slots, questions = start_topic_test(db, test_user, pool_size=2)
    question = questions[slots[0].question_id]
    right = correct_ids(question)[0]

    result = submit_answer(db, test.id, test_user.id, question.id, [right, right])

    assert result.is_correct is True
    assert selected_rows(db, test.id) == 1


def test_answer_from_another_question_scores_incorrect(db, test_user):
    test, slots, questions = start_topic_test(db, test_user, pool_size=2)
    first = questions[slots[0].question_id]
    second = questions[slots[1].question_id]
    chosen = correct_ids(first) + correct_ids(second)[:1]

    result = submit_answer(db, test.id, test_user.id, first.id, chosen)

    assert result.is_correct is False
    assert result.correct_answer_ids == sorted(correct_ids(first), key=str)
    assert result.correct_count == 0
    assert selected_rows(db, test.id) == len(chosen)
    detail = get_test_detail(db, test.id, test_user.id)
    assert detail.answered_count == 1


def test_unknown_answer_ids_score_incorrect_and_are_not_stored(db, test_user):
    test, slots, questions = start_topic_test(db, test_user, pool_size=2)
    question = questions[slots[0].question_id]

    result = submit_answer(
        db, test.id, test_user.id, question.id, correct_ids(question) + [uuid.uuid4()]
    )

    assert result.is_correct is False
    assert selected_rows(db, test.id) == len(correct_ids(question))


def test_selected_answers_are_recorded(db, test_user):
    test, slots, questions = start_topic_test(db, test_user, pool_size=2, wrong=3)
    question = questions[slots[0].question_id]
    chosen = wrong_ids(question)[:2]

    submit_answer(db, test.id, test_user.id, question.id, chosen)

    stored = set(
        db.scalars(
            select(TestQuestionAnswer.answer_id).where(TestQuestionAnswer.test_id == test.id)
        )
    )
    assert stored == set(chosen)


def test_second_submission_for_slot_conflicts(db, test_user):
    test, slots, questions = start_topic_test(db, test_user, pool_size=3)
    question = questions[slots[0].question_id]
    submit_answer(db, test.id, test_user.id, question.id, correct_ids(question))

    with pytest.raises(AppError) as exc_info:
        submit_answer(db, test.id, test_user.id, question.id, correct_ids(question))

    assert exc_info.value.code == "CONFLICT"
    detail = get_test_detail(db, test.id, test_user.id)
    assert detail.correct_count == 1
    assert detail.answered_count == 1
    assert selected_rows(db, test.id) == 1


def test_slot_can_be_claimed_once(db, test_user):
    test, slots, _ = start_topic_test(db, test_user, pool_size=2)
    now = utcnow()

    assert claim_slot(db, test.id, slots[0].question_id, True, now) is True
    assert claim_slot(db, test.id, slots[0].question_id, False, now) is False
    db.rollback()


def test_question_outside_test_is_not_found(db, test_user):
    test, _, _ = start_topic_test(db, test_user, pool_size=2, count=1)

    with pytest.raises(AppError) as exc_info:
        submit_answer(db, test.id, test_user.id, uuid.uuid4(), [uuid.uuid4()])
    assert exc_info.value.code == "NOT_FOUND"


def test_submit_by_other_user_is_forbidden(db, test_user, other_user):
    test, slots, questions = start_topic_test(db, test_user)
    question = questions[slots[0].question_id]

    with pytest.raises(AppError) as exc_info:
        submit_answer(db, test.id, other_user.id, question.id, correct_ids(question))
    assert exc_info.value.code == "FORBIDDEN"


def test_submit_to_abandoned_test_is_invalid_state(db, test_user):
    test, slots, questions = start_topic_test(db, test_user)
    abandon_test(db, test.id, test_user.id)
    question = questions[slots[0].question_id]

    with pytest.raises(AppError) as exc_info:
        submit_answer(db, test.id, test_user.id, question.id, correct_ids(question))
    assert exc_info.value.code == "INVALID_STATE"


# ============================================================================
# Auto-completion
# ============================================================================


def test_answering_all_correctly_completes_with_full_score(db, test_user):
    """Topic with 5 questions, 3 requested, all answered correctly."""
    test, slots, questions = start_topic_test(db, test_user, pool_size=5, count=3)

    results = [
        submit_answer(
            db, test.id, test_user.id, slot.question_id, correct_ids(questions[slot.question_id])
        )
        for slot in slots
    ]

    assert [r.test_completed for r in results] == [False, False, True]
    final = results[-1]
    assert final.correct_count == 3
    assert final.answered_count == 3
    assert final.score_percent == 100

    db.refresh(test)
    assert test.status is TestStatus.COMPLETED
    assert test.score_percent == 100
    assert test.completed_at is not None


def test_completion_score_truncates(db, test_user):
    """1 of 3 correct is 33, 2 of 3 correct is 66 (floor, not rounding)."""
    test, slots, questions = start_topic_test(db, test_user, pool_size=3)
    answers = [
        correct_ids(questions[slots[0].question_id]),
        correct_ids(questions[slots[1].question_id]),
        wrong_ids(questions[slots[2].question_id])[:1],
    ]

    results = [
        submit_answer(db, test.id, test_user.id, slot.question_id, answer_ids)
        for slot, answer_ids in zip(slots, answers)
    ]

    assert results[-1].test_completed is True
    assert results[-1].score_percent == 66


def test_answers_in_any_order_complete_the_test(db, test_user):
    test, slots, questions = start_topic_test(db, test_user, pool_size=3)

    for slot in reversed(slots):
        result = submit_answer(
            db, test.id, test_user.id, slot.question_id, wrong_ids(questions[slot.question_id])[:1]
        )

    assert result.test_completed is True
    assert result.score_percent == 0


def test_no_answer_after_completion(db, test_user):
    test, slots, questions = start_topic_test(db, test_user, pool_size=1)
    question = questions[slots[0].question_id]
    submit_answer(db, test.id, test_user.id, question.id, correct_ids(question))

    with pytest.raises(AppError) as exc_info:
        submit_answer(db, test.id, test_user.id, question.id, correct_ids(question))
    assert exc_info.value.code == "INVALID_STATE"
