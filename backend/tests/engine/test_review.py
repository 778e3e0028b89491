"""Tests for reviewing finished tests."""

import pytest
from sqlalchemy import delete

from quizbank.core.app_exceptions import AppError
from quizbank.models.content import Question
from quizbank.models.test_session import TestStatus
from quizbank.services.test_engine import abandon_test, review_test, submit_answer
from tests.helpers.seed import correct_ids, start_topic_test, wrong_ids


def test_review_of_active_test_is_invalid_state(db, test_user):
    test, _, _ = start_topic_test(db, test_user)

    with pytest.raises(AppError) as exc_info:
        review_test(db, test.id, test_user.id)
    assert exc_info.value.code == "INVALID_STATE"


def test_review_of_completed_test(db, test_user):
    test, slots, questions = start_topic_test(db, test_user, pool_size=2, correct=2)
    first, second = (questions[s.question_id] for s in slots)
    submit_answer(db, test.id, test_user.id, first.id, correct_ids(first))
    chosen = [correct_ids(second)[0], wrong_ids(second)[0]]
    submit_answer(db, test.id, test_user.id, second.id, chosen)

    review = review_test(db, test.id, test_user.id)

    assert review.status is TestStatus.COMPLETED
    assert review.total_questions == 2
    assert review.correct_count == 1
    assert review.score_percent == 50
    assert [item.order for item in review.questions] == [1, 2]

    item_one, item_two = review.questions
    assert item_one.question.id == first.id
    assert item_one.question.explanation == "Because it is right"
    assert item_one.is_correct is True
    assert set(item_one.selected_answer_ids) == set(correct_ids(first))
    assert {a.id: a.is_correct for a in item_one.answers} == {
        a.id: a.is_correct for a in first.answers
    }

    assert item_two.is_correct is False
    assert set(item_two.selected_answer_ids) == set(chosen)


def test_review_of_abandoned_test_with_unanswered_slots(db, test_user):
    test, slots, questions = start_topic_test(db, test_user, pool_size=3)
    first = questions[slots[0].question_id]
    submit_answer(db, test.id, test_user.id, first.id, correct_ids(first))
    abandon_test(db, test.id, test_user.id)

    review = review_test(db, test.id, test_user.id)

    assert review.status is TestStatus.ABANDONED
    assert review.score_percent == 100
    assert len(review.questions) == 3
    assert review.questions[0].is_correct is True
    for item in review.questions[1:]:
        assert item.is_correct is False
        assert item.selected_answer_ids == []
        assert len(item.answers) == 3


def test_review_does_not_mutate(db, test_user):
    test, _, _ = start_topic_test(db, test_user)
    abandon_test(db, test.id, test_user.id)

    first = review_test(db, test.id, test_user.id)
    second = review_test(db, test.id, test_user.id)

    assert first == second


def test_review_of_other_users_test_is_forbidden(db, test_user, other_user):
    test, _, _ = start_topic_test(db, test_user)
    abandon_test(db, test.id, test_user.id)

    with pytest.raises(AppError) as exc_info:
        review_test(db, test.id, other_user.id)
    assert exc_info.value.code == "FORBIDDEN"


def test_review_with_missing_question_is_not_found(db, test_user):
    test, slots, _ = start_topic_test(db, test_user, pool_size=3)
    abandon_test(db, test.id, test_user.id)
    # SQLite does not enforce the cascade here, so the slot outlives its question
    db.execute(delete(Question).where(Question.id == slots[1].question_id))
    db.commit()

    with pytest.raises(AppError) as exc_info:
        review_test(db, test.id, test_user.id)

    assert exc_info.value.code == "NOT_FOUND"
    assert exc_info.value.details == {"question_id": str(slots[1].question_id)}
