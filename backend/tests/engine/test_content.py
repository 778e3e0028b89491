"""Tests for the read-only content lookups."""

import uuid

from quizbank.services import content
from tests.helpers.seed import correct_ids, create_category, create_topic_with_questions


def test_existence_checks(db):
    topic, questions = create_topic_with_questions(db, 1)
    category = create_category(db, questions)

    assert content.topic_exists(db, topic.id)
    assert content.category_exists(db, category.id)
    assert content.question_exists(db, questions[0].id)
    assert not content.topic_exists(db, uuid.uuid4())
    assert not content.category_exists(db, uuid.uuid4())
    assert not content.question_exists(db, uuid.uuid4())


def test_question_ids_in_filters_language_and_unknown_ids(db):
    _, questions = create_topic_with_questions(db, 2, lang="en")
    ids = [q.id for q in questions] + [uuid.uuid4()]

    assert sorted(content.question_ids_in(db, ids, "en")) == sorted(q.id for q in questions)
    assert content.question_ids_in(db, ids, "de") == []
    assert content.question_ids_in(db, [], "en") == []


def test_correct_answer_ids(db):
    _, questions = create_topic_with_questions(db, 1, correct=2, wrong=1)
    question = questions[0]

    assert content.correct_answer_ids(db, question.id) == set(correct_ids(question))


def test_batched_answers_are_grouped_by_question(db):
    _, questions = create_topic_with_questions(db, 3, correct=1, wrong=1)

    grouped = content.answers_for_questions(db, [q.id for q in questions])

    assert set(grouped) == {q.id for q in questions}
    assert all(len(options) == 2 for options in grouped.values())
    assert content.get_questions(db, [q.id for q in questions]).keys() == grouped.keys()


def test_existing_answer_ids_drops_unknown_ids(db):
    _, questions = create_topic_with_questions(db, 2)
    known = correct_ids(questions[0]) + correct_ids(questions[1])

    assert content.existing_answer_ids(db, known + [uuid.uuid4()]) == set(known)
    assert content.existing_answer_ids(db, []) == set()
