"""Tests for status transitions and scoring rules."""

import uuid

import pytest

from quizbank.core.app_exceptions import AppError
from quizbank.models.test_session import TestStatus
from quizbank.services.test_engine.state import (
    TestEvent,
    is_exact_match,
    next_status,
    score_percent,
)


def test_active_transitions():
    assert next_status(TestStatus.ACTIVE, TestEvent.LAST_SLOT_ANSWERED) is TestStatus.COMPLETED
    assert next_status(TestStatus.ACTIVE, TestEvent.ABANDON) is TestStatus.ABANDONED


@pytest.mark.parametrize("status", [TestStatus.COMPLETED, TestStatus.ABANDONED])
@pytest.mark.parametrize("event", list(TestEvent))
def test_terminal_statuses_have_no_transitions(status, event):
    with pytest.raises(AppError) as exc_info:
        next_status(status, event)
    assert exc_info.value.code == "INVALID_STATE"
    assert exc_info.value.status_code == 422


@pytest.mark.parametrize(
    "correct, total, expected",
    [(0, 1, 0), (1, 3, 33), (2, 3, 66), (1, 6, 16), (3, 3, 100), (24, 25, 96)],
)
def test_score_percent_truncates(correct, total, expected):
    assert score_percent(correct, total) == expected


def test_exact_match():
    a, b, c = uuid.uuid4(), uuid.uuid4(), uuid.uuid4()
    assert is_exact_match([a, b], {b, a})
    assert not is_exact_match([a], {a, b})
    assert not is_exact_match([a, b, c], {a, b})
    assert not is_exact_match([c], {a})
