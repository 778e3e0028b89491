"""Test session engine.

Builds sampled practice tests from a filtered question pool, records answers
slot by slot, and scores tests on completion or abandonment:
- filters: pool resolution and deduplication fingerprint
- factory: one active test per user and filter
- answers: peek-next and atomic per-slot submission
- completion: abandon with partial scoring
- review: per-slot reconstruction of finished tests
"""

from quizbank.services.test_engine.answers import get_current_question, submit_answer
from quizbank.services.test_engine.completion import abandon_test
from quizbank.services.test_engine.factory import create_test
from quizbank.services.test_engine.queries import (
    delete_test,
    get_test_detail,
    list_tests,
    parse_status,
    summarize,
    list_history,
)
from quizbank.services.test_engine.review import review_test

__all__ = [
    "create_test",
    "get_current_question",
    "submit_answer",
    "abandon_test",
    "review_test",
    "list_tests",
    "list_history",
    "get_test_detail",
    "delete_test",
    "parse_status",
    "summarize",
]
