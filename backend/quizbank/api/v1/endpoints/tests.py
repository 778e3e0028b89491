"""Test session endpoints."""

import random
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from quizbank.core.dependencies import get_current_user, get_db, get_rng
from quizbank.models.user import User
from quizbank.schemas.test_session import (
    AnswerResultOut,
    AnswerSubmit,
    CompleteTestOut,
    CurrentQuestionOut,
    TestCreate,
    TestDetailOut,
    TestOut,
    TestReviewOut,
)
from quizbank.services import test_engine

router = APIRouter()


# ============================================================================
# Collection
# ============================================================================


@router.post("", response_model=TestOut, status_code=status.HTTP_201_CREATED)
async def create_test(
    params: TestCreate,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    rng: Annotated[random.Random, Depends(get_rng)],
):
    """
    Create a new test.

    Samples ``questions_count`` distinct questions from the filter's pool.
    Only one active test per filter is allowed at a time.
    """
    test = test_engine.create_test(db, current_user.id, params, rng)
    return test_engine.summarize(test, 0)


@router.get("", response_model=list[TestOut])
async def list_tests(
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    status_filter: Annotated[str | None, Query(alias="status")] = None,
):
    """List the current user's tests, newest first."""
    test_status = test_engine.parse_status(status_filter)
    return test_engine.list_tests(db, current_user.id, test_status)


# Declared before /{test_id} so "history" is not parsed as an ID
@router.get("/history", response_model=list[TestOut])
async def get_history(
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Completed and abandoned tests, most recently finished first."""
    return test_engine.list_history(db, current_user.id)


# ============================================================================
# Single test
# ============================================================================


@router.get("/{test_id}", response_model=TestDetailOut)
async def get_test(
    test_id: UUID,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    return test_engine.get_test_detail(db, test_id, current_user.id)


@router.delete("/{test_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_test(
    test_id: UUID,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    test_engine.delete_test(db, test_id, current_user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{test_id}/current", response_model=CurrentQuestionOut)
async def get_current_question(
    test_id: UUID,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Next unanswered question, without explanation or correctness."""
    return test_engine.get_current_question(db, test_id, current_user.id)


@router.post("/{test_id}/answer", response_model=AnswerResultOut)
async def submit_answer(
    test_id: UUID,
    body: AnswerSubmit,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    """
    Answer one question of an active test.

    Each question can be answered once. Answering the last question
    completes the test and returns its score.
    """
    return test_engine.submit_answer(
        db, test_id, current_user.id, body.question_id, body.answer_ids
    )


@router.post("/{test_id}/complete", response_model=CompleteTestOut)
async def complete_test(
    test_id: UUID,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Abandon an active test, scoring only the answered questions."""
    return test_engine.abandon_test(db, test_id, current_user.id)


@router.get("/{test_id}/review", response_model=TestReviewOut)
async def review_test(
    test_id: UUID,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Per-question review of a completed or abandoned test."""
    return test_engine.review_test(db, test_id, current_user.id)
