"""Question endpoints, including a question's answers and categories.

Everything here requires authentication; questions of paid topics also
require an active subscription.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from quizbank.core.dependencies import get_current_user, get_db
from quizbank.models.user import User
from quizbank.schemas.content import (
    AnswerOut,
    CategoryOut,
    QuestionCategoryOut,
    QuestionCreate,
    QuestionOut,
    QuestionUpdate,
)
from quizbank.services import catalog

router = APIRouter()

Lang = Annotated[str, Query(min_length=2, max_length=10, description="Language code")]


@router.get("", response_model=list[QuestionOut])
async def list_questions(
    lang: Lang,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    return catalog.list_questions(db, lang)


@router.get("/{question_id}", response_model=QuestionOut)
async def get_question(
    question_id: UUID,
    lang: Lang,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    return catalog.get_question(db, current_user.id, question_id, lang)


@router.post("", response_model=QuestionOut, status_code=status.HTTP_201_CREATED)
async def create_question(
    params: QuestionCreate,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    return catalog.create_question(db, current_user.id, params.model_dump())


@router.patch("/{question_id}", response_model=QuestionOut)
async def update_question(
    question_id: UUID,
    params: QuestionUpdate,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    changes = params.model_dump(exclude_unset=True)
    return catalog.update_question(db, current_user.id, question_id, changes)


@router.delete("/{question_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_question(
    question_id: UUID,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    catalog.delete_question(db, current_user.id, question_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{question_id}/answers", response_model=list[AnswerOut])
async def list_question_answers(
    question_id: UUID,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    return catalog.answers_for_question(db, current_user.id, question_id)


# ============================================================================
# Categories of a question
# ============================================================================


@router.get("/{question_id}/categories", response_model=list[CategoryOut])
async def list_question_categories(
    question_id: UUID,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    return catalog.question_categories(db, question_id)


@router.post(
    "/{question_id}/categories/{category_id}",
    response_model=QuestionCategoryOut,
    status_code=status.HTTP_201_CREATED,
)
async def add_question_category(
    question_id: UUID,
    category_id: UUID,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    catalog.link_category(db, question_id, category_id)
    return QuestionCategoryOut(question_id=question_id, category_id=category_id)


@router.delete(
    "/{question_id}/categories/{category_id}", status_code=status.HTTP_204_NO_CONTENT
)
async def remove_question_category(
    question_id: UUID,
    category_id: UUID,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    catalog.unlink_category(db, question_id, category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
