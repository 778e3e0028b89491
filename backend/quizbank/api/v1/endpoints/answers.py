"""Answer option endpoints (authenticated; paid topics need a subscription)."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from quizbank.core.dependencies import get_current_user, get_db
from quizbank.models.user import User
from quizbank.schemas.content import AnswerCreate, AnswerOut, AnswerUpdate
from quizbank.services import catalog

router = APIRouter()


@router.get("", response_model=list[AnswerOut])
async def list_answers(
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    return catalog.list_answers(db)


@router.get("/{answer_id}", response_model=AnswerOut)
async def get_answer(
    answer_id: UUID,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    return catalog.get_answer(db, current_user.id, answer_id)


@router.post("", response_model=AnswerOut, status_code=status.HTTP_201_CREATED)
async def create_answer(
    params: AnswerCreate,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    return catalog.create_answer(db, current_user.id, params.model_dump())


@router.patch("/{answer_id}", response_model=AnswerOut)
async def update_answer(
    answer_id: UUID,
    params: AnswerUpdate,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    changes = params.model_dump(exclude_unset=True)
    return catalog.update_answer(db, current_user.id, answer_id, changes)


@router.delete("/{answer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_answer(
    answer_id: UUID,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    catalog.delete_answer(db, current_user.id, answer_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
