"""Favorite question endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from quizbank.core.dependencies import get_current_user, get_db
from quizbank.models.user import User
from quizbank.schemas.favorite import FavoriteQuestionsOut
from quizbank.services import favorites

router = APIRouter()


@router.get("/questions", response_model=FavoriteQuestionsOut)
async def list_favorite_questions(
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Favorite question IDs of the current user, newest first."""
    return FavoriteQuestionsOut(question_ids=favorites.favorite_question_ids(db, current_user.id))


@router.post("/questions/{question_id}", status_code=status.HTTP_201_CREATED)
async def add_favorite_question(
    question_id: UUID,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    favorites.add_favorite(db, current_user.id, question_id)
    return {"question_id": question_id}


@router.delete("/questions/{question_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_favorite_question(
    question_id: UUID,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    favorites.remove_favorite(db, current_user.id, question_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
