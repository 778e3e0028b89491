"""Favorite questions of a user."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from quizbank.core.app_exceptions import already_exists, not_found
from quizbank.models.favorite import UserFavoriteQuestion
from quizbank.services import content


def favorite_question_ids(db: Session, user_id: UUID) -> list[UUID]:
    """IDs of the user's favorite questions, newest first."""
    stmt = (
        select(UserFavoriteQuestion.question_id)
        .where(UserFavoriteQuestion.user_id == user_id)
        .order_by(UserFavoriteQuestion.created_at.desc())
    )
    return list(db.scalars(stmt))


def add_favorite(db: Session, user_id: UUID, question_id: UUID) -> UserFavoriteQuestion:
    if not content.question_exists(db, question_id):
        raise not_found("Question not found")
    if db.get(UserFavoriteQuestion, (user_id, question_id)) is not None:
        raise already_exists("Question is already a favorite")

    favorite = UserFavoriteQuestion(user_id=user_id, question_id=question_id)
    db.add(favorite)
    try:
        db.commit()
    except IntegrityError:
        # Concurrent add of the same pair
        db.rollback()
        raise already_exists("Question is already a favorite") from None
    return favorite


def remove_favorite(db: Session, user_id: UUID, question_id: UUID) -> None:
    favorite = db.get(UserFavoriteQuestion, (user_id, question_id))
    if favorite is None:
        raise not_found("Favorite not found")
    db.delete(favorite)
    db.commit()
