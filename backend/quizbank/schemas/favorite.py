"""Favorite question schemas."""

from uuid import UUID

from pydantic import BaseModel


class FavoriteQuestionsOut(BaseModel):
    question_ids: list[UUID]
