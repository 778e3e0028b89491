"""Topic endpoints: public catalogue, authenticated changes."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from quizbank.core.dependencies import get_current_user, get_db
from quizbank.models.content import Topic
from quizbank.models.user import User
from quizbank.schemas.content import QuestionOut, TopicCreate, TopicOut, TopicUpdate
from quizbank.services import catalog

router = APIRouter()


@router.get("", response_model=list[TopicOut])
async def list_topics(db: Annotated[Session, Depends(get_db)]):
    return catalog.list_topics(db)


@router.get("/{topic_id}", response_model=TopicOut)
async def get_topic(topic_id: UUID, db: Annotated[Session, Depends(get_db)]):
    return catalog.get_or_404(db, Topic, topic_id)


@router.post("", response_model=TopicOut, status_code=status.HTTP_201_CREATED)
async def create_topic(
    params: TopicCreate,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    return catalog.create_topic(db, params.model_dump())


@router.patch("/{topic_id}", response_model=TopicOut)
async def update_topic(
    topic_id: UUID,
    params: TopicUpdate,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    return catalog.update_topic(db, topic_id, params.model_dump(exclude_unset=True))


@router.delete("/{topic_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_topic(
    topic_id: UUID,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    catalog.delete_topic(db, topic_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{topic_id}/questions", response_model=list[QuestionOut])
async def list_topic_questions(
    topic_id: UUID,
    lang: Annotated[str, Query(min_length=2, max_length=10)],
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Questions of a topic in one language; paid topics need a subscription."""
    return catalog.questions_for_topic(db, current_user.id, topic_id, lang)
