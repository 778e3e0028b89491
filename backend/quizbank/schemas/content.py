"""Schemas for managing topics, categories, questions and answers."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

# ============================================================================
# Topics
# ============================================================================


class TopicCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    difficulty: str = Field(..., min_length=1, max_length=50)
    duration: int = Field(..., ge=0, le=32767, description="Minutes")
    subscription_required: bool = False


class TopicUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    difficulty: str | None = Field(None, min_length=1, max_length=50)
    duration: int | None = Field(None, ge=0, le=32767)
    subscription_required: bool | None = None


class TopicOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    difficulty: str
    duration: int
    subscription_required: bool


# ============================================================================
# Categories
# ============================================================================


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)


class CategoryUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)


class CategoryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str


# ============================================================================
# Questions
# ============================================================================


class QuestionCreate(BaseModel):
    topic_id: UUID
    name: str = Field(..., min_length=1, max_length=500)
    lang: str = Field(..., min_length=2, max_length=10)
    content: str | None = None
    explanation: str = Field(..., min_length=1)


class QuestionUpdate(BaseModel):
    """Partial update; ``content`` may be cleared with an explicit null."""

    topic_id: UUID | None = None
    name: str | None = Field(None, min_length=1, max_length=500)
    lang: str | None = Field(None, min_length=2, max_length=10)
    content: str | None = None
    explanation: str | None = Field(None, min_length=1)


class QuestionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    topic_id: UUID
    name: str
    lang: str
    content: str | None
    explanation: str


class QuestionCategoryOut(BaseModel):
    question_id: UUID
    category_id: UUID


# ============================================================================
# Answers
# ============================================================================


class AnswerCreate(BaseModel):
    question_id: UUID
    value: str = Field(..., min_length=1, max_length=500)
    is_correct: bool


class AnswerUpdate(BaseModel):
    question_id: UUID | None = None
    value: str | None = Field(None, min_length=1, max_length=500)
    is_correct: bool | None = None


class AnswerOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    question_id: UUID
    value: str
    is_correct: bool
