"""Pydantic schemas for test sessions."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from quizbank.core.config import settings
from quizbank.models.test_session import FilterType, TestStatus

# ============================================================================
# Requests
# ============================================================================


class TestCreate(BaseModel):
    """Request to create a test session."""

    __test__ = False

    filter_type: str = Field(
        ..., min_length=1, max_length=50, description="favorites, category or topic"
    )
    filter_id: UUID | None = Field(
        None, description="Category or topic ID (required unless filter_type is favorites)"
    )
    lang: str = Field(..., min_length=2, max_length=10, description="Language code")
    questions_count: int = Field(
        ..., ge=1, le=settings.TEST_MAX_QUESTIONS, description="Number of questions"
    )


class AnswerSubmit(BaseModel):
    """Submit the chosen options for one question."""

    question_id: UUID
    answer_ids: list[UUID] = Field(..., min_length=1)


# ============================================================================
# Session summaries
# ============================================================================


class TestOut(BaseModel):
    """Session summary (list, history and create responses)."""

    __test__ = False

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    filter_type: FilterType
    filter_id: UUID | None
    lang: str
    total_questions: int
    answered_count: int
    correct_count: int
    status: TestStatus
    score_percent: int | None
    created_at: datetime
    completed_at: datetime | None


class TestQuestionInfo(BaseModel):
    """Slot state without question content."""

    __test__ = False

    order: int
    question_id: UUID
    is_answered: bool
    is_correct: bool | None


class TestDetailOut(BaseModel):
    """Session detail with per-slot state."""

    __test__ = False

    id: UUID
    filter_type: FilterType
    filter_id: UUID | None
    lang: str
    total_questions: int
    answered_count: int
    correct_count: int
    status: TestStatus
    score_percent: int | None
    questions: list[TestQuestionInfo]


# ============================================================================
# Player
# ============================================================================


class AnswerOption(BaseModel):
    """Answer option without correctness."""

    id: UUID
    value: str


class QuestionInfo(BaseModel):
    """Question payload for an active test (no explanation)."""

    id: UUID
    name: str
    content: str | None
    lang: str


class CurrentQuestionOut(BaseModel):
    """Next unanswered slot."""

    order: int
    question: QuestionInfo
    answers: list[AnswerOption]
    multiple_answers: bool


class AnswerResultOut(BaseModel):
    """Outcome of one answer submission."""

    is_correct: bool
    correct_answer_ids: list[UUID]
    explanation: str
    test_completed: bool
    answered_count: int
    correct_count: int
    score_percent: int | None = None


class CompleteTestOut(BaseModel):
    """Outcome of abandoning a test."""

    status: TestStatus
    answered_count: int
    correct_count: int
    score_percent: int


# ============================================================================
# Review
# ============================================================================


class AnswerOptionWithCorrectness(AnswerOption):
    is_correct: bool


class QuestionInfoWithExplanation(QuestionInfo):
    explanation: str


class ReviewQuestionOut(BaseModel):
    order: int
    question: QuestionInfoWithExplanation
    answers: list[AnswerOptionWithCorrectness]
    selected_answer_ids: list[UUID]
    is_correct: bool


class TestReviewOut(BaseModel):
    """Full review of a finished test, ordered by slot."""

    __test__ = False

    id: UUID
    filter_type: FilterType
    filter_id: UUID | None
    lang: str
    total_questions: int
    correct_count: int
    score_percent: int
    status: TestStatus
    questions: list[ReviewQuestionOut]
