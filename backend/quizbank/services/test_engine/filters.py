"""Question pool resolution for test filters."""

from dataclasses import dataclass
from uuid import UUID

from sqlalchemy.orm import Session

from quizbank.core.app_exceptions import invalid_field_value, missing_field, not_found
from quizbank.models.test_session import FilterType
from quizbank.services import content, favorites


@dataclass(frozen=True)
class TestFilter:
    """Validated filter descriptor with its deduplication fingerprint."""

    __test__ = False

    filter_type: FilterType
    filter_id: UUID | None
    lang: str

    @property
    def fingerprint(self) -> str:
        return filter_fingerprint(self.filter_type, self.filter_id, self.lang)


def filter_fingerprint(filter_type: FilterType, filter_id: UUID | None, lang: str) -> str:
    """Deterministic key for (type, id, lang); a missing id has its own shape."""
    if filter_id is None:
        return f"{filter_type.value}:{lang}"
    return f"{filter_type.value}:{filter_id}:{lang}"


def parse_filter(filter_type: str, filter_id: UUID | None, lang: str) -> TestFilter:
    """Validate the raw filter fields.

    Raises:
        AppError: INVALID_FIELD_VALUE for an unknown type, MISSING_FIELD when
            a category/topic filter comes without an id
    """
    try:
        kind = FilterType(filter_type)
    except ValueError:
        raise invalid_field_value(
            "filter_type", f"Unknown filter_type {filter_type!r}"
        ) from None

    if kind.requires_id and filter_id is None:
        raise missing_field("filter_id", f"filter_id is required for {kind.value} filter")

    return TestFilter(filter_type=kind, filter_id=filter_id, lang=lang)


def resolve_pool(db: Session, user_id: UUID, test_filter: TestFilter) -> list[UUID]:
    """Candidate question IDs for the filter, in a stable order.

    Raises:
        AppError: NOT_FOUND if the referenced category or topic does not exist
    """
    lang = test_filter.lang

    if test_filter.filter_type is FilterType.FAVORITES:
        return content.question_ids_in(db, favorites.favorite_question_ids(db, user_id), lang)

    if test_filter.filter_type is FilterType.CATEGORY:
        if not content.category_exists(db, test_filter.filter_id):
            raise not_found("Category not found")
        return content.question_ids_for_category(db, test_filter.filter_id, lang)

    if test_filter.filter_type is FilterType.TOPIC:
        if not content.topic_exists(db, test_filter.filter_id):
            raise not_found("Topic not found")
        return content.question_ids_for_topic(db, test_filter.filter_id, lang)

    raise invalid_field_value("filter_type")
