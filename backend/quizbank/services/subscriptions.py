"""Subscription grants and the access rule for paid topics."""

from datetime import datetime, timedelta
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from quizbank.common.time import utcnow
from quizbank.core.app_exceptions import payment_required
from quizbank.core.config import settings
from quizbank.core.logging import get_logger
from quizbank.models.content import Topic
from quizbank.models.user import User, UserSubscription

logger = get_logger(__name__)


def grant_subscription(db: Session, user: User, now: datetime | None = None) -> UserSubscription:
    """Open a new access window of SUBSCRIPTION_GRANT_HOURS for the user."""
    now = now or utcnow()
    subscription = UserSubscription(
        user_id=user.id,
        expire_at=now + timedelta(hours=settings.SUBSCRIPTION_GRANT_HOURS),
        is_active=True,
    )
    db.add(subscription)
    db.commit()
    db.refresh(subscription)

    logger.info(
        "Subscription granted",
        extra={
            "event": "subscription_granted",
            "user_id": str(user.id),
            "expire_at": subscription.expire_at.isoformat(),
        },
    )
    return subscription


def has_active_subscription(db: Session, user_id: UUID, now: datetime | None = None) -> bool:
    now = now or utcnow()
    stmt = select(UserSubscription.id).where(
        UserSubscription.user_id == user_id,
        UserSubscription.is_active.is_(True),
        UserSubscription.is_deleted.is_(False),
        UserSubscription.expire_at > now,
    )
    return db.scalars(stmt.limit(1)).first() is not None


def ensure_topic_access(db: Session, user_id: UUID, topic: Topic) -> None:
    """
    Gate content of paid topics.

    Raises:
        AppError: PAYMENT_REQUIRED when the topic needs a subscription the
            user does not currently hold
    """
    if topic.subscription_required and not has_active_subscription(db, user_id):
        raise payment_required()
