"""Subscription expiry sweep (scheduled every minute)."""

from datetime import datetime

from sqlalchemy import update
from sqlalchemy.orm import Session

from quizbank.common.time import utcnow
from quizbank.core.logging import get_logger
from quizbank.models.user import UserSubscription

logger = get_logger(__name__)


def expire_subscriptions(db: Session, now: datetime | None = None) -> int:
    """
    Deactivate subscriptions whose expiry time has passed.

    Args:
        db: Database session
        now: Reference time (defaults to current UTC time)

    Returns:
        Number of subscriptions deactivated
    """
    now = now or utcnow()
    result = db.execute(
        update(UserSubscription)
        .where(
            UserSubscription.is_active.is_(True),
            UserSubscription.is_deleted.is_(False),
            UserSubscription.expire_at < now,
        )
        .values(is_active=False, updated_at=now)
    )
    db.commit()

    expired = result.rowcount or 0
    if expired:
        logger.info(
            "Subscriptions expired",
            extra={"event": "subscriptions_expired", "count": expired},
        )
    return expired
