"""User account endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from quizbank.core.app_exceptions import invalid_credentials, user_not_found
from quizbank.core.dependencies import get_db
from quizbank.core.security import verify_password
from quizbank.models.user import User
from quizbank.schemas.auth import AuthParams
from quizbank.schemas.subscription import SubscriptionOut
from quizbank.services import subscriptions

router = APIRouter()


@router.post(
    "/_sub",
    response_model=SubscriptionOut,
    status_code=status.HTTP_201_CREATED,
    summary="Add subscription",
    description="Grant a short subscription window to the account behind the credentials.",
)
async def add_subscription(
    params: AuthParams,
    db: Annotated[Session, Depends(get_db)],
) -> SubscriptionOut:
    email = params.email.strip().lower()
    user = db.scalars(select(User).where(User.email == email)).first()
    if user is None:
        raise user_not_found()
    if not verify_password(params.password, user.password_hash):
        raise invalid_credentials()

    return SubscriptionOut.model_validate(subscriptions.grant_subscription(db, user))
