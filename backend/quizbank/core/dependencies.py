"""FastAPI dependencies for authentication and the test engine."""

import random
from typing import Annotated
from uuid import UUID

import jwt
from fastapi import Depends, Header
from sqlalchemy.orm import Session

from quizbank.core.app_exceptions import invalid_token, token_missing, user_not_found
from quizbank.core.security import verify_access_token
from quizbank.db.session import get_db
from quizbank.models.user import User

__all__ = ["get_current_user", "get_db", "get_rng"]


def get_current_user(
    authorization: Annotated[str | None, Header()] = None,
    db: Session = Depends(get_db),
) -> User:
    """Dependency to get the current authenticated user from JWT token."""
    if not authorization:
        raise token_missing()

    # Extract token from "Bearer <token>"
    try:
        scheme, token = authorization.split()
        if scheme.lower() != "bearer":
            raise ValueError("Invalid authorization scheme")
    except ValueError:
        raise invalid_token("Expected: Bearer <token>") from None

    try:
        payload = verify_access_token(token)
        user_id = UUID(payload["sub"])
    except (jwt.InvalidTokenError, KeyError, ValueError) as e:
        raise invalid_token(f"Invalid or expired token: {e}") from e

    user = db.get(User, user_id)
    if user is None:
        raise user_not_found()

    return user


def get_rng() -> random.Random:
    """Random source used to sample test questions."""
    return random.SystemRandom()
