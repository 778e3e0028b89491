"""Authentication endpoints: register, login and current user."""

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from quizbank.core.app_exceptions import already_exists, invalid_credentials, user_not_found
from quizbank.core.dependencies import get_current_user
from quizbank.core.logging import get_logger
from quizbank.core.security import create_access_token, hash_password, verify_password
from quizbank.db.session import get_db
from quizbank.models.user import User
from quizbank.schemas.auth import AuthParams, TokenOut, UserOut

logger = get_logger(__name__)

router = APIRouter(tags=["Auth"])


def _normalize_email(email: str) -> str:
    return email.strip().lower()


@router.post(
    "/register",
    response_model=UserOut,
    status_code=status.HTTP_201_CREATED,
    summary="Register",
    description="Create a new user account.",
)
async def register(
    params: AuthParams,
    db: Session = Depends(get_db),
) -> UserOut:
    email = _normalize_email(params.email)
    if db.scalars(select(User.id).where(User.email == email)).first() is not None:
        raise already_exists("Email already registered")

    user = User(email=email, password_hash=hash_password(params.password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise already_exists("Email already registered") from None
    db.refresh(user)

    logger.info("User registered", extra={"event": "user_registered", "user_id": str(user.id)})
    return UserOut.model_validate(user)


@router.post(
    "/login",
    response_model=TokenOut,
    status_code=status.HTTP_200_OK,
    summary="Log in",
    description="Authenticate with email and password and receive a bearer token.",
)
async def login(
    params: AuthParams,
    db: Session = Depends(get_db),
) -> TokenOut:
    user = db.scalars(select(User).where(User.email == _normalize_email(params.email))).first()
    if user is None:
        raise user_not_found()
    if not verify_password(params.password, user.password_hash):
        logger.info("Login denied", extra={"event": "auth_login_denied", "user_id": str(user.id)})
        raise invalid_credentials()

    return TokenOut(access_token=create_access_token(str(user.id)))


@router.get(
    "/current",
    response_model=UserOut,
    status_code=status.HTTP_200_OK,
    summary="Get current user",
)
async def get_current_user_profile(
    current_user: User = Depends(get_current_user),
) -> UserOut:
    return UserOut.model_validate(current_user)
