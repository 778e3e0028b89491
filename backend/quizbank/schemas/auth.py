"""Authentication schemas."""

from uuid import UUID

from pydantic import BaseModel, EmailStr, Field


class AuthParams(BaseModel):
    """Credentials for register and login."""

    email: EmailStr
    password: str = Field(..., min_length=3)


class TokenOut(BaseModel):
    access_token: str
    token_type: str = "Bearer"


class UserOut(BaseModel):
    id: UUID
    email: str
    username: str | None = None

    class Config:
        from_attributes = True
