"""Application-specific exceptions for consistent error handling."""

from typing import Any

from fastapi import HTTPException, status


class AppError(HTTPException):
    """Application error with standardized error code."""

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: dict[str, Any] | list[Any] | None = None,
    ):
        super().__init__(
            status_code=status_code,
            detail={
                "code": code,
                "message": message,
                "details": details,
            },
        )
        self.code = code
        self.message = message
        self.details = details


# ============================================================================
# Error taxonomy
# ============================================================================


def not_found(message: str = "Resource not found", **details: Any) -> AppError:
    return AppError(status.HTTP_404_NOT_FOUND, "NOT_FOUND", message, details or None)


def forbidden(message: str = "Forbidden") -> AppError:
    return AppError(status.HTTP_403_FORBIDDEN, "FORBIDDEN", message)


def payment_required(message: str = "Active subscription required") -> AppError:
    return AppError(status.HTTP_402_PAYMENT_REQUIRED, "PAYMENT_REQUIRED", message)


def conflict(message: str = "Conflict", **details: Any) -> AppError:
    return AppError(status.HTTP_409_CONFLICT, "CONFLICT", message, details or None)


def already_exists(message: str = "Resource already exists", **details: Any) -> AppError:
    return AppError(status.HTTP_409_CONFLICT, "ALREADY_EXISTS", message, details or None)


def invalid_state(message: str = "Invalid state", **details: Any) -> AppError:
    return AppError(
        status.HTTP_422_UNPROCESSABLE_ENTITY, "INVALID_STATE", message, details or None
    )


def invalid_input(message: str = "Invalid input provided", **details: Any) -> AppError:
    return AppError(status.HTTP_400_BAD_REQUEST, "INVALID_INPUT", message, details or None)


def invalid_field_value(field: str, message: str = "Invalid field value") -> AppError:
    return AppError(
        status.HTTP_400_BAD_REQUEST, "INVALID_FIELD_VALUE", message, {"field": field}
    )


def missing_field(field: str, message: str = "Required field is missing") -> AppError:
    return AppError(status.HTTP_400_BAD_REQUEST, "MISSING_FIELD", message, {"field": field})


def token_missing() -> AppError:
    return AppError(
        status.HTTP_401_UNAUTHORIZED, "TOKEN_MISSING", "Authentication token is missing"
    )


def invalid_token(message: str = "Invalid authentication token") -> AppError:
    return AppError(status.HTTP_401_UNAUTHORIZED, "INVALID_TOKEN", message)


def invalid_credentials() -> AppError:
    return AppError(status.HTTP_401_UNAUTHORIZED, "INVALID_CREDENTIALS", "Invalid credentials")


def user_not_found() -> AppError:
    return AppError(status.HTTP_404_NOT_FOUND, "USER_NOT_FOUND", "User not found")
