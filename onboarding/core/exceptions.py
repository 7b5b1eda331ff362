from typing import Any, Optional

from fastapi import HTTPException, status


class AppException(HTTPException):
    """Base for every error the API reports as ``{"error", "code", "details"}``."""

    code = "UNEXPECTED"
    status_code_default = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        details: Any = None,
        status_code: Optional[int] = None,
        headers: Optional[dict] = None,
    ):
        super().__init__(
            status_code=status_code or self.status_code_default,
            detail=message,
            headers=headers,
        )
        self.details = details

    @property
    def message(self) -> str:
        return self.detail


class ValidationError(AppException):
    code = "VALIDATION_ERROR"
    status_code_default = status.HTTP_400_BAD_REQUEST


class DuplicateKeyError(AppException):
    code = "DUPLICATE_KEY"
    status_code_default = status.HTTP_400_BAD_REQUEST


class NotFoundError(AppException):
    code = "NOT_FOUND"
    status_code_default = status.HTTP_404_NOT_FOUND


class UnauthorizedError(AppException):
    code = "UNAUTHORIZED"
    status_code_default = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "User not authenticated.", details: Any = None):
        super().__init__(message, details=details, headers={"WWW-Authenticate": "Bearer"})


class InvalidCredentialsException(UnauthorizedError):
    def __init__(self):
        super().__init__("Invalid last name or password.")


class ForbiddenError(AppException):
    code = "FORBIDDEN"
    status_code_default = status.HTTP_403_FORBIDDEN


class SelfActionForbiddenError(ForbiddenError):
    code = "SELF_ACTION_FORBIDDEN"


class UploadRejectedError(AppException):
    code = "UPLOAD_REJECTED"
    status_code_default = status.HTTP_400_BAD_REQUEST


class StorageError(AppException):
    code = "STORAGE_ERROR"
    status_code_default = status.HTTP_502_BAD_GATEWAY
