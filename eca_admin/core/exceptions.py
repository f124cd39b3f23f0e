from fastapi import status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError


class AppError(Exception):
    """Base error translated to a JSON error payload at the request boundary"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "An unexpected error occurred"

    def __init__(self, message: str | None = None, details: str | None = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad request"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class RelatedRecordMissing(NotFoundError):
    """A referenced row (reader, book, status, order...) does not exist"""

    default_message = "Related record not found"


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Insufficient permissions"


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Already exists"


class UnexpectedStorageError(AppError):
    default_message = "An unexpected database error occurred"


def classify_storage_error(exc: SQLAlchemyError) -> AppError:
    """
    Map a SQLAlchemy error onto the application error taxonomy.

    The driver message is the only discriminator shared by SQLite and
    PostgreSQL, so the check is done on its text.
    """
    if isinstance(exc, IntegrityError):
        text = str(exc.orig).lower()
        if "unique" in text or "duplicate" in text:
            return ConflictError("Record already exists", details=str(exc.orig))
        if "foreign key" in text:
            return RelatedRecordMissing(details=str(exc.orig))
    return UnexpectedStorageError(details=str(exc))
