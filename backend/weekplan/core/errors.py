from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError, SQLAlchemyError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from starlette import status


class WeekplanError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "INTERNAL_SERVER_ERROR"
    error = "Internal server error occurred"

    def __init__(self, error: str | None = None, *, code: str | None = None, details=None):
        super().__init__(error or self.error)
        if error:
            self.error = error
        if code:
            self.code = code
        self.details = details

    def ToPayload(self) -> dict:
        payload = {"success": False, "error": self.error, "code": self.code}
        if self.details is not None:
            payload["details"] = self.details
        return payload


class ValidationError(WeekplanError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "VALIDATION_ERROR"
    error = "Invalid request"

    def __init__(self, error: str, *, code: str, field: str | None = None, details=None):
        if details is None and field is not None:
            details = {"field": field}
        super().__init__(error, code=code, details=details)
        self.field = field


class NotFoundError(WeekplanError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "RESOURCE_NOT_FOUND"
    error = "Resource not found"


class ConflictError(WeekplanError):
    status_code = status.HTTP_409_CONFLICT
    code = "CONFLICT"
    error = "Request conflicts with existing data"


class StoreError(WeekplanError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "DATABASE_ERROR"
    error = "Database operation failed"


class StoreUnavailableError(StoreError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    code = "DATABASE_CONNECTION_ERROR"
    error = "Database connection error"


class CatalogUnavailableError(WeekplanError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "CATALOG_UNAVAILABLE"
    error = "Failed to randomize recipes"


_CONNECTION_ERRORS = (PoolTimeoutError, OperationalError, InterfaceError)


def TranslateStoreError(exc: SQLAlchemyError, error: str | None = None) -> WeekplanError:
    """Map a SQLAlchemy failure onto the store taxonomy without leaking driver text."""
    if isinstance(exc, _CONNECTION_ERRORS):
        return StoreUnavailableError()
    if isinstance(exc, IntegrityError):
        return ConflictError()
    return StoreError(error)
