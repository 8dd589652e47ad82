from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    NOT_FOUND = "NOT_FOUND"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    FAILED_PRECONDITION = "FAILED_PRECONDITION"
    UNAUTHENTICATED = "UNAUTHENTICATED"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    UNIMPLEMENTED = "UNIMPLEMENTED"
    INTERNAL = "INTERNAL"
    UNKNOWN = "UNKNOWN"


class AppError(Exception):
    """Base exception for the application"""

    kind: ErrorKind = ErrorKind.UNKNOWN

    def __init__(self, message: str = "", cause: Optional[BaseException] = None):
        self.message = message or self.kind.value
        self.cause = cause
        super().__init__(self.message)
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        if self.cause is None:
            return f"code = {self.kind.value}, message = {self.message}"
        return f"code = {self.kind.value}, message = {self.message}: {self.cause}"

    def to_response(self) -> dict:
        # The cause stays server side.
        return {"code": self.kind.value, "message": self.message}


class InvalidArgumentError(AppError):
    """Request arguments failed validation"""
    kind = ErrorKind.INVALID_ARGUMENT


class NotFoundError(AppError):
    """Resource not found errors"""
    kind = ErrorKind.NOT_FOUND


class AlreadyExistsError(AppError):
    """Resource conflict errors"""
    kind = ErrorKind.ALREADY_EXISTS


class FailedPreconditionError(AppError):
    """The system is not in the state the operation requires"""
    kind = ErrorKind.FAILED_PRECONDITION


class AuthenticationError(AppError):
    """Authentication related errors"""
    kind = ErrorKind.UNAUTHENTICATED


class AuthorizationError(AppError):
    """Authorization related errors"""
    kind = ErrorKind.PERMISSION_DENIED


class UnimplementedError(AppError):
    """Operation intentionally not built"""
    kind = ErrorKind.UNIMPLEMENTED


class InternalError(AppError):
    """Unexpected failure in a lower layer"""
    kind = ErrorKind.INTERNAL


class UnknownError(AppError):
    """Error that did not originate from this taxonomy"""
    kind = ErrorKind.UNKNOWN


def find_app_error(exc: Optional[BaseException]) -> Optional[AppError]:
    """Walk the cause/context chain and return the first AppError on it."""
    seen = set()
    while exc is not None and id(exc) not in seen:
        if isinstance(exc, AppError):
            return exc
        seen.add(id(exc))
        exc = exc.__cause__ or exc.__context__
    return None


def classify(exc: Optional[BaseException]) -> ErrorKind:
    """Recover the taxonomy kind of any exception, UNKNOWN if it is foreign."""
    err = find_app_error(exc)
    if err is None:
        return ErrorKind.UNKNOWN
    return err.kind


def to_app_error(exc: BaseException) -> AppError:
    err = find_app_error(exc)
    if err is not None:
        return err
    return UnknownError(cause=exc)
