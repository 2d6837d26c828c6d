"""Uniform result envelope returned by every use case."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorKind(Enum):
    VALIDATION_FAILED = "ValidationFailed"
    INVALID_ARGUMENT = "InvalidArgument"
    INVALID_TRANSITION = "InvalidTransition"
    NOT_FOUND = "NotFound"
    PERSISTENCE_FAILURE = "PersistenceFailure"
    UNEXPECTED_FAILURE = "UnexpectedFailure"


@dataclass(frozen=True)
class Response:
    """Outcome of a request.

    Callers branch on ``success``; ``error`` names the failure category so
    adapters (HTTP, CLI) can map it without parsing ``message``.
    """

    success: bool
    data: Any = None
    message: str | None = None
    errors: tuple[str, ...] = ()
    error: ErrorKind | None = None

    @classmethod
    def ok(cls, data: Any = None, message: str | None = None) -> "Response":
        return cls(success=True, data=data, message=message)

    @classmethod
    def fail(cls, kind: ErrorKind, message: str | None = None, errors=()) -> "Response":
        return cls(success=False, message=message, errors=tuple(errors), error=kind)

    @classmethod
    def not_found(cls, message: str) -> "Response":
        return cls.fail(ErrorKind.NOT_FOUND, message)

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "data": self.data,
            "message": self.message,
            "errors": list(self.errors) or None,
        }
