"""Request pipeline stages.

Every use case runs as

    validation → exception translation → handler

Each stage is a plain ``request -> Response`` callable wrapping the next one.
The handler always returns a ``Response``, so no stage needs to know the shape
of the payload it carries.
"""

from collections.abc import Callable

import structlog
from protean.exceptions import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from order_management.pipeline.response import ErrorKind, Response
from order_management.pipeline.validation import Validator
from order_management.shared.exceptions import (
    InvalidArgument,
    InvalidOperation,
    InvalidTransition,
    PersistenceFailure,
    error_messages,
)

logger = structlog.get_logger(__name__)

Stage = Callable[[object], Response]

INVALID_ARGUMENT_MESSAGE = "Invalid data provided. Please check your input and try again."
INVALID_TRANSITION_MESSAGE = "Invalid status transition. Please check the current order status and try again."
INVALID_OPERATION_MESSAGE = "Unable to process the request at this time. Please try again."
PERSISTENCE_FAILURE_MESSAGE = "Unable to save changes. Please try again later."
UNEXPECTED_FAILURE_MESSAGE = "An unexpected error occurred. Please try again later."


def _request_type(request, request_type: str | None) -> str:
    return request_type or type(request).__name__


def validation_stage(validator: Validator, next_stage: Stage, request_type: str | None = None) -> Stage:
    """Reject invalid requests before ``next_stage`` ever sees them."""

    def stage(request) -> Response:
        messages = validator.validate(request)
        if messages:
            logger.warning(
                "Validation failed for request",
                request_type=_request_type(request, request_type),
                errors=messages,
            )
            return Response.fail(ErrorKind.VALIDATION_FAILED, errors=messages)
        return next_stage(request)

    return stage


def exception_translation_stage(next_stage: Stage, request_type: str | None = None) -> Stage:
    """Turn failures raised by ``next_stage`` into failure responses.

    Only ``Exception`` subclasses are caught; cancellation and interpreter
    exits propagate unchanged.
    """

    def stage(request) -> Response:
        name = _request_type(request, request_type)
        try:
            return next_stage(request)
        except InvalidTransition as exc:
            _log_domain_failure("Invalid operation", name, exc)
            return Response.fail(ErrorKind.INVALID_TRANSITION, INVALID_TRANSITION_MESSAGE, error_messages(exc))
        except InvalidOperation as exc:
            _log_domain_failure("Invalid operation", name, exc)
            return Response.fail(ErrorKind.INVALID_ARGUMENT, INVALID_OPERATION_MESSAGE)
        except (InvalidArgument, ValidationError) as exc:
            _log_domain_failure("Invalid argument", name, exc)
            return Response.fail(ErrorKind.INVALID_ARGUMENT, INVALID_ARGUMENT_MESSAGE)
        except (PersistenceFailure, SQLAlchemyError):
            logger.exception("Database error occurred while processing request", request_type=name)
            return Response.fail(ErrorKind.PERSISTENCE_FAILURE, PERSISTENCE_FAILURE_MESSAGE)
        except Exception:
            logger.exception("Unexpected error occurred while processing request", request_type=name)
            return Response.fail(ErrorKind.UNEXPECTED_FAILURE, UNEXPECTED_FAILURE_MESSAGE)

    return stage


def _log_domain_failure(error_type: str, request_type: str, exc: ValidationError) -> None:
    logger.warning(
        f"{error_type} in request",
        request_type=request_type,
        error_type=type(exc).__name__,
        message="; ".join(error_messages(exc)),
    )


def build_pipeline(handler: Stage, validator: Validator | None = None, request_type: str | None = None) -> Stage:
    """Compose the full pipeline around ``handler``."""
    pipeline = exception_translation_stage(handler, request_type)
    if validator is not None:
        pipeline = validation_stage(validator, pipeline, request_type)
    return pipeline
