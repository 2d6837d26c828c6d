"""Failure taxonomy of the order management domain.

Domain failures extend Protean's ``ValidationError`` so they carry the same
``{field: [messages]}`` payload as field-level validation raised by Protean
itself. Infrastructure failures are plain exceptions.
"""

from protean.exceptions import ValidationError


class InvalidArgument(ValidationError):
    """Malformed identifier or out-of-range value reached the domain layer."""


class InvalidOperation(ValidationError):
    """The aggregate is not in a state that allows the requested operation."""


class InvalidTransition(InvalidOperation):
    """Status state machine violation."""

    def __init__(self, current, attempted):
        self.current = current
        self.attempted = attempted
        super().__init__(
            {"status": [f"Cannot transition from {_label(current)} to {_label(attempted)}"]}
        )


class PersistenceFailure(Exception):
    """A repository write could not be completed."""


def _label(status) -> str:
    return getattr(status, "value", str(status))


def error_messages(exc: ValidationError) -> list[str]:
    """Flatten a Protean ``{field: [messages]}`` payload into plain strings."""
    messages = getattr(exc, "messages", None)
    if not isinstance(messages, dict):
        return [str(exc)]

    flattened = []
    for value in messages.values():
        if isinstance(value, (list, tuple)):
            flattened.extend(str(item) for item in value)
        else:
            flattened.append(str(value))
    return flattened
