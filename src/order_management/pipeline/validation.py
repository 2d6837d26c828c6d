"""Request validators.

A validator is an ordered collection of rules. Each rule inspects the request
and yields zero or more human-readable messages; running the validator
collects the messages of every rule. Rules read fields through
``field_value`` so a malformed request yields messages instead of raising.
"""

from collections.abc import Callable, Iterable, Mapping

Rule = Callable[[object], Iterable[str]]


class Validator:
    def __init__(self, *rules: Rule) -> None:
        self.rules = rules

    def validate(self, request) -> list[str]:
        messages = []
        for rule in self.rules:
            messages.extend(rule(request) or ())
        return messages


def field_value(data, name: str):
    """``data[name]`` for mappings, ``data.<name>`` otherwise; ``None`` if absent."""
    if isinstance(data, Mapping):
        return data.get(name)
    return getattr(data, name, None)


def is_blank(value) -> bool:
    return value is None or not str(value).strip()


def is_whole_number(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def required(attribute: str, message: str) -> Rule:
    """Rule: ``request.<attribute>`` must be present and not blank."""

    def rule(request):
        if is_blank(field_value(request, attribute)):
            yield message

    return rule


def each(attribute: str, item_validator: "Validator") -> Rule:
    """Rule: run ``item_validator`` over every element of ``request.<attribute>``."""

    def rule(request):
        values = field_value(request, attribute) or ()
        if isinstance(values, (str, bytes, Mapping)) or not isinstance(values, Iterable):
            yield f"{attribute} must be a list"
            return
        for index, item in enumerate(values):
            for message in item_validator.validate(item):
                yield f"{attribute}[{index}]: {message}"

    return rule
