"""Field validation — declarative rules evaluated against entity values.

Each entity shape declares, per field, an ordered tuple of ``Rule`` objects.
``check_fields`` walks the required fields in declaration order and stops at
the first field that is unset or fails one of its rules, returning a
``ValidationReport`` that names the field and the 0-based rule index.

Validation is pure: no I/O, no logging. Callers decide how to report.
"""

import re
from dataclasses import dataclass, fields
from typing import Any, Callable, Iterable, Mapping

from fleet_api.domain.exceptions import EntityValidationError


class _Unset:
    """Sentinel for a field that was never assigned."""

    _instance: "_Unset | None" = None

    def __new__(cls) -> "_Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


@dataclass(frozen=True)
class Rule:
    """A named predicate; ``True`` means the value passes."""

    name: str
    predicate: Callable[[Any], bool]

    def __call__(self, value: Any) -> bool:
        return bool(self.predicate(value))


def is_string() -> Rule:
    return Rule("is_string", lambda value: isinstance(value, str))


def is_integer() -> Rule:
    # bool is an int subclass; JSON true/false is not a length.
    return Rule(
        "is_integer",
        lambda value: isinstance(value, int) and not isinstance(value, bool),
    )


def min_length(minimum: int) -> Rule:
    return Rule(f"min_length:{minimum}", lambda value: len(value) >= minimum)


def max_length(maximum: int) -> Rule:
    return Rule(f"max_length:{maximum}", lambda value: len(value) <= maximum)


def min_value(minimum: int) -> Rule:
    return Rule(f"min_value:{minimum}", lambda value: value >= minimum)


def max_value(maximum: int) -> Rule:
    return Rule(f"max_value:{maximum}", lambda value: value <= maximum)


def matches(pattern: str) -> Rule:
    compiled = re.compile(pattern)
    return Rule(f"matches:{pattern}", lambda value: compiled.fullmatch(value) is not None)


@dataclass(frozen=True)
class ValidationReport:
    """Machine-readable description of the first validation failure.

    ``rule_index`` is the 0-based position of the failed rule in the field's
    rule tuple. Every field lists its type check first, so index 0 means the
    value had the wrong type and range or format rules start at 1. It is None
    when a required field is missing.
    """

    kind: str
    values: dict[str, Any]
    field: str
    rule_index: int | None  # None when the field is unset
    rule_name: str

    @property
    def reason(self) -> str:
        if self.rule_index is None:
            return f"'{self.field}' is required"
        return f"'{self.field}' failed rule {self.rule_index} ({self.rule_name})"

    def as_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "field": self.field,
            "rule_index": self.rule_index,
            "rule": self.rule_name,
        }


def check_fields(
    kind: str,
    values: Mapping[str, Any],
    required: Iterable[str],
    rules: Mapping[str, tuple[Rule, ...]],
) -> ValidationReport | None:
    """Return a report for the first failing field, or None if all pass."""
    snapshot = {name: (None if value is UNSET else value) for name, value in values.items()}
    for name in required:
        value = values.get(name, UNSET)
        if value is UNSET or value is None:
            return ValidationReport(kind, snapshot, name, None, "required")
        for index, rule in enumerate(rules.get(name, ())):
            if not rule(value):
                return ValidationReport(kind, snapshot, name, index, rule.name)
    return None


def validate_shape(entity: Any) -> None:
    """Validate a dataclass entity shape; raise EntityValidationError on failure.

    Field order is the dataclass declaration order, filtered to the shape's
    ``REQUIRED_FIELDS``.
    """
    values = {f.name: getattr(entity, f.name) for f in fields(entity)}
    required = [name for name in values if name in entity.REQUIRED_FIELDS]
    report = check_fields(entity.KIND.value, values, required, entity.RULES)
    if report is not None:
        raise EntityValidationError(report)
