"""Validation engine — checks record input against its declared field rules.

The rules live on the pydantic input schemas of each record type (see
``admin_console.application.schemas``). This module runs them and turns
pydantic's error list into one human-readable message per wire field.
Invalid input is a normal outcome here, not an exception.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import ErrorDetails

from admin_console.application.resources import RecordDescriptor, RecordKind, get_descriptor
from admin_console.domain.exceptions import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)

FORM_ERROR_KEY = "_form"

_NUMBER_TYPE_ERRORS = frozenset({"float_type", "float_parsing", "finite_number"})
_INTEGER_TYPE_ERRORS = frozenset({"int_type", "int_parsing", "int_from_float", "int_parsing_size"})


@dataclass(frozen=True)
class ValidationResult(Generic[ModelT]):
    """Outcome of validating one candidate input.

    Exactly one of ``value`` / ``errors`` is meaningful: ``value`` holds the
    accepted schema instance when ``errors`` is empty.
    """

    entity_type: str
    value: ModelT | None = None
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors

    def raise_for_errors(self) -> ModelT:
        """Return the accepted value or raise the domain ``ValidationError``."""
        if self.errors or self.value is None:
            raise ValidationError(self.entity_type, self.errors)
        return self.value


def validate(
    kind: RecordKind | str | RecordDescriptor,
    data: Mapping[str, Any],
    *,
    for_update: bool = False,
) -> ValidationResult:
    """Validate ``data`` (keyed by wire field names) for a record type.

    Every field is checked; all violations are reported together.
    """
    descriptor = get_descriptor(kind)
    schema = descriptor.update_schema if for_update else descriptor.create_schema
    try:
        value = schema.model_validate(data)
    except PydanticValidationError as exc:
        return ValidationResult(
            entity_type=descriptor.label,
            errors=_collect_errors(schema, exc.errors()),
        )
    return ValidationResult(entity_type=descriptor.label, value=value)


def _collect_errors(schema: type[BaseModel], details: list[ErrorDetails]) -> dict[str, str]:
    fields = _fields_by_key(schema)
    errors: dict[str, str] = {}
    for detail in details:
        loc = detail.get("loc") or ()
        if not loc:
            errors.setdefault(FORM_ERROR_KEY, detail["msg"])
            continue
        key, label = fields.get(str(loc[0]), (str(loc[0]), str(loc[0])))
        # First violation per field wins
        errors.setdefault(key, _message_for(detail, label))
    return errors


def _fields_by_key(schema: type[BaseModel]) -> dict[str, tuple[str, str]]:
    """Map both attribute and alias names to ``(wire_key, label)``."""
    mapping: dict[str, tuple[str, str]] = {}
    for name, info in schema.model_fields.items():
        wire = info.alias or name
        label = info.title or name.replace("_", " ").capitalize()
        mapping[name] = (wire, label)
        mapping[wire] = (wire, label)
    return mapping


def _message_for(detail: ErrorDetails, label: str) -> str:
    kind = detail["type"]
    ctx = detail.get("ctx") or {}

    if kind == "missing":
        return f"{label} is required"
    if kind == "string_type":
        return f"{label} must be text"
    if kind == "string_too_short":
        if ctx.get("min_length") == 1:
            return f"{label} is required"
        return f"{label} must be at least {ctx.get('min_length')} characters"
    if kind == "string_too_long":
        return f"{label} must be at most {ctx.get('max_length')} characters"

    # Type mismatches are reported apart from range violations
    if kind in _NUMBER_TYPE_ERRORS:
        return f"{label} must be a number"
    if kind in _INTEGER_TYPE_ERRORS:
        return f"{label} must be a whole number"

    if kind == "greater_than":
        return f"{label} must be greater than {_bound(ctx, 'gt')}"
    if kind == "greater_than_equal":
        return f"{label} must be at least {_bound(ctx, 'ge')}"
    if kind == "less_than":
        return f"{label} must be less than {_bound(ctx, 'lt')}"
    if kind == "less_than_equal":
        return f"{label} must be at most {_bound(ctx, 'le')}"

    return detail["msg"]


def _bound(ctx: dict[str, Any], key: str) -> str:
    """Render a numeric limit the way it was declared: 0 rather than 0.0."""
    value = ctx.get(key)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return f"{value:g}"
    return str(value)
