# =============================================================================
# core/validation.py - Validation Engine
# =============================================================================
# Turns an untyped request payload into a typed DTO, or into the full list of
# constraint violations found in it.
#
# DTO shapes are declared as explicit constraint tables (see
# core/models/dto.py). The engine compiles each table into a pydantic model
# and reports its errors as named constraint violations:
#
#   CreatePostDto = Shape("CreatePostDto", {
#       "title": FieldRule("string", required=True),
#       "content": FieldRule("string", required=True),
#   })
#
# Two modes, picked by the caller:
# - strict  (skip_missing=False): every required field must be present
# - partial (skip_missing=True):  missing fields are simply left out
#
# Unknown fields are dropped. Nested objects are checked recursively only if
# their FieldRule names a nested shape.
#
# Usage:
#   from core.validation import ensure_valid
#   dto = ensure_valid(CreatePostDto, payload)
#   dto["title"]
# =============================================================================

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Iterator, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, create_model

from app.exceptions import ValidationFailedError

FieldKind = Literal["string", "object", "string_list"]

# Constraint names reported back to clients
REQUIRED = "required"
IS_STRING = "is_string"
IS_OBJECT = "is_object"
IS_STRING_LIST = "is_string_list"

_KIND_CONSTRAINTS: dict[str, tuple[str, str]] = {
    "string": (IS_STRING, "must be a string"),
    "object": (IS_OBJECT, "must be an object"),
    "string_list": (IS_STRING_LIST, "must be a list of strings"),
}


# =============================================================================
# Constraint Tables
# =============================================================================

@dataclass(frozen=True)
class FieldRule:
    """
    Constraints for one field of a DTO shape.

    Attributes:
        kind: Expected value type
        required: Whether strict mode demands the field
        shape: Nested shape to validate an object against (optional)
    """
    kind: FieldKind
    required: bool = False
    shape: Shape | None = None


@dataclass(frozen=True, eq=False)
class Shape:
    """A named table of field rules. Compared and hashed by identity."""
    name: str
    fields: Mapping[str, FieldRule]


# =============================================================================
# Results
# =============================================================================

@dataclass(frozen=True)
class Violation:
    """One violated constraint on one field."""
    field: str
    constraint: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {
            "field": self.field,
            "constraint": self.constraint,
            "message": self.message,
        }


@dataclass(frozen=True)
class Dto:
    """
    Request-scoped typed value produced by validation.

    Holds only the fields that were present and valid. Nested shapes are
    Dto instances themselves.
    """
    shape: str
    values: Mapping[str, Any]

    def __getitem__(self, name: str) -> Any:
        return self.values[name]

    def __contains__(self, name: object) -> bool:
        return name in self.values

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def get(self, name: str, default: Any = None) -> Any:
        return self.values.get(name, default)

    def to_dict(self) -> dict[str, Any]:
        """Plain dict copy, with nested DTOs flattened to dicts."""
        return {
            key: value.to_dict() if isinstance(value, Dto) else value
            for key, value in self.values.items()
        }


@dataclass
class ValidationResult:
    """Either a DTO or the violations that prevented building one."""
    dto: Dto | None = None
    violations: list[Violation] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.violations

# =============================================================================
# Engine
# =============================================================================
# Each (shape, mode) pair is compiled once into a pydantic model. Pydantic
# error types are then mapped back onto the constraint names above.

_KIND_TYPES: dict[str, Any] = {
    "string": str,
    "object": dict[str, Any],
    "string_list": list[str],
}

_MODEL_CONFIG = ConfigDict(extra="ignore")


@lru_cache(maxsize=None)
def _model_for(shape: Shape, skip_missing: bool) -> type[BaseModel]:
    definitions: dict[str, Any] = {}
    for name, rule in shape.fields.items():
        if rule.kind == "object" and rule.shape is not None:
            # A nested object replaces the stored one whole, so it is
            # always checked strictly.
            annotation = _model_for(rule.shape, False)
        else:
            annotation = _KIND_TYPES[rule.kind]

        if rule.required and not skip_missing:
            definitions[name] = (annotation, ...)
        else:
            definitions[name] = (Optional[annotation], None)

    model_name = f"{shape.name}Partial" if skip_missing else shape.name
    return create_model(model_name, __config__=_MODEL_CONFIG, **definitions)


def _prune(shape: Shape, payload: Mapping[str, Any]) -> dict[str, Any]:
    """Keep declared fields only; null counts as missing."""
    cleaned: dict[str, Any] = {}
    for name, rule in shape.fields.items():
        value = payload.get(name)
        if value is None:
            continue
        if rule.shape is not None and isinstance(value, dict):
            value = _prune(rule.shape, value)
        cleaned[name] = value
    return cleaned


def _locate(shape: Shape, loc: tuple[Any, ...]) -> tuple[str, FieldRule | None]:
    """Resolve a pydantic error location to a dotted field path and its rule."""
    parts: list[str] = []
    rule: FieldRule | None = None
    current: Shape | None = shape
    for part in loc:
        if current is None or part not in current.fields:
            break
        rule = current.fields[part]
        parts.append(part)
        current = rule.shape if rule.kind == "object" else None
    return ".".join(parts), rule


def _to_violations(shape: Shape, errors: list[dict[str, Any]]) -> list[Violation]:
    found: dict[tuple[str, str], Violation] = {}
    for error in errors:
        path, rule = _locate(shape, tuple(error["loc"]))
        if rule is None:
            violation = Violation("body", IS_OBJECT, "request body must be a JSON object")
        elif error["type"] == "missing":
            violation = Violation(path, REQUIRED, f"{path} is required")
        else:
            constraint, text = _KIND_CONSTRAINTS[rule.kind]
            violation = Violation(path, constraint, f"{path} {text}")
        # one violation per field and constraint, however many list items failed
        found.setdefault((violation.field, violation.constraint), violation)
    return list(found.values())


def _to_dto(shape: Shape, instance: BaseModel) -> Dto:
    values: dict[str, Any] = {}
    for name, rule in shape.fields.items():
        if name not in instance.model_fields_set:
            continue
        value = getattr(instance, name)
        if isinstance(value, BaseModel) and rule.shape is not None:
            value = _to_dto(rule.shape, value)
        values[name] = value
    return Dto(shape.name, values)


def validate_payload(
    shape: Shape,
    payload: Any,
    skip_missing: bool = False,
) -> ValidationResult:
    """
    Validate a raw payload against a shape.

    Args:
        shape: The DTO constraint table
        payload: Decoded request body (anything JSON can produce)
        skip_missing: Partial mode; required fields may be absent

    Returns:
        ValidationResult with a Dto, or with every violation found
    """
    if not isinstance(payload, dict):
        return ValidationResult(
            violations=[Violation("body", IS_OBJECT, "request body must be a JSON object")]
        )

    model = _model_for(shape, skip_missing)
    try:
        instance = model.model_validate(_prune(shape, payload))
    except ValidationError as e:
        return ValidationResult(violations=_to_violations(shape, e.errors()))
    return ValidationResult(dto=_to_dto(shape, instance))


def ensure_valid(shape: Shape, payload: Any, skip_missing: bool = False) -> Dto:
    """
    Validate a payload, raising on any violation.

    Raises:
        ValidationFailedError: Carrying every violation found
    """
    result = validate_payload(shape, payload, skip_missing=skip_missing)
    if not result.is_valid:
        raise ValidationFailedError([v.to_dict() for v in result.violations])
    return result.dto
