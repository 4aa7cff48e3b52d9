from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Mapping, Optional, Tuple, Type, TypeVar, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..core.exceptions import ValidationError

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)


@dataclass(frozen=True)
class FieldViolation:
    path: Tuple[Union[str, int], ...]
    message: str

    def describe(self) -> str:
        where = ".".join(str(p) for p in self.path) or "<body>"
        return f"{where}: {self.message}"

    def to_json(self) -> dict:
        return {"path": list(self.path), "message": self.message}


@dataclass(frozen=True)
class Valid(Generic[T]):
    value: T


@dataclass(frozen=True)
class Invalid:
    violations: Tuple[FieldViolation, ...]


ValidationResult = Union[Valid[T], Invalid]


def require_non_blank(value: Optional[str], message: str) -> Optional[str]:
    """Reject empty or whitespace-only strings. The value is returned untouched."""
    if value is not None and not value.strip():
        raise ValueError(message)
    return value


def reject_null(value: Any, message: str) -> Any:
    if value is None:
        raise ValueError(message)
    return value


_OBJECT_TYPE_ERRORS = frozenset({"model_type", "model_attributes_type", "dict_type"})


def _to_violation(err: Mapping[str, Any], required_messages: Mapping[str, str]) -> FieldViolation:
    path = tuple(err.get("loc") or ())
    if err["type"] in _OBJECT_TYPE_ERRORS:
        message = "Must be an object" if path else "Request body must be a JSON object"
    elif err["type"] == "missing":
        key = path[-1] if path else ""
        message = required_messages.get(str(key), "Required")
    elif err["type"] == "value_error" and "error" in (err.get("ctx") or {}):
        # Strip pydantic's "Value error, " prefix; keep our own message.
        message = str(err["ctx"]["error"])
    else:
        message = err["msg"]
    return FieldViolation(path=path, message=message)


def validate_payload(
    model: Type[M],
    payload: Any,
    *,
    required_messages: Optional[Mapping[str, str]] = None,
) -> ValidationResult[M]:
    """Run a payload through a schema model and return a tagged result."""

    try:
        return Valid(model.model_validate(payload))
    except PydanticValidationError as exc:
        messages = required_messages or {}
        return Invalid(tuple(_to_violation(e, messages) for e in exc.errors(include_url=False)))


def unwrap(result: ValidationResult[T]) -> T:
    if isinstance(result, Invalid):
        raise ValidationError(result.violations)
    return result.value
