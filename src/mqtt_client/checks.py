from __future__ import annotations

from typing import Any, TypeVar

from .errors import ValidationError

T = TypeVar("T")

UNSIGNED_SHORT_MAX = 65_535


def not_null(value: T | None, name: str) -> T:
    if value is None:
        raise ValidationError(f"{name} must not be None.")
    return value


def not_empty(value: str | None, name: str) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{name} must be a string, got {type(value).__name__}.")
    if not value:
        raise ValidationError(f"{name} must not be empty.")
    return value


def port(value: Any, name: str) -> int:
    """Accept an int in the range 1..65535; bools are rejected."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{name} must be an int, got {type(value).__name__}.")
    if not 1 <= value <= UNSIGNED_SHORT_MAX:
        raise ValidationError(
            f"{name} must be in the range [1, {UNSIGNED_SHORT_MAX}], but was {value}.",
            details=value,
        )
    return value


def instance_or_none(value: Any, cls: type[T], name: str) -> T | None:
    if value is None:
        return None
    return instance(value, cls, name)


def instance(value: Any, cls: type[T], name: str) -> T:
    if not isinstance(value, cls):
        raise ValidationError(
            f"{name} must be created by the {cls.__name__} API, "
            f"got {type(value).__name__}."
        )
    return value


def listener(value: Any, name: str) -> Any:
    not_null(value, name)
    if not callable(value):
        raise ValidationError(f"{name} must be callable, got {type(value).__name__}.")
    return value
