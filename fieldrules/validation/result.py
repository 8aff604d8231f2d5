"""Validation result accumulator shared by one validation run."""
from __future__ import annotations

from typing import Any, Generic, TypeVar

from fieldrules.errors import AppError, Err, Ok, Result

from .errors import FieldError, ValidationError, details_to_app_error

R = TypeVar("R")


class ValidationResult(Generic[R]):
    """Append-only, ordered collection of field errors for one root object.

    Errors appear in the order rules were declared and traversal visited
    them. A result is valid exactly when no error was recorded.
    """

    __slots__ = ("_validated_object", "_errors")

    def __init__(self, validated_object: R):
        self._validated_object = validated_object
        self._errors: list[FieldError] = []

    def add_error(self, field_path: str, message: str, *, constraint: str = "custom") -> None:
        self._errors.append(FieldError(field_path=field_path, message=message, constraint=constraint))

    @property
    def is_valid(self) -> bool:
        return not self._errors

    @property
    def errors(self) -> list[FieldError]:
        return self._errors.copy()

    @property
    def validated_object(self) -> R:
        return self._validated_object

    @property
    def first_error(self) -> FieldError | None:
        return self._errors[0] if self._errors else None

    @property
    def field_errors(self) -> dict[str, list[str]]:
        """Messages grouped by field path, in first-seen path order."""
        grouped: dict[str, list[str]] = {}
        for error in self._errors:
            grouped.setdefault(error.field_path, []).append(error.message)
        return grouped

    def errors_for(self, field_path: str) -> list[FieldError]:
        return [e for e in self._errors if e.field_path == field_path]

    def __len__(self) -> int:
        return len(self._errors)

    def __repr__(self) -> str:
        return f"ValidationResult(valid={self.is_valid}, errors={len(self._errors)})"

    def to_dict(self) -> dict[str, Any]:
        return {"valid": self.is_valid, "errors": [e.to_dict() for e in self._errors]}

    def to_app_error(self) -> AppError | None:
        """Convert to AppError if errors exist."""
        return details_to_app_error(self._errors) if self._errors else None

    def to_result(self) -> Result[R, AppError]:
        """``Ok(validated_object)`` when valid, otherwise ``Err`` with the collapsed error."""
        if self.is_valid:
            return Ok(self._validated_object)
        return Err(details_to_app_error(self._errors))

    def raise_if_invalid(self, message: str = "Validation failed") -> None:
        if self._errors:
            raise ValidationError(message=message, details=self._errors.copy())
