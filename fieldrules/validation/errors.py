"""Validation Error Records

Path-addressed error records and the exception raised when a caller asks
for an invalid result to be treated as fatal.

Error Format:
{
    "error": {
        "type": "validation_error",
        "message": "Validation failed",
        "error_count": 1,
        "errors": [
            {"field": "addresses[0].city", "constraint": "not_null", "message": "must not be null"}
        ]
    }
}
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from fieldrules.errors import AppError, ErrorCode, validation_error, validation_failed


@dataclass(frozen=True, slots=True)
class FieldError:
    """A single failed rule.

    - field_path: dotted/indexed path to the offending value (e.g. "addresses[0].street")
    - message: rendered failure message
    - constraint: name of the rule that failed (e.g. "not_null", "matches")
    """
    field_path: str
    message: str
    constraint: str = "custom"

    def to_dict(self) -> dict[str, Any]:
        return {"field": self.field_path, "constraint": self.constraint, "message": self.message}

    def __str__(self) -> str:
        return f"{self.field_path} {self.message}" if self.field_path else self.message


def details_to_app_error(details: list[FieldError], origin: str = "validation") -> AppError:
    """Collapse field errors into one AppError for the error handling system."""
    if len(details) == 1:
        d = details[0]
        return validation_error(f"{d.field_path}: {d.message}", code=ErrorCode.for_constraint(d.constraint),
            field=d.field_path, constraint=d.constraint, origin=origin).error
    return validation_failed(len(details), [d.to_dict() for d in details], origin=origin).error


@dataclass
class ValidationError(Exception):
    """Raised by ``ValidationResult.raise_if_invalid`` when errors were recorded."""
    message: str
    details: list[FieldError]

    def __post_init__(self):
        super().__init__(self.message)

    def __str__(self) -> str:
        if not self.details: return self.message
        if len(self.details) == 1: return f"{(d := self.details[0]).field_path}: {d.message}"
        return f"{self.message} ({len(self.details)} errors)"

    @property
    def field_errors(self) -> dict[str, list[FieldError]]:
        """Group errors by field path."""
        result: dict[str, list[FieldError]] = {}
        for detail in self.details: result.setdefault(detail.field_path, []).append(detail)
        return result

    @property
    def first_error(self) -> FieldError | None: return self.details[0] if self.details else None

    def to_app_error(self) -> AppError: return details_to_app_error(self.details)

    def to_dict(self) -> dict[str, Any]:
        return {"error": {"type": "validation_error", "message": self.message,
            "error_count": len(self.details), "errors": [d.to_dict() for d in self.details]}}
