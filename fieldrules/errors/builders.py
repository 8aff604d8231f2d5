"""Error Builders

Ergonomic constructors for the typed errors the engine reports.
Each builder creates an AppError with the appropriate code and context.
"""
from typing import Any

from .types import AppError, ErrorCode, ErrorContext, Err


# =============================================================================
# Validation Errors (E2xxx)
# =============================================================================

def validation_error(
    message: str,
    *,
    code: ErrorCode = ErrorCode.E2000_VALIDATION_GENERIC,
    field: str | None = None,
    constraint: str | None = None,
    origin: str = "",
    **metadata,
) -> Err[AppError]:
    """Create validation error."""
    meta = {"field": field, "constraint": constraint, **metadata}
    return Err(AppError(
        code=code,
        message=message,
        context=ErrorContext(origin=origin),
        metadata={k: v for k, v in meta.items() if v is not None},
    ))


def validation_failed(
    error_count: int, errors: list[dict[str, Any]], origin: str = ""
) -> Err[AppError]:
    return validation_error(
        f"Validation failed: {error_count} errors",
        origin=origin,
        error_count=error_count,
        errors=errors,
    )


def plugin_incompatible(
    plugin: str, field: str, expected: str, origin: str = ""
) -> Err[AppError]:
    return validation_error(
        f"Plugin '{plugin}' is not compatible with validator for '{field}' (expects {expected})",
        code=ErrorCode.E2007_PLUGIN_INCOMPATIBLE,
        field=field,
        origin=origin,
        plugin=plugin,
        expected=expected,
    )


# =============================================================================
# Internal Errors (E9xxx)
# =============================================================================

def invalid_configuration(
    message: str, *, component: str, origin: str = "", **metadata
) -> Err[AppError]:
    """Create error for a validator that was wired up incorrectly."""
    return Err(AppError(
        code=ErrorCode.E9004_INVALID_CONFIGURATION,
        message=message,
        context=ErrorContext(origin=origin),
        metadata={"component": component, **metadata},
    ))
