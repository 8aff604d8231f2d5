"""Monadic Error Handling

Key components:
- Result[T, E]: Monadic container for success/failure
- AppError: Base error type with full context
- ErrorCode: Error code taxonomy
- Builder functions: Ergonomic error construction

Usage:
    from fieldrules.errors import Ok, Err, AppError

    match result.to_result():
        case Ok(user):
            save(user)
        case Err(error):
            log.warning(error.message, code=error.code.name)
"""
from .types import (
    Result,
    Ok,
    Err,
    AppError,
    ErrorCode,
    ErrorContext,
)

from .builders import (
    validation_error,
    validation_failed,
    plugin_incompatible,
    invalid_configuration,
)

from .handlers import (
    AppErrorException,
    raise_error,
)

__all__ = [
    "Result",
    "Ok",
    "Err",
    "AppError",
    "ErrorCode",
    "ErrorContext",
    "validation_error",
    "validation_failed",
    "plugin_incompatible",
    "invalid_configuration",
    "AppErrorException",
    "raise_error",
]
