"""Exception Bridge

Raising helpers for code paths that report engine misconfiguration as
exceptions instead of Result values.
"""
from __future__ import annotations

from .types import AppError


class AppErrorException(Exception):
    """Exception wrapper for AppError.

    Use this when you need to raise an AppError in code that
    doesn't use the Result monad.
    """

    def __init__(self, error: AppError):
        self.error = error
        super().__init__(str(error))


def raise_error(error: AppError) -> None:
    """Raise AppError as exception.

    Usage:
        if root is UNBOUND:
            raise_error(invalid_configuration("no root", component="validator").error)
    """
    raise AppErrorException(error)
