"""Validation context and field path helpers."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from .result import ValidationResult

R = TypeVar("R")


@dataclass(frozen=True, slots=True)
class ValidationContext(Generic[R]):
    """Pairs the root object with the single result shared by one run.

    Passed down through nested, iterated and composed evaluation so that
    descendants can reach the original root and report into the same result.
    """
    root: R
    result: ValidationResult[R]


def join_path(parent: str, name: str) -> str:
    """Extend ``parent`` with a dotted segment (``"user" + "city" -> "user.city"``)."""
    if not parent:
        return name
    if not name:
        return parent
    return f"{parent}.{name}"


def index_path(path: str, index: int) -> str:
    """Append a zero-based collection index (``"addresses" -> "addresses[2]"``)."""
    return f"{path}[{index}]"
