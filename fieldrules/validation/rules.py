"""Validation Rules

A rule is the atomic unit of constraint: a predicate over the derived value,
a static message, and an applicability condition. A rule whose message is
``None`` only exists to drive a traversal (nested, for_each, compose) and
never reports an error of its own.
"""
from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Generic, TypeVar

from .conditions import Condition

if TYPE_CHECKING:
    from .context import ValidationContext

T = TypeVar("T")
R = TypeVar("R")

RulePredicate = Callable[[Any, "ValidationContext[Any]"], bool]


@dataclass(frozen=True, slots=True)
class ValidationRule(Generic[T, R]):
    predicate: RulePredicate
    message: str | None
    condition: Condition
    constraint: str = "custom"
    args: tuple = ()

    @property
    def traverses(self) -> bool:
        """True for side-effecting rules that never emit their own error."""
        return self.message is None

    def applies(self, value: T, root: R) -> bool:
        return bool(self.condition(value, root))

    def test(self, value: T, context: ValidationContext[R]) -> bool:
        return bool(self.predicate(value, context))


def takes_root(predicate: Callable[..., Any]) -> bool:
    """Whether a user predicate wants ``(value, root)`` rather than ``(value)``.

    Decided by required positional parameters; callables without an
    inspectable signature (most builtins) are treated as single-argument.
    """
    try:
        params = inspect.signature(predicate).parameters.values()
    except (TypeError, ValueError):
        return False
    required = 0
    for param in params:
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return True
        if param.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD) \
                and param.default is inspect.Parameter.empty:
            required += 1
    return required >= 2
