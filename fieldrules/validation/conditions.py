"""Condition Combinators

A condition is a ``(value, root) -> bool`` callable deciding whether a rule,
or a whole field validator, applies for one validation run.
"""
from __future__ import annotations

from typing import Any, Callable

Condition = Callable[[Any, Any], bool]


def always(value: Any, root: Any) -> bool:
    return True


def never(value: Any, root: Any) -> bool:
    return False


def both(first: Condition, second: Condition) -> Condition:
    """AND two conditions, short-circuiting on the first."""
    if first is always:
        return second
    if second is always:
        return first
    return lambda value, root: first(value, root) and second(value, root)


def negate(condition: Condition) -> Condition:
    if condition is always:
        return never
    if condition is never:
        return always
    return lambda value, root: not condition(value, root)
