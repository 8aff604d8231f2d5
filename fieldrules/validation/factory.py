"""Validator Factories

Indirection point for how field validators store and invoke their closures.
The builder only talks to a ``ValidatorFactory``, so swapping eager for lazy
evaluation needs no change at the call sites.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, TypeVar

from .conditions import Condition
from .rules import RulePredicate
from .validator import UNBOUND, Validator

T = TypeVar("T")
R = TypeVar("R")
F = TypeVar("F")


class Deferred(Generic[F]):
    """Resolve a value on first access and cache it."""

    __slots__ = ("_supplier", "_value", "resolved")

    def __init__(self, supplier: Callable[[], F]):
        self._supplier, self._value, self.resolved = supplier, None, False

    def get(self) -> F:
        if not self.resolved:
            self._value, self.resolved = self._supplier(), True
        return self._value


class LazyLoadingValidator(Validator[T, R]):
    """Validator whose rule predicates and conditions are bound on first use."""

    def _add_rule(
        self,
        predicate: RulePredicate,
        message: str | None,
        condition: Condition,
        *,
        constraint: str = "custom",
        args: tuple = (),
    ) -> Validator[T, R]:
        lazy_predicate = Deferred(lambda: predicate)
        lazy_condition = Deferred(lambda: condition)
        return super()._add_rule(
            lambda value, context: lazy_predicate.get()(value, context),
            message,
            lambda value, root: lazy_condition.get()(value, root),
            constraint=constraint,
            args=args,
        )


class ValidatorFactory(ABC):
    @abstractmethod
    def create_validator(
        self,
        getter: Callable[[R], T],
        field_path: str,
        top_level_condition: Condition,
        root: R = UNBOUND,
        *,
        value_type: type | None = None,
    ) -> Validator[T, R]:
        """Construct a field validator bound to ``root``."""


class DefaultValidatorFactory(ValidatorFactory):
    def create_validator(self, getter, field_path, top_level_condition, root=UNBOUND, *,
                         value_type=None) -> Validator[Any, Any]:
        return Validator(getter, field_path, top_level_condition, root, value_type=value_type)


class LazyLoadingValidatorFactory(ValidatorFactory):
    def create_validator(self, getter, field_path, top_level_condition, root=UNBOUND, *,
                         value_type=None) -> Validator[Any, Any]:
        return LazyLoadingValidator(getter, field_path, top_level_condition, root, value_type=value_type)
