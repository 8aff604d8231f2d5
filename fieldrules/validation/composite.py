"""Composite Validator

A reusable bundle of rule-adding steps plus one default applicability
condition. The same composite can be attached to any number of validators;
it holds no per-target state, so every application yields an independent
rule set.

Usage:
    address_rules = (
        CompositeValidator()
        .add(lambda v: v.not_null())
        .add(lambda v: v.nested("city", lambda a: a.city, lambda c: c.not_empty()))
    )
    builder.rule_for("main_address", lambda u: u.main_address).compose(address_rules)
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Generic, TypeVar

from .conditions import Condition, always

if TYPE_CHECKING:
    from .validator import Validator

T = TypeVar("T")
R = TypeVar("R")

Configurator = Callable[["Validator[T, R]"], Any]


class CompositeValidator(Generic[T, R]):
    __slots__ = ("_configurators", "_default_condition")

    def __init__(self, *configurators: Configurator):
        self._configurators: list[Configurator] = list(configurators)
        self._default_condition: Condition = always

    def add(self, configurator: Configurator) -> CompositeValidator[T, R]:
        self._configurators.append(configurator)
        return self

    def with_default_condition(self, condition: Condition) -> CompositeValidator[T, R]:
        """Replace the default condition (last write wins)."""
        self._default_condition = condition
        return self

    @property
    def default_condition(self) -> Condition:
        return self._default_condition

    def apply_to(self, validator: Validator[T, R]) -> None:
        """Run every configurator against ``validator`` in registration order."""
        for configure in self._configurators:
            configure(validator)

    def __len__(self) -> int:
        return len(self._configurators)
