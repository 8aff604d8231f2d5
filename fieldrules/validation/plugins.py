"""Validator Plugins

Post-hoc rule injectors the builder applies to every registered field
validator after built-in rules and cross-field rules have run. A plugin
declares the value type it targets; dispatch queries ``supports`` before
invoking it and skips incompatible validators with a warning.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, TypeVar

from .result import ValidationResult
from .validator import Validator

T = TypeVar("T")
R = TypeVar("R")


class PluginIncompatibleError(Exception):
    """Raised from ``ValidatorPlugin.apply`` when a mismatch is only detectable late."""


class ValidatorPlugin(ABC, Generic[T, R]):
    value_type: type | None = None

    @property
    def name(self) -> str:
        return type(self).__name__

    def supports(self, validator: Validator[Any, R], root: R) -> bool:
        """Capability query: can this plugin handle ``validator``'s values?"""
        if self.value_type is None:
            return True
        if validator.value_type is not None:
            return issubclass(validator.value_type, self.value_type)
        value = validator.value_of(root)
        return value is None or isinstance(value, self.value_type)

    @abstractmethod
    def apply(self, validator: Validator[T, R], result: ValidationResult[R]) -> None:
        """Inject and evaluate extra checks for ``validator`` into ``result``."""


class RulePlugin(ValidatorPlugin[T, R]):
    """Plugin that runs extra rules against every compatible field.

    The rules are declared on a transient validator sharing the target's
    path and getter, so registered validators are never mutated and the
    builder can be validated repeatedly. Untyped plugins that meet a value
    their rules cannot handle are rejected as incompatible.

    Usage:
        builder.register_plugin(RulePlugin(lambda v: v.not_empty(), value_type=str))
    """

    def __init__(self, configure: Callable[[Validator[T, R]], Any], value_type: type | None = None):
        self._configure = configure
        self.value_type = value_type

    def apply(self, validator: Validator[T, R], result: ValidationResult[R]) -> None:
        """Run the injected rules; errors reach ``result`` only if every rule could run.

        Raises:
            PluginIncompatibleError: a rule raised ``TypeError`` on the field's value
        """
        root = result.validated_object
        if not validator.applies_to(root):
            return
        scope = validator.spawn(validator.getter, validator.field_path)
        self._configure(scope)
        scratch = ValidationResult(root)
        try:
            scope.validate(root, scratch)
        except TypeError as e:
            raise PluginIncompatibleError(str(e)) from e
        for error in scratch.errors:
            result.add_error(error.field_path, error.message, constraint=error.constraint)
