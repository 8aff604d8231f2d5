"""Validation Builder

Root-level orchestration: registers field validators and cross-field
validators against one root object, optionally registers plugins, and runs
the whole batch into a single result.

Usage:
    builder = ValidationBuilder(user)
    builder.rule_for("name", lambda u: u.name).not_null()
    builder.rule_for("email", lambda u: u.email).matches(r"^[^@]+@[^@]+\\.[^@]+$")
    builder.rule_for_combination(
        "password", "confirm_password", lambda u: u.password, lambda u: u.confirm_password,
    ).satisfies(lambda a, b: a == b, "passwords must match")

    result = builder.validate()
    if not result.is_valid:
        for error in result.errors:
            print(error)
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Hashable, Iterable, TypeVar

from fieldrules.config import get_settings
from fieldrules.errors import plugin_incompatible, raise_error
from fieldrules.logging import builder_logger, plugin_logger

from .conditions import Condition, always
from .cross_field import CrossFieldValidator
from .factory import DefaultValidatorFactory, ValidatorFactory
from .groups import GroupValidator
from .plugins import PluginIncompatibleError, ValidatorPlugin
from .result import ValidationResult
from .validator import Validator

R = TypeVar("R")
U = TypeVar("U")
V = TypeVar("V")

log = builder_logger()


@dataclass(frozen=True, slots=True)
class _Registration(Generic[R]):
    validator: Any
    groups: frozenset


class ValidationBuilder(Generic[R]):
    """Single-use entry point bound to one root object.

    ``validate`` may be called repeatedly; each call produces an independent
    result because registered validators are fixed after configuration.
    """

    def __init__(
        self,
        obj: R,
        validator_factory: ValidatorFactory | None = None,
        *,
        strict_plugins: bool | None = None,
    ):
        self._object = obj
        self._factory = validator_factory or DefaultValidatorFactory()
        self._strict_plugins = strict_plugins
        self._validators: list[_Registration[R]] = []
        self._cross_field_validators: list[_Registration[R]] = []
        self._plugins: list[ValidatorPlugin[Any, R]] = []

    @property
    def validated_object(self) -> R:
        return self._object

    def rule_for(
        self,
        field_name: str,
        getter: Callable[[R], U],
        condition: Condition = always,
        *,
        value_type: type | None = None,
        groups: Iterable[Hashable] = (),
    ) -> Validator[U, R]:
        """Register a field validator; ``condition`` gates the whole field."""
        validator = self._factory.create_validator(getter, field_name, condition, self._object, value_type=value_type)
        self._validators.append(_Registration(validator, frozenset(groups)))
        return validator

    def rule_for_combination(
        self,
        field1: str,
        field2: str,
        getter1: Callable[[R], U],
        getter2: Callable[[R], V],
        condition: Callable[[R], bool] | None = None,
        *,
        groups: Iterable[Hashable] = (),
    ) -> CrossFieldValidator[R, U, V]:
        validator = CrossFieldValidator(field1, field2, getter1, getter2)
        if condition is not None:
            validator.when(condition)
        self._cross_field_validators.append(_Registration(validator, frozenset(groups)))
        return validator

    def register_plugin(self, plugin: ValidatorPlugin[Any, R]) -> ValidationBuilder[R]:
        self._plugins.append(plugin)
        return self

    def validate(self, *groups: Hashable) -> ValidationResult[R]:
        """Run field validators, then cross-field validators, then plugins.

        When ``groups`` are given, registrations tagged with other groups
        are skipped; untagged registrations always run.
        """
        selector = GroupValidator(*groups)
        validators = [r.validator for r in self._validators if selector.selects(r.groups)]
        cross_field = [r.validator for r in self._cross_field_validators if selector.selects(r.groups)]

        log.debug(
            "validation_started",
            root_type=type(self._object).__name__,
            validators=len(validators),
            cross_field_validators=len(cross_field),
            plugins=len(self._plugins),
            groups=sorted(map(str, selector.active_groups)),
        )

        result = ValidationResult(self._object)
        for validator in validators:
            validator.validate(self._object, result)
        for validator in cross_field:
            validator.validate(self._object, result)
        self._apply_plugins(validators, result)

        log.debug("validation_completed", root_type=type(self._object).__name__,
            valid=result.is_valid, error_count=len(result))
        return result

    def _apply_plugins(self, validators: list[Validator[Any, R]], result: ValidationResult[R]) -> None:
        for plugin in self._plugins:
            for validator in validators:
                self._apply_plugin(plugin, validator, result)

    def _apply_plugin(self, plugin: ValidatorPlugin[Any, R], validator: Validator[Any, R],
                      result: ValidationResult[R]) -> None:
        if not plugin.supports(validator, self._object):
            self._skip_plugin(plugin, validator, reason="value_type")
            return
        try:
            plugin.apply(validator, result)
        except PluginIncompatibleError as e:
            self._skip_plugin(plugin, validator, reason=str(e) or "rejected")
            return
        plugin_logger().debug("plugin_applied", plugin=plugin.name, field=validator.field_path)

    def _skip_plugin(self, plugin: ValidatorPlugin[Any, R], validator: Validator[Any, R], *, reason: str) -> None:
        expected = getattr(plugin.value_type, "__name__", "any")
        strict = self._strict_plugins if self._strict_plugins is not None else get_settings().STRICT_PLUGINS
        if strict:
            raise_error(plugin_incompatible(plugin.name, validator.field_path, expected, origin="builder").error)
        plugin_logger().warning(
            "plugin_incompatible",
            plugin=plugin.name,
            field=validator.field_path,
            validator=type(validator).__name__,
            expected=expected,
            reason=reason,
        )
