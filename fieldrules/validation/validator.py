"""Field Validator

Binds one derived value (getter over the root object) to a field path, a
top-level gating condition and an ordered list of rules.

Features:
- Fluent rule declaration; every rule method returns the validator
- Per-rule conditions plus a ``when``/``otherwise`` step for inline if/else
- Nested, per-element and composed scopes run as transient child validators
  that report into the same shared result
- Optional message source for rendering failure messages
"""
from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, Sized
from typing import TYPE_CHECKING, Any, Callable, Generic, TypeVar

from fieldrules.config import get_settings
from fieldrules.errors import invalid_configuration, raise_error

from .conditions import Condition, always, both, negate, never
from .context import ValidationContext, index_path, join_path
from .messages import MessageSource
from .result import ValidationResult
from .rules import RulePredicate, ValidationRule, takes_root

if TYPE_CHECKING:
    from .composite import CompositeValidator

T = TypeVar("T")
U = TypeVar("U")
R = TypeVar("R")


class _Unbound:
    def __repr__(self) -> str:
        return "UNBOUND"


UNBOUND: Any = _Unbound()


def _is_empty(value: Any) -> bool:
    # mappings are neither strings nor collections, as in for_each
    if isinstance(value, Sized) and not isinstance(value, Mapping):
        return len(value) == 0
    return False


def _is_collection(value: Any) -> bool:
    return isinstance(value, Iterable) and not isinstance(value, (str, bytes, bytearray, Mapping))


def _type_name(element_type: Any) -> str:
    return getattr(element_type, "__name__", str(element_type))


class Validator(Generic[T, R]):
    """Ordered rule list for one field of a root object.

    Usage:
        validator = Validator(lambda user: user.email, "email")
        validator.not_null().matches(r"^[^@]+@[^@]+\\.[^@]+$")
        result = validator.validate(user)
    """

    def __init__(
        self,
        getter: Callable[[R], T],
        field_path: str = "",
        top_level_condition: Condition = always,
        root: R = UNBOUND,
        *,
        value_type: type | None = None,
        message_source: MessageSource | None = None,
        locale: str | None = None,
    ):
        self._getter = getter
        self._field_path = field_path
        self._top_level_condition = top_level_condition
        self._root = root
        self._rules: list[ValidationRule[T, R]] = []
        self.value_type = value_type
        self._message_source = message_source
        self._locale = locale

    @property
    def field_path(self) -> str:
        return self._field_path

    @property
    def getter(self) -> Callable[[R], T]:
        return self._getter

    @property
    def rules(self) -> tuple[ValidationRule[T, R], ...]:
        return tuple(self._rules)

    def value_of(self, root: R) -> T:
        return self._getter(root)

    def applies_to(self, root: R) -> bool:
        """Whether the top-level condition admits this field for ``root``."""
        return bool(self._top_level_condition(self._getter(root), root))

    # ------------------------------------------------------------------
    # Built-in rules
    # ------------------------------------------------------------------

    def not_null(self, condition: Condition = always) -> Validator[T, R]:
        return self._add_rule(lambda value, context: value is not None, "must not be null", condition,
            constraint="not_null")

    def not_empty(self, condition: Condition = always) -> Validator[T, R]:
        return self._add_rule(lambda value, context: value is not None and not _is_empty(value),
            "must not be empty", condition, constraint="not_empty")

    def satisfies(self, predicate: Callable[..., bool], message: str, condition: Condition = always) -> Validator[T, R]:
        """Null-safe custom predicate; ``predicate`` takes ``(value)`` or ``(value, root)``."""
        if takes_root(predicate):
            check = lambda value, context: value is None or predicate(value, context.root)
        else:
            check = lambda value, context: value is None or predicate(value)
        return self._add_rule(check, message, condition, constraint="satisfies")

    def cross_field(self, predicate: Callable[[T, R], bool], message: str, condition: Condition = always) -> Validator[T, R]:
        """Root-aware predicate that also sees ``None`` values."""
        return self._add_rule(lambda value, context: predicate(value, context.root), message, condition,
            constraint="cross_field")

    def matches(self, regex: str, condition: Condition = always) -> Validator[T, R]:
        pattern = re.compile(regex)
        return self._add_rule(lambda value, context: value is not None and pattern.fullmatch(str(value)) is not None,
            f"must match pattern: {regex}", condition, constraint="matches", args=(regex,))

    def greater_than(self, bound: Any, condition: Condition = always) -> Validator[T, R]:
        return self._add_rule(lambda value, context: value is not None and value > bound,
            f"must be greater than {bound}", condition, constraint="greater_than", args=(bound,))

    # ------------------------------------------------------------------
    # Traversal rules
    # ------------------------------------------------------------------

    def nested(
        self,
        field_name: str,
        nested_getter: Callable[[T], U],
        configure: Callable[[Validator[U, R]], Any],
        condition: Condition = always,
    ) -> Validator[T, R]:
        """Validate a value derived from this one at ``<path>.<field_name>``.

        The child is only run when the current value is not ``None``.
        """
        nested_path = join_path(self._field_path, field_name)

        def traverse(value: T, context: ValidationContext[R]) -> bool:
            if value is not None:
                child = self.spawn(lambda root: nested_getter(value), nested_path)
                configure(child)
                child.validate(context.root, context.result)
            return True

        return self._add_rule(traverse, None, condition, constraint="nested")

    def for_each(
        self,
        field_name: str,
        element_type: Any,
        configure: Callable[[Validator[Any, R]], Any],
        condition: Condition = always,
        *,
        type_check: Callable[[Any], bool] | None = None,
    ) -> Validator[T, R]:
        """Validate every element of a collection value at ``<path>[<index>]``.

        Elements rejected by ``type_check`` (``isinstance(item, element_type)``
        by default) are reported as ``is not of type <element_type>``.
        """
        list_path = join_path(self._field_path, field_name)
        is_element = type_check or (lambda item: isinstance(item, element_type))
        type_message = f"is not of type {_type_name(element_type)}"

        def traverse(value: T, context: ValidationContext[R]) -> bool:
            if not _is_collection(value):
                return True
            for index, item in enumerate(value):
                item_path = index_path(list_path, index)
                if is_element(item):
                    child = self.spawn(lambda root, item=item: item, item_path)
                    configure(child)
                    child.validate(context.root, context.result)
                else:
                    context.result.add_error(item_path, type_message, constraint="type")
            return True

        return self._add_rule(traverse, None, condition, constraint="for_each")

    def compose(self, composite: CompositeValidator[T, R]) -> Validator[T, R]:
        return self.compose_conditionally(composite)

    def compose_conditionally(
        self, composite: CompositeValidator[T, R], condition: Condition | None = None
    ) -> Validator[T, R]:
        """Run a composite's rules against this value in a transient scope.

        The override ``condition`` (default: the composite's own) is ANDed
        with the composite's default condition, which is never bypassed.
        """
        default_condition = composite.default_condition
        effective = both(condition if condition is not None else default_condition, default_condition)

        def apply_composite(value: T, context: ValidationContext[R]) -> bool:
            child = self.spawn(lambda root: value, self._field_path)
            composite.apply_to(child)
            before = len(context.result)
            child.validate(context.root, context.result)
            return len(context.result) == before

        return self._add_rule(apply_composite, None, effective, constraint="compose")

    # ------------------------------------------------------------------
    # Conditions and messages
    # ------------------------------------------------------------------

    def when(self, condition: Condition) -> ConditionalRules[T, R]:
        """Gate exactly the next declared rule on ``condition``."""
        return ConditionalRules(self, condition)

    def otherwise(self) -> ConditionalRules[T, R]:
        """Negate the (always-true) pending condition: the next rule never applies."""
        return ConditionalRules(self, never)

    def with_message_source(self, source: MessageSource | None, locale: str | None = None) -> Validator[T, R]:
        self._message_source, self._locale = source, locale
        return self

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def spawn(self, getter: Callable[[R], U], field_path: str) -> Validator[U, R]:
        """Create a transient child of the same class, inheriting root and message source."""
        return type(self)(getter, field_path, always, self._root,
            message_source=self._message_source, locale=self._locale)

    def validate(self, root: R = UNBOUND, result: ValidationResult[R] | None = None) -> ValidationResult[R]:
        """Evaluate every rule against ``root`` and record failures into ``result``.

        Without arguments the root bound at construction is validated into a
        fresh result.
        """
        if root is UNBOUND:
            root = self._root
        if root is UNBOUND:
            raise_error(invalid_configuration(f"Validator for '{self._field_path}' has no root object to validate",
                component="validator", field=self._field_path).error)
        if result is None:
            result = ValidationResult(root)

        value = self._getter(root)
        if not self._top_level_condition(value, root):
            return result

        context = ValidationContext(root, result)
        for rule in self._rules:
            if rule.applies(value, root) and not rule.test(value, context) and not rule.traverses:
                result.add_error(self._field_path, self._render(rule), constraint=rule.constraint)
        return result

    def _render(self, rule: ValidationRule[T, R]) -> str:
        if self._message_source is None:
            return rule.message
        return self._message_source.render(rule.message, rule.args, self._locale or get_settings().DEFAULT_LOCALE)

    def _add_rule(
        self,
        predicate: RulePredicate,
        message: str | None,
        condition: Condition,
        *,
        constraint: str = "custom",
        args: tuple = (),
    ) -> Validator[T, R]:
        self._rules.append(ValidationRule(predicate, message, condition, constraint, args))
        return self

    def __repr__(self) -> str:
        return f"{type(self).__name__}(field_path={self._field_path!r}, rules={len(self._rules)})"


class ConditionalRules(Generic[T, R]):
    """Pending condition for the next rule declared on a validator.

    Each rule method adds exactly one rule whose condition is ANDed with the
    pending one and returns the validator, so later rules are unaffected.

    Usage:
        v.when(is_adult).satisfies(has_id, "id required")
        v.when(is_adult).otherwise().satisfies(has_guardian, "guardian required")
    """

    __slots__ = ("_validator", "_condition")

    def __init__(self, validator: Validator[T, R], condition: Condition):
        self._validator, self._condition = validator, condition

    def _gate(self, condition: Condition) -> Condition:
        return both(condition, self._condition)

    def when(self, condition: Condition) -> ConditionalRules[T, R]:
        return ConditionalRules(self._validator, condition)

    def otherwise(self) -> ConditionalRules[T, R]:
        return ConditionalRules(self._validator, negate(self._condition))

    def with_message_source(self, source: MessageSource | None, locale: str | None = None) -> ConditionalRules[T, R]:
        self._validator.with_message_source(source, locale)
        return self

    def not_null(self, condition: Condition = always) -> Validator[T, R]:
        return self._validator.not_null(self._gate(condition))

    def not_empty(self, condition: Condition = always) -> Validator[T, R]:
        return self._validator.not_empty(self._gate(condition))

    def satisfies(self, predicate: Callable[..., bool], message: str, condition: Condition = always) -> Validator[T, R]:
        return self._validator.satisfies(predicate, message, self._gate(condition))

    def cross_field(self, predicate: Callable[[T, R], bool], message: str, condition: Condition = always) -> Validator[T, R]:
        return self._validator.cross_field(predicate, message, self._gate(condition))

    def matches(self, regex: str, condition: Condition = always) -> Validator[T, R]:
        return self._validator.matches(regex, self._gate(condition))

    def greater_than(self, bound: Any, condition: Condition = always) -> Validator[T, R]:
        return self._validator.greater_than(bound, self._gate(condition))

    def nested(self, field_name: str, nested_getter: Callable[[T], U], configure: Callable[[Validator[U, R]], Any],
               condition: Condition = always) -> Validator[T, R]:
        return self._validator.nested(field_name, nested_getter, configure, self._gate(condition))

    def for_each(self, field_name: str, element_type: Any, configure: Callable[[Validator[Any, R]], Any],
                 condition: Condition = always, *, type_check: Callable[[Any], bool] | None = None) -> Validator[T, R]:
        return self._validator.for_each(field_name, element_type, configure, self._gate(condition),
            type_check=type_check)

    def compose(self, composite: CompositeValidator[T, R]) -> Validator[T, R]:
        return self.compose_conditionally(composite)

    def compose_conditionally(self, composite: CompositeValidator[T, R],
                              condition: Condition | None = None) -> Validator[T, R]:
        base = condition if condition is not None else composite.default_condition
        return self._validator.compose_conditionally(composite, self._gate(base))
