"""Cross-Field Validator

A standalone invariant over two values derived from the same root, e.g.
``password == confirm_password``. It is not bound to a field validator's
path; failures are reported through a replaceable error handler.
"""
from __future__ import annotations

from typing import Any, Callable, Generic, TypeVar

from fieldrules.errors import invalid_configuration, raise_error

from .result import ValidationResult

R = TypeVar("R")
U = TypeVar("U")
V = TypeVar("V")

ErrorHandler = Callable[[ValidationResult[Any], str | None], None]


class CrossFieldValidator(Generic[R, U, V]):
    """Compare two derived values with a binary predicate.

    Usage:
        builder.rule_for_combination(
            "password", "confirm_password",
            lambda f: f.password, lambda f: f.confirm_password,
        ).satisfies(lambda a, b: a == b, "passwords must match")
    """

    def __init__(self, field1: str, field2: str, getter1: Callable[[R], U], getter2: Callable[[R], V]):
        self.field1, self.field2 = field1, field2
        self._getter1, self._getter2 = getter1, getter2
        self._predicate: Callable[[U, V], bool] | None = None
        self._message: str | None = None
        self._condition: Callable[[R], bool] = lambda root: True
        self._negate = False
        self._error_handler: ErrorHandler = self._report_both

    def _report_both(self, result: ValidationResult[Any], message: str | None) -> None:
        result.add_error(self.field1, message, constraint="cross_field")
        result.add_error(self.field2, message, constraint="cross_field")

    def satisfies(self, predicate: Callable[[U, V], bool], message: str) -> CrossFieldValidator[R, U, V]:
        self._predicate, self._message = predicate, message
        return self

    def when(self, condition: Callable[[R], bool]) -> CrossFieldValidator[R, U, V]:
        """Replace the applicability condition and clear any pending negation."""
        self._condition, self._negate = condition, False
        return self

    def otherwise(self) -> CrossFieldValidator[R, U, V]:
        """Toggle negation of the applicability condition."""
        self._negate = not self._negate
        return self

    def with_error_handler(self, handler: ErrorHandler) -> CrossFieldValidator[R, U, V]:
        self._error_handler = handler
        return self

    def with_message(self, provider: Callable[[R], str]) -> CrossFieldValidator[R, U, V]:
        """Render the failure message from the validated root at failure time."""
        self._message = None

        def report(result: ValidationResult[Any], message: str | None) -> None:
            self._report_both(result, provider(result.validated_object))

        self._error_handler = report
        return self

    def applies(self, root: R) -> bool:
        matched = bool(self._condition(root))
        return not matched if self._negate else matched

    def validate(self, root: R, result: ValidationResult[R]) -> None:
        if self._predicate is None:
            raise_error(invalid_configuration(
                f"Cross-field rule for '{self.field1}'/'{self.field2}' has no predicate; call satisfies() first",
                component="cross_field", fields=[self.field1, self.field2]).error)
        if not self.applies(root):
            return
        if not self._predicate(self._getter1(root), self._getter2(root)):
            self._error_handler(result, self._message)

    def __repr__(self) -> str:
        return f"CrossFieldValidator({self.field1!r}, {self.field2!r})"
