"""Unit tests for rule primitives, condition combinators and group selection."""

import pytest

from fieldrules.validation import GroupValidator, ValidationRule, always, both, negate, never
from fieldrules.validation.rules import takes_root


def is_positive(value, root) -> bool:
    return value > 0


class TestConditions:
    def test_constants(self) -> None:
        assert always(None, None) is True
        assert never(None, None) is False

    def test_both_short_circuits_on_always(self) -> None:
        assert both(always, is_positive) is is_positive
        assert both(is_positive, always) is is_positive

    def test_both_ands(self) -> None:
        condition = both(is_positive, lambda value, root: root == "ok")
        assert condition(1, "ok")
        assert not condition(1, "no")
        assert not condition(-1, "ok")

    def test_negate(self) -> None:
        assert negate(always) is never
        assert negate(never) is always
        assert negate(is_positive)(-1, None)


class TestValidationRule:
    def test_traversal_rule_has_no_message(self) -> None:
        rule = ValidationRule(lambda value, context: False, None, always)
        assert rule.traverses
        assert not ValidationRule(lambda value, context: False, "x", always).traverses

    def test_applies_uses_condition(self) -> None:
        rule = ValidationRule(lambda value, context: True, "x", is_positive)
        assert rule.applies(3, None)
        assert not rule.applies(-3, None)


class TestTakesRoot:
    @pytest.mark.parametrize("predicate,expected", [
        (lambda v: True, False),
        (lambda v, root: True, True),
        (lambda v, strict=False: True, False),
        (lambda *args: True, True),
        (str.isdigit, False),
        (callable, False),
    ])
    def test_arity(self, predicate, expected) -> None:
        assert takes_root(predicate) is expected


class TestGroupValidator:
    def test_empty_selector_selects_everything(self) -> None:
        assert GroupValidator().selects({"signup"})

    def test_untagged_always_selected(self) -> None:
        assert GroupValidator("signup").selects(())

    def test_intersection(self) -> None:
        selector = GroupValidator("signup", "admin")
        assert selector.is_group_active("admin")
        assert selector.selects(["admin", "profile"])
        assert not selector.selects(["profile"])
