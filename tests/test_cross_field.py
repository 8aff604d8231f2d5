"""Unit tests for two-field invariants."""

import pytest

from fieldrules.errors import AppErrorException, ErrorCode
from fieldrules.validation import CrossFieldValidator, ValidationBuilder, ValidationResult
from tests.conftest import pairs
from tests.domain import User


def passwords(builder: ValidationBuilder, condition=None) -> CrossFieldValidator:
    return builder.rule_for_combination("password", "confirm_password",
        lambda u: u.password, lambda u: u.confirm_password, condition)


def run(validator: CrossFieldValidator, user: User) -> ValidationResult:
    result = ValidationResult(user)
    validator.validate(user, result)
    return result


def equal(a, b) -> bool:
    return a == b


class TestDefaultHandler:
    def test_failure_reports_both_fields(self) -> None:
        builder = ValidationBuilder(User(password="a", confirm_password="b"))
        passwords(builder).satisfies(equal, "Passwords must match")
        result = builder.validate()
        assert pairs(result) == [
            ("password", "Passwords must match"),
            ("confirm_password", "Passwords must match"),
        ]
        assert {e.constraint for e in result.errors} == {"cross_field"}

    def test_pass_reports_nothing(self) -> None:
        builder = ValidationBuilder(User(password="a", confirm_password="a"))
        passwords(builder).satisfies(equal, "Passwords must match")
        assert builder.validate().is_valid

    def test_predicate_receives_none(self) -> None:
        seen = []
        validator = CrossFieldValidator("a", "b", lambda u: u.password, lambda u: u.confirm_password)
        validator.satisfies(lambda a, b: seen.append((a, b)) or True, "unused")
        assert run(validator, User()).is_valid
        assert seen == [(None, None)]

    def test_missing_predicate_is_a_configuration_error(self) -> None:
        validator = CrossFieldValidator("a", "b", lambda u: u.password, lambda u: u.confirm_password)
        with pytest.raises(AppErrorException) as exc_info:
            run(validator, User())
        assert exc_info.value.error.code is ErrorCode.E9004_INVALID_CONFIGURATION
        assert exc_info.value.error.metadata["fields"] == ["a", "b"]


class TestWhenOtherwise:
    def mismatch(self) -> CrossFieldValidator:
        return CrossFieldValidator("password", "confirm_password", lambda u: u.password,
            lambda u: u.confirm_password).satisfies(equal, "Passwords must match")

    def test_when_gates_evaluation(self) -> None:
        validator = self.mismatch().when(lambda u: u.age >= 18)
        assert run(validator, User(age=15, password="a", confirm_password="b")).is_valid
        assert len(run(validator, User(age=30, password="a", confirm_password="b"))) == 2

    def test_otherwise_negates_condition(self) -> None:
        validator = self.mismatch().when(lambda u: u.age >= 18).otherwise()
        assert len(run(validator, User(age=15, password="a", confirm_password="b"))) == 2
        assert run(validator, User(age=30, password="a", confirm_password="b")).is_valid

    def test_otherwise_without_when_never_applies(self) -> None:
        validator = self.mismatch().otherwise()
        assert not validator.applies(User())
        assert run(validator, User(password="a", confirm_password="b")).is_valid

    def test_double_otherwise_toggles_back(self) -> None:
        validator = self.mismatch().when(lambda u: u.age >= 18).otherwise().otherwise()
        assert validator.applies(User(age=30))
        assert not validator.applies(User(age=15))

    def test_when_resets_pending_negation(self) -> None:
        validator = self.mismatch().otherwise().when(lambda u: u.age >= 18)
        assert validator.applies(User(age=30))

    def test_builder_condition_argument(self) -> None:
        builder = ValidationBuilder(User(age=15, password="a", confirm_password="b"))
        passwords(builder, lambda u: u.age >= 18).satisfies(equal, "Passwords must match")
        assert builder.validate().is_valid

    def test_negated_branch_flips_with_root(self) -> None:
        minor = User(age=15, password="secret", confirm_password="secret")
        adult = User(age=40, password="secret", confirm_password="secret")
        validator = CrossFieldValidator("password", "confirm_password", lambda u: u.password,
            lambda u: u.confirm_password).satisfies(lambda a, b: a != b, "minors must pick distinct values")
        validator.when(lambda u: u.age >= 18).otherwise()
        assert len(run(validator, minor)) == 2
        assert run(validator, adult).is_valid


class TestReporting:
    def test_custom_handler_replaces_default(self) -> None:
        builder = ValidationBuilder(User(password="a", confirm_password="b"))
        passwords(builder).satisfies(equal, "Passwords must match").with_error_handler(
            lambda result, message: result.add_error("confirm_password", message))
        assert pairs(builder.validate()) == [("confirm_password", "Passwords must match")]

    def test_handler_called_once_per_failure(self) -> None:
        calls = []
        validator = CrossFieldValidator("a", "b", lambda u: u.password, lambda u: u.confirm_password)
        validator.satisfies(equal, "differ").with_error_handler(lambda result, message: calls.append(message))
        result = run(validator, User(password="a", confirm_password="b"))
        assert calls == ["differ"]
        assert result.is_valid

    def test_handler_not_called_on_success(self) -> None:
        calls = []
        validator = CrossFieldValidator("a", "b", lambda u: u.password, lambda u: u.confirm_password)
        validator.satisfies(equal, "differ").with_error_handler(lambda result, message: calls.append(message))
        run(validator, User(password="a", confirm_password="a"))
        assert calls == []

    def test_dynamic_message_rendered_from_root(self) -> None:
        builder = ValidationBuilder(User(name="ada", password="a", confirm_password="b"))
        passwords(builder).satisfies(equal, "static").with_message(
            lambda u: f"Passwords for {u.name} must match")
        assert pairs(builder.validate()) == [
            ("password", "Passwords for ada must match"),
            ("confirm_password", "Passwords for ada must match"),
        ]

    def test_runs_after_field_validators(self) -> None:
        builder = ValidationBuilder(User(password="a", confirm_password="b"))
        passwords(builder).satisfies(equal, "Passwords must match")
        builder.rule_for("name", lambda u: u.name).not_null()
        assert [e.field_path for e in builder.validate().errors] == ["name", "password", "confirm_password"]
