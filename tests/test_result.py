"""Tests for the result accumulator and its bridges into the error system."""

import pytest

from fieldrules.errors import AppError, Err, ErrorCode, Ok
from fieldrules.validation import FieldError, ValidationError, ValidationResult
from tests.domain import User


@pytest.fixture
def result() -> ValidationResult:
    result = ValidationResult(User())
    result.add_error("name", "must not be null", constraint="not_null")
    result.add_error("addresses[0].city", "must not be null", constraint="not_null")
    result.add_error("name", "must match pattern: .+", constraint="matches")
    return result


class TestValidationResult:
    def test_new_result_is_valid(self) -> None:
        user = User()
        result = ValidationResult(user)
        assert result.is_valid
        assert result.errors == []
        assert result.first_error is None
        assert result.validated_object is user
        assert len(result) == 0

    def test_errors_kept_in_insertion_order(self, result) -> None:
        assert [str(e) for e in result.errors] == [
            "name must not be null",
            "addresses[0].city must not be null",
            "name must match pattern: .+",
        ]
        assert not result.is_valid
        assert len(result) == 3

    def test_errors_is_a_snapshot(self, result) -> None:
        result.errors.clear()
        assert len(result.errors) == 3

    def test_duplicates_are_kept(self) -> None:
        result = ValidationResult(None)
        result.add_error("a", "x")
        result.add_error("a", "x")
        assert len(result) == 2

    def test_field_errors_groups_messages(self, result) -> None:
        assert result.field_errors == {
            "name": ["must not be null", "must match pattern: .+"],
            "addresses[0].city": ["must not be null"],
        }

    def test_errors_for_path(self, result) -> None:
        assert [e.constraint for e in result.errors_for("name")] == ["not_null", "matches"]
        assert result.errors_for("email") == []

    def test_first_error(self, result) -> None:
        assert result.first_error == FieldError("name", "must not be null", "not_null")

    def test_to_dict(self, result) -> None:
        data = result.to_dict()
        assert data["valid"] is False
        assert data["errors"][1] == {"field": "addresses[0].city", "constraint": "not_null",
            "message": "must not be null"}

    def test_empty_path_renders_message_only(self) -> None:
        assert str(FieldError("", "is wrong")) == "is wrong"


class TestErrorBridge:
    def test_valid_result_is_ok(self) -> None:
        user = User()
        result = ValidationResult(user)
        assert result.to_app_error() is None
        assert result.to_result() == Ok(user)

    def test_single_error_maps_constraint_to_code(self) -> None:
        result = ValidationResult(User())
        result.add_error("name", "must not be null", constraint="not_null")
        outcome = result.to_result()
        assert isinstance(outcome, Err)
        error = outcome.unwrap_err()
        assert error.code is ErrorCode.E2001_REQUIRED_FIELD_MISSING
        assert error.message == "name: must not be null"
        assert error.metadata == {"field": "name", "constraint": "not_null"}

    @pytest.mark.parametrize("constraint,code", [
        ("matches", ErrorCode.E2002_INVALID_FORMAT),
        ("greater_than", ErrorCode.E2003_OUT_OF_RANGE),
        ("type", ErrorCode.E2004_INVALID_TYPE),
        ("cross_field", ErrorCode.E2006_CROSS_FIELD_MISMATCH),
        ("satisfies", ErrorCode.E2005_CONSTRAINT_VIOLATION),
    ])
    def test_constraint_codes(self, constraint, code) -> None:
        assert ErrorCode.for_constraint(constraint) is code

    def test_multiple_errors_collapse(self, result) -> None:
        error = result.to_app_error()
        assert isinstance(error, AppError)
        assert error.code is ErrorCode.E2000_VALIDATION_GENERIC
        assert error.code.category == "validation"
        assert error.metadata["error_count"] == 3
        assert error.metadata["errors"][0]["field"] == "name"
        assert error.context.origin == "validation"

    def test_result_matches(self, result) -> None:
        handled = result.to_result().match(ok=lambda user: "ok", err=lambda e: e.code.name)
        assert handled == "E2000_VALIDATION_GENERIC"


class TestValidationError:
    def test_valid_result_does_not_raise(self) -> None:
        ValidationResult(User()).raise_if_invalid()

    def test_raise_if_invalid(self, result) -> None:
        with pytest.raises(ValidationError) as exc_info:
            result.raise_if_invalid("User rejected")
        error = exc_info.value
        assert str(error) == "User rejected (3 errors)"
        assert list(error.field_errors) == ["name", "addresses[0].city"]
        assert error.first_error.field_path == "name"
        assert error.to_app_error().metadata["error_count"] == 3
        assert error.to_dict()["error"]["error_count"] == 3

    def test_single_error_message(self) -> None:
        result = ValidationResult(User())
        result.add_error("email", "must match pattern: .+", constraint="matches")
        with pytest.raises(ValidationError, match="email: must match pattern"):
            result.raise_if_invalid()

    def test_details_are_detached_from_result(self, result) -> None:
        with pytest.raises(ValidationError) as exc_info:
            result.raise_if_invalid()
        result.add_error("age", "late")
        assert len(exc_info.value.details) == 3
