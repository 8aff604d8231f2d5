"""Pytest configuration and shared fixtures."""

import pytest
import structlog

from tests.domain import Address, User


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()


@pytest.fixture
def valid_user() -> User:
    return User(
        name="Ada Lovelace",
        email="ada@example.com",
        age=36,
        addresses=[Address(street="12 St James Sq", city="London")],
        main_address=Address(street="12 St James Sq", city="London"),
        password="analytical",
        confirm_password="analytical",
    )


def pairs(result) -> list[tuple[str, str]]:
    """(field_path, message) pairs in reporting order."""
    return [(e.field_path, e.message) for e in result.errors]
