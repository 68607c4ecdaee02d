"""Tests for the exception hierarchy."""

import pytest

from codetribute.exceptions import (
    AuthenticationError,
    CodetributeError,
    ConfigurationError,
    PublishError,
    UninitializedError,
    ValidationError,
)


@pytest.mark.parametrize(
    "error",
    [
        ConfigurationError("bad"),
        ValidationError("bad", field="x"),
        UninitializedError("bad"),
        AuthenticationError("bad"),
        PublishError("bad"),
    ],
)
def test_all_errors_share_base(error: CodetributeError) -> None:
    assert isinstance(error, CodetributeError)


def test_plain_message_without_details() -> None:
    assert str(CodetributeError("boom")) == "boom"


def test_details_are_rendered() -> None:
    error = PublishError("Rejected", status_code=422, path="log.txt")

    assert str(error) == "Rejected (status_code=422, path=log.txt)"
    assert error.status_code == 422


def test_validation_error_truncates_long_values() -> None:
    error = ValidationError("Too long", field="model", value="m" * 150, expected="short")

    assert error.details["value"] == "m" * 100 + "..."
    assert error.details["field"] == "model"
    assert error.value == "m" * 150


def test_uninitialized_component_detail() -> None:
    error = UninitializedError("No client", component="summarizer")

    assert error.details == {"component": "summarizer"}
