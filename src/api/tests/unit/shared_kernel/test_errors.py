"""Unit tests for the shared failure taxonomy."""

import pytest

from shared_kernel.errors import (
    AccessDeniedError,
    ConflictError,
    Failure,
    FailureKind,
    NotFoundError,
    Ok,
    TransportError,
    ValidationFailedError,
    require_fields,
)


class TestServiceErrors:
    """Tests for ServiceError subclasses."""

    @pytest.mark.parametrize(
        ("error_class", "kind"),
        [
            (NotFoundError, FailureKind.NOT_FOUND),
            (AccessDeniedError, FailureKind.ACCESS_DENIED),
            (ValidationFailedError, FailureKind.VALIDATION_FAILED),
            (ConflictError, FailureKind.CONFLICT),
            (TransportError, FailureKind.TRANSPORT_FAILURE),
        ],
    )
    def test_each_error_carries_its_kind(self, error_class, kind):
        error = error_class("some_reason")

        assert error.kind == kind
        assert error.reason == "some_reason"

    def test_message_defaults_to_reason(self):
        assert str(ConflictError("duplicate_code")) == "duplicate_code"
        assert str(ConflictError("duplicate_code", "Code taken")) == "Code taken"


class TestResult:
    """Tests for Ok and Failure outcomes."""

    def test_ok_is_ok(self):
        result = Ok(42)

        assert result.ok is True
        assert result.value == 42

    def test_failure_from_error_keeps_classification(self):
        failure = Failure.from_error(AccessDeniedError("blocked"))

        assert failure.ok is False
        assert failure.kind == FailureKind.ACCESS_DENIED
        assert failure.reason == "blocked"


class TestRequireFields:
    """Tests for require_fields."""

    def test_accepts_filled_fields(self):
        require_fields(name="Rohan", email="rohan@nfsu.ac.in")

    @pytest.mark.parametrize("blank", [None, "", "   "])
    def test_names_first_blank_field(self, blank):
        with pytest.raises(ValidationFailedError) as exc_info:
            require_fields(name="Rohan", batch=blank, email=blank)

        assert exc_info.value.reason == "missing_batch"
