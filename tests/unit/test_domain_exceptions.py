"""Tests for domain exceptions (error_code, message, details, retryable)."""

from caseflow.domain.exceptions import (
    CaseflowException,
    ResourceNotFoundException,
    SqlNotConfiguredException,
    ValidationException,
)


def test_caseflow_exception_default_error_code() -> None:
    """Base CaseflowException uses class name as error_code when not provided."""
    exc = CaseflowException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "CaseflowException"
    assert exc.details == {}
    assert exc.retryable is True


def test_caseflow_exception_to_dict() -> None:
    exc = CaseflowException("Oops", error_code="CUSTOM", details={"key": "value"})
    assert exc.to_dict() == {
        "error": "CUSTOM",
        "message": "Oops",
        "details": {"key": "value"},
    }


def test_resource_not_found_exception() -> None:
    exc = ResourceNotFoundException("workflow_instance", "wi1")
    assert exc.error_code == "RESOURCE_NOT_FOUND"
    assert "wi1" in exc.message
    assert exc.details == {"resource_type": "workflow_instance", "resource_id": "wi1"}
    assert exc.retryable is False


def test_validation_exception_with_field() -> None:
    exc = ValidationException("subject_id is required", field="subject_id")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "subject_id"}
    assert exc.retryable is False


def test_sql_not_configured_exception() -> None:
    exc = SqlNotConfiguredException()
    assert exc.error_code == "SERVICE_UNAVAILABLE"
    assert exc.retryable is True
