"""Tests for the domain error family."""

import pytest

from llm_bridge.domain.errors import (
    DomainError,
    ExecutionCancelled,
    ExecutionError,
    ValidationError,
)


def test_validation_error_is_domain_error():
    err = ValidationError("Invalid input")
    assert isinstance(err, DomainError)
    assert str(err) == "Invalid input"


def test_execution_error_carries_exit_details():
    err = ExecutionError(message="copilot failed", exit_code=2, stderr="boom")
    assert isinstance(err, DomainError)
    assert err.exit_code == 2
    assert err.stderr == "boom"
    assert str(err) == "copilot failed (exit code 2)"


def test_execution_error_without_exit_code():
    err = ExecutionError("docker not found")
    assert err.exit_code is None
    assert str(err) == "docker not found"


def test_execution_cancelled_is_execution_error():
    err = ExecutionCancelled("cancelled")
    assert isinstance(err, ExecutionError)

    with pytest.raises(ExecutionError):
        raise err
