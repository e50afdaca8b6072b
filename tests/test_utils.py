"""Tests for utility functions."""
import click
import pytest
from unittest.mock import patch

from package_image.exceptions import SetupError
from package_image.utils import handle_errors, timed_step_status


@patch('package_image.utils.console')
def test_timed_step_status_success(mock_console):
    """
    Test timed_step_status success case.
    Expected: numbered start line and a success line.
    """
    # Arrange - no setup needed

    # Act - complete the step
    with timed_step_status(1, 3, "Building image"):
        pass

    # Assert - started and succeeded
    assert "[1/3]" in mock_console.print.call_args_list[0].args[0]
    mock_console.success.assert_called_once()
    mock_console.error.assert_not_called()


@patch('package_image.utils.console')
def test_timed_step_status_exception_propagation(mock_console):
    """
    Test that timed_step_status propagates exceptions.
    Expected: exception re-raised after the failure line is printed.
    """
    # Arrange - prepare exception
    test_exception = ValueError("Test error")

    # Act & Assert - exception should be propagated
    with pytest.raises(ValueError, match="Test error"):
        with timed_step_status(2, 3, "Pushing image"):
            raise test_exception
    assert "failed" in mock_console.error.call_args.args[0]


@patch('package_image.utils.console')
def test_handle_errors_decorator(mock_console):
    """
    Test handle_errors with a packaging failure.
    Expected: error shown via console, exit status 1.
    """
    # Arrange - create decorated function that raises
    @handle_errors
    def failing_function():
        raise SetupError("read cache: missing")

    # Act & Assert - exits with 1
    with pytest.raises(SystemExit) as excinfo:
        failing_function()
    assert excinfo.value.code == 1
    assert mock_console.error.call_args.args[0] == "Error: read cache: missing"


@patch('package_image.utils.console')
def test_handle_errors_unexpected(mock_console):
    """
    Test handle_errors with an unexpected exception.
    Expected: reported as unexpected, exit status 1.
    """
    # Arrange - create decorated function that raises
    @handle_errors
    def failing_function():
        raise ValueError("Test error")

    # Act & Assert - exits with 1
    with pytest.raises(SystemExit):
        failing_function()
    assert mock_console.error.call_args.args[0].startswith("Unexpected error:")


def test_handle_errors_passes_click_exceptions():
    """
    Test that click usage errors are left to click.
    Expected: ClickException re-raised unchanged.
    """
    # Arrange - create decorated function that raises
    @handle_errors
    def failing_function():
        raise click.UsageError("bad option")

    # Act & Assert - untouched
    with pytest.raises(click.UsageError, match="bad option"):
        failing_function()
