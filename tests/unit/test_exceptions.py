"""Unit tests for Custom Exceptions."""

from pathlib import Path

from varorder.utils.exceptions import (
    CyclicDependencyError,
    DashboardLoadError,
    GraphIntegrityError,
    InvalidVariableNameError,
    UndefinedVariableError,
    VariableOrderError,
    VariableValidationError,
)


class TestCyclicDependencyError:
    """Test CyclicDependencyError exception."""

    def test_defaults(self):
        """Test default message and empty diagnostics."""
        error = CyclicDependencyError()

        assert str(error) == "circular dependency detected"
        assert error.blocked == []
        assert error.cycles == []

    def test_with_diagnostics(self):
        """Test blocked names and cycles."""
        error = CyclicDependencyError(blocked=["a", "b"], cycles=[["a", "b", "a"]])

        assert error.blocked == ["a", "b"]
        assert error.cycles == [["a", "b", "a"]]


class TestVariableValidationError:
    """Test VariableValidationError exception."""

    def test_message_lists_errors(self):
        """Every collected error appears in the message."""
        errors = [
            InvalidVariableNameError("a b", "^x$"),
            UndefinedVariableError("c", "d"),
        ]

        error = VariableValidationError(errors)

        assert error.errors == errors
        assert "2 variable error(s) found" in str(error)
        assert "'a b' is not a correct variable name" in str(error)
        assert "variable 'd' is used in the variable 'c'" in str(error)


class TestDashboardLoadError:
    """Test DashboardLoadError exception."""

    def test_with_path(self):
        """Path prefixes the message."""
        error = DashboardLoadError("bad", path=Path("dash.yaml"))

        assert str(error) == "dash.yaml: bad"

    def test_without_path(self):
        """Test message without path."""
        cause = ValueError("boom")
        error = DashboardLoadError("bad", original_error=cause)

        assert str(error) == "bad"
        assert error.original_error is cause


class TestHierarchy:
    """Test exception inheritance."""

    def test_user_errors(self):
        """User-facing errors share one base class."""
        for cls in (
            InvalidVariableNameError,
            UndefinedVariableError,
            CyclicDependencyError,
            VariableValidationError,
            DashboardLoadError,
        ):
            assert issubclass(cls, VariableOrderError)

    def test_integrity_error_is_separate(self):
        """Internal errors are not caught by VariableOrderError handlers."""
        assert not issubclass(GraphIntegrityError, VariableOrderError)
