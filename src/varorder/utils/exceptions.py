"""Custom exceptions for varorder.

Exception Hierarchy:
-------------------
VariableOrderError (base)
├── InvalidVariableNameError    # Name does not match the naming pattern
├── UndefinedVariableError      # Expression references an unknown variable
├── CyclicDependencyError       # Circular dependency between variables
├── VariableValidationError     # Several of the above, collected in one pass
└── DashboardLoadError          # Dashboard file unreadable or malformed

GraphIntegrityError (RuntimeError)
    # Internal: an edge names a node the graph does not hold

Usage Guidelines:
----------------
1. None of these errors is retryable. The variable definitions must be fixed.

2. Catch VariableOrderError to handle every user-facing failure at once,
   for example when rejecting a dashboard at save time.

3. GraphIntegrityError means the extractor and the graph disagree about the
   set of variables. It signals a bug and should not be caught.

4. Errors carry the offending names as attributes so callers can render
   their own messages instead of parsing str(error).
"""

from pathlib import Path


class VariableOrderError(Exception):
    """Base exception for all varorder errors."""

    pass


class InvalidVariableNameError(VariableOrderError):
    """Raised when a variable name does not match the naming pattern."""

    def __init__(self, name: str, pattern: str) -> None:
        """
        Initialize InvalidVariableNameError.

        Args:
            name: The offending variable name.
            pattern: The pattern variable names must match.
        """
        super().__init__(
            f"'{name}' is not a correct variable name. It should match the regexp: {pattern}"
        )
        self.name = name
        self.pattern = pattern


class UndefinedVariableError(VariableOrderError):
    """Raised when an expression references a variable that is not defined."""

    def __init__(self, variable: str, reference: str) -> None:
        """
        Initialize UndefinedVariableError.

        Args:
            variable: Name of the variable whose expression holds the reference.
            reference: The referenced name that is missing.
        """
        super().__init__(
            f"variable '{reference}' is used in the variable '{variable}' but not defined"
        )
        self.variable = variable
        self.reference = reference


class CyclicDependencyError(VariableOrderError):
    """
    Raised when the variables depend on each other in a circle.

    Example cycles:
    1. $a is used in b, $b is used in a
    2. A query variable whose expression references itself

    No partial order is produced. The whole variable set is rejected even if
    only a subset of it forms the cycle.
    """

    def __init__(
        self,
        message: str = "circular dependency detected",
        blocked: list[str] | None = None,
        cycles: list[list[str]] | None = None,
    ) -> None:
        """
        Initialize CyclicDependencyError.

        Args:
            message: Error message.
            blocked: Variables that could not be scheduled when the cycle was hit.
            cycles: Detected cycles, each a list of names closing on its first element.
        """
        super().__init__(message)
        self.blocked = blocked or []
        self.cycles = cycles or []


class VariableValidationError(VariableOrderError):
    """Raised with every naming and reference error found in a single pass."""

    def __init__(self, errors: list[VariableOrderError]) -> None:
        """
        Initialize VariableValidationError.

        Args:
            errors: The individual errors, in discovery order.
        """
        lines = "\n".join(f"  - {error}" for error in errors)
        super().__init__(f"{len(errors)} variable error(s) found:\n{lines}")
        self.errors = errors


class DashboardLoadError(VariableOrderError):
    """Raised when a dashboard file cannot be turned into variable definitions."""

    def __init__(
        self,
        message: str,
        path: Path | str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """
        Initialize DashboardLoadError.

        Args:
            message: Error message.
            path: Optional path of the file being loaded.
            original_error: Optional original exception that caused this error.
        """
        super().__init__(message)
        self.path = path
        self.original_error = original_error

    def __str__(self) -> str:
        if self.path:
            return f"{self.path}: {self.args[0]}"
        return str(self.args[0]) if self.args else "dashboard load error"


class GraphIntegrityError(RuntimeError):
    """Raised when the dependency graph is asked to link a node it does not hold."""

    pass
