"""Utility functions and exceptions."""

from .exceptions import (
    CyclicDependencyError,
    DashboardLoadError,
    GraphIntegrityError,
    InvalidVariableNameError,
    UndefinedVariableError,
    VariableOrderError,
    VariableValidationError,
)

__all__ = [
    "VariableOrderError",
    "InvalidVariableNameError",
    "UndefinedVariableError",
    "CyclicDependencyError",
    "VariableValidationError",
    "DashboardLoadError",
    "GraphIntegrityError",
]
