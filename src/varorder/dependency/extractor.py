"""Dependency Extractor - find which variables reference which.

A QueryVariable may use another variable by writing ``$name`` in its
expression. The extractor scans every expression, checks that the referenced
variables exist and that every variable name is well formed, and returns the
raw reference lists. It does not look for cycles: that is the scheduler's job.

Validation Order:
----------------
1. Every name is checked against the naming pattern first, so a bad name is
   reported whether or not it takes part in a reference.
2. References are then collected per variable, in textual order, and each one
   is checked against the set of defined names.

By default the first error is raised. With ``collect_all_errors`` the
extractor keeps going and raises a single VariableValidationError holding
every naming and reference error it found.
"""

import re
from collections.abc import Mapping

import structlog

from ..config import ResolverConfig
from ..models.variables import DashboardVariable
from ..utils.exceptions import (
    InvalidVariableNameError,
    UndefinedVariableError,
    VariableOrderError,
    VariableValidationError,
)

logger = structlog.get_logger(__name__)


class DependencyExtractor:
    """
    Extract variable references from query expressions.

    The patterns are compiled once, when the extractor is created, and reused
    for every call to extract().
    """

    def __init__(
        self,
        name_pattern: re.Pattern[str],
        reference_pattern: re.Pattern[str],
        collect_all_errors: bool = False,
    ) -> None:
        """
        Initialize the extractor.

        Args:
            name_pattern: Pattern every variable name must fully match
            reference_pattern: Pattern of a reference; group 1 is the referenced name
            collect_all_errors: Report every error at once instead of the first one
        """
        if reference_pattern.groups < 1:
            raise ValueError("reference_pattern must capture the variable name in group 1")
        self.name_pattern = name_pattern
        self.reference_pattern = reference_pattern
        self.collect_all_errors = collect_all_errors

    @classmethod
    def from_config(cls, config: ResolverConfig) -> "DependencyExtractor":
        """Build an extractor from resolver configuration."""
        return cls(
            name_pattern=re.compile(config.name_pattern),
            reference_pattern=re.compile(config.reference_pattern),
            collect_all_errors=config.collect_all_errors,
        )

    def extract(self, variables: Mapping[str, DashboardVariable]) -> dict[str, list[str]]:
        """
        Compute the references of every variable.

        Args:
            variables: Mapping of variable name to definition

        Returns:
            Mapping of variable name to the names its expression references,
            duplicates included, in textual order. Variables without any
            reference are absent.

        Raises:
            InvalidVariableNameError: If a name does not match the naming pattern
            UndefinedVariableError: If an expression references an unknown variable
            VariableValidationError: If collect_all_errors is set and any error was found
        """
        errors: list[VariableOrderError] = []

        for name in variables:
            if not self.name_pattern.fullmatch(name):
                self._fail(InvalidVariableNameError(name, self.name_pattern.pattern), errors)

        result: dict[str, list[str]] = {}
        for name, variable in variables.items():
            for reference in self.references(variable):
                if reference not in variables:
                    self._fail(UndefinedVariableError(name, reference), errors)
                    continue
                result.setdefault(name, []).append(reference)

        if errors:
            raise VariableValidationError(errors)

        logger.debug(
            "Extracted variable dependencies",
            variables=len(variables),
            referencing=len(result),
            references=sum(len(refs) for refs in result.values()),
        )
        return result

    def references(self, variable: DashboardVariable) -> list[str]:
        """
        List the names referenced by a single variable.

        Args:
            variable: Variable definition

        Returns:
            Referenced names in textual order, duplicates included
        """
        expression = variable.expression
        if expression is None:
            return []
        return [match.group(1) for match in self.reference_pattern.finditer(expression)]

    def _fail(self, error: VariableOrderError, errors: list[VariableOrderError]) -> None:
        if not self.collect_all_errors:
            raise error
        errors.append(error)
