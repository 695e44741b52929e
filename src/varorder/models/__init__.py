"""Data models for varorder."""

from .order import Group, group_index
from .variables import (
    ConstantVariable,
    ConstantVariableParameter,
    DashboardVariable,
    QueryVariable,
    QueryVariableParameter,
    TextVariable,
    TextVariableParameter,
    VariableBase,
    VariableDisplay,
    parse_variables,
)

__all__ = [
    # Variables
    "DashboardVariable",
    "VariableBase",
    "VariableDisplay",
    "QueryVariable",
    "QueryVariableParameter",
    "ConstantVariable",
    "ConstantVariableParameter",
    "TextVariable",
    "TextVariableParameter",
    "parse_variables",
    # Build order
    "Group",
    "group_index",
]
