"""Input adapters: turning dashboard files into variable definitions."""

from .loader import extract_variable_section, format_validation_error, load_variables

__all__ = [
    "extract_variable_section",
    "format_validation_error",
    "load_variables",
]
