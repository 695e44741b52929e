"""Configuration constants for varorder.

Named defaults for the variable naming rule and the reference syntax used by
the dependency extractor.
"""

# -----------------------------------------------------------------------------
# Variable Patterns
# -----------------------------------------------------------------------------
# Kept as plain strings. Each DependencyExtractor compiles its own copy so that
# callers can override them through ResolverConfig.

# A variable name must match this pattern in full
DEFAULT_NAME_PATTERN: str = r"^[a-zA-Z0-9_-]+$"

# A reference to another variable inside a query expression ($name).
# Group 1 captures the referenced name without the dollar sign.
DEFAULT_REFERENCE_PATTERN: str = r"\$([a-zA-Z0-9_-]+)"
