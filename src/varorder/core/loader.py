"""Dashboard loader - read variable definitions from a file.

Accepted Shapes:
---------------
1. A full dashboard document, variables under ``spec.variables``:
```
kind: Dashboard
metadata:
  name: node-exporter
spec:
  variables:
    job:
      kind: ConstantVariable
      parameter:
        values: [node]
```

2. A document with a top-level ``variables`` mapping.

3. A bare mapping of variable name to definition.

JSON is a subset of YAML, so both formats go through yaml.safe_load.

Error Handling:
--------------
- FileNotFoundError: The file doesn't exist
- DashboardLoadError: Malformed YAML/JSON, unexpected document structure,
  or a variable definition rejected by the Pydantic models
"""

from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import ValidationError

from ..models.variables import DashboardVariable, parse_variables
from ..utils.exceptions import DashboardLoadError

logger = structlog.get_logger(__name__)


def load_variables(path: Path) -> dict[str, DashboardVariable]:
    """
    Load and validate the variables of a dashboard file.

    Args:
        path: Path to a YAML or JSON dashboard file

    Returns:
        Mapping of variable name to validated definition

    Raises:
        FileNotFoundError: If the file doesn't exist
        DashboardLoadError: If the file cannot be parsed into variables
    """
    if not path.exists():
        raise FileNotFoundError(f"Dashboard file not found: {path}")

    logger.debug("Loading dashboard", path=str(path))

    try:
        with open(path, encoding="utf-8") as f:
            document = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise DashboardLoadError(f"Invalid YAML/JSON: {e}", path=path, original_error=e) from e

    raw = extract_variable_section(document, path)

    try:
        variables = parse_variables(raw)
    except ValidationError as e:
        raise DashboardLoadError(
            format_validation_error(e), path=path, original_error=e
        ) from e

    logger.debug("Dashboard loaded", path=str(path), variables=len(variables))
    return variables


def extract_variable_section(document: Any, path: Path | str | None = None) -> dict[str, Any]:
    """
    Locate the variable mapping inside a loaded document.

    Args:
        document: Result of yaml.safe_load
        path: Source path, only used in error messages

    Returns:
        The raw mapping of variable name to definition (empty for an empty document)

    Raises:
        DashboardLoadError: If the document or its variable section is not a mapping
    """
    if document is None:
        return {}

    if not isinstance(document, dict):
        raise DashboardLoadError(
            f"expected a mapping at the top level, got {type(document).__name__}", path=path
        )

    if isinstance(document.get("spec"), dict):
        section = document["spec"].get("variables")
    elif "variables" in document:
        section = document["variables"]
    else:
        section = document

    if section is None:
        return {}

    if not isinstance(section, dict):
        raise DashboardLoadError(
            f"expected variables to be a mapping, got {type(section).__name__}", path=path
        )

    non_string = [key for key in section if not isinstance(key, str)]
    if non_string:
        raise DashboardLoadError(
            f"variable names must be strings, got {non_string[0]!r}", path=path
        )

    return section


def format_validation_error(error: ValidationError) -> str:
    """
    Format Pydantic validation error into human-readable message.

    Args:
        error: Pydantic ValidationError

    Returns:
        Formatted error message
    """
    errors = error.errors()
    if not errors:
        return str(error)

    # Format first error (most relevant)
    first_error = errors[0]
    field = ".".join(str(loc) for loc in first_error["loc"])
    msg = first_error["msg"]

    if len(errors) > 1:
        return f"{field}: {msg} (and {len(errors) - 1} more errors)"
    return f"{field}: {msg}"
