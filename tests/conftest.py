"""Pytest configuration and shared fixtures.

Fixtures are organized by category:
- Variable sets: ready-made dashboards used across test modules
- File fixtures: dashboards written to temporary files
"""

from pathlib import Path

import pytest
import yaml

from factories import constant, query, text
from varorder.models.variables import DashboardVariable

# =============================================================================
# Variable Sets
# =============================================================================


@pytest.fixture
def running_example() -> dict[str, DashboardVariable]:
    """
    Seven variables in four levels.

          (f)         (d)
         /   \\         |
       (c)   (b)      (g)
         \\   /
          (a)
           |
          (e)
    """
    return {
        "f": constant("1"),
        "d": text("node"),
        "c": query("rate(x{v='$f'}[5m])"),
        "b": query("max by (v) (y{v=\"$f\"})"),
        "g": query("label_values($d)"),
        "a": query("sum(z{c='$c', b='$b'})"),
        "e": query("count($a)"),
    }


@pytest.fixture
def running_example_order() -> list[list[str]]:
    """Expected build order of running_example, names sorted per group."""
    return [["d", "f"], ["b", "c", "g"], ["a"], ["e"]]


@pytest.fixture
def two_cycle() -> dict[str, DashboardVariable]:
    """a and b reference each other."""
    return {"a": query("up{x='$b'}"), "b": query("up{x='$a'}")}


# =============================================================================
# File Fixtures
# =============================================================================


@pytest.fixture
def dashboard_document() -> dict:
    """Perses-style dashboard holding the running example variables."""
    return {
        "kind": "Dashboard",
        "metadata": {"name": "node-exporter", "project": "demo"},
        "spec": {
            "duration": "6h",
            "variables": {
                "f": {"kind": "ConstantVariable", "parameter": {"values": ["1"]}},
                "d": {"kind": "TextVariable", "parameter": {"value": "node"}},
                "c": {"kind": "QueryVariable", "parameter": {"expr": "rate(x{v='$f'}[5m])"}},
                "b": {"kind": "QueryVariable", "parameter": {"expr": "max(y{v='$f'})"}},
                "g": {"kind": "QueryVariable", "parameter": {"expr": "label_values($d)"}},
                "a": {"kind": "QueryVariable", "parameter": {"expr": "z{c='$c', b='$b'}"}},
                "e": {"kind": "QueryVariable", "parameter": {"expr": "count($a)"}},
            },
        },
    }


@pytest.fixture
def dashboard_file(tmp_path: Path, dashboard_document: dict) -> Path:
    """Write the dashboard document to a YAML file."""
    path = tmp_path / "dashboard.yaml"
    path.write_text(yaml.safe_dump(dashboard_document, sort_keys=False))
    return path


@pytest.fixture
def cyclic_dashboard_file(tmp_path: Path) -> Path:
    """Dashboard whose variables reference each other."""
    path = tmp_path / "cyclic.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "variables": {
                    "a": {"kind": "QueryVariable", "parameter": {"expr": "up{x='$b'}"}},
                    "b": {"kind": "QueryVariable", "parameter": {"expr": "up{x='$a'}"}},
                }
            }
        )
    )
    return path
