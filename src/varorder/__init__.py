"""varorder - evaluation order of interdependent dashboard variables."""

from .config import ResolverConfig, VarOrderConfig
from .dependency import DependencyExtractor, VariableGraph
from .models import DashboardVariable, Group, parse_variables
from .resolver import build_order, check, new_graph

__version__ = "0.1.0"
__all__ = [
    "build_order",
    "check",
    "new_graph",
    "DependencyExtractor",
    "VariableGraph",
    "DashboardVariable",
    "Group",
    "parse_variables",
    "ResolverConfig",
    "VarOrderConfig",
]
