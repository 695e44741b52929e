"""Entry points: validate variables and compute their build order.

To decide which variable to evaluate first (that is, which query to run
first) we:

1. Work out which variable references which (DependencyExtractor).
2. Turn those references into a dependency graph (VariableGraph).
3. Peel the graph level by level (build_order). Each level is a Group whose
   variables can be evaluated in parallel.

Nothing here performs I/O or keeps state between calls. Errors are raised to
the caller unchanged.
"""

from collections.abc import Mapping

import structlog

from .config import ResolverConfig
from .dependency.extractor import DependencyExtractor
from .dependency.graph import VariableGraph
from .dependency.scheduler import build_order as schedule
from .models.order import Group
from .models.variables import DashboardVariable

logger = structlog.get_logger(__name__)


def new_graph(
    variables: Mapping[str, DashboardVariable],
    config: ResolverConfig | None = None,
) -> VariableGraph:
    """
    Validate the variables and build their dependency graph.

    Args:
        variables: Mapping of variable name to definition
        config: Extractor settings (defaults apply when omitted)

    Returns:
        The dependency graph

    Raises:
        InvalidVariableNameError: If a variable name is malformed
        UndefinedVariableError: If an expression references an unknown variable
        VariableValidationError: If config.collect_all_errors is set and errors were found
    """
    extractor = DependencyExtractor.from_config(config or ResolverConfig())
    dependencies = extractor.extract(variables)
    return VariableGraph(list(variables), dependencies)


def build_order(
    variables: Mapping[str, DashboardVariable],
    config: ResolverConfig | None = None,
) -> list[Group]:
    """
    Compute the order in which variables can be evaluated.

    Args:
        variables: Mapping of variable name to definition
        config: Extractor settings (defaults apply when omitted)

    Returns:
        Groups in evaluation order. Variables of one group can be evaluated
        concurrently once every earlier group is done.

    Raises:
        InvalidVariableNameError: If a variable name is malformed
        UndefinedVariableError: If an expression references an unknown variable
        CyclicDependencyError: If the variables depend on each other in a circle
    """
    graph = new_graph(variables, config)
    order = schedule(graph)
    logger.debug("Variable build order ready", variables=len(graph), groups=len(order))
    return order


def check(
    variables: Mapping[str, DashboardVariable],
    config: ResolverConfig | None = None,
) -> None:
    """
    Verify that a build order exists, without returning it.

    Meant as a validation gate, e.g. before a dashboard is saved.

    Args:
        variables: Mapping of variable name to definition
        config: Extractor settings (defaults apply when omitted)

    Raises:
        Same errors as build_order()
    """
    build_order(variables, config)
