"""Dependency Graph - directed graph of variables linked by references.

Nodes live in an arena (a plain list) and refer to each other by index. An
edge ``dependency -> dependent`` is stored as the dependent's index in the
dependency's ``children`` set, and as one more unit in the dependent's
``dependencies`` counter (its number of incoming edges).

Example:
    a: QueryVariable "up{job='$b', env='$c'}"
    b: QueryVariable "label_values($c)"
    c: ConstantVariable

    Edges: c -> a, b -> a, c -> b
    Counters: a = 2, b = 1, c = 0

Edges are de-duplicated per pair: ``$c`` appearing twice in one expression
still adds a single edge and a single unit to the counter.
"""

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field

import structlog

from ..utils.exceptions import GraphIntegrityError

logger = structlog.get_logger(__name__)


@dataclass
class VariableNode:
    """
    Node in the dependency graph representing a variable.

    Attributes:
        name: Variable name
        children: Indexes of the nodes that depend on this one
        dependencies: Number of distinct variables this one depends on
            (incoming edges). The variable can be evaluated once all of
            them have been.
    """

    name: str
    children: set[int] = field(default_factory=set)
    dependencies: int = 0


class VariableGraph:
    """
    Directed graph of variable dependencies.

    Construction is purely structural. Ordering and cycle detection are done
    by the scheduler, which never mutates the graph.
    """

    def __init__(
        self,
        names: Iterable[str] = (),
        dependencies: Mapping[str, Sequence[str]] | None = None,
    ) -> None:
        """
        Build the graph.

        Args:
            names: Every variable name, including those with no edges at all
            dependencies: Mapping of dependent name to the names it references

        Raises:
            GraphIntegrityError: If a name is duplicated or an edge names an unknown node
        """
        self.nodes: list[VariableNode] = []
        self._index: dict[str, int] = {}

        for name in names:
            self.add_node(name)

        for dependent, deps in (dependencies or {}).items():
            for dep in deps:
                self.add_edge(dep, dependent)

        logger.debug("Variable graph built", nodes=len(self.nodes), edges=self.edge_count)

    def add_node(self, name: str) -> VariableNode:
        """
        Add a variable to the graph.

        Args:
            name: Variable name

        Returns:
            The created node

        Raises:
            GraphIntegrityError: If the name is already in the graph
        """
        if name in self._index:
            raise GraphIntegrityError(f"Variable already in graph: {name}")
        node = VariableNode(name=name)
        self._index[name] = len(self.nodes)
        self.nodes.append(node)
        return node

    def add_edge(self, start: str, end: str) -> bool:
        """
        Record that ``end`` depends on ``start``.

        Args:
            start: The dependency (evaluated first)
            end: The dependent (evaluated after start)

        Returns:
            True if the edge is new, False if it was already present

        Raises:
            GraphIntegrityError: If either name is not a node of the graph
        """
        start_index = self._lookup(start)
        end_index = self._lookup(end)

        parent = self.nodes[start_index]
        if end_index in parent.children:
            return False
        parent.children.add(end_index)
        self.nodes[end_index].dependencies += 1
        return True

    def node(self, name: str) -> VariableNode:
        """Return the node of a variable."""
        return self.nodes[self._lookup(name)]

    def index_of(self, name: str) -> int:
        """Return the arena index of a variable."""
        return self._lookup(name)

    @property
    def names(self) -> list[str]:
        """Variable names in insertion order."""
        return [node.name for node in self.nodes]

    @property
    def edge_count(self) -> int:
        """Number of distinct edges."""
        return sum(len(node.children) for node in self.nodes)

    def children_of(self, name: str) -> set[str]:
        """Names of the variables that depend on ``name``."""
        return {self.nodes[i].name for i in self.node(name).children}

    def dependency_count(self, name: str) -> int:
        """Number of distinct variables ``name`` depends on."""
        return self.node(name).dependencies

    def edges(self) -> Iterator[tuple[str, str]]:
        """Yield every edge as ``(dependency, dependent)``."""
        for node in self.nodes:
            for child in sorted(node.children):
                yield node.name, self.nodes[child].name

    def to_dot(self) -> str:
        """
        Generate DOT format representation of the dependency graph.

        Returns:
            String containing the Graphviz DOT definition
        """
        lines = ["digraph VariableGraph {"]
        lines.append("    rankdir=LR;")
        lines.append("    node [shape=box style=filled];")

        for node in self.nodes:
            # Roots have nothing to wait for
            color = "#d4edda" if node.dependencies == 0 else "#cce5ff"
            lines.append(f'    "{node.name}" [fillcolor="{color}"];')

        for start, end in self.edges():
            lines.append(f'    "{start}" -> "{end}";')

        lines.append("}")
        return "\n".join(lines)

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def _lookup(self, name: str) -> int:
        try:
            return self._index[name]
        except KeyError:
            raise GraphIntegrityError(f"Variable not found in graph: {name}") from None
