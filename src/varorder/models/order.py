"""Build order types."""

from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class Group:
    """
    One level of a build order.

    Every variable in a group can be evaluated concurrently: all of its
    dependencies belong to earlier groups. Names are kept sorted so that the
    same input always renders the same way, but membership is what matters.

    Attributes:
        index: Position of the group in the build order (0 = no dependencies)
        variables: Names of the variables in this group
    """

    index: int
    variables: tuple[str, ...]

    def __iter__(self) -> Iterator[str]:
        return iter(self.variables)

    def __len__(self) -> int:
        return len(self.variables)

    def __contains__(self, name: object) -> bool:
        return name in self.variables


def group_index(order: list[Group]) -> dict[str, int]:
    """
    Map every variable name to the index of the group that holds it.

    Args:
        order: A build order

    Returns:
        Dict of variable name to group index
    """
    return {name: group.index for group in order for name in group.variables}
