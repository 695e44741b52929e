"""Dependency management for variable ordering."""

from .extractor import DependencyExtractor
from .graph import VariableGraph, VariableNode
from .scheduler import build_order, find_cycle

__all__ = [
    "DependencyExtractor",
    "VariableGraph",
    "VariableNode",
    "build_order",
    "find_cycle",
]
