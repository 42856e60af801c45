"""Dependency graph construction and cycle detection."""

from graph.algos import Cycle, detect_cycles, format_cycle_description
from graph.builder import (
    DependencyGraph,
    GraphBuild,
    GraphBuildWarning,
    build_dependency_graph,
    resolve_import_path,
)

__all__ = [
    "Cycle",
    "DependencyGraph",
    "GraphBuild",
    "GraphBuildWarning",
    "build_dependency_graph",
    "detect_cycles",
    "format_cycle_description",
    "resolve_import_path",
]
