"""Graph algorithms for circular import detection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping, Sequence

CYCLE_NOTE = "This breaks the layer hierarchy and creates circular coupling."


@dataclass(frozen=True)
class Cycle:
    """A closed walk in the dependency graph; the first node repeats last."""

    nodes: tuple[str, ...]
    description: str

    @property
    def edges(self) -> tuple[tuple[str, str], ...]:
        return tuple(zip(self.nodes, self.nodes[1:]))


def format_cycle_description(nodes: Sequence[str]) -> str:
    """Render one line per hop of a cycle."""
    if not nodes:
        return "Empty cycle"

    lines = ["Circular dependency detected:"]
    for source, target in zip(nodes, nodes[1:]):
        lines.append(f"  {source} -> {target}")
    lines.append("")
    lines.append(f"  {CYCLE_NOTE}")
    return "\n".join(lines)


class _DfsState:
    """Mutable state for one cycle detection pass."""

    def __init__(self) -> None:
        self.visited: set[str] = set()
        self.on_stack: set[str] = set()
        self.path: list[str] = []
        self.cycles: list[Cycle] = []

    def enter(self, node: str) -> None:
        self.visited.add(node)
        self.on_stack.add(node)
        self.path.append(node)

    def leave(self, node: str) -> None:
        self.path.pop()
        self.on_stack.discard(node)

    def record_cycle(self, back_to: str) -> None:
        start = self.path.index(back_to)
        nodes = (*self.path[start:], back_to)
        self.cycles.append(
            Cycle(nodes=nodes, description=format_cycle_description(nodes))
        )


def _visit(root: str, graph: Mapping[str, Sequence[str]], state: _DfsState) -> None:
    """Depth-first search from ``root`` with an explicit frame stack."""
    state.enter(root)
    frames: list[tuple[str, Iterator[str]]] = [(root, iter(graph.get(root, ())))]

    while frames:
        node, neighbors = frames[-1]
        for neighbor in neighbors:
            if neighbor not in state.visited:
                state.enter(neighbor)
                frames.append((neighbor, iter(graph.get(neighbor, ()))))
                break
            if neighbor in state.on_stack:
                state.record_cycle(neighbor)
        else:
            frames.pop()
            state.leave(node)


def detect_cycles(
    graph: Mapping[str, Sequence[str]],
    *,
    sort_roots: bool = True,
) -> list[Cycle]:
    """Find circular dependencies in a directed graph.

    Every back edge met during a depth-first search yields one cycle, so
    rotations of the same loop reached through different back edges are
    all reported and self-imports count as one-hop cycles. Nodes already
    visited from an earlier root are not re-entered.

    Args:
        graph: Mapping of node -> ordered list of nodes it imports
        sort_roots: Start searches from nodes in sorted key order so that
            the report is stable; otherwise use the mapping's order

    Returns:
        Cycles in discovery order.
    """
    state = _DfsState()
    roots = sorted(graph) if sort_roots else list(graph)

    for node in roots:
        if node not in state.visited:
            _visit(node, graph, state)

    return state.cycles


__all__ = ["CYCLE_NOTE", "Cycle", "detect_cycles", "format_cycle_description"]
