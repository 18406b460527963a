"""Edge bookkeeping and node partitions shared by generators and couplers."""

from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass
from typing import Iterable

Edge = tuple[int, int]


@dataclass(frozen=True)
class EdgeFlags:
    """Structural options of a generated graph.

    Attributes:
        allow_multiple: The same edge may occur more than once.
        self_loop: Edges (u, u) are permitted.
        directed: Edges are ordered pairs; otherwise stored as u < v.
    """

    allow_multiple: bool = False
    self_loop: bool = False
    directed: bool = False


class EdgeSet:
    """Ordered edge list that only admits edges allowed by its flags."""

    def __init__(self, flags: EdgeFlags) -> None:
        self.flags = flags
        self.edges: list[Edge] = []
        self._keys: Counter[Edge] = Counter()

    def __len__(self) -> int:
        return len(self.edges)

    def normalize(self, u: int, v: int) -> Edge | None:
        """Return the stored form of (u, v), or None if it is never allowed."""
        if u == v and not self.flags.self_loop:
            return None
        if not self.flags.directed and u > v:
            u, v = v, u
        return (u, v)

    def add(self, u: int, v: int) -> bool:
        edge = self.normalize(u, v)
        if edge is None:
            return False
        if not self.flags.allow_multiple and self._keys[edge]:
            return False
        self.edges.append(edge)
        self._keys[edge] += 1
        return True

    def replace(self, index: int, u: int, v: int) -> bool:
        """Swap the edge at ``index`` for (u, v); keep the old one on failure."""
        edge = self.normalize(u, v)
        if edge is None:
            return False
        old = self.edges[index]
        self._keys[old] -= 1
        if not self.flags.allow_multiple and self._keys[edge]:
            self._keys[old] += 1
            return False
        self.edges[index] = edge
        self._keys[edge] += 1
        return True

    def truncate(self, size: int) -> None:
        for edge in self.edges[size:]:
            self._keys[edge] -= 1
        del self.edges[size:]


def pair_count(size: int, flags: EdgeFlags) -> int:
    """Number of distinct admissible edges among ``size`` nodes."""
    pairs = size * (size - 1)
    if not flags.directed:
        pairs //= 2
    if flags.self_loop:
        pairs += size
    return pairs


def edge_capacity(distinct_edges: int, flags: EdgeFlags) -> float:
    """Upper bound on the edge count a generator can reach."""
    if flags.allow_multiple and distinct_edges > 0:
        return math.inf
    return distinct_edges


def ring_distance(a: int, b: int, n: int) -> int:
    d = abs(a - b) % n
    return min(d, n - d)


class HierarchicalModules:
    """Nested partition of ``n`` nodes used by the Pan-Sinha model.

    Leaf modules hold ``ceil(n / m**h)`` consecutive nodes; every level above
    merges ``m`` modules of the level below. Level ``h`` contains all nodes.
    """

    def __init__(self, n: int, levels: int, branching: int) -> None:
        if levels < 0:
            raise ValueError("Number of hierarchy levels must be non-negative")
        if branching < 1:
            raise ValueError("Module size must be at least 1")
        self.n = n
        self.levels = levels
        self.branching = branching
        self.leaf_size = max(1, math.ceil(n / branching**levels))

    def module(self, node: int, level: int) -> int:
        return (node // self.leaf_size) // self.branching**level

    def distance(self, u: int, v: int) -> int:
        """Lowest level at which ``u`` and ``v`` share a module."""
        for level in range(self.levels + 1):
            if self.module(u, level) == self.module(v, level):
                return level
        return self.levels

    def common_module(self, u: int, v: int) -> tuple[int, int]:
        level = self.distance(u, v)
        return (level, self.module(u, level))

    def leaf_sizes(self) -> list[int]:
        return [
            min(self.leaf_size, self.n - start)
            for start in range(0, self.n, self.leaf_size)
        ]


class SimpleModules:
    """Partition of ``n`` nodes into ``m`` modules of (almost) equal size."""

    def __init__(self, n: int, count: int) -> None:
        if count < 1:
            raise ValueError("Number of modules must be at least 1")
        groups: dict[int, list[int]] = {}
        for node in range(n):
            groups.setdefault(node * count // n, []).append(node)
        self.members: list[list[int]] = list(groups.values())
        self._module_of = [0] * n
        for index, members in enumerate(self.members):
            for node in members:
                self._module_of[node] = index

    def __len__(self) -> int:
        return len(self.members)

    def module(self, node: int) -> int:
        return self._module_of[node]

    def common_module(self, u: int, v: int) -> int | None:
        """Module containing both nodes, or None if the edge spans modules."""
        module = self._module_of[u]
        return module if module == self._module_of[v] else None

    def sizes(self) -> list[int]:
        return [len(members) for members in self.members]


def grouped_pair_count(sizes: Iterable[int], flags: EdgeFlags) -> int:
    return sum(pair_count(size, flags) for size in sizes)
