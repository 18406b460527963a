"""Selection of edge pairs that are fused into binary reactions.

A pair ``(i, j)`` of positions in the edge list becomes the reaction
``edges[i][0] + edges[j][0] <-> edges[i][1] + edges[j][1]``. Every edge takes
part in at most one pair. When fewer pairs than requested can be formed the
couplers return what they found together with a
:class:`~crngen.errors.CouplingShortfall`; they never raise for that reason.

With ``limit_coupling`` the pairs are restricted by model:

- Erdős–Rényi, Barabási–Albert: no restriction.
- Watts–Strogatz: all four endpoints must lie in one short window of the ring.
- Pan–Sinha, simple modular: the edges must have the same lowest common module
  below the whole network.
"""

from __future__ import annotations

import logging
import math
from collections import defaultdict
from dataclasses import dataclass
from itertools import combinations
from typing import Callable, Hashable, Sequence

import numpy as np

from crngen.errors import CouplingShortfall, InvalidParameterError
from crngen.topology import Edge, HierarchicalModules, SimpleModules, ring_distance

logger = logging.getLogger(__name__)

Pair = tuple[int, int]


@dataclass(frozen=True)
class CouplingResult:
    pairs: list[Pair]
    requested: int

    @property
    def shortfall(self) -> CouplingShortfall | None:
        if len(self.pairs) >= self.requested:
            return None
        return CouplingShortfall(requested=self.requested, achieved=len(self.pairs))


def is_null_pair(edges: Sequence[Edge], i: int, j: int) -> bool:
    """True if coupling edges i and j gives identical educts and products."""
    educts = sorted((edges[i][0], edges[j][0]))
    products = sorted((edges[i][1], edges[j][1]))
    return educts == products


def _greedy_pairs(
    rng: np.random.Generator,
    edges: Sequence[Edge],
    c: int,
    key: Callable[[Edge], Hashable] | None = None,
    compatible: Callable[[Edge, Edge], bool] | None = None,
) -> CouplingResult:
    """Pair edges in random order, each with the first fitting waiting edge.

    ``key`` groups edges into buckets that are paired separately; an edge
    whose key is None is never coupled.
    """
    if c < 0:
        raise InvalidParameterError(f"Number of couplings must be non-negative, got {c}")
    pairs: list[Pair] = []
    if c == 0:
        return CouplingResult(pairs, c)

    waiting: defaultdict[Hashable, list[int]] = defaultdict(list)
    for index in rng.permutation(len(edges)):
        index = int(index)
        group = key(edges[index]) if key is not None else 0
        if group is None:
            continue
        bucket = waiting[group]
        partner = None
        for candidate in bucket:
            if is_null_pair(edges, candidate, index):
                continue
            if compatible is not None and not compatible(edges[candidate], edges[index]):
                continue
            partner = candidate
            break
        if partner is None:
            bucket.append(index)
            continue
        bucket.remove(partner)
        pairs.append((partner, index))
        if len(pairs) == c:
            break

    result = CouplingResult(pairs, c)
    if result.shortfall is not None:
        logger.warning("%s", result.shortfall)
    return result


def endpoint_spread(nodes: Sequence[int], n: int) -> int:
    """Largest ring distance between any two of ``nodes``."""
    return max((ring_distance(a, b, n) for a, b in combinations(nodes, 2)), default=0)


def couple_uniform(rng: np.random.Generator, edges: Sequence[Edge], c: int) -> CouplingResult:
    return _greedy_pairs(rng, edges, c)


def couple_erdos_renyi(
    rng: np.random.Generator,
    edges: Sequence[Edge],
    c: int,
    limit_coupling: bool = False,
) -> CouplingResult:
    # Erdos-Renyi graphs have no structure to preserve.
    if limit_coupling:
        logger.debug("limit_coupling has no effect on Erdos-Renyi networks")
    return couple_uniform(rng, edges, c)


def couple_barabasi_albert(
    rng: np.random.Generator,
    edges: Sequence[Edge],
    c: int,
    limit_coupling: bool = False,
) -> CouplingResult:
    if limit_coupling:
        logger.debug("limit_coupling has no effect on Barabasi-Albert networks")
    return couple_uniform(rng, edges, c)


def couple_watts_strogatz(
    rng: np.random.Generator,
    edges: Sequence[Edge],
    c: int,
    n: int,
    limit_coupling: bool = False,
) -> CouplingResult:
    """Couple Watts-Strogatz edges.

    With ``limit_coupling`` two edges qualify when all four endpoints lie
    within ring distance ``2 * ceil(M/N)`` of each other, i.e. inside one
    window twice the lattice radius wide.
    """
    if not limit_coupling:
        return couple_uniform(rng, edges, c)
    window = 2 * math.ceil(len(edges) / n) if n else 0

    def near(first: Edge, second: Edge) -> bool:
        return endpoint_spread((*first, *second), n) <= window

    return _greedy_pairs(rng, edges, c, compatible=near)


def couple_pan_sinha(
    rng: np.random.Generator,
    edges: Sequence[Edge],
    c: int,
    hierarchy: HierarchicalModules,
    limit_coupling: bool = False,
) -> CouplingResult:
    """Couple Pan-Sinha edges.

    With ``limit_coupling`` only edges sharing the same lowest common module
    are paired. Edges whose only common module is the whole network stay
    unary unless the hierarchy is flat.
    """
    if not limit_coupling:
        return couple_uniform(rng, edges, c)

    def module(edge: Edge) -> tuple[int, int] | None:
        common = hierarchy.common_module(*edge)
        if hierarchy.levels > 0 and common[0] == hierarchy.levels:
            return None
        return common

    return _greedy_pairs(rng, edges, c, key=module)


def couple_simple_modular(
    rng: np.random.Generator,
    edges: Sequence[Edge],
    c: int,
    partition: SimpleModules,
    limit_coupling: bool = False,
) -> CouplingResult:
    if not limit_coupling:
        return couple_uniform(rng, edges, c)
    # edges spanning two modules are never coupled
    return _greedy_pairs(rng, edges, c, key=lambda edge: partition.common_module(*edge))
