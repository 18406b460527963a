"""Random graph models producing the edge lists of reaction networks.

Every generator returns exactly ``m`` edges as ``(u, v)`` node pairs or raises
:class:`~crngen.errors.InfeasibleParametersError`. The structural flags of
:class:`~crngen.topology.EdgeFlags` are honoured by all models:

- ``self_loop``: edges ``(u, u)`` may be produced.
- ``allow_multiple``: the same edge may be produced repeatedly.
- ``directed``: edges keep their orientation; otherwise they are stored with
  ``u < v`` and compared without orientation.

Sampling is done by rejection. Before sampling, each model computes the size of
its admissible edge space and refuses impossible requests up front. While
sampling, a bounded number of consecutive rejections is tolerated so that a
run can never spin forever.
"""

from __future__ import annotations

import logging
import math
from typing import Callable, Optional

import numpy as np

from crngen.constants import REJECTION_FACTOR
from crngen.errors import InfeasibleParametersError, InvalidParameterError
from crngen.topology import (
    Edge,
    EdgeFlags,
    EdgeSet,
    HierarchicalModules,
    SimpleModules,
    edge_capacity,
    grouped_pair_count,
    pair_count,
)

logger = logging.getLogger(__name__)

Draw = Callable[[], Optional[Edge]]


def _rejection_budget(n: int, m: int) -> int:
    return REJECTION_FACTOR * max(m, n * n)


def _check_request(model: str, n: int, m: int, capacity: float) -> None:
    if n < 0 or m < 0:
        raise InvalidParameterError(
            f"{model}: node and edge counts must be non-negative (N={n}, M={m})"
        )
    if m > capacity:
        raise InfeasibleParametersError(
            f"{model}: cannot place {m} edges on {n} nodes, "
            f"at most {capacity} are possible with the given flags",
            context={"N": n, "M": m, "capacity": capacity},
        )


def _fill(
    edge_set: EdgeSet,
    m: int,
    draw: Draw,
    budget: int,
    model: str,
    on_accept: Callable[[Edge], None] | None = None,
) -> None:
    """Draw candidates until ``edge_set`` holds ``m`` edges.

    ``draw`` returns a candidate pair or None for a candidate the model itself
    discarded. Both count as rejections.
    """
    rejections = 0
    while len(edge_set) < m:
        candidate = draw()
        if candidate is not None and edge_set.add(*candidate):
            rejections = 0
            if on_accept is not None:
                on_accept(edge_set.edges[-1])
            continue
        rejections += 1
        if rejections > budget:
            raise InfeasibleParametersError(
                f"{model}: gave up after {budget} consecutive rejections "
                f"with {len(edge_set)} of {m} edges placed",
                context={"M": m, "placed": len(edge_set)},
            )


def erdos_renyi(
    rng: np.random.Generator,
    n: int,
    m: int,
    flags: EdgeFlags = EdgeFlags(),
) -> list[Edge]:
    """Erdős–Rényi G(N, M): edges drawn uniformly with rejection."""
    _check_request("Erdos-Renyi", n, m, edge_capacity(pair_count(n, flags), flags))
    edge_set = EdgeSet(flags)

    def draw() -> Edge:
        return int(rng.integers(n)), int(rng.integers(n))

    _fill(edge_set, m, draw, _rejection_budget(n, m), "Erdos-Renyi")
    logger.debug("Erdos-Renyi network with %d nodes and %d edges", n, m)
    return edge_set.edges


def _attachment_quotas(edges: int, nodes: int) -> list[int]:
    if nodes <= 0:
        return []
    base, extra = divmod(edges, nodes)
    return [base + 1 if index < extra else base for index in range(nodes)]


def barabasi_albert(
    rng: np.random.Generator,
    n: int,
    m: int,
    flags: EdgeFlags = EdgeFlags(),
) -> list[Edge]:
    """Barabási–Albert preferential attachment with exactly ``m`` edges.

    A path over the first ``ceil(m/n) + 1`` nodes seeds the graph. Every later
    node links to existing nodes drawn from the endpoint pool, which holds both
    ends of every accepted edge and therefore realises degree-proportional
    selection. A node that cannot place its share passes the deficit on.
    """
    _check_request("Barabasi-Albert", n, m, edge_capacity(pair_count(n, flags), flags))
    edge_set = EdgeSet(flags)
    if m == 0:
        return edge_set.edges

    pool: list[int] = []

    def remember(edge: Edge) -> None:
        pool.extend(edge)

    seed_edges = min(math.ceil(m / n), n - 1, m)
    for node in range(seed_edges):
        if edge_set.add(node, node + 1):
            remember(edge_set.edges[-1])

    first_new = seed_edges + 1
    quotas = _attachment_quotas(m - len(edge_set), n - first_new)
    deficit = 0
    for node, quota in zip(range(first_new, n), quotas):
        wanted = quota + deficit
        if not flags.allow_multiple:
            wanted = min(wanted, node + (1 if flags.self_loop else 0))
        placed = 0
        rejections = 0
        budget = REJECTION_FACTOR * (len(pool) + node + 1)
        while placed < wanted and rejections <= budget:
            if pool:
                target = pool[int(rng.integers(len(pool)))]
            else:
                target = int(rng.integers(node))
            if edge_set.add(node, target):
                remember(edge_set.edges[-1])
                placed += 1
                rejections = 0
            else:
                rejections += 1
        deficit = quota + deficit - placed

    if len(edge_set) < m:
        logger.debug(
            "Barabasi-Albert: placing %d remaining edges preferentially",
            m - len(edge_set),
        )

        def draw() -> Edge:
            source = int(rng.integers(n))
            if pool:
                return source, pool[int(rng.integers(len(pool)))]
            return source, int(rng.integers(n))

        _fill(
            edge_set,
            m,
            draw,
            _rejection_budget(n, m),
            "Barabasi-Albert",
            on_accept=remember,
        )
    return edge_set.edges


def watts_strogatz(
    rng: np.random.Generator,
    n: int,
    m: int,
    alpha: float,
    flags: EdgeFlags = EdgeFlags(),
) -> list[Edge]:
    """Watts–Strogatz small-world ring with rewiring probability ``alpha``.

    Each node is linked to its ``k = ceil(m/n)`` successors on the ring; the
    lattice is traversed offset by offset (all nearest neighbours first). Each
    lattice edge then has its far endpoint replaced by a uniform node with
    probability ``alpha``. The result is cut to the first ``m`` edges, or topped
    up with uniform edges when the flags removed lattice edges.
    """
    if not 0.0 <= alpha <= 1.0:
        raise InvalidParameterError(f"Watts-Strogatz: alpha must lie in [0, 1], got {alpha}")
    _check_request("Watts-Strogatz", n, m, edge_capacity(pair_count(n, flags), flags))
    edge_set = EdgeSet(flags)
    if m == 0:
        return edge_set.edges

    k = math.ceil(m / n)
    sources: list[int] = []
    for offset in range(1, k + 1):
        for node in range(n):
            if edge_set.add(node, (node + offset) % n):
                sources.append(node)

    attempts = REJECTION_FACTOR * n
    rewired = 0
    for index, source in enumerate(sources):
        if rng.random() >= alpha:
            continue
        for _ in range(attempts):
            if edge_set.replace(index, source, int(rng.integers(n))):
                rewired += 1
                break
    logger.debug("Watts-Strogatz: rewired %d of %d lattice edges", rewired, len(sources))

    if len(edge_set) > m:
        edge_set.truncate(m)
    elif len(edge_set) < m:

        def draw() -> Edge:
            return int(rng.integers(n)), int(rng.integers(n))

        _fill(edge_set, m, draw, _rejection_budget(n, m), "Watts-Strogatz")
    return edge_set.edges


def _check_ratio(model: str, r: float) -> None:
    if not 0.0 <= r <= 1.0:
        raise InvalidParameterError(f"{model}: r must lie in [0, 1], got {r}")


def pan_sinha(
    rng: np.random.Generator,
    n: int,
    m: int,
    h: int,
    module_size: int,
    r: float,
    flags: EdgeFlags = EdgeFlags(),
) -> list[Edge]:
    """Pan–Sinha hierarchical modular network.

    Candidate pairs are drawn uniformly and accepted with probability
    ``r ** d`` where ``d`` is the level of the endpoints' lowest common module
    (0 inside a leaf module).
    """
    _check_ratio("Pan-Sinha", r)
    try:
        hierarchy = HierarchicalModules(n, h, module_size)
    except ValueError as exc:
        raise InvalidParameterError(f"Pan-Sinha: {exc}") from exc

    if r == 0.0:
        distinct = grouped_pair_count(hierarchy.leaf_sizes(), flags)
    else:
        distinct = pair_count(n, flags)
    _check_request("Pan-Sinha", n, m, edge_capacity(distinct, flags))

    acceptance = [r**level for level in range(h + 1)]
    edge_set = EdgeSet(flags)

    def draw() -> Edge | None:
        u, v = int(rng.integers(n)), int(rng.integers(n))
        if rng.random() < acceptance[hierarchy.distance(u, v)]:
            return u, v
        return None

    _fill(edge_set, m, draw, _rejection_budget(n, m), "Pan-Sinha")
    logger.debug(
        "Pan-Sinha network with leaf modules of %d nodes over %d levels",
        hierarchy.leaf_size,
        h,
    )
    return edge_set.edges


def simple_modular(
    rng: np.random.Generator,
    n: int,
    m: int,
    modules: int,
    r: float,
    flags: EdgeFlags = EdgeFlags(),
) -> list[Edge]:
    """Network of ``modules`` equal blocks; a fraction ``r`` of edges links blocks."""
    _check_ratio("Simple-modular", r)
    try:
        partition = SimpleModules(n, modules)
    except ValueError as exc:
        raise InvalidParameterError(f"Simple-modular: {exc}") from exc

    count = len(partition)
    intra = grouped_pair_count(partition.sizes(), flags)
    if count < 2 or r == 0.0:
        distinct = intra
    elif r == 1.0:
        distinct = pair_count(n, flags) - intra
    else:
        distinct = pair_count(n, flags)
    _check_request("Simple-modular", n, m, edge_capacity(distinct, flags))
    if count < 2 and r > 0.0:
        logger.debug("Simple-modular: single module, all edges are intra-module")

    members = partition.members
    edge_set = EdgeSet(flags)

    def pick(module: int) -> int:
        nodes = members[module]
        return nodes[int(rng.integers(len(nodes)))]

    def draw() -> Edge:
        if count >= 2 and rng.random() < r:
            first = int(rng.integers(count))
            second = int(rng.integers(count - 1))
            if second >= first:
                second += 1
            return pick(first), pick(second)
        module = int(rng.integers(count))
        return pick(module), pick(module)

    _fill(edge_set, m, draw, _rejection_budget(n, m), "Simple-modular")
    return edge_set.edges
