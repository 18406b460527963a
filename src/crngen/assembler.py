"""Turn generated edges and coupling pairs into species and reactions."""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from crngen.constants import SPECIES_PREFIX
from crngen.models import EnergyDistribution, Reaction, Species
from crngen.sampling import sample_activation_energy, sample_species_energy
from crngen.topology import Edge

logger = logging.getLogger(__name__)


def species_name(node: int) -> str:
    return f"{SPECIES_PREFIX}{node}"


def _check_pairs(pairs: Sequence[tuple[int, int]], edge_count: int) -> None:
    used: set[int] = set()
    for i, j in pairs:
        if i == j:
            raise ValueError(f"Coupling pair ({i}, {j}) uses the same edge twice")
        for index in (i, j):
            if not 0 <= index < edge_count:
                raise ValueError(f"Coupling index {index} outside edge list of {edge_count}")
            if index in used:
                raise ValueError(f"Edge {index} is coupled more than once")
            used.add(index)


def assemble_network(
    n: int,
    edges: Sequence[Edge],
    pairs: Sequence[tuple[int, int]] = (),
    *,
    rng: np.random.Generator | None = None,
    energy_dist: EnergyDistribution | None = None,
    aener_dist: EnergyDistribution | None = None,
) -> tuple[list[Species], list[Reaction]]:
    """Build the reaction network of a generated graph.

    One species ``A_<i>`` is created per node. Each coupling pair ``(i, j)``
    yields the reversible reaction ``e_i.from + e_j.from <-> e_i.to + e_j.to``;
    every edge not consumed by a pair yields a reversible unary reaction.
    Binary reactions come first, in pair order, followed by the unary ones in
    edge order.

    Args:
        n: Number of nodes.
        edges: Generator output.
        pairs: Positions in ``edges`` to fuse, as returned by a coupler.
        rng: Random handle, required when energies are sampled.
        energy_dist: Species energy distribution, or None for zero energies.
        aener_dist: Activation energy distribution, or None for zero.

    Returns:
        The species list and the reaction list.
    """
    _check_pairs(pairs, len(edges))
    if rng is None and (energy_dist is not None or aener_dist is not None):
        raise ValueError("A random generator is needed to sample energies")
    for dist in (energy_dist, aener_dist):
        if dist is EnergyDistribution.LOGARITHMIC:
            logger.warning("Logarithmic energy distribution is not implemented, using linear")

    def activation() -> float:
        return 0.0 if aener_dist is None else sample_activation_energy(rng)

    species = [
        Species(
            id=node,
            name=species_name(node),
            energy=0.0 if energy_dist is None else sample_species_energy(rng),
        )
        for node in range(n)
    ]

    reactions: list[Reaction] = []
    consumed = [False] * len(edges)
    for i, j in pairs:
        reactions.append(
            Reaction(
                educts=(edges[i][0], edges[j][0]),
                products=(edges[i][1], edges[j][1]),
                reversible=True,
                activation=activation(),
            )
        )
        consumed[i] = consumed[j] = True

    for index, (u, v) in enumerate(edges):
        if consumed[index]:
            continue
        reactions.append(Reaction(educts=(u,), products=(v,), reversible=True, activation=activation()))

    logger.debug(
        "Assembled %d species, %d binary and %d unary reactions",
        len(species),
        len(pairs),
        len(reactions) - len(pairs),
    )
    return species, reactions


def assemble_unary_network(
    n: int, edges: Sequence[Edge]
) -> tuple[list[Species], list[Reaction]]:
    """Plain network: zero energies and one unary reaction per edge."""
    return assemble_network(n, edges)
