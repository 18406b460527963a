"""Data structures for species and reactions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Sequence


class EnergyDistribution(IntEnum):
    """Distribution used for species and activation energies.

    Only ``LINEAR`` is implemented. ``LOGARITHMIC`` keeps its slot and is
    sampled like ``LINEAR``.
    """

    LINEAR = 0
    LOGARITHMIC = 1


@dataclass(frozen=True)
class Species:
    id: int
    name: str
    constant: bool = False
    energy: float = 0.0


@dataclass(frozen=True)
class Reaction:
    """Reaction between species referenced by id.

    Educts and products are ordered; a species appearing twice has
    stoichiometric coefficient two.
    """

    educts: tuple[int, ...]
    products: tuple[int, ...]
    reversible: bool = True
    activation: float = 0.0
    k: float = 1.0
    k_b: float = 1.0
    c: float = 1.0

    def __post_init__(self) -> None:
        if not self.educts or not self.products:
            raise ValueError("A reaction needs at least one educt and one product")

    @property
    def species_ids(self) -> set[int]:
        return set(self.educts) | set(self.products)

    def is_unary(self) -> bool:
        return len(self.educts) == 1 and len(self.products) == 1

    def is_binary(self) -> bool:
        return len(self.educts) == 2 and len(self.products) == 2


def species_index(species: Sequence[Species]) -> dict[str, int]:
    """Map species names to their ids."""
    return {sp.name: sp.id for sp in species}
