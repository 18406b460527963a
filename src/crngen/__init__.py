"""crngen: random chemical reaction network generation and transformation."""

from crngen.assembler import assemble_network
from crngen.models import EnergyDistribution, Reaction, Species
from crngen.topology import EdgeFlags

__all__ = [
    "assemble_network",
    "EnergyDistribution",
    "Reaction",
    "Species",
    "EdgeFlags",
]
