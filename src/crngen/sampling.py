"""Seeded random source and energy samplers."""

from __future__ import annotations

import logging
import time

import numpy as np

logger = logging.getLogger(__name__)


def make_rng(seed: int | None = None) -> np.random.Generator:
    """Create the random handle used for one run.

    Without a seed the wall-clock seconds are used so that a run can be
    repeated from the logged value.
    """
    if seed is None:
        seed = int(time.time())
    logger.info("Random seed is %d", seed)
    return np.random.default_rng(seed)


def sample_species_energy(rng: np.random.Generator) -> float:
    """Species energy, uniform in [-1, 0]."""
    return -float(rng.random())


def sample_activation_energy(rng: np.random.Generator) -> float:
    """Activation energy, uniform in [0, 1]."""
    return float(rng.random())
