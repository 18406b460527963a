"""Persistence helpers for crngen."""

from crngen.persistence.jrnf import read_jrnf, write_jrnf
from crngen.persistence.sbml import write_sbml

__all__ = [
    "read_jrnf",
    "write_jrnf",
    "write_sbml",
]
