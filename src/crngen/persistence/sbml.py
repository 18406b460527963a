"""SBML export of reaction networks (write-only)."""

from __future__ import annotations

from collections import Counter
from pathlib import Path
from typing import Sequence

import libsbml

from crngen.errors import FileIOError
from crngen.models import Reaction, Species

SBML_LEVEL = 2
SBML_VERSION = 4
COMPARTMENT_ID = "compartment"


def species_sbml_id(species_id: int) -> str:
    return f"s_{species_id}"


def _check(status: int, what: str) -> None:
    if status != libsbml.LIBSBML_OPERATION_SUCCESS:
        message = libsbml.OperationReturnValue_toString(status)
        raise ValueError(f"libsbml failed to {what}: {message}")


def _mass_action(ids: Sequence[int]) -> str:
    return " * ".join(species_sbml_id(index) for index in ids)


def _add_reaction(model: libsbml.Model, index: int, reaction: Reaction) -> None:
    sbml_reaction = model.createReaction()
    _check(sbml_reaction.setId(f"r_{index}"), "set reaction id")
    _check(sbml_reaction.setReversible(reaction.reversible), "set reversibility")

    for ids, create in (
        (reaction.educts, sbml_reaction.createReactant),
        (reaction.products, sbml_reaction.createProduct),
    ):
        for species_id, count in Counter(ids).items():
            reference = create()
            _check(reference.setSpecies(species_sbml_id(species_id)), "set species reference")
            _check(reference.setStoichiometry(float(count)), "set stoichiometry")

    law = sbml_reaction.createKineticLaw()
    formula = f"k * {_mass_action(reaction.educts)}"
    parameters = [("k", reaction.k)]
    if reaction.reversible:
        formula += f" - k_b * {_mass_action(reaction.products)}"
        parameters.append(("k_b", reaction.k_b))
    for name, value in parameters:
        parameter = law.createParameter()
        _check(parameter.setId(name), "set parameter id")
        _check(parameter.setValue(value), "set parameter value")
    math = libsbml.parseL3Formula(formula)
    if math is None:
        raise ValueError(f"libsbml could not parse rate law '{formula}'")
    _check(law.setMath(math), "set rate law")


def build_document(
    species: Sequence[Species], reactions: Sequence[Reaction], model_id: str = "network"
) -> libsbml.SBMLDocument:
    document = libsbml.SBMLDocument(SBML_LEVEL, SBML_VERSION)
    model = document.createModel()
    _check(model.setId(model_id), "set model id")

    compartment = model.createCompartment()
    _check(compartment.setId(COMPARTMENT_ID), "set compartment id")
    _check(compartment.setSize(1.0), "set compartment size")

    for sp in species:
        sbml_species = model.createSpecies()
        _check(sbml_species.setId(species_sbml_id(sp.id)), "set species id")
        _check(sbml_species.setName(sp.name), "set species name")
        _check(sbml_species.setCompartment(COMPARTMENT_ID), "set species compartment")
        _check(sbml_species.setInitialConcentration(1.0), "set initial concentration")
        _check(sbml_species.setBoundaryCondition(sp.constant), "set boundary condition")

    for index, reaction in enumerate(reactions):
        _add_reaction(model, index, reaction)
    return document


def write_sbml(
    path: str | Path, species: Sequence[Species], reactions: Sequence[Reaction]
) -> None:
    """Write the network as an SBML Level 2 Version 4 document."""
    path = Path(path)
    document = build_document(species, reactions, model_id=_model_id(path))
    if not libsbml.writeSBMLToFile(document, str(path)):
        raise FileIOError("Error at writing sbml-file", path)


def _model_id(path: Path) -> str:
    # SBML ids must start with a letter or underscore and hold only [A-Za-z0-9_].
    stem = "".join(ch if (ch.isascii() and ch.isalnum()) or ch == "_" else "_" for ch in path.stem)
    if not stem or stem[0].isdigit():
        stem = f"_{stem}"
    return stem
