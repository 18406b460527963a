"""Transformations of complete reaction networks."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Sequence

from crngen.models import Reaction, Species, species_index

logger = logging.getLogger(__name__)

Network = tuple[list[Species], list[Reaction]]


def format_reaction(reaction: Reaction, species: Sequence[Species]) -> str:
    """Human readable form, e.g. ``A_1 + A_2 <-> A_3 + A_4``."""
    educts = " + ".join(species[index].name for index in reaction.educts)
    products = " + ".join(species[index].name for index in reaction.products)
    arrow = "<->" if reaction.reversible else "->"
    return f"{educts} {arrow} {products}"


def _find_species(species: Sequence[Species], name: str) -> int | None:
    found = species_index(species).get(name)
    if found is not None:
        return found
    logger.warning("Species '%s' not found in network, nothing removed", name)
    return None


def _without_species(species: Sequence[Species], removed: int) -> tuple[list[Species], dict[int, int]]:
    kept: list[Species] = []
    new_ids: dict[int, int] = {}
    for sp in species:
        if sp.id == removed:
            continue
        new_ids[sp.id] = len(kept)
        kept.append(replace(sp, id=len(kept)))
    return kept, new_ids


def _remap(reaction: Reaction, new_ids: dict[int, int]) -> Reaction:
    return replace(
        reaction,
        educts=tuple(new_ids[index] for index in reaction.educts),
        products=tuple(new_ids[index] for index in reaction.products),
    )


def remove_species_reactions(
    species: Sequence[Species], reactions: Sequence[Reaction], name: str
) -> Network:
    """Drop species ``name`` and every reaction it takes part in."""
    removed = _find_species(species, name)
    if removed is None:
        return list(species), list(reactions)

    kept_species, new_ids = _without_species(species, removed)
    kept_reactions = [
        _remap(reaction, new_ids)
        for reaction in reactions
        if removed not in reaction.species_ids
    ]
    logger.info(
        "Removed species '%s' and %d reactions",
        name,
        len(reactions) - len(kept_reactions),
    )
    return kept_species, kept_reactions


def remove_species_stoichiometric(
    species: Sequence[Species], reactions: Sequence[Reaction], name: str
) -> Network:
    """Drop species ``name`` from all reactions, keeping the reduced reactions.

    A reaction left without educts or without products is dropped.
    """
    removed = _find_species(species, name)
    if removed is None:
        return list(species), list(reactions)

    kept_species, new_ids = _without_species(species, removed)
    kept_reactions: list[Reaction] = []
    for reaction in reactions:
        educts = tuple(new_ids[index] for index in reaction.educts if index != removed)
        products = tuple(new_ids[index] for index in reaction.products if index != removed)
        if not educts or not products:
            continue
        kept_reactions.append(replace(reaction, educts=educts, products=products))
    logger.info(
        "Removed species '%s', dropped %d emptied reactions",
        name,
        len(reactions) - len(kept_reactions),
    )
    return kept_species, kept_reactions


def combine_networks(
    species_1: Sequence[Species],
    reactions_1: Sequence[Reaction],
    species_2: Sequence[Species],
    reactions_2: Sequence[Reaction],
) -> Network:
    """Union of two networks; species sharing a name become one species.

    The first network keeps its ids. Species only present in the second
    network are appended in their original order, and the second network's
    reactions are re-indexed to the combined species list.
    """
    species = list(species_1)
    by_name = species_index(species)
    new_ids: dict[int, int] = {}
    for sp in species_2:
        if sp.name not in by_name:
            by_name[sp.name] = len(species)
            species.append(replace(sp, id=len(species)))
        new_ids[sp.id] = by_name[sp.name]

    reactions = list(reactions_1)
    reactions.extend(_remap(reaction, new_ids) for reaction in reactions_2)
    return species, reactions
