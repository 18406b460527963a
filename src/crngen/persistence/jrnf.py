"""Reader and writer for the native jrnf text format.

Layout::

    jrnf0003
    <species count> <reaction count>
    <id> <name> <constant 0|1> <energy>
    ...
    <reversible 0|1> <activation> <k> <k_b> <c> ; <educt ids> > <product ids>
    ...
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, Sequence

from crngen.constants import JRNF_MAGIC
from crngen.errors import FileIOError, JrnfFormatError
from crngen.models import Reaction, Species


def _flag(text: str) -> bool:
    if text not in ("0", "1"):
        raise ValueError(f"expected 0 or 1, got '{text}'")
    return text == "1"


def format_species(sp: Species) -> str:
    return f"{sp.id} {sp.name} {int(sp.constant)} {sp.energy!r}"


def format_reaction_line(reaction: Reaction) -> str:
    header = " ".join(
        [
            str(int(reaction.reversible)),
            repr(reaction.activation),
            repr(reaction.k),
            repr(reaction.k_b),
            repr(reaction.c),
        ]
    )
    educts = " ".join(str(index) for index in reaction.educts)
    products = " ".join(str(index) for index in reaction.products)
    return f"{header} ; {educts} > {products}"


def dumps(species: Sequence[Species], reactions: Sequence[Reaction]) -> str:
    lines = [JRNF_MAGIC, f"{len(species)} {len(reactions)}"]
    lines.extend(format_species(sp) for sp in species)
    lines.extend(format_reaction_line(reaction) for reaction in reactions)
    return "\n".join(lines) + "\n"


def write_jrnf(
    path: str | Path, species: Sequence[Species], reactions: Sequence[Reaction]
) -> None:
    """Write a network to ``path``."""
    path = Path(path)
    try:
        with open(path, "w", encoding="utf-8") as handle:
            handle.write(dumps(species, reactions))
    except OSError as exc:
        raise FileIOError(f"Error at writing jrnf-file: {exc.strerror}", path) from exc


def _content_lines(text: str) -> Iterator[tuple[int, str]]:
    for number, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if stripped:
            yield number, stripped


def _parse_species(line: str, expected_id: int) -> Species:
    fields = line.split()
    if len(fields) != 4:
        raise ValueError(f"species line needs 4 fields, got {len(fields)}")
    species_id = int(fields[0])
    if species_id != expected_id:
        raise ValueError(f"species id {species_id} where {expected_id} was expected")
    return Species(
        id=species_id,
        name=fields[1],
        constant=_flag(fields[2]),
        energy=float(fields[3]),
    )


def _parse_ids(text: str, species_count: int) -> tuple[int, ...]:
    ids = tuple(int(token) for token in text.split())
    for index in ids:
        if not 0 <= index < species_count:
            raise ValueError(f"unknown species id {index}")
    return ids


def _parse_reaction(line: str, species_count: int) -> Reaction:
    head, sep, body = line.partition(";")
    if not sep or ">" not in body:
        raise ValueError("reaction line needs '; <educts> > <products>'")
    fields = head.split()
    if len(fields) != 5:
        raise ValueError(f"reaction header needs 5 fields, got {len(fields)}")
    educt_text, _, product_text = body.partition(">")
    return Reaction(
        educts=_parse_ids(educt_text, species_count),
        products=_parse_ids(product_text, species_count),
        reversible=_flag(fields[0]),
        activation=float(fields[1]),
        k=float(fields[2]),
        k_b=float(fields[3]),
        c=float(fields[4]),
    )


def loads(text: str, path: str | Path = "<string>") -> tuple[list[Species], list[Reaction]]:
    lines = _content_lines(text)

    try:
        number, magic = next(lines)
    except StopIteration:
        raise JrnfFormatError("Empty jrnf-file", path) from None
    if magic != JRNF_MAGIC:
        raise JrnfFormatError(f"Unknown file header '{magic}'", path, number)

    try:
        number, counts = next(lines)
        species_count, reaction_count = (int(field) for field in counts.split())
    except StopIteration:
        raise JrnfFormatError("Missing species and reaction counts", path) from None
    except ValueError:
        raise JrnfFormatError("Malformed species and reaction counts", path, number) from None

    species: list[Species] = []
    reactions: list[Reaction] = []
    for number, line in lines:
        try:
            if len(species) < species_count:
                species.append(_parse_species(line, len(species)))
            elif len(reactions) < reaction_count:
                reactions.append(_parse_reaction(line, species_count))
            else:
                raise ValueError("unexpected content after the last reaction")
        except ValueError as exc:
            raise JrnfFormatError(str(exc), path, number) from exc

    if len(species) != species_count or len(reactions) != reaction_count:
        raise JrnfFormatError(
            f"Expected {species_count} species and {reaction_count} reactions, "
            f"found {len(species)} and {len(reactions)}",
            path,
        )
    return species, reactions


def read_jrnf(path: str | Path) -> tuple[list[Species], list[Reaction]]:
    """Read a network from ``path``."""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as handle:
            text = handle.read()
    except OSError as exc:
        raise FileIOError(f"Error at reading jrnf-file: {exc.strerror}", path) from exc
    except UnicodeDecodeError as exc:
        raise JrnfFormatError(
            f"Error at reading jrnf-file: not UTF-8 text at byte {exc.start}", path
        ) from exc
    return loads(text, path)
