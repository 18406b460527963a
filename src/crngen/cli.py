"""Command-line entrypoint for crngen.

The program is driven by mode switches. Every mode present on the command line
runs in the order of :data:`MODES`, for example::

    crngen create_ER_NM N=10 M=15 out=er.jrnf
    crngen create_PS_NMhmr_bi_C N=27 M=50 h=2 m=3 r=0.5 C=10 limit_coupling
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import partial
from typing import Annotated, Callable

import numpy as np
import typer

from crngen.assembler import assemble_network, assemble_unary_network
from crngen.constants import DEFAULT_OUTPUT
from crngen.coupling import (
    CouplingResult,
    couple_barabasi_albert,
    couple_erdos_renyi,
    couple_pan_sinha,
    couple_simple_modular,
    couple_watts_strogatz,
)
from crngen.errors import CrnGenError, InvalidParameterError
from crngen.generators import (
    barabasi_albert,
    erdos_renyi,
    pan_sinha,
    simple_modular,
    watts_strogatz,
)
from crngen.logging_utils import DEFAULT_LOGGER_NAME, configure_logging, get_user_message
from crngen.models import EnergyDistribution
from crngen.params import ParameterSet
from crngen.persistence import read_jrnf, write_jrnf, write_sbml
from crngen.sampling import make_rng
from crngen.topology import Edge, EdgeFlags, HierarchicalModules, SimpleModules
from crngen.transforms import (
    combine_networks,
    format_reaction,
    remove_species_reactions,
    remove_species_stoichiometric,
)

logger = logging.getLogger(DEFAULT_LOGGER_NAME)

app = typer.Typer(add_completion=False)

FLAG_NAMES = ("self_loop", "directed", "allow_multiple", "limit_coupling")

HELP_TEXT = """\
          Network tools
          ===============
 call with parameter 'info' or 'help' for showing this screen

-> print_network
 Load a jrnf-file and print its reactions to the screen
 --> in - Name of jrnf-file to print

-> translate_jrnf_sbml
 Reads a jrnf-file and writes it as sbml
 --> in - input file
 --> out - output file

-> transform_rm_species_r, transform_rm_species_s
 Transforms a reaction network, removing one species. Either all
 reactions containing the species are removed ('_r') or only
 the species is removed from these reactions ('_s').
 --> in - input file
 --> out - output file
 --> sp - name of the species to be removed

-> combine_networks
 Combines two networks, identifying species with equal names
 --> in1, in2 - input files
 --> out - output file

-> create_ER_NM, create_BA_NM, create_WS_NMalpha, create_PS_NMhmr
-> create_ER_NM_bi_C, create_BA_NM_bi_C, create_WS_NMalpha_bi_C,
-> create_PS_NMhmr_bi_C, create_SM_NMmr_bi_C
 Creates an Erdos Renyi, Barabasi Albert, Watts Strogatz, Pan Sinha
 or simple modular network (possibly coupling C edge pairs)
 reactions are reversible (A <-> B type).
 --> N - Number of nodes (species)
 --> M - Number of edges
 --> C - Number of edge pairs that are coupled
 --> out - Output filename
 --> seed - seed of the random generator (default: current time)
 --> self_loop - allow self loops (if possible)
 --> directed - generate directed network
 --> allow_multiple - allow multiple occurrence of an edge
 --> limit_coupling - coupling linear reactions with model specific constraints
 --> alpha - rewiring probability (WS)
 --> h - number of upper hierarchic levels (PS)
 --> m - size of 2. level modules (PS), number of modules (SM)
 --> r - decrease of connectivity per level (PS), inter-module ratio (SM)
 --> energy_dist, aener_dist - energy distributions, 0 = linear (bi_C)
"""

Handler = Callable[[ParameterSet, np.random.Generator], None]
Generate = Callable[[np.random.Generator, int, int, ParameterSet, EdgeFlags], list[Edge]]
Couple = Callable[[np.random.Generator, list[Edge], int, int, ParameterSet, bool], CouplingResult]


@dataclass(frozen=True)
class NetworkModel:
    mode: str
    title: str
    parameters: tuple[str, ...]
    generate: Generate
    couple: Couple


@dataclass(frozen=True)
class ModeSpec:
    name: str
    required: tuple[str, ...]
    handler: Handler


def _print_network(params: ParameterSet, _rng: np.random.Generator) -> None:
    species, reactions = read_jrnf(params.get_str("in"))
    typer.echo("jrnf-File:")
    for reaction in reactions:
        typer.echo(format_reaction(reaction, species))


def _translate_jrnf_sbml(params: ParameterSet, _rng: np.random.Generator) -> None:
    logger.info("Executing: translate_jrnf_sbml!")
    species, reactions = read_jrnf(params.get_str("in"))
    logger.info("Read file with %d species and %d reactions!", len(species), len(reactions))
    write_sbml(params.get_str("out"), species, reactions)


def _transform_rm_species(
    params: ParameterSet, _rng: np.random.Generator, keep_reactions: bool
) -> None:
    if keep_reactions:
        logger.info("Executing: transform_rm_species_s!")
        logger.info(" (removing a species from network - keep reduced reactions)")
        transform = remove_species_stoichiometric
    else:
        logger.info("Executing: transform_rm_species_r!")
        logger.info(" (removing a species and all reactions with it)")
        transform = remove_species_reactions
    species, reactions = read_jrnf(params.get_str("in"))
    species, reactions = transform(species, reactions, params.get_str("sp"))
    write_jrnf(params.get_str("out"), species, reactions)


def _combine_networks(params: ParameterSet, _rng: np.random.Generator) -> None:
    logger.info("mode: combine_networks")
    species_1, reactions_1 = read_jrnf(params.get_str("in1"))
    species_2, reactions_2 = read_jrnf(params.get_str("in2"))
    species, reactions = combine_networks(species_1, reactions_1, species_2, reactions_2)
    logger.info(
        "Combined network having %d species and %d reactions.", len(species), len(reactions)
    )
    out = params.get_str("out")
    logger.info("Writing reaction network to %s", out)
    write_jrnf(out, species, reactions)


def _energy_distribution(params: ParameterSet, name: str) -> EnergyDistribution:
    value = params.get_int_or(name, EnergyDistribution.LINEAR.value)
    try:
        return EnergyDistribution(value)
    except ValueError:
        raise InvalidParameterError(
            f"Parameter '{name}' must be one of "
            f"{[dist.value for dist in EnergyDistribution]}, got {value}"
        ) from None


def _create_network(
    params: ParameterSet,
    rng: np.random.Generator,
    model: NetworkModel,
    coupled: bool,
) -> None:
    mode = model.mode + ("_bi_C" if coupled else "")
    n = params.get_int("N")
    m = params.get_int("M")
    c = params.get_int("C") if coupled else 0
    out = params.get_str_or("out", DEFAULT_OUTPUT[mode])
    flags = EdgeFlags(
        allow_multiple=params.have("allow_multiple"),
        self_loop=params.have("self_loop"),
        directed=params.have("directed"),
    )
    limit_coupling = params.have("limit_coupling")

    details = [f"N={n}", f"M={m}"]
    details.extend(f"{name}={params.get_str(name)}" for name in model.parameters)
    if coupled:
        details.append(f"C={c}")
    details.append(f"out={out}")
    logger.info("mode: %s  %s", mode, "   ".join(details))
    for name in FLAG_NAMES:
        if params.have(name) and (coupled or name != "limit_coupling"):
            logger.info("%s is active!", name.replace("_", " "))

    logger.info("creating %s network", model.title)
    edges = model.generate(rng, n, m, params, flags)

    if coupled:
        energy_dist = _energy_distribution(params, "energy_dist")
        aener_dist = _energy_distribution(params, "aener_dist")
        logger.info(
            "Energy distribution is %d and activation energy dist is %d",
            energy_dist,
            aener_dist,
        )
        logger.info("Doing coupling.")
        coupling = model.couple(rng, edges, c, n, params, limit_coupling)
        species, reactions = assemble_network(
            n,
            edges,
            coupling.pairs,
            rng=rng,
            energy_dist=energy_dist,
            aener_dist=aener_dist,
        )
    else:
        species, reactions = assemble_unary_network(n, edges)

    logger.info("Writing %d species and %d reactions to %s", len(species), len(reactions), out)
    write_jrnf(out, species, reactions)


def _show_help(_params: ParameterSet, _rng: np.random.Generator) -> None:
    typer.echo(HELP_TEXT, nl=False)


MODELS = (
    NetworkModel(
        mode="create_ER_NM",
        title="Erdos-Renyi",
        parameters=(),
        generate=lambda rng, n, m, p, flags: erdos_renyi(rng, n, m, flags),
        couple=lambda rng, edges, c, n, p, limit: couple_erdos_renyi(rng, edges, c, limit),
    ),
    NetworkModel(
        mode="create_BA_NM",
        title="Barabasi-Albert",
        parameters=(),
        generate=lambda rng, n, m, p, flags: barabasi_albert(rng, n, m, flags),
        couple=lambda rng, edges, c, n, p, limit: couple_barabasi_albert(rng, edges, c, limit),
    ),
    NetworkModel(
        mode="create_WS_NMalpha",
        title="Watts-Strogatz",
        parameters=("alpha",),
        generate=lambda rng, n, m, p, flags: watts_strogatz(
            rng, n, m, p.get_float("alpha"), flags
        ),
        couple=lambda rng, edges, c, n, p, limit: couple_watts_strogatz(
            rng, edges, c, n, limit
        ),
    ),
    NetworkModel(
        mode="create_PS_NMhmr",
        title="Pan-Sinha",
        parameters=("h", "m", "r"),
        generate=lambda rng, n, m, p, flags: pan_sinha(
            rng, n, m, p.get_int("h"), p.get_int("m"), p.get_float("r"), flags
        ),
        couple=lambda rng, edges, c, n, p, limit: couple_pan_sinha(
            rng, edges, c, HierarchicalModules(n, p.get_int("h"), p.get_int("m")), limit
        ),
    ),
    NetworkModel(
        mode="create_SM_NMmr",
        title="simple modular",
        parameters=("m", "r"),
        generate=lambda rng, n, m, p, flags: simple_modular(
            rng, n, m, p.get_int("m"), p.get_float("r"), flags
        ),
        couple=lambda rng, edges, c, n, p, limit: couple_simple_modular(
            rng, edges, c, SimpleModules(n, p.get_int("m")), limit
        ),
    ),
)


def _build_modes() -> tuple[ModeSpec, ...]:
    modes = [
        ModeSpec("print_network", ("in",), _print_network),
        ModeSpec("translate_jrnf_sbml", ("in", "out"), _translate_jrnf_sbml),
        ModeSpec(
            "transform_rm_species_r",
            ("in", "out", "sp"),
            partial(_transform_rm_species, keep_reactions=False),
        ),
        ModeSpec(
            "transform_rm_species_s",
            ("in", "out", "sp"),
            partial(_transform_rm_species, keep_reactions=True),
        ),
        ModeSpec("combine_networks", ("in1", "in2", "out"), _combine_networks),
    ]
    for model in MODELS:
        required = ("N", "M", *model.parameters)
        # The simple modular model only exists in its coupled form.
        if model.mode != "create_SM_NMmr":
            modes.append(
                ModeSpec(model.mode, required, partial(_create_network, model=model, coupled=False))
            )
        modes.append(
            ModeSpec(
                f"{model.mode}_bi_C",
                (*required, "C"),
                partial(_create_network, model=model, coupled=True),
            )
        )
    modes.append(ModeSpec("help", (), _show_help))
    return tuple(modes)


MODES = _build_modes()

SWITCHES = frozenset({*(mode.name for mode in MODES), "info", *FLAG_NAMES})


def dispatch(params: ParameterSet, rng: np.random.Generator) -> int:
    """Run every mode switched on in ``params``; return the number run."""
    fired = 0
    for mode in MODES:
        present = params.have(mode.name) or (mode.name == "help" and params.have("info"))
        if not present:
            continue
        params.require(mode.required, mode.name)
        mode.handler(params, rng)
        fired += 1
    return fired


@app.command(
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
    help="Generate and transform reaction networks. Run with 'help' for all modes.",
)
def run(
    ctx: typer.Context,
    log_level: Annotated[
        str, typer.Option("--log-level", help="Logging level for progress messages.")
    ] = "INFO",
) -> None:
    configure_logging(log_level, force=True)
    params = ParameterSet.from_tokens(ctx.args, SWITCHES)
    try:
        rng = make_rng(params.get_int_or("seed", None))
        if not dispatch(params, rng):
            typer.echo("No mode given. Call with 'help' for a list of modes.")
    except CrnGenError as exc:
        typer.echo(get_user_message(exc))
        logger.debug("%s", exc.log_message(), exc_info=exc)
        raise typer.Exit(code=1) from exc


def main() -> None:
    app()
