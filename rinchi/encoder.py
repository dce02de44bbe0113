"""Reaction InChI (RInChI) writer.

A reaction is written as the InChI bodies of its molecules, grouped by role.
Each group is sorted, the reactant and product groups are ordered by their
content so the output does not depend on which side the caller labelled as
reactants, and the agents always come last::

    RInChI=1.00.1S/<first>!<first><><second><><agent>!<agent>\n
"""
from __future__ import annotations

import logging
from typing import Any, Iterable, Protocol, Sequence

from rinchi.errors import AdapterFailure, UnexpectedIdentifierFormat
from rinchi.reaction import ROLES, Reaction

LOGGER = logging.getLogger(__name__)

INCHI_PREFIX = "InChI=1S/"
RINCHI_HEADER = "RInChI=1.00.1S/"
GROUP_SEPARATOR = "<>"
COMPONENT_SEPARATOR = "!"


class IdentifierAdapter(Protocol):
    """Anything able to turn one molecule into a standard InChI string."""

    def identify(self, molecule: Any) -> str:
        ...


def trim_identifier(raw: object, *, role: str | None = None, index: int | None = None) -> str:
    """Strip the ``InChI=1S/`` prefix and anything from the first newline on."""

    if not isinstance(raw, str) or not raw.startswith(INCHI_PREFIX):
        LOGGER.debug("Rejecting identifier for %s[%s]: %r", role, index, raw)
        raise UnexpectedIdentifierFormat(raw, role=role, index=index)
    body, _, _ = raw[len(INCHI_PREFIX):].partition("\n")
    return body


def extract_identifier(
    molecule: Any,
    adapter: IdentifierAdapter,
    *,
    role: str | None = None,
    index: int | None = None,
) -> str:
    try:
        raw = adapter.identify(molecule)
    except Exception as exc:
        raise AdapterFailure(str(exc), role=role, index=index) from exc
    return trim_identifier(raw, role=role, index=index)


def canonicalize(identifiers: Iterable[str]) -> tuple[str, ...]:
    """Sort one role's identifiers by code point, keeping duplicates."""

    return tuple(sorted(identifiers))


def resolve_direction(reactants: Sequence[str], products: Sequence[str]) -> bool:
    """Return ``True`` when the reactant group is written before the products.

    Both groups must already be sorted.  They are compared position by
    position and the first differing pair decides: the group holding the
    smaller identifier goes first.  When one group runs out before any
    difference is found, the longer group goes first.  Identical groups keep
    the reactants first.  The decision for ``(products, reactants)`` is
    always the opposite of ``(reactants, products)`` unless they are equal, so
    the written string is the same whichever way round the reaction was given.
    """

    for reactant, product in zip(reactants, products):
        if product < reactant:
            return False
        if reactant < product:
            return True
    return len(reactants) >= len(products)


def _join(group: Sequence[str]) -> str:
    return COMPONENT_SEPARATOR.join(group)


def assemble(first: Sequence[str], second: Sequence[str], agents: Sequence[str]) -> str:
    return (
        RINCHI_HEADER
        + _join(first)
        + GROUP_SEPARATOR
        + _join(second)
        + GROUP_SEPARATOR
        + _join(agents)
        + "\n"
    )


def identify_groups(
    reaction: Reaction, adapter: IdentifierAdapter
) -> dict[str, tuple[str, ...]]:
    """Identify every molecule and return the sorted group for each role.

    Molecules are processed reactants first, then products, then agents, each
    in input order; the first failure propagates.
    """

    groups: dict[str, tuple[str, ...]] = {}
    for role in ROLES:
        identifiers = [
            extract_identifier(molecule, adapter, role=role, index=index)
            for index, molecule in enumerate(reaction.group(role))
        ]
        groups[role] = canonicalize(identifiers)
    return groups


def write_groups(groups: dict[str, tuple[str, ...]]) -> str:
    """Assemble sorted role groups, as returned by :func:`identify_groups`."""

    reactants, products = groups["reactants"], groups["products"]
    reactants_first = resolve_direction(reactants, products)
    LOGGER.debug(
        "Encoding %d reactants, %d products, %d agents (reactants_first=%s)",
        len(reactants),
        len(products),
        len(groups["agents"]),
        reactants_first,
    )
    if reactants_first:
        return assemble(reactants, products, groups["agents"])
    return assemble(products, reactants, groups["agents"])


def encode(reaction: Reaction, adapter: IdentifierAdapter) -> str:
    """Return the RInChI string for ``reaction``, newline terminated.

    An empty reaction is valid and encodes to ``RInChI=1.00.1S/<><>``.
    """

    return write_groups(identify_groups(reaction, adapter))
