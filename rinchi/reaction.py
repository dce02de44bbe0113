"""Reaction container and helpers for building one from raw table cells."""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

ROLES: tuple[str, ...] = ("reactants", "products", "agents")


@dataclass(frozen=True)
class Reaction:
    """Three ordered groups of opaque molecules.

    The encoder never inspects a molecule; it only hands it to the identifier
    adapter, so the entries can be SMILES strings, RDKit molecules or anything
    the adapter in use understands.
    """

    reactants: tuple[Any, ...] = field(default_factory=tuple)
    products: tuple[Any, ...] = field(default_factory=tuple)
    agents: tuple[Any, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # accept lists from callers while keeping the instance hashable
        for role in ROLES:
            object.__setattr__(self, role, tuple(getattr(self, role)))

    @classmethod
    def from_smiles(cls, rxn_smiles: str) -> "Reaction":
        """Parse ``reactants>agents>products`` or ``reactants>>products``.

        Agents listed after a trailing ``|`` on the product side are appended
        to the agent group.
        """

        text = (rxn_smiles or "").strip()
        if not text:
            return cls()
        parts = text.split(">")
        if len(parts) == 3:
            reactants_part, agents_part, products_part = parts
        elif len(parts) == 2:
            reactants_part, products_part = parts
            agents_part = ""
        else:
            raise ValueError(f"Expected reaction SMILES with '>' separators: {text!r}")
        products_core, _, trailing_agents = products_part.partition("|")
        agents = _split_component(agents_part)
        agents.extend(_split_component(trailing_agents))
        return cls(
            tuple(_split_component(reactants_part)),
            tuple(_split_component(products_core)),
            tuple(agents),
        )

    def group(self, role: str) -> tuple[Any, ...]:
        if role not in ROLES:
            raise KeyError(role)
        return getattr(self, role)

    def swapped(self) -> "Reaction":
        """Return the same reaction written in the opposite direction."""

        return Reaction(self.products, self.reactants, self.agents)

    def is_empty(self) -> bool:
        return not (self.reactants or self.products or self.agents)


def _split_component(component: str | None) -> list[str]:
    if not component:
        return []
    return [fragment.strip() for fragment in component.split(".") if fragment.strip()]


_CELL_DELIMITERS = (";", "|", ",")


def _cell_items(text: str) -> list[Any]:
    """Items of a text cell: a JSON list if it parses as one, else delimited."""

    if text.startswith("[") and text.endswith("]"):
        try:
            parsed = json.loads(text)
        except json.JSONDecodeError:
            # bracket atoms such as "[Na+]" are SMILES, not JSON
            parsed = None
        if isinstance(parsed, list) and parsed:
            return parsed
    delimiter = next((item for item in _CELL_DELIMITERS if item in text), ".")
    return text.split(delimiter)


def split_entities(value: object) -> list[str]:
    """Normalize a raw molecule cell to a list of SMILES strings.

    Accepts lists, tuples and numpy arrays (Parquet list columns), JSON list
    text, and text delimited by ``;``, ``|`` or ``,``.  Plain text falls back
    to splitting fragments on ``.``.  ``None`` and NaN give an empty list.
    """

    if hasattr(value, "tolist"):
        value = value.tolist()
    if value is None or (isinstance(value, float) and value != value):
        return []
    if isinstance(value, str):
        items = _cell_items(value.strip())
    elif isinstance(value, list | tuple):
        items = list(value)
    else:
        items = [value]
    return [str(item).strip() for item in items if str(item).strip()]
