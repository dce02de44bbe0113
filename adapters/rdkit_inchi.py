"""Standard InChI generation through RDKit."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from rdkit import Chem
from rdkit.Chem import inchi

from rinchi.errors import AdapterFailure

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class RDKitInChIAdapter:
    """Identify molecules given as SMILES strings or ``rdkit.Chem.Mol`` objects.

    ``options`` is passed verbatim to ``MolToInchi``.  Non-standard options
    make the InChI library emit ``InChI=1/`` which the encoder rejects.
    """

    options: str = ""

    def to_mol(self, molecule: Any) -> Chem.Mol:
        if isinstance(molecule, Chem.Mol):
            return molecule
        if isinstance(molecule, str):
            smiles = molecule.strip()
            mol = Chem.MolFromSmiles(smiles) if smiles else None
            if mol is None:
                raise AdapterFailure(f"RDKit could not parse SMILES {molecule!r}")
            return mol
        raise AdapterFailure(f"Unsupported molecule type {type(molecule).__name__}")

    def identify(self, molecule: Any) -> str:
        mol = self.to_mol(molecule)
        try:
            value = inchi.MolToInchi(mol, options=self.options)
        except Exception as exc:  # pragma: no cover - RDKit edge cases
            LOGGER.debug("InChI generation failed for %s: %s", molecule, exc)
            raise AdapterFailure(f"InChI generation failed: {exc}") from exc
        if not value:
            raise AdapterFailure(f"RDKit produced no InChI for {Chem.MolToSmiles(mol)!r}")
        return value
