"""Identifier adapters backed by cheminformatics toolkits."""
from .rdkit_inchi import RDKitInChIAdapter  # noqa: F401

__all__ = ["RDKitInChIAdapter"]
