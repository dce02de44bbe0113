"""Reaction InChI writer."""
from .encoder import (  # noqa: F401
    IdentifierAdapter,
    assemble,
    canonicalize,
    encode,
    extract_identifier,
    identify_groups,
    resolve_direction,
    write_groups,
)
from .errors import AdapterFailure, RInChIError, UnexpectedIdentifierFormat  # noqa: F401
from .reaction import Reaction  # noqa: F401

__all__ = [
    "AdapterFailure",
    "IdentifierAdapter",
    "RInChIError",
    "Reaction",
    "UnexpectedIdentifierFormat",
    "assemble",
    "canonicalize",
    "encode",
    "extract_identifier",
    "identify_groups",
    "resolve_direction",
    "write_groups",
]
