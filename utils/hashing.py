"""Stable digests for encoded reactions."""
from __future__ import annotations

from blake3 import blake3


def blake3_hexdigest(data: bytes) -> str:
    """Return a BLAKE3 hex digest (256-bit)."""

    return blake3(data).hexdigest()


def rinchi_digest(rinchi: str) -> str:
    """Digest of a RInChI string, ignoring its trailing newline."""

    return blake3_hexdigest(rinchi.rstrip("\n").encode("utf-8"))
