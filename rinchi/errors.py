"""Exceptions raised while encoding a reaction."""
from __future__ import annotations


class RInChIError(Exception):
    """Base class for all encoding failures."""


class AdapterFailure(RInChIError):
    """The identifier adapter could not produce an identifier for a molecule."""

    def __init__(self, message: str, *, role: str | None = None, index: int | None = None) -> None:
        super().__init__(message)
        self.role = role
        self.index = index


class UnexpectedIdentifierFormat(RInChIError):
    """Adapter output does not start with the standard InChI prefix."""

    def __init__(
        self,
        raw: object,
        *,
        role: str | None = None,
        index: int | None = None,
    ) -> None:
        super().__init__(f"Identifier does not start with 'InChI=1S/': {str(raw)[:40]!r}")
        self.raw = raw
        self.role = role
        self.index = index
