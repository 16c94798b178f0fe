"""Named elliptic curves and their registry object identifiers.

NIST curves use the SEC 1 / ANSI X9.62 arcs, brainpool curves the TeleTrusT
arc (RFC 5639), Ed25519 the RFC 8410 arc and Curve25519 the Cryptlib arc used
by OpenPGP implementations for Cv25519.
"""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from cryptography.x509 import ObjectIdentifier

__all__ = ["NamedCurve", "CURVES", "by_oid"]


@dataclass(frozen=True)
class NamedCurve:
    name: str
    oid: ObjectIdentifier
    aliases: Tuple[str, ...] = ()

    @property
    def dotted(self) -> str:
        return self.oid.dotted_string


def _curve(name: str, dotted: str, *aliases: str) -> NamedCurve:
    return NamedCurve(name=name, oid=ObjectIdentifier(dotted), aliases=aliases)


CURVES: Mapping[str, NamedCurve] = MappingProxyType({
    c.name: c
    for c in (
        _curve("secp521r1", "1.3.132.0.35", "NIST P-521"),
        _curve("secp384r1", "1.3.132.0.34", "NIST P-384"),
        _curve("secp256r1", "1.2.840.10045.3.1.7", "NIST P-256", "prime256v1"),
        _curve("brainpoolP512r1", "1.3.36.3.3.2.8.1.1.13"),
        _curve("brainpoolP384r1", "1.3.36.3.3.2.8.1.1.11"),
        _curve("brainpoolP256r1", "1.3.36.3.3.2.8.1.1.7"),
        _curve("Ed25519", "1.3.101.112", "id-Ed25519"),
        _curve("Curve25519", "1.3.6.1.4.1.3029.1.5.1", "Cv25519"),
    )
})

_BY_OID = {c.oid: c for c in CURVES.values()}


def by_oid(oid: ObjectIdentifier | str) -> Optional[NamedCurve]:
    """Reverse lookup; accepts an ObjectIdentifier or its dotted string."""
    if isinstance(oid, str):
        try:
            oid = ObjectIdentifier(oid)
        except ValueError:
            return None
    return _BY_OID.get(oid)
