"""Parameter catalog for OpenPGP key generation.

One entry per supported algorithm/size combination plus an ``EXPERIMENTAL``
sentinel. Each entry is a frozen ``ParameterSet``:

  RSA      modulus_or_curve_id = public exponent (65537), key_size = modulus bits
  DSA      modulus_or_curve_id = subgroup order bits (224 / 256), key_size = modulus bits
  ElGamal  modulus_or_curve_id = RFC 3526 prime, generator = 2, key_size = prime bits
  EC       modulus_or_curve_id = curve ObjectIdentifier, key_size = 0
  EXPERIMENTAL  nothing populated; consumers must refuse to generate from it

The table is keyed by ``Variant`` member (never by position) and is built once
at import. Lookups never fail for a ``Variant``; only ``lookup`` (free-form
names coming from a selection layer) raises ``UnknownVariant``.

ElGamal groups 17 and 18 were historically recorded with key sizes 6114 and
8096. The real prime sizes (6144, 8192) are reported unless legacy sizes are
requested with ``legacy_key_sizes=True`` or PGPKEYS_ELGAMAL_LEGACY_KEY_SIZES.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from cryptography.x509 import ObjectIdentifier

from . import config
from .crypto import curves, modp
from .utils.logging import get_logger

__all__ = [
    "AlgorithmFamily",
    "Variant",
    "ParameterSet",
    "UnknownVariant",
    "RSA_PUBLIC_EXPONENT",
    "parameters_for",
    "family",
    "variants",
    "variants_for",
    "lookup",
    "key_size_mismatches",
]

log = get_logger()

RSA_PUBLIC_EXPONENT = 65537


class UnknownVariant(ValueError):
    """Raised when a free-form name does not match any catalog variant."""


class AlgorithmFamily(str, Enum):
    RSA = "rsa"
    DSA = "dsa"
    ELGAMAL = "elgamal"
    EC = "ec"
    UNSPECIFIED = "unspecified"


class Variant(str, Enum):
    EXPERIMENTAL = "experimental"
    RSA2048 = "rsa2048"
    RSA3072 = "rsa3072"
    RSA4096 = "rsa4096"
    RSA8192 = "rsa8192"
    DSA2048 = "dsa2048"
    DSA3072 = "dsa3072"
    ELGAMAL2048 = "elgamal2048"
    ELGAMAL3072 = "elgamal3072"
    ELGAMAL4096 = "elgamal4096"
    ELGAMAL6144 = "elgamal6144"
    ELGAMAL8192 = "elgamal8192"
    EC_NIST_P521 = "ec-nist-p521"
    EC_NIST_P384 = "ec-nist-p384"
    EC_NIST_P256 = "ec-nist-p256"
    EC_BPOOL_512 = "ec-bpool-512"
    EC_BPOOL_384 = "ec-bpool-384"
    EC_BPOOL_256 = "ec-bpool-256"
    EC_ED25519 = "ec-ed25519"
    EC_CV25519 = "ec-cv25519"


@dataclass(frozen=True)
class ParameterSet:
    family: AlgorithmFamily
    modulus_or_curve_id: int | ObjectIdentifier | None = None
    generator: int | None = None
    key_size: int = 0
    label: str = ""

    @property
    def public_exponent(self) -> Optional[int]:
        return self.modulus_or_curve_id if self.family is AlgorithmFamily.RSA else None  # type: ignore[return-value]

    @property
    def subgroup_bits(self) -> Optional[int]:
        """DSA only: bit length of the subgroup order q, not of the modulus."""
        return self.modulus_or_curve_id if self.family is AlgorithmFamily.DSA else None  # type: ignore[return-value]

    @property
    def prime(self) -> Optional[int]:
        return self.modulus_or_curve_id if self.family is AlgorithmFamily.ELGAMAL else None  # type: ignore[return-value]

    @property
    def oid(self) -> Optional[ObjectIdentifier]:
        return self.modulus_or_curve_id if self.family is AlgorithmFamily.EC else None  # type: ignore[return-value]

    @property
    def usable(self) -> bool:
        return self.family is not AlgorithmFamily.UNSPECIFIED

    def to_dict(self) -> Dict[str, Any]:
        """JSON friendly view; integers wider than 64 bits are rendered as hex."""
        value = self.modulus_or_curve_id
        if isinstance(value, ObjectIdentifier):
            rendered: Any = value.dotted_string
        elif isinstance(value, int) and value.bit_length() > 64:
            rendered = format(value, "X")
        else:
            rendered = value
        return {
            "family": self.family.value,
            "label": self.label,
            "modulus_or_curve_id": rendered,
            "generator": self.generator,
            "key_size": self.key_size,
            "usable": self.usable,
        }


def _rsa(bits: int) -> ParameterSet:
    return ParameterSet(AlgorithmFamily.RSA, RSA_PUBLIC_EXPONENT, None, bits, f"RSA {bits} bit")


def _dsa(bits: int, subgroup_bits: int) -> ParameterSet:
    return ParameterSet(AlgorithmFamily.DSA, subgroup_bits, None, bits, f"DSA {bits} bit")


def _elgamal(group_id: int) -> ParameterSet:
    g = modp.group(group_id)
    return ParameterSet(
        AlgorithmFamily.ELGAMAL,
        g.prime,
        g.generator,
        g.bits,
        f"ElGamal {g.bits} bit using DH group {group_id}",
    )


def _ec(curve_name: str, label: str) -> ParameterSet:
    return ParameterSet(AlgorithmFamily.EC, curves.CURVES[curve_name].oid, None, 0, label)


_CATALOG: Mapping[Variant, ParameterSet] = MappingProxyType({
    Variant.EXPERIMENTAL: ParameterSet(AlgorithmFamily.UNSPECIFIED, label="Experimental / unspecified"),
    Variant.RSA2048: _rsa(2048),
    Variant.RSA3072: _rsa(3072),
    Variant.RSA4096: _rsa(4096),
    Variant.RSA8192: _rsa(8192),
    Variant.DSA2048: _dsa(2048, 224),
    Variant.DSA3072: _dsa(3072, 256),
    Variant.ELGAMAL2048: _elgamal(14),
    Variant.ELGAMAL3072: _elgamal(15),
    Variant.ELGAMAL4096: _elgamal(16),
    Variant.ELGAMAL6144: _elgamal(17),
    Variant.ELGAMAL8192: _elgamal(18),
    Variant.EC_NIST_P521: _ec("secp521r1", "NIST P-521 (secp521r1)"),
    Variant.EC_NIST_P384: _ec("secp384r1", "NIST P-384 (secp384r1)"),
    Variant.EC_NIST_P256: _ec("secp256r1", "NIST P-256 (secp256r1)"),
    Variant.EC_BPOOL_512: _ec("brainpoolP512r1", "brainpoolP512r1"),
    Variant.EC_BPOOL_384: _ec("brainpoolP384r1", "brainpoolP384r1"),
    Variant.EC_BPOOL_256: _ec("brainpoolP256r1", "brainpoolP256r1"),
    Variant.EC_ED25519: _ec("Ed25519", "Twisted Edwards Ed25519"),
    Variant.EC_CV25519: _ec("Curve25519", "Montgomery Cv25519"),
})

# Sizes recorded by older consumers for groups 17/18.
_LEGACY_KEY_SIZES = {
    Variant.ELGAMAL6144: 6114,
    Variant.ELGAMAL8192: 8096,
}

_LEGACY_CATALOG: Mapping[Variant, ParameterSet] = MappingProxyType({
    **_CATALOG,
    **{v: replace(_CATALOG[v], key_size=size) for v, size in _LEGACY_KEY_SIZES.items()},
})

_VARIANTS: Tuple[Variant, ...] = tuple(Variant)

_ALIASES: Dict[str, Variant] = {"unspecified": Variant.EXPERIMENTAL}
for _v, _ps in _CATALOG.items():
    if _ps.family is AlgorithmFamily.EC:
        _c = curves.by_oid(_ps.oid)
        for _n in (_c.name, *_c.aliases):
            _ALIASES[_n.lower()] = _v

log.debug("parameter catalog ready: %d variants", len(_CATALOG))
if config.ELGAMAL_LEGACY_KEY_SIZES:
    log.warning("ElGamal legacy key sizes enabled: %s",
                ", ".join(f"{v.name}={s}" for v, s in _LEGACY_KEY_SIZES.items()))


def _use_legacy(legacy_key_sizes: Optional[bool]) -> bool:
    return config.ELGAMAL_LEGACY_KEY_SIZES if legacy_key_sizes is None else legacy_key_sizes


def parameters_for(variant: Variant, *, legacy_key_sizes: Optional[bool] = None) -> ParameterSet:
    table = _LEGACY_CATALOG if _use_legacy(legacy_key_sizes) else _CATALOG
    return table[variant]


def family(variant: Variant) -> AlgorithmFamily:
    return _CATALOG[variant].family


def variants() -> Tuple[Variant, ...]:
    """All variants in catalog order, sentinel first."""
    return _VARIANTS


def variants_for(fam: AlgorithmFamily) -> Tuple[Variant, ...]:
    return tuple(v for v in _VARIANTS if _CATALOG[v].family is fam)


def lookup(name: str) -> Variant:
    """Resolve a user supplied name to a Variant.

    Accepts member names ("RSA4096", "ec_nist_p256"), values ("ec-nist-p256")
    and curve names or aliases ("Ed25519", "NIST P-256", "Cv25519"), all
    case-insensitive.
    """
    key = name.strip()
    member = Variant.__members__.get(key.upper().replace("-", "_"))
    if member is not None:
        return member
    member = _ALIASES.get(key.lower())
    if member is not None:
        return member
    raise UnknownVariant(f"unknown key variant: {name!r}")


def key_size_mismatches(*, legacy_key_sizes: Optional[bool] = None) -> List[Tuple[Variant, int, int]]:
    """ElGamal entries whose recorded key_size differs from the prime's bit length.

    Returns (variant, recorded, actual) tuples and logs a warning for each.
    """
    out: List[Tuple[Variant, int, int]] = []
    for v in variants_for(AlgorithmFamily.ELGAMAL):
        ps = parameters_for(v, legacy_key_sizes=legacy_key_sizes)
        actual = ps.prime.bit_length()  # type: ignore[union-attr]
        if actual != ps.key_size:
            log.warning("%s records key_size=%d but its prime is %d bits", v.name, ps.key_size, actual)
            out.append((v, ps.key_size, actual))
    return out
