import dataclasses

import pytest
from cryptography.x509 import ObjectIdentifier

from pgpkeys import catalog
from pgpkeys.catalog import (
    AlgorithmFamily,
    ParameterSet,
    RSA_PUBLIC_EXPONENT,
    Variant,
    family,
    parameters_for,
    variants,
    variants_for,
)
from pgpkeys.crypto.modp import MODP_GROUPS


EXPECTED_ORDER = [
    "EXPERIMENTAL",
    "RSA2048", "RSA3072", "RSA4096", "RSA8192",
    "DSA2048", "DSA3072",
    "ELGAMAL2048", "ELGAMAL3072", "ELGAMAL4096", "ELGAMAL6144", "ELGAMAL8192",
    "EC_NIST_P521", "EC_NIST_P384", "EC_NIST_P256",
    "EC_BPOOL_512", "EC_BPOOL_384", "EC_BPOOL_256",
    "EC_ED25519", "EC_CV25519",
]

_PREFIX_FAMILY = {
    "RSA": AlgorithmFamily.RSA,
    "DSA": AlgorithmFamily.DSA,
    "ELGAMAL": AlgorithmFamily.ELGAMAL,
    "EC_": AlgorithmFamily.EC,
    "EXPERIMENTAL": AlgorithmFamily.UNSPECIFIED,
}


def _expected_family(v: Variant) -> AlgorithmFamily:
    for prefix, fam in _PREFIX_FAMILY.items():
        if v.name.startswith(prefix):
            return fam
    raise AssertionError(v)


def test_order_is_fixed():
    assert [v.name for v in variants()] == EXPECTED_ORDER


def test_variants_restartable():
    first = list(variants())
    second = list(variants())
    assert first == second
    assert list(iter(variants())) == first


@pytest.mark.parametrize("v", list(Variant))
def test_family_consistent_with_name(v):
    assert family(v) is _expected_family(v)
    assert parameters_for(v).family is family(v)


@pytest.mark.parametrize("v,bits", [
    (Variant.RSA2048, 2048),
    (Variant.RSA3072, 3072),
    (Variant.RSA4096, 4096),
    (Variant.RSA8192, 8192),
])
def test_rsa(v, bits):
    ps = parameters_for(v)
    assert ps.modulus_or_curve_id == 65537 == RSA_PUBLIC_EXPONENT
    assert ps.public_exponent == 65537
    assert ps.generator is None
    assert ps.key_size == bits


@pytest.mark.parametrize("v,bits,q_bits", [
    (Variant.DSA2048, 2048, 224),
    (Variant.DSA3072, 3072, 256),
])
def test_dsa_subgroup_bits(v, bits, q_bits):
    ps = parameters_for(v)
    assert ps.key_size == bits
    assert ps.subgroup_bits == q_bits
    assert ps.modulus_or_curve_id == q_bits
    assert ps.generator is None
    # the selector is a bit count, not a modulus
    assert ps.prime is None


@pytest.mark.parametrize("v,group_id", [
    (Variant.ELGAMAL2048, 14),
    (Variant.ELGAMAL3072, 15),
    (Variant.ELGAMAL4096, 16),
    (Variant.ELGAMAL6144, 17),
    (Variant.ELGAMAL8192, 18),
])
def test_elgamal(v, group_id):
    ps = parameters_for(v)
    g = MODP_GROUPS[group_id]
    assert ps.generator == 2
    assert ps.prime == g.prime
    assert ps.prime.bit_length() == ps.key_size == g.bits
    assert f"group {group_id}" in ps.label


def test_elgamal_primes_distinct():
    primes = [parameters_for(v).prime for v in variants_for(AlgorithmFamily.ELGAMAL)]
    assert len(set(primes)) == 5


def test_ec_oids_unique_and_present():
    ec = variants_for(AlgorithmFamily.EC)
    assert len(ec) == 8
    oids = [parameters_for(v).oid for v in ec]
    assert all(isinstance(o, ObjectIdentifier) for o in oids)
    assert len(set(oids)) == len(oids)
    for v in ec:
        ps = parameters_for(v)
        assert ps.generator is None
        assert ps.key_size == 0
        assert ps.public_exponent is None and ps.prime is None and ps.subgroup_bits is None


def test_experimental_sentinel():
    ps = parameters_for(Variant.EXPERIMENTAL)
    assert ps.family is AlgorithmFamily.UNSPECIFIED
    assert ps.modulus_or_curve_id is None
    assert ps.generator is None
    assert ps.key_size == 0
    assert ps.usable is False
    assert ps.oid is None and ps.prime is None
    others = [parameters_for(v) for v in variants() if v is not Variant.EXPERIMENTAL]
    assert all(o.usable for o in others)
    assert ps not in others


def test_rsa_4096_scenario():
    ps = parameters_for(Variant.RSA4096)
    assert ps.public_exponent == 65537
    assert ps.key_size == 4096
    assert ps.generator is None
    assert ps.oid is None


def test_ed25519_scenario():
    ps = parameters_for(Variant.EC_ED25519)
    assert ps.oid == ObjectIdentifier("1.3.101.112")
    assert ps.generator is None
    assert ps.key_size == 0
    assert ps.public_exponent is None


def test_elgamal_group16_scenario():
    ps = parameters_for(Variant.ELGAMAL4096)
    assert ps.generator == 2
    assert ps.prime == MODP_GROUPS[16].prime
    assert format(ps.prime, "X").startswith("FFFFFFFFFFFFFFFFC90FDAA22168C234")
    assert format(ps.prime, "X").endswith("4DF435C934063199FFFFFFFFFFFFFFFF")


def test_variants_for_preserves_order():
    assert variants_for(AlgorithmFamily.RSA) == (
        Variant.RSA2048, Variant.RSA3072, Variant.RSA4096, Variant.RSA8192,
    )
    assert variants_for(AlgorithmFamily.UNSPECIFIED) == (Variant.EXPERIMENTAL,)
    total = sum(len(variants_for(f)) for f in AlgorithmFamily)
    assert total == len(variants())


def test_catalog_is_read_only():
    ps = parameters_for(Variant.RSA2048)
    with pytest.raises(dataclasses.FrozenInstanceError):
        ps.key_size = 1024  # type: ignore[misc]
    with pytest.raises(TypeError):
        catalog._CATALOG[Variant.RSA2048] = ParameterSet(AlgorithmFamily.RSA)  # type: ignore[index]
    assert parameters_for(Variant.RSA2048).key_size == 2048


def test_to_dict_renders_big_ints_as_hex():
    d = parameters_for(Variant.ELGAMAL2048).to_dict()
    assert d["family"] == "elgamal"
    assert d["generator"] == 2
    assert int(d["modulus_or_curve_id"], 16) == MODP_GROUPS[14].prime
    assert parameters_for(Variant.RSA2048).to_dict()["modulus_or_curve_id"] == 65537
    assert parameters_for(Variant.EC_NIST_P256).to_dict()["modulus_or_curve_id"] == "1.2.840.10045.3.1.7"
    assert parameters_for(Variant.EXPERIMENTAL).to_dict()["usable"] is False
