import random

import pytest

from petlib.bn import Bn

from zkcred.primes import is_safe_prime
from zkcred.rsa_group import (
    RSAModulus,
    random_unit,
    random_quadratic_residue,
    random_quadratic_residues,
)


@pytest.fixture(scope="module")
def modulus():
    return RSAModulus.generate(24, rng=random.Random(11))


def test_modulus_is_product_of_distinct_safe_primes(modulus):
    assert modulus.p != modulus.q
    assert modulus.n == modulus.p * modulus.q
    assert is_safe_prime(modulus.p)
    assert is_safe_prime(modulus.q)
    assert modulus.p.num_bits() == 24 and modulus.q.num_bits() == 24


def test_phi(modulus):
    p, q = int(modulus.p), int(modulus.q)
    assert int(modulus.phi) == (p - 1) * (q - 1)


def test_random_unit(modulus):
    rng = random.Random(3)
    for _ in range(20):
        x = random_unit(modulus.n, rng)
        assert 0 < x < modulus.n
        assert int(x) % int(modulus.p) != 0
        assert int(x) % int(modulus.q) != 0


def test_random_quadratic_residue(modulus):
    """Euler's criterion holds modulo both factors."""
    rng = random.Random(5)
    for _ in range(20):
        x = int(random_quadratic_residue(modulus.n, rng))
        for prime in (int(modulus.p), int(modulus.q)):
            assert pow(x, (prime - 1) // 2, prime) == 1


def test_random_quadratic_residues_count():
    qrs = random_quadratic_residues(Bn(23 * 47), 4, random.Random(1))
    assert len(qrs) == 4
