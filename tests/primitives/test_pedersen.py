import pytest

from zkcred.exceptions import GeneratorMismatchError
from zkcred.primitives import pedersen
from zkcred.primitives.pedersen import (
    Commitment,
    Opening,
    blinding_delta,
    commit,
    equal_given_blinding_delta,
    open_commitment,
)


@pytest.fixture
def generators(group, rng):
    return pedersen.setup(group, rng)


def test_setup_generators_are_distinct(generators):
    g, h = generators
    assert g != h


@pytest.mark.parametrize("secret", [0, 1, 4, 21, 2 ** 100])
def test_commit_then_open(generators, rng, secret):
    g, h = generators
    com, opening = commit(secret, g, h, rng)
    assert com.g == g and com.h == h
    assert com.open(opening)
    assert open_commitment(com, opening)


def test_changed_secret_does_not_open(generators, rng):
    g, h = generators
    com, opening = commit(3, g, h, rng)
    assert not com.open(Opening(secret=4, blinding=opening.blinding))


def test_changed_blinding_does_not_open(generators, rng):
    g, h = generators
    com, opening = commit(3, g, h, rng)
    assert not com.open(Opening(secret=opening.secret, blinding=opening.blinding + 1))


def test_commitments_are_hiding(generators, rng):
    g, h = generators
    com1, _ = commit(3, g, h, rng)
    com2, _ = commit(3, g, h, rng)
    assert com1.commitment != com2.commitment


def test_equal_secrets_given_blinding_delta(group, generators, rng):
    g, h = generators
    com1, opening1 = commit(2, g, h, rng)
    com2, opening2 = commit(2, g, h, rng)
    delta = blinding_delta(opening1, opening2, group)
    assert equal_given_blinding_delta(com1, com2, delta)


def test_different_secrets_given_blinding_delta(group, generators, rng):
    g, h = generators
    com1, opening1 = commit(2, g, h, rng)
    com2, opening2 = commit(3, g, h, rng)
    delta = blinding_delta(opening1, opening2, group)
    assert not equal_given_blinding_delta(com1, com2, delta)


def test_blinding_delta_for_self(group, generators, rng):
    g, h = generators
    com, opening = commit(2, g, h, rng)
    assert equal_given_blinding_delta(com, com, blinding_delta(opening, opening, group))


def test_generator_mismatch(group, generators, rng):
    g, h = generators
    _, other_h = pedersen.setup(group, rng)
    com1, opening1 = commit(2, g, h, rng)
    com2, opening2 = commit(2, g, other_h, rng)
    with pytest.raises(GeneratorMismatchError):
        equal_given_blinding_delta(com1, com2, blinding_delta(opening1, opening2, group))


def test_homomorphic_addition(group, generators, rng):
    g, h = generators
    com1, opening1 = commit(5, g, h, rng)
    com2, opening2 = commit(7, g, h, rng)
    total = com1 + com2
    order = group.order()
    opening = Opening(
        secret=12, blinding=(opening1.blinding + opening2.blinding) % order
    )
    assert isinstance(total, Commitment)
    assert total.open(opening)


def test_homomorphic_addition_requires_same_generators(group, generators, rng):
    g, h = generators
    other_g, other_h = pedersen.setup(group, rng)
    com1, _ = commit(5, g, h, rng)
    com2, _ = commit(7, other_g, other_h, rng)
    with pytest.raises(GeneratorMismatchError):
        com1 + com2
