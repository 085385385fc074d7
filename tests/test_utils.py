import random

from petlib.bn import Bn
from petlib.ec import EcPt

from zkcred.utils import (
    ensure_bn,
    get_rng,
    get_random_num,
    get_random_point,
    get_random_scalar,
    make_generators,
    random_below,
    random_in_range,
)


def test_get_rng_defaults_to_system_random():
    assert isinstance(get_rng(), random.SystemRandom)
    rng = random.Random(1)
    assert get_rng(rng) is rng


def test_seeded_points_are_reproducible(group):
    a = get_random_point(group, rng=random.Random(42))
    b = get_random_point(group, rng=random.Random(42))
    c = get_random_point(group, rng=random.Random(43))
    assert isinstance(a, EcPt)
    assert a == b
    assert a != c


def test_make_generators(group, rng):
    gens = make_generators(3, group, rng=rng)
    assert len(gens) == 3
    assert len({g.export() for g in gens}) == 3


def test_random_ranges(rng):
    for _ in range(50):
        assert 0 <= random_below(7, rng) < 7
        assert 10 <= random_in_range(10, 13, rng) < 13
        assert get_random_num(5, rng) < 32


def test_random_scalar_below_order(group, rng):
    order = group.order()
    for _ in range(10):
        assert 0 <= get_random_scalar(group, rng) < order


def test_ensure_bn():
    assert isinstance(ensure_bn(5), Bn)
    big = 2 ** 300 + 17
    assert int(ensure_bn(big)) == big
    x = Bn(9)
    assert ensure_bn(x) is x
