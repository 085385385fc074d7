import math
import random

from petlib.bn import Bn

from zkcred.consts import DEFAULT_GROUP, RANDOM_POINT_BITS

__all__ = [
    "get_rng",
    "get_random_point",
    "make_generators",
    "get_random_num",
    "get_random_scalar",
    "random_below",
    "random_in_range",
    "ensure_bn",
]


def get_rng(rng=None):
    """
    Return the random source to sample from.

    Every sampling function takes an optional ``rng``. Passing a seeded
    :py:class:`random.Random` makes runs reproducible; ``None`` gives a fresh
    OS-backed source.

    >>> get_rng(random.Random(1)).randrange(100) == random.Random(1).randrange(100)
    True
    >>> isinstance(get_rng(), random.SystemRandom)
    True
    """
    if rng is None:
        return random.SystemRandom()
    return rng


def get_random_point(group=None, random_bits=RANDOM_POINT_BITS, rng=None):
    """
    Hash fresh random bytes to a group element.

    Nobody learns the discrete logarithm of the result with respect to any other point.

    Args:
        group: Group
        random_bits: Number of bits of a random string to create a point.
        rng: Random source.

    >>> from petlib.ec import EcPt
    >>> a = get_random_point()
    >>> b = get_random_point()
    >>> isinstance(a, EcPt)
    True
    >>> a != b
    True
    >>> get_random_point(rng=random.Random(1)) == get_random_point(rng=random.Random(1))
    True
    """
    if group is None:
        group = DEFAULT_GROUP

    rng = get_rng(rng)
    num_bytes = math.ceil(random_bits / 8)
    randomness = rng.getrandbits(num_bytes * 8).to_bytes(num_bytes, "big")
    return group.hash_to_point(randomness)


def make_generators(num, group=None, random_bits=RANDOM_POINT_BITS, rng=None):
    """
    Create some random group generators.

    .. WARNING ::

        There is a negligible chance that some generators will be the same.

    Args:
        num: Number of generators to generate.
        group: Group
        random_bits: Number of bits of a random number used to create a generator.
        rng: Random source.

    >>> from petlib.ec import EcPt
    >>> generators = make_generators(3)
    >>> len(generators) == 3
    True
    >>> isinstance(generators[0], EcPt)
    True
    """
    rng = get_rng(rng)
    return [get_random_point(group, random_bits, rng=rng) for _ in range(num)]


def random_below(bound, rng=None):
    """
    Draw a big number uniformly from :math:`[0, bound)`.

    >>> x = random_below(10, random.Random(3))
    >>> 0 <= x < 10
    True
    """
    rng = get_rng(rng)
    return ensure_bn(rng.randrange(int(bound)))


def random_in_range(low, high, rng=None):
    """
    Draw a big number uniformly from :math:`[low, high)`.

    >>> x = random_in_range(5, 7)
    >>> x in (5, 6)
    True
    """
    rng = get_rng(rng)
    return ensure_bn(rng.randrange(int(low), int(high)))


def get_random_num(bits, rng=None):
    """
    Draw a random number of given bitlength.

    >>> x = get_random_num(6)
    >>> x < 2**6
    True
    """
    rng = get_rng(rng)
    return ensure_bn(rng.getrandbits(bits))


def get_random_scalar(group=None, rng=None):
    """Draw a scalar uniformly from the group's scalar field."""
    if group is None:
        group = DEFAULT_GROUP
    return random_below(group.order(), rng)


def ensure_bn(x):
    """
    Ensure that value is big number.

    >>> isinstance(ensure_bn(42), Bn)
    True
    >>> isinstance(ensure_bn(Bn(42)), Bn)
    True
    >>> int(ensure_bn(2**100)) == 2**100
    True
    """
    if isinstance(x, Bn):
        return x
    else:
        return Bn.from_decimal(str(x))
