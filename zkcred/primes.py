"""
Probabilistic primality testing and (safe) prime search.

Primality is decided with the Miller-Rabin test: a composite survives one round with probability at
most 1/4, so :math:`t` rounds give an error probability of at most :math:`4^{-t}`.

See "`Probabilistic algorithm for testing primality`_" by Rabin, 1980.

.. _`Probabilistic algorithm for testing primality`:
   https://doi.org/10.1016/0022-314X(80)90084-0

"""

import logging

from zkcred.consts import MILLER_RABIN_ROUNDS, MAX_PRIME_SEARCH_ATTEMPTS
from zkcred.exceptions import PrimeSearchExhaustedError
from zkcred.utils import get_rng, ensure_bn

logger = logging.getLogger(__name__)


def is_prime(n, rounds=MILLER_RABIN_ROUNDS, rng=None):
    """
    Miller-Rabin primality test.

    >>> is_prime(2), is_prime(3), is_prime(4), is_prime(97), is_prime(561)
    (True, True, False, True, False)

    Args:
        n: Candidate, an integer or big number.
        rounds: Number of random witnesses to try.
        rng: Random source for the witnesses.

    Returns:
        bool: False if ``n`` is certainly composite, True if it is prime with high probability.
    """
    n = int(n)
    if n in (2, 3):
        return True
    if n < 2 or n % 2 == 0:
        return False

    # n - 1 = 2^r * d with d odd
    r, d = 0, n - 1
    while d % 2 == 0:
        d //= 2
        r += 1

    rng = get_rng(rng)
    for _ in range(rounds):
        a = rng.randrange(2, n - 1)
        x = pow(a, d, n)
        if x == 1 or x == n - 1:
            continue
        for _ in range(r - 1):
            x = pow(x, 2, n)
            if x == n - 1:
                break
        else:
            return False
    return True


def is_safe_prime(n, rounds=MILLER_RABIN_ROUNDS, rng=None):
    """
    Check that both ``n`` and ``(n - 1) / 2`` are prime.

    >>> is_safe_prime(23), is_safe_prime(29)
    (True, False)
    """
    n = int(n)
    return is_prime(n, rounds, rng) and is_prime((n - 1) // 2, rounds, rng)


def _search(predicate, bits, rng, max_attempts, what, min_bits=2):
    if bits < min_bits:
        raise ValueError("Cannot search for a {} of {} bits".format(what, bits))

    rng = get_rng(rng)
    top_bit = 1 << (bits - 1)
    attempts = 0
    while max_attempts is None or attempts < max_attempts:
        attempts += 1
        candidate = rng.getrandbits(bits) | top_bit
        if predicate(candidate, rng=rng):
            logger.debug("Found a %d-bit %s after %d candidates", bits, what, attempts)
            return ensure_bn(candidate)

    raise PrimeSearchExhaustedError(
        "No {}-bit {} among {} candidates".format(bits, what, max_attempts)
    )


def generate_prime(bits, rng=None, max_attempts=MAX_PRIME_SEARCH_ATTEMPTS):
    """
    Draw uniform ``bits``-bit integers until one is prime.

    Args:
        bits: Exact bit length of the result.
        rng: Random source.
        max_attempts: Candidates to try before raising
            :py:class:`zkcred.exceptions.PrimeSearchExhaustedError`. ``None`` never gives up.

    Returns:
        petlib.bn.Bn: A prime.
    """
    return _search(is_prime, bits, rng, max_attempts, "prime")


def generate_safe_prime(bits, rng=None, max_attempts=MAX_PRIME_SEARCH_ATTEMPTS):
    """
    Draw uniform ``bits``-bit integers until one is a safe prime.

    Safe primes are rarer than primes by roughly a factor of the bit length, so ``max_attempts``
    should be scaled accordingly for large moduli.

    Args:
        bits: Exact bit length of the result.
        rng: Random source.
        max_attempts: Candidates to try before raising
            :py:class:`zkcred.exceptions.PrimeSearchExhaustedError`. ``None`` never gives up.

    Returns:
        petlib.bn.Bn: A safe prime.
    """
    # 5 is the smallest safe prime.
    return _search(is_safe_prime, bits, rng, max_attempts, "safe prime", min_bits=3)
