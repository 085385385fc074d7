"""
RSA moduli built from two safe primes, and random elements of their quadratic-residue subgroup.

For :math:`n = pq` with :math:`p = 2p' + 1` and :math:`q = 2q' + 1` safe primes, the quadratic
residues :math:`QR_n` form a cyclic group of order :math:`p'q'`. Whoever knows :math:`p` and
:math:`q` can take :math:`e`-th roots in it; everybody else only sees :math:`n`.
"""
import logging
import math

import attr

from zkcred.consts import MAX_PRIME_SEARCH_ATTEMPTS
from zkcred.primes import generate_safe_prime
from zkcred.utils import get_rng, random_in_range

logger = logging.getLogger(__name__)


@attr.s(frozen=True)
class RSAModulus:
    """
    Modulus :math:`n = pq` for two safe primes.

    The factors are secret; only ``n`` is meant to be published.
    """

    p = attr.ib()
    q = attr.ib()
    n = attr.ib()

    @property
    def phi(self):
        """Euler's totient :math:`(p - 1)(q - 1)`."""
        return (self.p - 1) * (self.q - 1)

    def num_bits(self):
        return self.n.num_bits()

    @staticmethod
    def generate(bits, rng=None, max_attempts=MAX_PRIME_SEARCH_ATTEMPTS):
        """
        Set up a modulus from two distinct safe primes of ``bits`` bits each.

        Args:
            bits: Bit length of each factor.
            rng: Random source.
            max_attempts: Candidate ceiling handed to each safe-prime search.
        """
        rng = get_rng(rng)
        p = generate_safe_prime(bits, rng=rng, max_attempts=max_attempts)
        q = generate_safe_prime(bits, rng=rng, max_attempts=max_attempts)
        while q == p:
            q = generate_safe_prime(bits, rng=rng, max_attempts=max_attempts)

        logger.debug("Generated a %d-bit RSA modulus", (p * q).num_bits())
        return RSAModulus(p=p, q=q, n=p * q)


def random_unit(n, rng=None):
    """
    Draw a uniform element of :math:`Z_n^*`.
    """
    rng = get_rng(rng)
    while True:
        x = random_in_range(1, n, rng)
        if math.gcd(int(x), int(n)) == 1:
            return x


def random_quadratic_residue(n, rng=None):
    """
    Square a uniform unit of :math:`Z_n^*`, giving a uniform quadratic residue modulo ``n``.
    """
    x = random_unit(n, rng)
    return x.mod_mul(x, n)


def random_quadratic_residues(n, num, rng=None):
    """
    Draw ``num`` independent quadratic residues modulo ``n``.

    >>> from petlib.bn import Bn
    >>> qrs = random_quadratic_residues(Bn(23 * 47), 3)
    >>> len(qrs)
    3
    """
    rng = get_rng(rng)
    return [random_quadratic_residue(n, rng) for _ in range(num)]
