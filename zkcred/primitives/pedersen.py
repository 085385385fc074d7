r"""
Pedersen commitments over a prime-order group.

A commitment to :math:`x` with blinding :math:`r` is :math:`C = x G + r H`, for two generators
:math:`G` and :math:`H` whose discrete-logarithm relation is unknown. It is perfectly hiding and
computationally binding.

Commitments are additively homomorphic: :math:`C(x_1, r_1) + C(x_2, r_2) = C(x_1 + x_2, r_1 +
r_2)`. In particular two parties can convince a third that they committed to the same value by
revealing only :math:`r_1 - r_2`.

See "`Non-Interactive and Information-Theoretic Secure Verifiable Secret Sharing`_" by Pedersen,
1991 for the details.

.. _`Non-Interactive and Information-Theoretic Secure Verifiable Secret Sharing`:
   https://doi.org/10.1007/3-540-46766-1_9

"""

import attr

from zkcred.consts import DEFAULT_GROUP
from zkcred.exceptions import GeneratorMismatchError
from zkcred.utils import ensure_bn, get_random_scalar, make_generators


@attr.s
class Opening:
    """
    Values that open a commitment. Only the committer holds them.
    """

    secret = attr.ib(converter=ensure_bn)
    blinding = attr.ib(converter=ensure_bn)


@attr.s
class Commitment:
    """
    Pedersen commitment :math:`C = x G + r H`, bound to the generators it was made with.
    """

    commitment = attr.ib()
    g = attr.ib()
    h = attr.ib()

    @property
    def group(self):
        return self.g.group

    def same_generators(self, other):
        return self.g == other.g and self.h == other.h

    def check_generators(self, other):
        """
        Raise :py:class:`zkcred.exceptions.GeneratorMismatchError` unless ``other`` uses the
        same generators.
        """
        if not self.same_generators(other):
            raise GeneratorMismatchError(
                "Commitments were made with different generators"
            )

    def open(self, opening):
        """
        Check that ``opening`` opens this commitment.

        Args:
            opening (:py:class:`Opening`): Claimed secret and blinding.

        Returns:
            bool: True if :math:`x G + r H` matches the commitment.
        """
        expected = opening.secret * self.g + opening.blinding * self.h
        return self.commitment == expected

    def __add__(self, other):
        """
        Homomorphic addition. The result opens to the sums of both openings.
        """
        self.check_generators(other)
        return Commitment(
            commitment=self.commitment + other.commitment, g=self.g, h=self.h
        )


def setup(group=None, rng=None):
    r"""
    Draw two independent generators :math:`G`, :math:`H`.

    Both are hashed from fresh randomness so nobody knows :math:`\log_G H`.

    Returns:
        tuple: ``(g, h)``
    """
    if group is None:
        group = DEFAULT_GROUP
    g, h = make_generators(2, group=group, rng=rng)
    return g, h


def commit(secret, g, h, rng=None):
    """
    Commit to ``secret`` with a fresh uniform blinding factor.

    Args:
        secret: Value to commit to, an integer or big number.
        g: First generator.
        h: Second generator.
        rng: Random source for the blinding factor.

    Returns:
        tuple: (:py:class:`Commitment`, :py:class:`Opening`)
    """
    opening = Opening(secret=secret, blinding=get_random_scalar(g.group, rng))
    commitment = opening.secret * g + opening.blinding * h
    return Commitment(commitment=commitment, g=g, h=h), opening


def open_commitment(commitment, opening):
    """Check that ``opening`` opens ``commitment``."""
    return commitment.open(opening)


def equal_given_blinding_delta(c1, c2, delta):
    r"""
    Check that two commitments hide the same value, given only the difference of their blindings.

    If :math:`C_1 = x G + r_1 H` and :math:`C_2 = x G + r_2 H` then :math:`C_1 - C_2 = (r_1 - r_2)
    H`. For different values the difference has a non-zero :math:`G` component, and the check fails.

    Args:
        c1 (:py:class:`Commitment`): First commitment.
        c2 (:py:class:`Commitment`): Second commitment.
        delta: :math:`r_1 - r_2`.

    Raises:
        GeneratorMismatchError: If the commitments use different generators.
    """
    c1.check_generators(c2)
    diff = c1.commitment + (-1 * c2.commitment)
    return diff == ensure_bn(delta) * c1.h


def blinding_delta(opening1, opening2, group=None):
    """Difference of two blinding factors, reduced modulo the group order."""
    if group is None:
        group = DEFAULT_GROUP
    return (opening1.blinding - opening2.blinding) % group.order()
