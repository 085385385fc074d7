r"""
Proof that two committed values satisfy a public affine relation.

Given :math:`C_1 = x_1 G + r_1 H` and :math:`C_2 = x_2 G + r_2 H`, the prover shows it knows both
openings and that :math:`x_2 = R(x_1)` for a public :math:`R(s) = k s + b`:

.. math::
    PK\{ (x_1, r_1, x_2, r_2): C_1 = x_1 G + r_1 H \wedge C_2 = x_2 G + r_2 H \wedge x_2 = R(x_1) \}

Two Schnorr proofs run side by side with one shared challenge. The randomizers of the second proof
are derived from those of the first through :math:`R`, so the responses for the secrets satisfy

.. math::
    s_2 - k s_1 = R(a_1) - c x_2 - k (a_1 - c x_1) = b + c (k x_1 - x_2) = b (1 - c)

exactly when :math:`x_2 = R(x_1)`. For :math:`R(s) = 4 s` the check reads :math:`-4 s_1 + s_2 = 0`.

The two per-commitment equations alone only prove knowledge of the openings. The combined check on
the responses is what ties :math:`x_1` and :math:`x_2` together.
"""

import attr

from zkcred.base import Prover, Verifier
from zkcred.consts import CHALLENGE_LENGTH
from zkcred.primitives import schnorr
from zkcred.utils import ensure_bn, get_random_num, get_random_scalar


@attr.s(frozen=True)
class AffineRelation:
    """
    Relation :math:`R(s) = k s + b` over the scalar field of the group.

    Args:
        multiplier: :math:`k`
        offset: :math:`b`
        order: Modulus of the scalar field.
    """

    multiplier = attr.ib(converter=ensure_bn)
    order = attr.ib(converter=ensure_bn)
    offset = attr.ib(default=0, converter=ensure_bn)

    def __call__(self, s):
        return (self.multiplier * s + self.offset) % self.order


def phase1_relation(g, h, relation, rng=None):
    """
    Prover's first move for both commitments.

    The randomizers of the second proof are images of the first ones under ``relation``.

    Returns:
        tuple: ``(base1, base2, a1, r1, a2, r2)``
    """
    a1 = get_random_scalar(g.group, rng)
    r1 = get_random_scalar(g.group, rng)
    a2, r2 = relation(a1), relation(r1)
    return a1 * g + r1 * h, a2 * g + r2 * h, a1, r1, a2, r2


def phase2_relation(base1, base2, challenge_bits=CHALLENGE_LENGTH, rng=None):
    """
    Verifier's move: one challenge shared by both proofs.

    Returns:
        tuple: ``(base1, base2, challenge)``
    """
    challenge = get_random_num(challenge_bits, rng)
    return base1, base2, challenge


def phase3_relation(a1, r1, a2, r2, challenge, opening1, opening2, order):
    """
    Prover's last move: Schnorr responses for both openings under the shared challenge.

    Returns:
        tuple: ``((s1, t1), (s2, t2))``
    """
    response1 = schnorr.phase3(
        a1, r1, challenge, opening1.secret, opening1.blinding, order
    )
    response2 = schnorr.phase3(
        a2, r2, challenge, opening2.secret, opening2.blinding, order
    )
    return response1, response2


def check_linear_combination(s1, s2, challenge, relation, order):
    r"""
    Check :math:`s_2 - (R(s_1) - R(0)) = R(0) (1 - c)`.

    Only valid for affine relations, whose linear part is :math:`R(s) - R(0)`.
    """
    offset = ensure_bn(relation(0)) % order
    lhs = (s2 - (relation(s1) - offset)) % order
    target = (offset - offset * challenge) % order
    return lhs == target


def verify_relation(
    g, h, challenge, c1, c2, response1, response2, base1, base2, relation
):
    """
    Check both Schnorr equations and the combined relation check.

    Args:
        g: First generator.
        h: Second generator.
        challenge: Shared challenge.
        c1 (:py:class:`zkcred.primitives.pedersen.Commitment`): Commitment to :math:`x_1`.
        c2 (:py:class:`zkcred.primitives.pedersen.Commitment`): Commitment to :math:`x_2`.
        response1: ``(s1, t1)``
        response2: ``(s2, t2)``
        base1: Proof base for ``c1``.
        base2: Proof base for ``c2``.
        relation: Affine callable mapping :math:`x_1` to :math:`x_2`.

    Returns:
        bool: True if verification succeeded, False otherwise.
    """
    order = g.group.order()
    knows_openings = schnorr.verify(
        g, h, challenge, c1, response1, base1
    ) and schnorr.verify(g, h, challenge, c2, response2, base2)
    return knows_openings and check_linear_combination(
        response1[0], response2[0], challenge, relation, order
    )


@attr.s
class RelationStatement:
    """
    Public part of a relation proof: two commitments over the same generators and the relation.
    """

    c1 = attr.ib()
    c2 = attr.ib()
    relation = attr.ib()

    def __attrs_post_init__(self):
        self.c1.check_generators(self.c2)

    @property
    def g(self):
        return self.c1.g

    @property
    def h(self):
        return self.c1.h


class RelationProver(Prover):
    """
    The prover in a relation proof.

    Args:
        stmt (:py:class:`RelationStatement`): Public statement.
        opening1: Opening of ``stmt.c1``.
        opening2: Opening of ``stmt.c2``.
        rng: Random source for the randomizers.
    """

    def __init__(self, stmt, opening1, opening2, rng=None):
        super().__init__(stmt, rng)
        self.opening1 = opening1
        self.opening2 = opening2
        self.randomizers = None

    def commit(self):
        base1, base2, *self.randomizers = phase1_relation(
            self.stmt.g, self.stmt.h, self.stmt.relation, self.rng
        )
        return base1, base2

    def compute_response(self, challenge):
        a1, r1, a2, r2 = self.randomizers
        return phase3_relation(
            a1,
            r1,
            a2,
            r2,
            challenge,
            self.opening1,
            self.opening2,
            self.stmt.g.group.order(),
        )


class RelationVerifier(Verifier):
    """
    The verifier in a relation proof.

    Args:
        stmt (:py:class:`RelationStatement`): Public statement.
        rng: Random source for the challenge.
        challenge_bits: Size of the challenge space in bits.
    """

    def send_challenge(self, proof_base):
        base1, base2 = proof_base
        base1, base2, self.challenge = phase2_relation(
            base1, base2, self.challenge_bits, self.rng
        )
        self.proof_base = (base1, base2)
        return self.challenge

    def check_response(self, response):
        response1, response2 = response
        base1, base2 = self.proof_base
        return verify_relation(
            self.stmt.g,
            self.stmt.h,
            self.challenge,
            self.stmt.c1,
            self.stmt.c2,
            response1,
            response2,
            base1,
            base2,
            self.stmt.relation,
        )
