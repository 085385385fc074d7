r"""
Interactive proof of knowledge of a Pedersen commitment opening.

The prover convinces the verifier that it knows :math:`(x, r)` such that :math:`C = x G + r H`:

.. math::
    PK\{ (x, r): C = x G + r H \}

The protocol has three moves:

1. The prover picks random :math:`a_1, a_2` and sends :math:`B = a_1 G + a_2 H`.
2. The verifier answers with a random challenge :math:`c`.
3. The prover sends :math:`s_1 = a_1 - c x` and :math:`s_2 = a_2 - c r`.

The verifier accepts iff :math:`s_1 G + s_2 H + c C = B`.

The protocol is complete, special sound (see :py:func:`extract_opening`), and honest-verifier
zero-knowledge (see :py:func:`simulate_transcript`).

See "`Efficient signature generation by smart cards`_" by Schnorr, 1991 for the details.

.. _`Efficient signature generation by smart cards`:
   https://doi.org/10.1007/BF00196725

"""

from zkcred.base import Prover, Verifier, SimulationTranscript
from zkcred.consts import CHALLENGE_LENGTH
from zkcred.utils import get_random_num, get_random_scalar


def phase1(g, h, rng=None):
    """
    Prover's first move: commit to fresh randomizers.

    Returns:
        tuple: ``(proof_base, a1, a2)``. The randomizers stay with the prover.
    """
    a1 = get_random_scalar(g.group, rng)
    a2 = get_random_scalar(g.group, rng)
    return a1 * g + a2 * h, a1, a2


def phase2(proof_base, challenge_bits=CHALLENGE_LENGTH, rng=None):
    """
    Verifier's move: keep the proof base and draw a challenge.

    Returns:
        tuple: ``(proof_base, challenge)``
    """
    challenge = get_random_num(challenge_bits, rng)
    return proof_base, challenge


def phase3(a1, a2, challenge, secret, blinding, order):
    """
    Prover's last move: answer the challenge.

    Args:
        a1: Randomizer for the secret.
        a2: Randomizer for the blinding.
        challenge: Verifier's challenge.
        secret: Committed value.
        blinding: Blinding factor of the commitment.
        order: Order of the group.

    Returns:
        tuple: ``(s1, s2)``
    """
    s1 = (a1 - challenge * secret) % order
    s2 = (a2 - challenge * blinding) % order
    return s1, s2


def recompute_proof_base(g, h, challenge, commitment, response):
    """Compute :math:`s_1 G + s_2 H + c C`."""
    s1, s2 = response
    return s1 * g + s2 * h + challenge * commitment.commitment


def verify(g, h, challenge, commitment, response, proof_base):
    """
    Check a transcript against the commitment.

    Args:
        g: First generator.
        h: Second generator.
        challenge: Challenge sent by the verifier.
        commitment (:py:class:`zkcred.primitives.pedersen.Commitment`): Commitment.
        response: Pair ``(s1, s2)``.
        proof_base: Proof base received in the first move.

    Returns:
        bool: True if verification succeeded, False otherwise.
    """
    return recompute_proof_base(g, h, challenge, commitment, response) == proof_base


def simulate_transcript(commitment, challenge_bits=CHALLENGE_LENGTH, rng=None):
    """
    Produce an accepting transcript without knowing the opening.

    The challenge and the responses are picked first, and the proof base is derived from them. The
    result is distributed exactly like an honest transcript.
    """
    g, h = commitment.g, commitment.h
    challenge = get_random_num(challenge_bits, rng)
    response = (get_random_scalar(g.group, rng), get_random_scalar(g.group, rng))
    proof_base = recompute_proof_base(g, h, challenge, commitment, response)
    return SimulationTranscript(
        proof_base=proof_base, challenge=challenge, response=response
    )


def extract_opening(transcript1, transcript2, order):
    r"""
    Recover the opening from two accepting transcripts with the same proof base.

    Subtracting the responses gives :math:`s_1 - s_1' = (c' - c) x`, hence
    :math:`x = (s_1 - s_1') / (c' - c)`, and likewise for the blinding.

    Args:
        transcript1 (:py:class:`zkcred.base.ProofTranscript`): First transcript.
        transcript2 (:py:class:`zkcred.base.ProofTranscript`): Second transcript.
        order: Order of the group.

    Returns:
        tuple: ``(secret, blinding)``

    Raises:
        ValueError: If the proof bases differ or the challenges are equal.
    """
    if transcript1.proof_base != transcript2.proof_base:
        raise ValueError("Transcripts do not share a proof base")

    c_diff = (transcript2.challenge - transcript1.challenge) % order
    if c_diff == 0:
        raise ValueError("Transcripts must have distinct challenges")

    inv = c_diff.mod_inverse(order)
    (s1, s2), (s1_prime, s2_prime) = transcript1.response, transcript2.response
    secret = ((s1 - s1_prime) * inv) % order
    blinding = ((s2 - s2_prime) * inv) % order
    return secret, blinding


class SchnorrProver(Prover):
    """
    The prover in a proof of knowledge of a commitment opening.

    Args:
        commitment (:py:class:`zkcred.primitives.pedersen.Commitment`): Public commitment.
        opening (:py:class:`zkcred.primitives.pedersen.Opening`): Its opening.
        rng: Random source for the randomizers.
    """

    def __init__(self, commitment, opening, rng=None):
        super().__init__(commitment, rng)
        self.opening = opening
        self.a1 = self.a2 = None

    def commit(self):
        proof_base, self.a1, self.a2 = phase1(self.stmt.g, self.stmt.h, self.rng)
        return proof_base

    def compute_response(self, challenge):
        return phase3(
            self.a1,
            self.a2,
            challenge,
            self.opening.secret,
            self.opening.blinding,
            self.stmt.group.order(),
        )


class SchnorrVerifier(Verifier):
    """
    The verifier in a proof of knowledge of a commitment opening.

    Args:
        commitment (:py:class:`zkcred.primitives.pedersen.Commitment`): Public commitment.
        rng: Random source for the challenge.
        challenge_bits: Size of the challenge space in bits.
    """

    def send_challenge(self, proof_base):
        self.proof_base, self.challenge = phase2(
            proof_base, self.challenge_bits, self.rng
        )
        return self.challenge

    def check_response(self, response):
        return verify(
            self.stmt.g,
            self.stmt.h,
            self.challenge,
            self.stmt,
            response,
            self.proof_base,
        )
