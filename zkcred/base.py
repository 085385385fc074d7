"""
Common classes, including subclassable basic provers and verifiers.
"""

import abc

import attr

from zkcred.consts import CHALLENGE_LENGTH
from zkcred.utils import get_rng, get_random_num


@attr.s
class ProofTranscript:
    """
    Transcript of one run of a three-move sigma protocol.

    For a proof about two commitments, ``proof_base`` and ``response`` are pairs.
    """

    proof_base = attr.ib()
    challenge = attr.ib()
    response = attr.ib()


@attr.s
class SimulationTranscript:
    """
    Simulated proof transcript, built without the witness.
    """

    proof_base = attr.ib()
    challenge = attr.ib()
    response = attr.ib()


class Prover(metaclass=abc.ABCMeta):
    """
    Abstract interface representing Prover used in sigma protocols.

    Args:
        stmt: Public statement: generators and commitment(s).
        rng: Random source used for the proof randomizers.
    """

    def __init__(self, stmt, rng=None):
        self.stmt = stmt
        self.rng = get_rng(rng)

    @abc.abstractmethod
    def commit(self):
        """
        Construct the proof base (first move) from fresh randomizers.
        """
        pass

    @abc.abstractmethod
    def compute_response(self, challenge):
        """
        Answer the verifier's challenge (third move).
        """
        pass


class Verifier(metaclass=abc.ABCMeta):
    """
    An abstract interface representing Verifier used in sigma protocols.

    Args:
        stmt: Public statement: generators and commitment(s).
        rng: Random source for the challenge.
        challenge_bits: Size of the challenge space in bits.
    """

    def __init__(self, stmt, rng=None, challenge_bits=CHALLENGE_LENGTH):
        self.stmt = stmt
        self.rng = get_rng(rng)
        self.challenge_bits = challenge_bits
        self.proof_base = None
        self.challenge = None

    def send_challenge(self, proof_base):
        """
        Store the received proof base and generate a challenge.

        The challenge is chosen at random between 0 and ``2^challenge_bits`` (excluded).
        """
        self.proof_base = proof_base
        self.challenge = get_random_num(bits=self.challenge_bits, rng=self.rng)
        return self.challenge

    @abc.abstractmethod
    def check_response(self, response):
        """
        Check the response against the stored proof base and challenge.
        """
        return False

    def verify(self, response):
        """
        Verify the responses of an interactive sigma protocol.

        Args:
            response: The response given by the prover

        Returns:
            bool: True if verification succeeded, False otherwise.
        """
        if self.proof_base is None or self.challenge is None:
            return False
        return self.check_response(response)

    def transcript(self, response):
        """Package the exchanged messages of this run."""
        return ProofTranscript(
            proof_base=self.proof_base, challenge=self.challenge, response=response
        )
