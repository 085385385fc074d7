"""
Utils that can be useful for debugging.
"""

import logging

logger = logging.getLogger(__name__)


class SigmaProtocol:
    """
    Sigma-protocol runner.

    Plays both sides of a three-move protocol in-process.

    Args:
        verifier: Verifier object
        prover: Prover object
    """

    def __init__(self, verifier, prover):
        self.verifier = verifier
        self.prover = prover
        self.transcript = None

    def verify(self, verbose=True):
        """Run the verification process."""

        # Funky names.
        victor = self.verifier
        peggy = self.prover

        proof_base = peggy.commit()
        challenge = victor.send_challenge(proof_base)
        response = peggy.compute_response(challenge)
        result = victor.verify(response)
        self.transcript = victor.transcript(response)

        if verbose:
            if result:
                logger.info("Verified for %s", victor.__class__.__name__)
            else:
                logger.info("Not verified for %s", victor.__class__.__name__)

        return result
