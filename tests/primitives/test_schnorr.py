import random

import pytest

from petlib.bn import Bn

from zkcred.base import ProofTranscript
from zkcred.primitives import pedersen
from zkcred.primitives.pedersen import Opening, commit
from zkcred.primitives.schnorr import (
    SchnorrProver,
    SchnorrVerifier,
    extract_opening,
    phase1,
    phase2,
    phase3,
    simulate_transcript,
    verify,
)
from zkcred.utils import get_random_scalar
from zkcred.utils.debug import SigmaProtocol


@pytest.fixture
def committed(group, rng):
    g, h = pedersen.setup(group, rng)
    secret = get_random_scalar(group, rng)
    com, opening = commit(secret, g, h, rng)
    return g, h, com, opening


def test_schnorr_phases(group, rng, committed):
    g, h, com, opening = committed
    proof_base, a1, a2 = phase1(g, h, rng)
    proof_base, challenge = phase2(proof_base, rng=rng)
    response = phase3(
        a1, a2, challenge, opening.secret, opening.blinding, group.order()
    )
    assert verify(g, h, challenge, com, response, proof_base)


@pytest.mark.parametrize("challenge_bits", [1, 32, 128])
def test_schnorr_interactive(rng, committed, challenge_bits):
    g, h, com, opening = committed
    prover = SchnorrProver(com, opening, rng)
    verifier = SchnorrVerifier(com, rng, challenge_bits=challenge_bits)
    protocol = SigmaProtocol(verifier, prover)
    assert protocol.verify()
    assert protocol.transcript.challenge.num_bits() <= challenge_bits


def test_schnorr_completeness_many_runs(group):
    rng = random.Random(99)
    g, h = pedersen.setup(group, rng)
    for secret in range(5):
        com, opening = commit(secret, g, h, rng)
        protocol = SigmaProtocol(SchnorrVerifier(com, rng), SchnorrProver(com, opening, rng))
        assert protocol.verify(verbose=False)


def test_schnorr_wrong_opening(rng, committed):
    g, h, com, opening = committed
    wrong = Opening(secret=opening.secret + 1, blinding=opening.blinding)
    protocol = SigmaProtocol(SchnorrVerifier(com, rng), SchnorrProver(com, wrong, rng))
    assert not protocol.verify()


def test_schnorr_tampered_response(group, rng, committed):
    g, h, com, opening = committed
    proof_base, a1, a2 = phase1(g, h, rng)
    _, challenge = phase2(proof_base, rng=rng)
    s1, s2 = phase3(a1, a2, challenge, opening.secret, opening.blinding, group.order())
    assert not verify(g, h, challenge, com, (s1 + 1, s2), proof_base)
    assert not verify(g, h, challenge + 1, com, (s1, s2), proof_base)


def test_verifier_without_challenge_rejects(committed):
    g, h, com, opening = committed
    verifier = SchnorrVerifier(com)
    assert not verifier.verify((1, 2))


def test_schnorr_extraction(group, rng, committed):
    g, h, com, opening = committed
    order = group.order()
    proof_base, a1, a2 = phase1(g, h, rng)

    transcripts = []
    for _ in range(2):
        _, challenge = phase2(proof_base, rng=rng)
        response = phase3(a1, a2, challenge, opening.secret, opening.blinding, order)
        assert verify(g, h, challenge, com, response, proof_base)
        transcripts.append(ProofTranscript(proof_base, challenge, response))

    assert transcripts[0].challenge != transcripts[1].challenge
    secret, blinding = extract_opening(transcripts[0], transcripts[1], order)
    assert secret == opening.secret % order
    assert blinding == opening.blinding % order


def test_extraction_requires_distinct_challenges(group, rng, committed):
    g, h, com, opening = committed
    order = group.order()
    proof_base, a1, a2 = phase1(g, h, rng)
    challenge = Bn(5)
    response = phase3(a1, a2, challenge, opening.secret, opening.blinding, order)
    transcript = ProofTranscript(proof_base, challenge, response)
    with pytest.raises(ValueError):
        extract_opening(transcript, transcript, order)


def test_extraction_requires_shared_proof_base(group, rng, committed):
    g, h, com, opening = committed
    order = group.order()
    t1 = ProofTranscript(phase1(g, h, rng)[0], 1, (0, 0))
    t2 = ProofTranscript(phase1(g, h, rng)[0], 2, (0, 0))
    with pytest.raises(ValueError):
        extract_opening(t1, t2, order)


def test_simulated_transcript_verifies(rng, committed):
    g, h, com, _ = committed
    transcript = simulate_transcript(com, rng=rng)
    assert verify(
        g, h, transcript.challenge, com, transcript.response, transcript.proof_base
    )
