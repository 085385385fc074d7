import random

import pytest

from petlib.ec import EcGroup

from zkcred.primitives.clsig import CLKeypair


@pytest.fixture
def group():
    return EcGroup()


@pytest.fixture
def rng():
    return random.Random(1337)


@pytest.fixture(scope="session")
def cl_keypair():
    # 32-bit safe primes keep key generation fast while exercising every step.
    return CLKeypair.generate(16, num_messages=3, rng=random.Random(2020))
