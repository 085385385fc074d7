from petlib.ec import EcGroup

# NIST P-224, the petlib default curve.
DEFAULT_GROUP = EcGroup(713)

# Bit length of interactive challenges. Soundness error is about 2^-CHALLENGE_LENGTH.
CHALLENGE_LENGTH = 128

# Error probability of a false "prime" is at most 4^-MILLER_RABIN_ROUNDS.
MILLER_RABIN_ROUNDS = 40

# Candidates drawn before a prime search gives up. None searches forever.
MAX_PRIME_SEARCH_ATTEMPTS = 1000000

# Random bytes hashed into a fresh group element.
RANDOM_POINT_BITS = 256
