r"""
Camenisch-Lysyanskaya signatures on blocks of messages, with selective disclosure.

The public key is an RSA modulus :math:`n = pq` built from safe primes, together with random
quadratic residues :math:`a_1, \ldots, a_L, b, c`. A signature on :math:`(m_1, \ldots, m_L)` is a
triple :math:`(s, e, v)` with :math:`e` a prime and

.. math::
    v^e \equiv a_1^{m_1} \cdots a_L^{m_L} b^s c \pmod n

Only the signer, who knows :math:`\phi(n)`, can take the :math:`e`-th root.

To disclose a subset of the messages, the holder folds the hidden ones into
:math:`C = \prod_{i \notin D} a_i^{m_i} b^{s - r}` for a fresh offset :math:`r`, and reveals
:math:`(C, r, e, v)` along with :math:`m_i` for :math:`i \in D`. The verifier checks
:math:`v^e \equiv C b^r \prod_{i \in D} a_i^{m_i} c`. The offset ``r`` removed from :math:`s` inside
:math:`C` and the exponent of :math:`b` checked by the verifier are the same value.

See "`A Signature Scheme with Efficient Protocols`_" by Camenisch and Lysyanskaya, 2002 for the
details.

.. _`A Signature Scheme with Efficient Protocols`:
   https://doi.org/10.1007/3-540-36413-7_20

"""

import logging
import math

import attr

from zkcred.consts import MAX_PRIME_SEARCH_ATTEMPTS
from zkcred.exceptions import (
    NotInvertibleError,
    PrimeSearchExhaustedError,
    ValidationError,
)
from zkcred.primes import generate_prime
from zkcred.rsa_group import RSAModulus, random_quadratic_residues
from zkcred.utils import ensure_bn, get_rng, random_in_range

logger = logging.getLogger(__name__)


def encode_message(message):
    """
    Encode an attribute as a big number: strings as UTF-8, bytes big-endian.

    >>> int(encode_message("AB")) == 0x4142
    True
    >>> encode_message(7) == encode_message(b"\\x07")
    True
    """
    if isinstance(message, str):
        message = message.encode("utf-8")
    if isinstance(message, bytes):
        return ensure_bn(int.from_bytes(message, "big"))
    return ensure_bn(message)


def _multi_exp(bases, exponents, n):
    result = ensure_bn(1)
    for base, exp in zip(bases, exponents):
        result = result.mod_mul(base.mod_pow(exp, n), n)
    return result


@attr.s
class CLSignature:
    """
    CL signature :math:`(s, e, v)`.
    """

    s = attr.ib()
    e = attr.ib()
    v = attr.ib()

    def verify_signature(self, pk, messages):
        """
        Verify the signature with respect to the public key and all the messages.

        Returns:
            bool: True if :math:`v^e = \\prod a_i^{m_i} b^s c \\bmod n`.
        """
        messages = [encode_message(m) for m in messages]
        if len(messages) > len(pk.message_bases):
            return False
        n = pk.n
        return ensure_bn(self.v).mod_pow(ensure_bn(self.e), n) == pk.representation(
            messages, self.s
        )

    def reveal_subset(
        self, pk, messages, disclosed_indices, blinding_offset=None, rng=None
    ):
        """
        Prepare a selective disclosure of some of the signed messages.

        Args:
            pk (:py:class:`CLPublicKey`): Signer's public key.
            messages: All signed messages.
            disclosed_indices: Indices (0-based) of the messages to reveal.
            blinding_offset: Value :math:`r` removed from :math:`s` inside the commitment. Drawn
                fresh from :math:`[1, 2n)` if omitted, so two disclosures of one signature do not
                share it.
            rng: Random source for the offset.

        Returns:
            :py:class:`SelectiveDisclosure`

        Raises:
            ValidationError: If there are more messages than bases in the key, an index is out of
                range, or the offset is not in :math:`[0, s]`.
        """
        messages = [encode_message(m) for m in messages]
        if len(messages) > len(pk.message_bases):
            raise ValidationError(
                "Key supports {} messages, got {}".format(
                    len(pk.message_bases), len(messages)
                )
            )
        disclosed_indices = set(disclosed_indices)
        if any(i < 0 or i >= len(messages) for i in disclosed_indices):
            raise ValidationError("Disclosed index out of range")

        n = pk.n
        if blinding_offset is None:
            r = random_in_range(1, n * 2, get_rng(rng))
        else:
            r = ensure_bn(blinding_offset)
        if r < 0 or r > self.s:
            raise ValidationError("Blinding offset must lie in [0, s]")

        hidden = [i for i in range(len(messages)) if i not in disclosed_indices]
        commitment = _multi_exp(
            [pk.message_bases[i] for i in hidden] + [pk.b],
            [messages[i] for i in hidden] + [self.s - r],
            n,
        )
        return SelectiveDisclosure(
            commitment=commitment,
            r=r,
            e=self.e,
            v=self.v,
            disclosed={i: messages[i] for i in sorted(disclosed_indices)},
        )


@attr.s
class SelectiveDisclosure:
    """
    What the holder sends when revealing only some messages.

    ``commitment`` binds the hidden messages and :math:`s - r`; ``disclosed`` maps message indices
    to revealed values.
    """

    commitment = attr.ib()
    r = attr.ib()
    e = attr.ib()
    v = attr.ib()
    disclosed = attr.ib(factory=dict)

    def verify(self, pk):
        """Check the disclosure against the public key."""
        return verify_selective(
            self.commitment, self.disclosed, self.r, self.e, self.v, pk
        )


def verify_selective(commitment, disclosed, s_prime, e, v, pk):
    r"""
    Check :math:`v^e \equiv C b^{s'} \prod_{i \in D} a_i^{m_i} c \pmod n`.

    Args:
        commitment: :math:`C`, binding the hidden messages.
        disclosed: Mapping from message index to revealed message.
        s_prime: Offset :math:`r` revealed with the commitment.
        e: Signature exponent.
        v: Signature value.
        pk (:py:class:`CLPublicKey`): Signer's public key.

    Returns:
        bool: True if verification succeeded, False otherwise.
    """
    if any(i < 0 or i >= len(pk.message_bases) for i in disclosed):
        return False

    n = pk.n
    indices = sorted(disclosed)
    rhs = _multi_exp(
        [ensure_bn(commitment), pk.b] + [pk.message_bases[i] for i in indices],
        [ensure_bn(1), ensure_bn(s_prime)]
        + [encode_message(disclosed[i]) for i in indices],
        n,
    )
    rhs = rhs.mod_mul(pk.c, n)
    return ensure_bn(v).mod_pow(ensure_bn(e), n) == rhs


@attr.s
class CLPublicKey:
    """
    CL public key: modulus and quadratic-residue bases.

    ``message_bases[i]`` is the base for message ``i``; ``a`` and ``a2`` name the first two.
    """

    n = attr.ib()
    message_bases = attr.ib()
    b = attr.ib()
    c = attr.ib()

    @property
    def a(self):
        return self.message_bases[0]

    @property
    def a2(self):
        if len(self.message_bases) < 2:
            raise ValidationError("Key has a single message base, there is no a2")
        return self.message_bases[1]

    def representation(self, messages, s):
        r"""Compute :math:`\prod a_i^{m_i} b^s c \bmod n`."""
        value = _multi_exp(
            list(self.message_bases[: len(messages)]) + [self.b],
            list(messages) + [ensure_bn(s)],
            self.n,
        )
        return value.mod_mul(self.c, self.n)


@attr.s
class CLSecretKey:
    """
    CL private key: the factorization of the modulus.
    """

    modulus = attr.ib()

    def choose_exponent(
        self, message_bits, rng=None, max_attempts=MAX_PRIME_SEARCH_ATTEMPTS
    ):
        """
        Draw a prime :math:`e` of ``message_bits + 2`` bits, coprime to :math:`\\phi(n)`.

        A prime larger than every prime factor of :math:`\\phi(n)` is always coprime to it; for
        smaller parameters the draw is repeated until it is, at most ``max_attempts`` times.

        Raises:
            PrimeSearchExhaustedError: If no suitable exponent was found.
        """
        rng = get_rng(rng)
        phi = int(self.modulus.phi)
        attempts = 0
        while max_attempts is None or attempts < max_attempts:
            attempts += 1
            e = generate_prime(message_bits + 2, rng=rng, max_attempts=max_attempts)
            if math.gcd(int(e), phi) == 1:
                return e
            logger.debug("Exponent shares a factor with phi(n), drawing again")

        raise PrimeSearchExhaustedError(
            "No {}-bit exponent coprime to phi(n) among {} primes".format(
                message_bits + 2, max_attempts
            )
        )

    def sign(self, pk, messages, e=None, s=None, message_bits=None, rng=None):
        """
        Sign a block of messages.

        Args:
            pk (:py:class:`CLPublicKey`): Matching public key.
            messages: Messages, as big numbers, integers, strings or bytes.
            e: Prime exponent. Drawn with :py:meth:`choose_exponent` if omitted.
            s: Randomizer in :math:`[2n, 3n)`. Drawn uniformly if omitted.
            message_bits: Bit length bound of messages, used when drawing ``e``. Defaults to the
                bit length of :math:`n`.
            rng: Random source.

        Returns:
            :py:class:`CLSignature`

        Raises:
            NotInvertibleError: If ``e`` is given and shares a factor with :math:`\\phi(n)`. Draw
                another exponent and sign again.
            ValidationError: If there are more messages than bases in the key.
        """
        messages = [encode_message(m) for m in messages]
        if len(messages) > len(pk.message_bases):
            raise ValidationError(
                "Key supports {} messages, got {}".format(
                    len(pk.message_bases), len(messages)
                )
            )

        rng = get_rng(rng)
        n = pk.n
        if s is None:
            s = random_in_range(n * 2, n * 3, rng)
        if e is None:
            if message_bits is None:
                message_bits = n.num_bits()
            e = self.choose_exponent(message_bits, rng=rng)
        s, e = ensure_bn(s), ensure_bn(e)

        phi = self.modulus.phi
        if math.gcd(int(e), int(phi)) != 1:
            raise NotInvertibleError("e is not invertible modulo phi(n)")
        e_inv = e.mod_inverse(phi)

        v = pk.representation(messages, s).mod_pow(e_inv, n)
        return CLSignature(s=s, e=e, v=v)


@attr.s
class CLKeypair:
    """
    A CL key pair.
    """

    pk = attr.ib()
    sk = attr.ib()

    @staticmethod
    def generate(
        security_param,
        num_messages=2,
        rng=None,
        max_attempts=MAX_PRIME_SEARCH_ATTEMPTS,
    ):
        """
        Generate a keypair.

        Args:
            security_param: :math:`k`. Both factors of the modulus are safe primes of
                :math:`2k` bits.
            num_messages: Number of messages a signature can cover.
            rng: Random source.
            max_attempts: Candidate ceiling for each safe-prime search.

        Returns:
            :py:class:`CLKeypair`: Keypair.
        """
        if num_messages < 1:
            raise ValueError("A key must support at least one message")

        rng = get_rng(rng)
        modulus = RSAModulus.generate(
            2 * security_param, rng=rng, max_attempts=max_attempts
        )
        n = modulus.n
        *message_bases, b, c = random_quadratic_residues(n, num_messages + 2, rng)
        pk = CLPublicKey(n=n, message_bases=message_bases, b=b, c=c)
        sk = CLSecretKey(modulus=modulus)
        logger.debug(
            "Generated CL keypair: %d-bit modulus, %d message bases",
            n.num_bits(),
            num_messages,
        )
        return CLKeypair(pk=pk, sk=sk)
