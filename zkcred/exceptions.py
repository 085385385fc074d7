"""
Common exception classes.
"""


class PrimeSearchExhaustedError(Exception):
    """No prime found within the allowed number of candidates."""


class NotInvertibleError(Exception):
    """Value has no inverse modulo the given modulus."""


class GeneratorMismatchError(Exception):
    """Commitments were made with different generators."""


class ValidationError(Exception):
    """Error during validation."""
