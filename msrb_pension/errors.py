# msrb_pension/errors.py
"""
Exception types raised by the benefit engine.

Both concrete errors also inherit from a builtin (ValueError / LookupError) so
callers that only know the builtins can still catch them.
"""


class PensionError(Exception):
    """Base class for benefit engine errors."""

    pass


class InvalidInputError(PensionError, ValueError):
    """Malformed or missing caller input (e.g. Option C without a beneficiary age)."""

    pass


class FactorLookupError(PensionError, LookupError):
    """An age/group/era combination falls outside the statutory tables."""

    pass
