"""Error taxonomy for the exact-arithmetic core.

Every error is an immediate failure of the call: the core never retries and
never hands back a partial result.
"""

from __future__ import annotations


class RepStabilityError(Exception):
    """Base class for errors raised by rep_stability."""


class DivisionByZero(RepStabilityError, ZeroDivisionError):
    """Zero denominator in a rational, or division by the zero polynomial."""


class InvalidArgument(RepStabilityError, ValueError):
    """Malformed input: bad partition data, negative combinatorial arguments,
    mismatched term/coefficient lengths, or mismatched character sizes."""
