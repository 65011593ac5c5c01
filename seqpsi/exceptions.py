"""
Exceptions and warnings raised by seqpsi.

Validation errors derive from ``ValueError`` so callers that only know the
standard library still catch them.
"""

from typing import Optional, Tuple


class PsiError(Exception):
    """Base class for all seqpsi errors."""


class InvalidMethod(PsiError, ValueError):
    """Unrecognized distance metric name."""


class DimensionMismatch(PsiError, ValueError):
    """Two samples being compared have a different number of variables."""


class InsufficientGroups(PsiError, ValueError):
    """Fewer than two sequences were supplied."""


class InvalidInput(PsiError, ValueError):
    """Sample values lie outside the domain of the chosen metric."""


class DegenerateAutosum(PsiError, ZeroDivisionError):
    """Combined autosum of a sequence pair is zero, so psi is undefined."""

    def __init__(self, message: str, pair: Optional[Tuple[str, str]] = None):
        super().__init__(message)
        self.pair = pair


class RaggedSequenceWarning(UserWarning):
    """Two compared sequences have very different numbers of samples."""
