"""
Error types for the reduction pipeline.

All errors subclass ValueError, so callers already catching
(np.linalg.LinAlgError, ValueError) keep working.
"""

from typing import Optional, Tuple


class PCAError(ValueError):
    """Base error for the reduction pipeline."""

    def __init__(self, message: str, shape: Optional[Tuple[int, ...]] = None):
        self.message = message
        self.shape = shape
        super().__init__(self.message)


class InvalidInput(PCAError):
    """Empty matrix, zero rows, ragged rows or non-numeric entries."""


class DimensionMismatch(PCAError):
    """Inner dimensions disagree."""


class NumericError(PCAError):
    """Degenerate input would divide by zero."""
