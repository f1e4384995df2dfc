"""
Dense matrix stages: validation, centering, covariance, min-max
normalization and projection.

Every function returns a new array. Inputs are never modified.
"""

import numpy as np
from typing import Any, Dict, Optional

from principal.config import CONFIG
from principal.errors import DimensionMismatch, InvalidInput, NumericError


def as_matrix(data: Any, name: str = 'matrix', allow_empty: bool = False) -> np.ndarray:
    """
    Convert array-like input to a 2D float64 array.

    A 1D input is treated as a single row. Raises InvalidInput for ragged
    or non-numeric input, for more than two dimensions, for non-finite
    entries, and (unless allow_empty) for zero rows or zero columns.
    """
    try:
        matrix = np.array(data, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise InvalidInput(f"{name} must be a rectangular numeric array: {exc}") from exc

    if matrix.ndim == 1:
        matrix = matrix.reshape(1, -1)
    if matrix.ndim != 2:
        raise InvalidInput(f"{name} must be 2D, got {matrix.ndim}D", shape=matrix.shape)

    if not allow_empty and (matrix.shape[0] == 0 or matrix.shape[1] == 0):
        raise InvalidInput(f"{name} is empty", shape=matrix.shape)
    if not np.all(np.isfinite(matrix)):
        raise InvalidInput(f"{name} contains NaN or inf", shape=matrix.shape)

    return matrix


def zero_centered(dataset: Any) -> np.ndarray:
    """Subtract each feature's (column's) mean from every sample."""
    matrix = as_matrix(dataset, name='dataset')
    return matrix - matrix.mean(axis=0)


def covariance(centered: Any) -> np.ndarray:
    """
    Sample covariance of an already-centered matrix.

    Parameters
    ----------
    centered : array-like
        (n_samples, n_features) matrix with zero column means.

    Returns
    -------
    np.ndarray
        (n_features, n_features) symmetric matrix, entry (i, j) =
        sum over rows of centered[r, i] * centered[r, j], divided by n - 1.
    """
    matrix = as_matrix(centered, name='centered matrix')
    n = matrix.shape[0]
    if n < 2:
        raise NumericError(
            "covariance needs at least 2 samples (n - 1 divisor is zero)",
            shape=matrix.shape,
        )

    cov = (matrix.T @ matrix) / (n - 1)
    # Exact symmetry; the product can drift by a rounding step
    return (cov + cov.T) / 2.0


def normalized(matrix: Any, config: Optional[Dict[str, Any]] = None) -> np.ndarray:
    """
    Global min-max normalization: (x - min) / (max - min).

    Uses the minimum and maximum over all elements. A matrix whose range is
    negligible next to its largest magnitude raises NumericError.
    """
    cfg = config or CONFIG
    values = as_matrix(matrix, name='matrix')

    lo = float(values.min())
    hi = float(values.max())
    span = hi - lo
    scale = max(abs(lo), abs(hi))
    if span <= cfg['numeric']['zero_tolerance'] * scale:
        raise NumericError(
            f"cannot normalize a constant matrix (min == max == {lo})",
            shape=values.shape,
        )

    return (values - lo) / span


def multiply(left: Any, right: Any) -> np.ndarray:
    """Matrix product left @ right. Either side may have zero columns."""
    a = as_matrix(left, name='left matrix', allow_empty=True)
    b = as_matrix(right, name='right matrix', allow_empty=True)
    if a.shape[1] != b.shape[0]:
        raise DimensionMismatch(
            f"inner dimensions disagree: {a.shape} @ {b.shape}",
            shape=(a.shape[0], a.shape[1], b.shape[0], b.shape[1]),
        )
    return a @ b
