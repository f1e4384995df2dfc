"""
Principal component selection.

Orders eigenpairs by eigenvalue (descending) and keeps a prefix chosen by
walking the cumulative variance ratio against a threshold.

The walk tests the ratio accumulated BEFORE the current eigenvalue:

    cumulative = 0
    for each eigenvalue, largest first:
        if cumulative / total <= threshold:
            cumulative += eigenvalue
            count += 1

So the first component is always kept for threshold >= 0, and the
component that crosses the threshold is kept as well. total is the signed
sum of all eigenvalues.

Ties are broken by original position (stable sort); equal eigenvalues
keep every eigenvector.
"""

import logging
from dataclasses import dataclass

import numpy as np
from typing import Any, Dict, Optional

from principal.config import CONFIG
from principal.errors import DimensionMismatch, NumericError
from principal.matrix import as_matrix


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Selection:
    """Outcome of one selection pass."""
    basis: np.ndarray        # (count, n_features) selected eigenvectors as rows
    eigenvalues: np.ndarray  # all eigenvalues, sorted descending
    order: np.ndarray        # original column index of each sorted eigenvalue
    total: float             # signed sum of all eigenvalues
    count: int               # principal component count

    @property
    def selected_eigenvalues(self) -> np.ndarray:
        return self.eigenvalues[:self.count]

    @property
    def explained_ratio(self) -> np.ndarray:
        return self.eigenvalues / self.total

    @property
    def cumulative_ratio(self) -> np.ndarray:
        return np.cumsum(self.explained_ratio)


def extract_diagonal(matrix: Any) -> np.ndarray:
    """Leading min(rows, cols) diagonal entries."""
    return np.diagonal(as_matrix(matrix, name='eigenvalue matrix')).copy()


def select_principal_components(
    eigenvalue_matrix: Any,
    eigenvector_matrix: Any,
    threshold: Optional[float] = None,
    config: Optional[Dict[str, Any]] = None,
) -> Selection:
    """
    Select the principal basis from an eigendecomposition.

    Parameters
    ----------
    eigenvalue_matrix : array-like
        Matrix whose diagonal holds the eigenvalues. Only the diagonal is read.
    eigenvector_matrix : array-like
        Matrix whose columns are the eigenvectors, aligned with the diagonal.
    threshold : float, optional
        Cumulative variance fraction. Defaults to CONFIG['selection']['threshold'].

    Returns
    -------
    Selection
    """
    cfg = config or CONFIG
    if threshold is None:
        threshold = cfg['selection']['threshold']

    values = extract_diagonal(eigenvalue_matrix)
    vectors = as_matrix(eigenvector_matrix, name='eigenvector matrix').T
    if vectors.shape[0] < len(values):
        raise DimensionMismatch(
            f"{len(values)} eigenvalues but only {vectors.shape[0]} eigenvectors",
            shape=vectors.shape,
        )
    vectors = vectors[:len(values)]

    order = np.argsort(-values, kind='stable')
    ordered = values[order]

    total = float(np.sum(values))
    scale = max(float(np.max(np.abs(values))), np.finfo(np.float64).tiny)
    if abs(total) <= cfg['numeric']['zero_tolerance'] * scale:
        raise NumericError(f"total variance is zero ({total}); nothing to select")

    if threshold <= 0:
        logger.warning("threshold %s <= 0 selects at most one component", threshold)

    cumulative = 0.0
    count = 0
    for value in ordered:
        if cumulative / total > threshold:
            # cumulative only moves when the test passes, so no later value can pass
            break
        cumulative += value
        count += 1

    logger.debug("selected %d of %d components (cumulative %.6g / total %.6g)",
                 count, len(values), cumulative, total)

    return Selection(
        basis=vectors[order[:count]],
        eigenvalues=ordered,
        order=order,
        total=total,
        count=count,
    )
