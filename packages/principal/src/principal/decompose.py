"""
PCA reduction pipeline.

zero-center → covariance → eigendecompose → (normalize) → select → project

The PCA class exposes each stage and the two public entry points, pca()
and pca_normalized(). compute_reduction() and compute_reduction_batch()
wrap it in the dict-returning style of the other compute packages and
always use a fresh instance per matrix.

Usage:
    from principal import PCA

    pca = PCA(threshold=0.95)
    reduced = pca.pca_normalized(data)     # (n_samples, k)
    k = pca.principal_component_num

Cached eigen target:
    Each PCA instance keeps the first matrix handed to the eigensolver and
    reuses it for every later call, whatever matrix that call passes in.
    Reusing one instance across different datasets therefore reduces every
    dataset after the first against the first dataset's covariance. Use one
    instance per dataset (or compute_reduction) when inputs differ.
"""

import logging
import threading

import numpy as np
from typing import Any, Dict, List, Optional, Sequence, Tuple

from principal.config import CONFIG
from principal.eigen import eigendecomposition
from principal.matrix import (
    as_matrix,
    covariance,
    multiply as _multiply,
    normalized as _normalized,
    zero_centered as _zero_centered,
)
from principal.selection import Selection, select_principal_components


logger = logging.getLogger(__name__)


class PCA:
    """
    Threshold-driven principal component analysis.

    Parameters
    ----------
    threshold : float, optional
        Cumulative variance fraction for component selection.
        Default: CONFIG['selection']['threshold'] (0.95).
    config : dict, optional
        Full config dict (see principal.config). Default: CONFIG.

    Only the cached eigen target is thread-safe. `selection` and
    `principal_component_num` describe the most recent selection on the
    instance, so concurrent reduce() calls may read each other's count.
    """

    normalized = staticmethod(_normalized)

    def __init__(
        self,
        threshold: Optional[float] = None,
        config: Optional[Dict[str, Any]] = None,
    ):
        self.config = config or CONFIG
        if threshold is None:
            threshold = self.config['selection']['threshold']
        self.threshold = float(threshold)
        self.selection: Optional[Selection] = None
        self._matrix: Optional[np.ndarray] = None
        self._lock = threading.Lock()

    @property
    def principal_component_num(self) -> int:
        """Component count of the last selection (0 before any run)."""
        return self.selection.count if self.selection is not None else 0

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    def zero_centered(self, matrix: Any) -> np.ndarray:
        return _zero_centered(matrix)

    def cov(self, matrix: Any) -> np.ndarray:
        return covariance(matrix)

    def eigenvalue_matrix(self, matrix: Any) -> np.ndarray:
        """Diagonal eigenvalue matrix of the cached eigen target."""
        return self._decompose(matrix)[0]

    def eigenvector_matrix(self, matrix: Any) -> np.ndarray:
        """Eigenvector matrix (columns) of the cached eigen target."""
        return self._decompose(matrix)[1]

    def principal_component(self, eigenvalue_matrix: Any, eigenvector_matrix: Any) -> np.ndarray:
        """Select the principal basis, (k, n_features), and record the selection."""
        self.selection = select_principal_components(
            eigenvalue_matrix,
            eigenvector_matrix,
            threshold=self.threshold,
            config=self.config,
        )
        return self.selection.basis

    def multiply(self, left: Any, right: Any) -> np.ndarray:
        return _multiply(left, right)

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def reduce(self, dataset: Any, normalize: bool = False) -> np.ndarray:
        """
        Reduce a dataset to its principal components.

        Parameters
        ----------
        dataset : array-like
            (n_samples, n_features) matrix.
        normalize : bool
            Min-max normalize the eigenvalue and eigenvector matrices
            before selection.

        Returns
        -------
        np.ndarray
            (n_samples, k) projection of the original (uncentered) dataset
            onto the selected basis.
        """
        data = as_matrix(dataset, name='dataset')
        centered = _zero_centered(data)
        cov = covariance(centered)

        eigenvalues, eigenvectors = self._decompose(cov)
        if normalize:
            eigenvalues = _normalized(eigenvalues, config=self.config)
            eigenvectors = _normalized(eigenvectors, config=self.config)

        basis = self.principal_component(eigenvalues, eigenvectors)
        reduced = _multiply(data, basis.T)

        logger.debug("reduced %s -> %s (normalize=%s)", data.shape, reduced.shape, normalize)
        return reduced

    def pca(self, dataset: Any) -> np.ndarray:
        """Reduce without normalization."""
        return self.reduce(dataset, normalize=False)

    def pca_normalized(self, dataset: Any) -> np.ndarray:
        """Reduce with min-max normalization of the eigen matrices."""
        return self.reduce(dataset, normalize=True)

    # ------------------------------------------------------------------
    # Cached eigen target
    # ------------------------------------------------------------------

    def _get_or_create_matrix(self, matrix: Any) -> np.ndarray:
        """Return the cached eigen target, storing `matrix` on first use."""
        with self._lock:
            if self._matrix is None:
                self._matrix = as_matrix(matrix, name='matrix').copy()
            elif not np.array_equal(self._matrix, matrix):
                logger.warning(
                    "PCA instance reused with a different matrix; using the cached %s target",
                    self._matrix.shape,
                )
            return self._matrix

    def _decompose(self, matrix: Any) -> Tuple[np.ndarray, np.ndarray]:
        return eigendecomposition(self._get_or_create_matrix(matrix), config=self.config)


def compute_reduction(
    dataset: Any,
    threshold: Optional[float] = None,
    normalize: bool = False,
    config: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Reduce one dataset with a fresh PCA instance.

    Parameters
    ----------
    dataset : array-like
        (n_samples, n_features) matrix.
    threshold : float, optional
        Cumulative variance fraction. Default from config.
    normalize : bool
        Min-max normalize the eigen matrices before selection.

    Returns
    -------
    dict with:
        reduced : np.ndarray — (n_samples, k) projection
        basis : np.ndarray — (k, n_features) selected eigenvectors
        eigenvalues : np.ndarray — all eigenvalues, sorted descending
        explained_ratio : np.ndarray — eigenvalue / total per eigenvalue
        cumulative_ratio : np.ndarray — running sum of explained_ratio
        total_variance : float — signed sum of eigenvalues
        principal_component_num : int — k
        n_samples : int
        n_features : int
        normalized : bool
    """
    data = as_matrix(dataset, name='dataset')
    pca = PCA(threshold=threshold, config=config)
    reduced = pca.reduce(data, normalize=normalize)
    selection = pca.selection

    return {
        'reduced': reduced,
        'basis': selection.basis,
        'eigenvalues': selection.eigenvalues,
        'explained_ratio': selection.explained_ratio,
        'cumulative_ratio': selection.cumulative_ratio,
        'total_variance': selection.total,
        'principal_component_num': selection.count,
        'n_samples': data.shape[0],
        'n_features': data.shape[1],
        'normalized': normalize,
    }


def compute_reduction_batch(
    datasets: Sequence[Any],
    indices: Optional[List[int]] = None,
    threshold: Optional[float] = None,
    normalize: bool = False,
    config: Optional[Dict[str, Any]] = None,
) -> List[Dict[str, Any]]:
    """
    Reduce a sequence of datasets, one fresh PCA instance each.

    Parameters
    ----------
    datasets : sequence of array-like
        Each (n_samples, n_features).
    indices : list of int, optional
        Index (I) recorded on each result. Default: 0..len-1.

    Returns
    -------
    list of dict, one per dataset (see compute_reduction), each with 'I'.
    """
    if indices is None:
        indices = list(range(len(datasets)))

    results = []
    for dataset, idx in zip(datasets, indices):
        result = compute_reduction(dataset, threshold=threshold, normalize=normalize, config=config)
        result['I'] = idx
        results.append(result)

    return results
