"""
Eigendecomposition of a square real matrix.

Thin wrapper over numpy.linalg. Returns the eigenvalues as a diagonal
matrix D and the eigenvectors as the columns of V, aligned by position
(D[i, i] belongs to V[:, i]).

The order of the eigenpairs is whatever the solver produces: eigh is
ascending, eig is unordered. Callers must sort explicitly.
"""

import numpy as np
from typing import Any, Dict, Optional, Tuple

from principal.config import CONFIG
from principal.errors import InvalidInput, NumericError
from principal.matrix import as_matrix


SOLVERS = ('auto', 'eigh', 'eig')


def eigendecomposition(
    matrix: Any,
    solver: Optional[str] = None,
    config: Optional[Dict[str, Any]] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Eigenvalues and eigenvectors of a square real matrix.

    Parameters
    ----------
    matrix : array-like
        (m, m) real matrix.
    solver : str, optional
        "eigh" (symmetric), "eig" (general) or "auto" (eigh when the
        matrix is symmetric within eigen.symmetry_tolerance).
        Defaults to CONFIG['eigen']['solver'].

    Returns
    -------
    (D, V) : tuple of np.ndarray
        D — (m, m) diagonal matrix of eigenvalues.
        V — (m, m) matrix whose columns are the eigenvectors.
    """
    cfg = config or CONFIG
    square = as_matrix(matrix, name='matrix')
    if square.shape[0] != square.shape[1]:
        raise InvalidInput(f"eigendecomposition needs a square matrix, got {square.shape}",
                           shape=square.shape)

    solver = solver or cfg['eigen']['solver']
    if solver not in SOLVERS:
        raise ValueError(f"Unknown eigen solver: {solver}. Available: {list(SOLVERS)}")

    if solver == 'auto':
        tol = cfg['eigen']['symmetry_tolerance']
        solver = 'eigh' if np.allclose(square, square.T, rtol=0.0, atol=tol) else 'eig'

    try:
        if solver == 'eigh':
            values, vectors = np.linalg.eigh(square)
        else:
            values, vectors = np.linalg.eig(square)
            values = np.real(values)
            vectors = np.real(vectors)
    except np.linalg.LinAlgError as exc:
        raise NumericError(f"eigensolver failed: {exc}", shape=square.shape) from exc

    return np.diag(values), vectors
