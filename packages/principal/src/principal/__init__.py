"""
Principal component reduction package.

Reduces a dense dataset (n_samples × n_features) to the leading
eigenvectors of its covariance, keeping enough components to cover a
configurable fraction of total variance.

Pipeline: zero-center → covariance → eigendecompose → (normalize) →
select → project.
"""

from principal.config import CONFIG, load_config
from principal.decompose import PCA, compute_reduction, compute_reduction_batch
from principal.eigen import eigendecomposition
from principal.errors import DimensionMismatch, InvalidInput, NumericError, PCAError
from principal.flatten import flatten_batch, flatten_result
from principal.matrix import as_matrix, covariance, multiply, normalized, zero_centered
from principal.selection import Selection, extract_diagonal, select_principal_components

__all__ = [
    'PCA',
    'compute_reduction',
    'compute_reduction_batch',
    'zero_centered',
    'covariance',
    'eigendecomposition',
    'extract_diagonal',
    'select_principal_components',
    'Selection',
    'normalized',
    'multiply',
    'as_matrix',
    'flatten_result',
    'flatten_batch',
    'CONFIG',
    'load_config',
    'PCAError',
    'InvalidInput',
    'DimensionMismatch',
    'NumericError',
]
