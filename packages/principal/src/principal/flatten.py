"""
Flatten reduction results to scalar rows.

compute_reduction returns arrays (eigenvalues, explained_ratio) and
matrices (basis, reduced). This module keeps the scalars and spreads the
leading per-component values into numbered keys, one dict per result.
"""

import numpy as np
from typing import Any, Dict, List, Optional

from principal.config import CONFIG


def flatten_result(
    result: Dict[str, Any],
    max_components: Optional[int] = None,
) -> Dict[str, float]:
    """
    Flatten a compute_reduction() result dict to scalar key-value pairs.

    Parameters
    ----------
    result : dict
        Output from compute_reduction().
    max_components : int, optional
        Number of eigenvalues/ratios to include.
        Defaults to CONFIG['flatten']['max_components'].

    Returns
    -------
    dict of {str: float | int}.
    """
    if max_components is None:
        max_components = CONFIG['flatten']['max_components']

    row = {}

    if 'I' in result:
        row['I'] = result['I']

    for key in ['principal_component_num', 'n_samples', 'n_features']:
        val = result.get(key)
        if val is not None:
            row[key] = int(val)

    if result.get('total_variance') is not None:
        row['total_variance'] = float(result['total_variance'])

    eigenvalues = result.get('eigenvalues')
    if eigenvalues is not None:
        for i in range(min(max_components, len(eigenvalues))):
            row[f'eigenvalue_{i}'] = float(eigenvalues[i])

    explained = result.get('explained_ratio')
    if explained is not None:
        cum = 0.0
        for i in range(min(max_components, len(explained))):
            ratio = float(explained[i]) if np.isfinite(explained[i]) else 0.0
            cum += ratio
            row[f'explained_ratio_{i}'] = ratio
            row[f'cumulative_variance_{i}'] = cum

    return row


def flatten_batch(
    results: List[Dict[str, Any]],
    max_components: Optional[int] = None,
) -> List[Dict[str, float]]:
    """Flatten a list of reduction results."""
    return [flatten_result(r, max_components) for r in results]
