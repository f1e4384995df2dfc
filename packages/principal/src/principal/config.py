"""
Principal Configuration
=======================
Defaults for component selection, numeric guards and the eigensolver.
Single source of truth; every stage reads from here unless handed an
explicit config dict.

Usage:
    from principal.config import CONFIG
    threshold = CONFIG['selection']['threshold']

    # YAML override, deep-merged over a copy of CONFIG
    from principal.config import load_config
    cfg = load_config('principal.yaml')
"""

import copy
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml


CONFIG = {

    # =================================================================
    # Component Selection
    # =================================================================
    'selection': {
        # Cumulative variance fraction the selector walks towards
        'threshold': 0.95,
    },

    # =================================================================
    # Numeric Guards
    # =================================================================
    'numeric': {
        # |denominator| at or below this fraction of the largest
        # magnitude involved raises NumericError
        'zero_tolerance': 1e-12,
    },

    # =================================================================
    # Eigensolver
    # =================================================================
    'eigen': {
        # 'auto' = eigh for symmetric input, eig otherwise
        'solver': 'auto',
        'symmetry_tolerance': 1e-10,
    },

    # =================================================================
    # Flattened output
    # =================================================================
    'flatten': {
        'max_components': 5,
    },
}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
    return base


def load_config(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Return a copy of CONFIG, optionally overridden from a YAML file.

    Only sections already present in CONFIG may be overridden; an unknown
    top-level section raises KeyError.
    """
    cfg = copy.deepcopy(CONFIG)
    if path is None:
        return cfg

    with open(path) as f:
        override = yaml.safe_load(f) or {}

    unknown = sorted(set(override) - set(CONFIG))
    if unknown:
        raise KeyError(f"Unknown config section(s): {unknown}. Available: {list(CONFIG)}")

    return _deep_merge(cfg, override)
