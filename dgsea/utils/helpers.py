"""
Helper functions for DGSEA analysis.
"""

import math
from typing import Iterable, Optional, Sequence

import numpy as np

from .errors import InvalidArgumentError


def safe_probability(value: float, default: float = 1.0) -> float:
    """
    Replace a NaN probability by a safe default.
    
    Parameters:
    -----------
    value : float
        Probability that may be NaN
    default : float
        Value used when `value` is NaN
        
    Returns:
    --------
    float
        `value`, or `default` when it is NaN
    """
    
    if value is None or math.isnan(value):
        return default
    return float(value)


def clean_pvalues(pvalues: Iterable[float]) -> np.ndarray:
    """
    Convert p-values to an array with NaN replaced by 1.0 and clipped to [0, 1].
    
    Parameters:
    -----------
    pvalues : Iterable[float]
        Raw p-values
        
    Returns:
    --------
    np.ndarray
        Cleaned p-values
    """
    
    pvalues = np.asarray(list(pvalues), dtype=float)
    pvalues = np.nan_to_num(pvalues, nan=1.0)
    return np.clip(pvalues, 0.0, 1.0)


def require_items(items: Optional[Sequence], name: str) -> Sequence:
    """Raise InvalidArgumentError if `items` is None or empty."""
    if items is None or len(items) == 0:
        raise InvalidArgumentError(f"{name} cannot be empty or null")
    return items


def require_not_none(items: Optional[Sequence], name: str) -> Sequence:
    """Raise InvalidArgumentError if `items` is None."""
    if items is None:
        raise InvalidArgumentError(
            f"Data lists must be initialized before use: {name} is not set"
        )
    return items


def validate_threshold(value: float, name: str = 'pval') -> float:
    """
    Check that a significance threshold lies in [0, 1].
    
    Parameters:
    -----------
    value : float
        Threshold to check
    name : str
        Option name used in the error message
        
    Returns:
    --------
    float
        The validated threshold
    """
    
    if value is None or math.isnan(value) or value < 0 or value > 1:
        raise InvalidArgumentError(
            f"P-value {name} must be between 0.0 and 1.0. Given {name}: {value}"
        )
    return float(value)


def validate_max_count(max_count: int, name: str = 'max_count') -> int:
    """Raise InvalidArgumentError unless max_count is at least 1."""
    if max_count is None or max_count < 1:
        raise InvalidArgumentError(f"{name} needs to be at least 1, got {max_count}")
    return int(max_count)
