"""
Utility functions for DGSEA analysis.
"""

from .errors import (
    DgseaError,
    InvalidArgumentError,
    PathwayNotFoundError,
    DegenerateDataError,
    ParseError,
    FailureKind,
    Outcome
)
from .helpers import (
    safe_probability,
    clean_pvalues,
    validate_threshold,
    validate_max_count
)

__all__ = [
    'DgseaError',
    'InvalidArgumentError',
    'PathwayNotFoundError',
    'DegenerateDataError',
    'ParseError',
    'FailureKind',
    'Outcome',
    'safe_probability',
    'clean_pvalues',
    'validate_threshold',
    'validate_max_count'
]
