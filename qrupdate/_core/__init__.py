"""
Core algorithms (backend-agnostic).
"""

from .methods import (
    DGKS,
    DGKS_ETA,
    ClassicalGramSchmidt,
    ModifiedGramSchmidt,
    OrthogonalizationMethod,
    get_method,
)
from .orthogonalize import orthogonalize_and_normalize

__all__ = [
    "OrthogonalizationMethod",
    "ClassicalGramSchmidt",
    "ModifiedGramSchmidt",
    "DGKS",
    "DGKS_ETA",
    "get_method",
    "orthogonalize_and_normalize",
]
