"""
Reference implementation (NumPy).

Functional versions of the orthogonalization methods, used to validate
the in-place kernels.
"""

from .gram_schmidt import classical_gram_schmidt, modified_gram_schmidt, dgks

__all__ = [
    "classical_gram_schmidt",
    "modified_gram_schmidt",
    "dgks",
]
