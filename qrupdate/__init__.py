"""
qrupdate: extend an orthonormal basis by one vector.

Classical Gram-Schmidt, modified Gram-Schmidt and DGKS (repeated classical
Gram-Schmidt) over NumPy arrays or torch tensors, real or complex.

Copyright (C) 2024 SGCX
Licensed under GPL-3.0
"""

__version__ = "1.0.0"

# Import main user-facing API
from ._core import (
    DGKS,
    ClassicalGramSchmidt,
    ModifiedGramSchmidt,
    OrthogonalizationMethod,
    get_method,
    orthogonalize_and_normalize,
)
from ._utils import DegenerateResidualWarning

# Import backend utilities (for advanced users)
from ._backends import get_backend, list_available_backends

__all__ = [
    'orthogonalize_and_normalize',
    'OrthogonalizationMethod',
    'ClassicalGramSchmidt',
    'ModifiedGramSchmidt',
    'DGKS',
    'get_method',
    'DegenerateResidualWarning',
    'get_backend',
    'list_available_backends',
]
