"""
Orthogonalization methods.

Each method carries only the scratch buffers it needs; the buffers are
owned by the method value and reused across calls, so a method instance
must not be shared between concurrent calls.

List of methods:
- `ModifiedGramSchmidt`: quite stable, BLAS-1
- `ClassicalGramSchmidt`: very unstable, BLAS-2
- `DGKS`: stable, BLAS-2, ~ twice as much work as `ModifiedGramSchmidt`
  but usually fast.
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, List, Tuple

import numpy as np


# 1 / sqrt(2), as in ARPACK
DGKS_ETA = 1.0 / math.sqrt(2.0)


class OrthogonalizationMethod(ABC):
    """Abstract base class for orthogonalization methods."""

    # Whether the basis may be given as a sequence of vectors
    accepts_sequence = False

    @abstractmethod
    def buffers(self) -> List[Tuple[str, Any]]:
        """Named scratch buffers, projection buffer first."""
        pass

    @abstractmethod
    def _orthogonalize(self, V, w, backend) -> float:
        """
        w <- (I - VV')w in place, fill the projection buffer.

        Returns the norm of the orthogonalized `w`; normalization is left
        to the caller.
        """
        pass


@dataclass
class ClassicalGramSchmidt(OrthogonalizationMethod):
    """
    Use the classical Gram-Schmidt method and store the projection in `r`.

    One pass of two matrix-vector products. Orthogonality can degrade by
    the condition number of ``[V w]``; use only for well-conditioned bases.
    """
    r: Any

    def buffers(self):
        return [('r', self.r)]

    def _orthogonalize(self, V, w, backend) -> float:
        if backend.ncols(V):
            backend.adjoint_matvec(V, w, self.r)
            backend.matvec_sub(V, self.r, w)
        return backend.norm(w)


@dataclass
class ModifiedGramSchmidt(OrthogonalizationMethod):
    """
    Use the modified Gram-Schmidt method and store the projection in `r`.

    The basis may be a matrix (columns are visited through views) or a
    sequence of individually stored vectors.
    """
    r: Any

    accepts_sequence = True

    def buffers(self):
        return [('r', self.r)]

    def _orthogonalize(self, V, w, backend) -> float:
        columns = (backend.column(V, i) for i in range(backend.ncols(V)))
        return self._sweep(columns, w, backend)

    def _orthogonalize_sequence(self, vectors, w, backend) -> float:
        return self._sweep(vectors, w, backend)

    def _sweep(self, columns, w, backend) -> float:
        r = self.r
        # Each coefficient uses the already updated w
        for i, column in enumerate(columns):
            r[i] = backend.dot(column, w)
            backend.axpy(-r[i], column, w)
        return backend.norm(w)


@dataclass
class DGKS(OrthogonalizationMethod):
    """
    Use the repeated, classical Gram-Schmidt method and store the projection in `r`.

    Needs a pre-allocated temporary vector `correction` that is similar to `r`.

    The first application of (I - VV') is unconditional. Another one follows
    only while ``||w|| <= eta * ||last projection||``, and at most `steps`
    applications are made in total. The number made by the last call is
    stored in `sweeps`.

    Usually 'twice is enough': the second application removes the rounding
    errors of the first. If `w` is nearly in the span of `V` more
    applications might be necessary.
    """
    r: Any
    correction: Any
    steps: int = 2
    eta: float = DGKS_ETA
    sweeps: int = field(default=0, init=False)

    def __post_init__(self):
        if isinstance(self.steps, bool) or not isinstance(self.steps, (int, np.integer)):
            raise ValueError(f"steps must be an integer, got {self.steps!r}")
        if self.steps < 1:
            raise ValueError(f"steps must be at least 1, got {self.steps}")
        if not self.eta > 0:
            raise ValueError(f"eta must be positive, got {self.eta!r}")

    def buffers(self):
        return [('r', self.r), ('correction', self.correction)]

    def _orthogonalize(self, V, w, backend) -> float:
        if backend.ncols(V) == 0:
            self.sweeps = 0
            return backend.norm(w)

        backend.adjoint_matvec(V, w, self.r)
        backend.matvec_sub(V, self.r, w)
        nrm = backend.norm(w)
        projection_size = backend.norm(self.r)
        self.sweeps = 1

        # Typically the condition holds at most once
        while self.sweeps < self.steps and not nrm > self.eta * projection_size:
            backend.adjoint_matvec(V, w, self.correction)
            projection_size = backend.norm(self.correction)
            backend.matvec_sub(V, self.correction, w)
            backend.axpy(1, self.correction, self.r)
            nrm = backend.norm(w)
            self.sweeps += 1

        return nrm


_METHOD_NAMES = {
    'cgs': 'classical',
    'classical': 'classical',
    'mgs': 'modified',
    'modified': 'modified',
    'dgks': 'dgks',
}


def get_method(
    name: str,
    size: int,
    dtype=np.float64,
    steps: int = 2,
) -> OrthogonalizationMethod:
    """
    Create an orthogonalization method with freshly allocated buffers.

    Parameters
    ----------
    name : str
        - 'cgs' / 'classical': ClassicalGramSchmidt
        - 'mgs' / 'modified': ModifiedGramSchmidt
        - 'dgks': DGKS
    size : int
        Number of basis columns the buffers are sized for
    dtype : numpy dtype
        Element type of basis and target vector
    steps : int
        Maximum number of sweeps (DGKS only)

    Returns
    -------
    OrthogonalizationMethod

    Examples
    --------
    >>> method = get_method('dgks', V.shape[1], dtype=V.dtype)
    >>> rho = orthogonalize_and_normalize(V, w, method)
    """
    kind = _METHOD_NAMES.get(name)
    if kind is None:
        raise ValueError(
            f"Unknown method: '{name}'\n"
            f"Valid options: {', '.join(repr(n) for n in _METHOD_NAMES)}"
        )

    r = np.zeros(size, dtype=dtype)
    if kind == 'classical':
        return ClassicalGramSchmidt(r)
    elif kind == 'modified':
        return ModifiedGramSchmidt(r)
    return DGKS(r, np.zeros(size, dtype=dtype), steps=steps)
