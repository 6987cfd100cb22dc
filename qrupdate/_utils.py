"""
Utility functions.
"""

import math
import warnings


class DegenerateResidualWarning(RuntimeWarning):
    """The target vector was (numerically) in the span of the basis."""
    pass


def check_vector(x, backend, name='x'):
    """Validate a 1-dimensional array of a supported dtype."""
    if not backend.is_array(x):
        raise TypeError(
            f"{name} must be an array for the {backend.name} backend, "
            f"got {type(x).__name__}"
        )
    if x.ndim != 1:
        raise ValueError(f"{name} must be 1-dimensional")
    backend.check_dtype(x, name)
    return x.shape[0]


def check_target(w, backend, name='target_vector'):
    """Validate the vector that is orthogonalized in place."""
    n = check_vector(w, backend, name)
    flags = getattr(w, 'flags', None)
    if flags is not None and not flags.writeable:
        raise ValueError(f"{name} is read-only")
    return n


def check_matrix(V, backend, name='basis'):
    """Validate a 2-dimensional basis; returns its shape."""
    if not backend.is_array(V):
        raise TypeError(
            f"{name} must be an array for the {backend.name} backend, "
            f"got {type(V).__name__}"
        )
    if V.ndim != 2:
        raise ValueError(f"{name} must be 2-dimensional")
    backend.check_dtype(V, name)
    return V.shape


def check_sequence(vectors, backend, name='basis'):
    """Validate a sequence of equal-length vectors; returns (n, m) or (None, 0)."""
    n = None
    for i, v in enumerate(vectors):
        length = check_vector(v, backend, f"{name}[{i}]")
        if n is None:
            n = length
        elif length != n:
            raise ValueError(
                f"{name}[{i}] has length {length}, expected {n}"
            )
    return n, len(vectors)


def check_same_dtype(*named):
    """All (name, array) pairs must share one dtype."""
    (first_name, first), *rest = named
    for name, x in rest:
        if x.dtype != first.dtype:
            raise ValueError(
                f"{name} has dtype {x.dtype} but {first_name} has dtype {first.dtype}"
            )


def check_no_alias(backend, buffer, buffer_name, *others):
    """Raise if `buffer` overlaps any of the (name, array) pairs in `others`."""
    for name, x in others:
        if backend.shares_memory(buffer, x):
            raise ValueError(f"{buffer_name} shares memory with {name}")


def warn_if_degenerate(rho, tiny):
    """Warn when the residual norm cannot be used to normalize."""
    if not math.isfinite(rho) or rho < tiny:
        warnings.warn(
            f"Residual norm {rho!r} is zero, subnormal or non-finite; "
            f"the target vector lies in the span of the basis and "
            f"the normalized result is not finite.",
            DegenerateResidualWarning,
            stacklevel=3
        )
