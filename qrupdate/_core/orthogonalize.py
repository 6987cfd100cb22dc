"""
Orthogonalize a vector against an orthonormal basis and normalize it.

Validates arguments and delegates to the method and backend.
"""

from .._backends import get_backend
from .._utils import (
    check_matrix,
    check_no_alias,
    check_same_dtype,
    check_sequence,
    check_target,
    check_vector,
    warn_if_degenerate,
)
from .methods import OrthogonalizationMethod


def orthogonalize_and_normalize(
    basis,
    target_vector,
    method: OrthogonalizationMethod,
    backend=None,
) -> float:
    """
    Orthogonalize `target_vector` in place against the columns of `basis`.

    In exact arithmetic: ``w <- (I - VV')w`` followed by ``w <- w / ||w||``.
    In finite precision rounding errors can occur; how well the result is
    orthogonal to `basis` depends on the method.

    Parameters
    ----------
    basis : array, shape (n, m), or sequence of m arrays of shape (n,)
        Orthonormal columns. Only ModifiedGramSchmidt accepts a sequence.
    target_vector : array, shape (n,)
        Overwritten with the normalized residual.
    method : OrthogonalizationMethod
        ClassicalGramSchmidt, ModifiedGramSchmidt or DGKS. Its projection
        buffer is overwritten with ``basis' * target_vector`` so that
        ``rho * q + basis @ method.r`` reconstructs the original vector.
    backend : str or BackendBase, optional
        Defaults to the backend matching the type of `target_vector`.

    Returns
    -------
    rho : float
        Norm of the residual, i.e. the normalization factor applied.

    Notes
    -----
    A zero or subnormal `rho` means the vector was in the span of `basis`.
    The result is then not finite; a DegenerateResidualWarning is issued
    and no substitute direction is chosen.

    Often in literature the `ModifiedGramSchmidt` method is advocated (in
    iterative solvers like GMRES for instance). However, rounding errors
    can build up in modified Gram-Schmidt, so a stable alternative is
    repeated Gram-Schmidt (`DGKS`).
    """
    if not isinstance(method, OrthogonalizationMethod):
        raise TypeError(
            f"method must be an OrthogonalizationMethod, got {type(method).__name__}"
        )

    if backend is None:
        backend = get_backend('auto', like=target_vector)
    else:
        backend = get_backend(backend)

    w = target_vector
    n = check_target(w, backend)

    is_sequence = not backend.is_array(basis) and isinstance(basis, (list, tuple))
    if is_sequence:
        if not method.accepts_sequence:
            raise TypeError(
                f"{type(method).__name__} needs the basis as a matrix; "
                f"only ModifiedGramSchmidt accepts a sequence of vectors"
            )
        n_basis, m = check_sequence(basis, backend)
        basis_arrays = [(f'basis[{i}]', v) for i, v in enumerate(basis)]
    else:
        n_basis, m = check_matrix(basis, backend)
        basis_arrays = [('basis', basis)]

    if n_basis is not None and n_basis != n:
        raise ValueError(
            f"basis has {n_basis} rows but target_vector has length {n}"
        )

    buffers = method.buffers()
    for name, buf in buffers:
        length = check_vector(buf, backend, name)
        if length != m:
            raise ValueError(
                f"{name} has length {length} but basis has {m} columns"
            )

    check_same_dtype(('target_vector', w), *basis_arrays, *buffers)

    for i, (name, buf) in enumerate(buffers):
        check_no_alias(backend, buf, name, ('target_vector', w), *basis_arrays, *buffers[i + 1:])

    if is_sequence:
        rho = method._orthogonalize_sequence(basis, w, backend)
    else:
        rho = method._orthogonalize(basis, w, backend)

    # Normalize; the norm is already known
    warn_if_degenerate(rho, backend.tiny(w))
    backend.rdiv(w, rho)

    return rho
