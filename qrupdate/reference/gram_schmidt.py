"""
Gram-Schmidt orthogonalization without in-place updates.

Plain NumPy, one fresh array per step. Slow but easy to audit; the
in-place kernels are checked against these.
"""

import numpy as np
from typing import Tuple


def classical_gram_schmidt(
    V: np.ndarray,
    v: np.ndarray,
) -> Tuple[np.ndarray, np.ndarray, float]:
    """
    One classical Gram-Schmidt pass.

    Parameters
    ----------
    V : ndarray, shape (n, m)
        Orthonormal columns
    v : ndarray, shape (n,)
        Vector to orthogonalize (not modified)

    Returns
    -------
    q : ndarray, shape (n,)
        Normalized residual
    r : ndarray, shape (m,)
        Projection coefficients V^H v
    rho : float
        Residual norm
    """
    r = V.conj().T @ v
    residual = v - V @ r
    rho = np.linalg.norm(residual)
    return residual / rho, r, float(rho)


def modified_gram_schmidt(
    V: np.ndarray,
    v: np.ndarray,
) -> Tuple[np.ndarray, np.ndarray, float]:
    """
    Modified Gram-Schmidt: project out one column at a time.

    Same arguments and results as `classical_gram_schmidt`.
    """
    m = V.shape[1]
    r = np.zeros(m, dtype=np.result_type(V, v))
    residual = np.array(v, copy=True)
    for i in range(m):
        r[i] = np.vdot(V[:, i], residual)
        residual = residual - r[i] * V[:, i]
    rho = np.linalg.norm(residual)
    return residual / rho, r, float(rho)


def dgks(
    V: np.ndarray,
    v: np.ndarray,
    steps: int = 2,
    eta: float = 1.0 / np.sqrt(2.0),
) -> Tuple[np.ndarray, np.ndarray, float, int]:
    """
    Repeated classical Gram-Schmidt with the DGKS re-orthogonalization test.

    Returns
    -------
    q, r, rho
        As for `classical_gram_schmidt`, `r` accumulated over all passes
    sweeps : int
        Number of passes made (at most `steps`)
    """
    r = V.conj().T @ v
    residual = v - V @ r
    rho = np.linalg.norm(residual)
    projection_size = np.linalg.norm(r)
    sweeps = 1

    for _ in range(steps - 1):
        if rho > eta * projection_size:
            break
        correction = V.conj().T @ residual
        projection_size = np.linalg.norm(correction)
        residual = residual - V @ correction
        r = r + correction
        rho = np.linalg.norm(residual)
        sweeps += 1

    return residual / rho, r, float(rho), sweeps
