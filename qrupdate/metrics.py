"""
Diagnostics for orthonormal bases and orthogonalization results.

All functions take NumPy arrays (or anything ``np.asarray`` accepts) and
return Python floats.
"""

import numpy as np
from scipy.linalg import norm


def orthogonality_error(Q: np.ndarray) -> float:
    """
    Orthogonality error ``||I - Q^H Q||_F``.

    Parameters
    ----------
    Q : ndarray of shape (n, m)
        Basis whose columns should be orthonormal.

    Returns
    -------
    gamma : float
        Frobenius norm of the deviation of ``Q`` from orthonormality.
    """
    Q = np.asarray(Q)
    m = Q.shape[1]
    return float(norm(np.eye(m, dtype=Q.dtype) - Q.conj().T @ Q, 'fro'))


def projection_residual(V: np.ndarray, q: np.ndarray) -> float:
    """Norm of the components of ``q`` along the columns of ``V``, ``||V^H q||``."""
    V = np.asarray(V)
    if V.shape[1] == 0:
        return 0.0
    return float(norm(V.conj().T @ np.asarray(q)))


def reconstruction_error(V: np.ndarray,
                         q: np.ndarray,
                         r: np.ndarray,
                         rho: float,
                         v: np.ndarray) -> float:
    """
    Relative error of ``rho * q + V r`` as a reconstruction of ``v``.

    Parameters
    ----------
    V : ndarray of shape (n, m)
        Basis the vector was orthogonalized against.
    q : ndarray of shape (n,)
        Normalized residual.
    r : ndarray of shape (m,)
        Projection coefficients.
    rho : float
        Residual norm.
    v : ndarray of shape (n,)
        Original vector.

    Returns
    -------
    err : float
        ``||rho q + V r - v|| / max(1, ||v||)``.
    """
    V = np.asarray(V)
    v = np.asarray(v)
    approx = rho * np.asarray(q)
    if V.shape[1]:
        approx = approx + V @ np.asarray(r)
    return float(norm(approx - v) / max(1.0, norm(v)))
