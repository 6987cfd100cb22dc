"""
CPU backend using NumPy + SciPy.

BLAS-2 products go through scipy.linalg.blas; this is the reference backend.
"""

import numpy as np
from scipy.linalg.blas import get_blas_funcs

from .base import BackendBase


SUPPORTED_DTYPES = (np.float32, np.float64, np.complex64, np.complex128)


def _c_ordered(V):
    """Whether gemv should be given V.T to avoid a Fortran-order copy of V."""
    return V.flags.c_contiguous and not V.flags.f_contiguous


class CPUBackend(BackendBase):
    """
    CPU backend using NumPy + SciPy.

    Works in the precision of the arrays it is given (single or double,
    real or complex); nothing is upcast.

    Bases are passed to BLAS without copying when they are Fortran- or
    C-contiguous. A column slice ``Q[:, :j]`` is only contiguous when ``Q``
    is Fortran-ordered, so allocate a growing basis with ``order="F"``.
    """

    def __init__(self):
        self.name = "cpu"

    def is_array(self, x) -> bool:
        return isinstance(x, np.ndarray)

    def check_dtype(self, x: np.ndarray, name: str) -> None:
        if x.dtype.type not in SUPPORTED_DTYPES:
            raise ValueError(
                f"{name} has dtype {x.dtype}; expected one of "
                f"float32, float64, complex64, complex128"
            )

    def shares_memory(self, a: np.ndarray, b: np.ndarray) -> bool:
        return np.shares_memory(a, b)

    def tiny(self, x: np.ndarray) -> float:
        # finfo of a complex dtype describes its real component
        return float(np.finfo(x.dtype).tiny)

    def adjoint_matvec(self, V: np.ndarray, w: np.ndarray, out: np.ndarray) -> None:
        gemv, = get_blas_funcs(("gemv",), (V, w))
        if _c_ordered(V):
            # V.T is Fortran-ordered: V^H w = conj(V^T conj(w))
            if np.iscomplexobj(V):
                out[...] = gemv(1.0, V.T, w.conj()).conj()
            else:
                out[...] = gemv(1.0, V.T, w)
        else:
            # trans=2 is the conjugate transpose
            out[...] = gemv(1.0, V, w, trans=2)

    def matvec_sub(self, V: np.ndarray, x: np.ndarray, w: np.ndarray) -> None:
        gemv, = get_blas_funcs(("gemv",), (V, x))
        if _c_ordered(V):
            w -= gemv(1.0, V.T, x, trans=1)
        else:
            w -= gemv(1.0, V, x)

    def dot(self, x: np.ndarray, y: np.ndarray):
        return np.vdot(x, y)

    def axpy(self, a, x: np.ndarray, y: np.ndarray) -> None:
        y += a * x

    def norm(self, x: np.ndarray) -> float:
        nrm2, = get_blas_funcs(("nrm2",), (x,))
        return float(nrm2(x))

    def rdiv(self, x: np.ndarray, s: float) -> None:
        # Degenerate residuals are reported by the caller
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            if np.iscomplexobj(x):
                # Real and imaginary parts separately; a complex division
                # by a subnormal overflows
                x.real /= s
                x.imag /= s
            else:
                x /= s

    def get_device_info(self) -> dict:
        """Get backend information."""
        import scipy
        return {
            'backend': 'cpu',
            'device': 'cpu',
            'library': f'NumPy {np.__version__}, SciPy {scipy.__version__}',
        }
