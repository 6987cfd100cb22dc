"""
Abstract base class for linear-algebra backends.

Defines the primitives the orthogonalization kernels are written against.
"""

from abc import ABC, abstractmethod
from typing import Any


class BackendBase(ABC):
    """
    Abstract base class for all backends.

    A backend operates on its own array type (NumPy arrays, torch tensors)
    and never converts between them. All in-place primitives write into
    the argument they are given.
    """

    name = "base"

    @abstractmethod
    def is_array(self, x: Any) -> bool:
        """Whether `x` is an array this backend can operate on."""
        pass

    @abstractmethod
    def check_dtype(self, x: Any, name: str) -> None:
        """Raise ValueError unless `x` has a real or complex floating dtype."""
        pass

    @abstractmethod
    def shares_memory(self, a: Any, b: Any) -> bool:
        """Whether `a` and `b` overlap in memory."""
        pass

    @abstractmethod
    def tiny(self, x: Any) -> float:
        """Smallest positive normal number of the real type underlying `x`."""
        pass

    def ncols(self, V: Any) -> int:
        return V.shape[1]

    def column(self, V: Any, i: int) -> Any:
        """View of column `i` of `V`."""
        return V[:, i]

    @abstractmethod
    def adjoint_matvec(self, V: Any, w: Any, out: Any) -> None:
        """
        out <- V^H w

        Parameters
        ----------
        V : array, shape (n, m)
        w : array, shape (n,)
        out : array, shape (m,)
            Overwritten.
        """
        pass

    @abstractmethod
    def matvec_sub(self, V: Any, x: Any, w: Any) -> None:
        """w <- w - V x"""
        pass

    @abstractmethod
    def dot(self, x: Any, y: Any) -> Any:
        """Conjugate inner product x^H y as a scalar."""
        pass

    @abstractmethod
    def axpy(self, a: Any, x: Any, y: Any) -> None:
        """y <- y + a x"""
        pass

    @abstractmethod
    def norm(self, x: Any) -> float:
        """Euclidean norm as a Python float."""
        pass

    @abstractmethod
    def rdiv(self, x: Any, s: float) -> None:
        """
        x <- x / s

        Division by zero must produce non-finite entries, not raise.
        """
        pass

    @abstractmethod
    def get_device_info(self) -> dict:
        """Get backend information."""
        pass
