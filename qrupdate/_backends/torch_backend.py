"""
PyTorch backend.

Operates on torch tensors on whatever device they already live on
(CPU, CUDA or MPS); tensors are never moved or converted.
"""

from typing import Any

from .base import BackendBase


class TorchBackend(BackendBase):
    """
    PyTorch backend.

    Same primitives as the CPU backend, expressed with in-place tensor ops.
    Complex tensors use the conjugate transpose (``V.mH``).
    """

    def __init__(self):
        """Initialize PyTorch backend."""
        self.name = "torch"

        try:
            import torch
            self.torch = torch
        except ImportError:
            raise ImportError(
                "PyTorch required for torch backend. "
                "Install: pip install torch"
            )

        self._real_dtypes = {
            torch.float32: torch.float32,
            torch.float64: torch.float64,
            torch.complex64: torch.float32,
            torch.complex128: torch.float64,
        }

    def is_array(self, x: Any) -> bool:
        return isinstance(x, self.torch.Tensor)

    def check_dtype(self, x, name: str) -> None:
        if x.dtype not in self._real_dtypes:
            raise ValueError(
                f"{name} has dtype {x.dtype}; expected one of "
                f"torch.float32, torch.float64, torch.complex64, torch.complex128"
            )

    def shares_memory(self, a, b) -> bool:
        """
        Overlap test on the address ranges spanned by two tensors.

        Like ``numpy.may_share_memory``: interleaved strided views of one
        storage are reported as overlapping.
        """
        if a.device != b.device or a.numel() == 0 or b.numel() == 0:
            return False
        a_start, a_end = self._extent(a)
        b_start, b_end = self._extent(b)
        return a_start < b_end and b_start < a_end

    @staticmethod
    def _extent(t):
        span = 1 + sum((size - 1) * stride for size, stride in zip(t.shape, t.stride()))
        start = t.data_ptr()
        return start, start + span * t.element_size()

    def tiny(self, x) -> float:
        return float(self.torch.finfo(self._real_dtypes[x.dtype]).tiny)

    def adjoint_matvec(self, V, w, out) -> None:
        out.copy_(self.torch.mv(V.mH, w))

    def matvec_sub(self, V, x, w) -> None:
        w.addmv_(V, x, alpha=-1)

    def dot(self, x, y):
        return self.torch.vdot(x, y)

    def axpy(self, a, x, y) -> None:
        y.add_(a * x)

    def norm(self, x) -> float:
        return float(self.torch.linalg.vector_norm(x).item())

    def rdiv(self, x, s: float) -> None:
        if x.is_complex():
            # Real and imaginary parts separately; a complex division
            # by a subnormal overflows
            self.torch.view_as_real(x).div_(s)
        else:
            x.div_(s)

    def get_device_info(self) -> dict:
        """Get backend information."""
        torch = self.torch
        devices = ['cpu']
        if torch.cuda.is_available():
            devices.append('cuda')
        if hasattr(torch.backends, 'mps') and torch.backends.mps.is_available():
            devices.append('mps')
        return {
            'backend': 'torch',
            'device': ', '.join(devices),
            'library': f'PyTorch {torch.__version__}',
        }
