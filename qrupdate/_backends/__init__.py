"""
Backend selection and management.

Provides one interface over NumPy arrays (CPU, SciPy BLAS) and
torch tensors (any device PyTorch supports).
"""

from typing import Any, Optional, Union
import warnings

from .base import BackendBase

# CPU backend (always available)
try:
    from .cpu_backend import CPUBackend
    CPU_AVAILABLE = True
except ImportError:
    CPU_AVAILABLE = False
    warnings.warn("CPU backend unavailable - installation error!")

# PyTorch backend (optional)
try:
    import torch  # noqa: F401
    from .torch_backend import TorchBackend
    TORCH_AVAILABLE = True
except ImportError:
    TORCH_AVAILABLE = False


_VALID_NAMES = ('auto', 'cpu', 'numpy', 'torch')


def get_backend(
    backend: Union[str, BackendBase] = 'auto',
    like: Optional[Any] = None,
) -> BackendBase:
    """
    Get computational backend.

    Parameters
    ----------
    backend : str or BackendBase
        Backend selection:
        - 'auto': Match the array type of `like`
        - 'cpu' / 'numpy': NumPy arrays with SciPy BLAS
        - 'torch': torch tensors
        A BackendBase instance is returned unchanged.

    like : array or tensor, optional
        Array used by 'auto' to pick the backend. Defaults to CPU.

    Returns
    -------
    BackendBase
        Backend instance

    Examples
    --------
    >>> backend = get_backend('auto', like=w)
    >>> backend = get_backend('cpu')
    >>> backend = get_backend('torch')
    """
    if isinstance(backend, BackendBase):
        return backend

    if backend == 'auto':
        if TORCH_AVAILABLE and like is not None and isinstance(like, torch.Tensor):
            return TorchBackend()
        if not CPU_AVAILABLE:
            raise RuntimeError("No backends available!")
        return CPUBackend()

    elif backend in ('cpu', 'numpy'):
        if not CPU_AVAILABLE:
            raise RuntimeError("CPU backend unavailable!")
        return CPUBackend()

    elif backend == 'torch':
        if not TORCH_AVAILABLE:
            raise RuntimeError(
                "PyTorch backend unavailable.\n"
                "Install: pip install torch"
            )
        return TorchBackend()

    else:
        raise ValueError(
            f"Unknown backend: '{backend}'\n"
            f"Valid options: {', '.join(repr(n) for n in _VALID_NAMES)}"
        )


def list_available_backends() -> list:
    """List names of available backends."""
    backends = []
    if CPU_AVAILABLE:
        backends.append('cpu')
    if TORCH_AVAILABLE:
        backends.append('torch')
    return backends


def print_backend_info():
    """Print detailed backend information (diagnostic)."""
    print("qrupdate Backend Status")
    print("=" * 50)
    print(f"\nAvailable Backends:")
    print(f"  CPU (NumPy/SciPy):   {'✓' if CPU_AVAILABLE else '✗'} - numpy.ndarray")
    print(f"  PyTorch:             {'✓' if TORCH_AVAILABLE else '✗'} - torch.Tensor")

    print(f"\nLibraries:")
    for name in list_available_backends():
        info = get_backend(name).get_device_info()
        print(f"  {name}: {info['library']} (devices: {info['device']})")


# Export main interface
__all__ = [
    'get_backend',
    'list_available_backends',
    'print_backend_info',
    'BackendBase',
    'CPU_AVAILABLE',
    'TORCH_AVAILABLE',
]


if __name__ == "__main__":
    print_backend_info()
