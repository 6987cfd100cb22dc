"""
Test diagnostic metrics.
"""

import pytest
import numpy as np

from qrupdate.metrics import orthogonality_error, projection_residual, reconstruction_error


class TestMetrics:

    def test_orthogonality_error_of_identity(self):
        assert orthogonality_error(np.eye(5, 3)) == 0.0

    def test_orthogonality_error_complex(self):
        Q = np.eye(4, 2, dtype=np.complex128) * 1j
        assert orthogonality_error(Q) == pytest.approx(0.0, abs=1e-15)

    def test_orthogonality_error_detects_scaling(self):
        Q = np.eye(4, 2) * 2.0
        # diag(Q'Q) = 4, so ||I - Q'Q||_F = sqrt(2) * 3
        assert orthogonality_error(Q) == pytest.approx(3.0 * np.sqrt(2.0))

    def test_projection_residual(self):
        V = np.eye(4, 2)
        assert projection_residual(V, np.array([0.0, 0.0, 1.0, 0.0])) == 0.0
        assert projection_residual(V, np.array([3.0, 4.0, 0.0, 0.0])) == pytest.approx(5.0)
        assert projection_residual(np.zeros((4, 0)), np.ones(4)) == 0.0

    def test_reconstruction_error(self):
        V = np.eye(3, 1)
        v = np.array([2.0, 0.0, 3.0])
        q = np.array([0.0, 0.0, 1.0])
        assert reconstruction_error(V, q, np.array([2.0]), 3.0, v) == pytest.approx(0.0)
        assert reconstruction_error(V, q, np.array([1.0]), 3.0, v) == pytest.approx(1.0 / np.sqrt(13.0))
