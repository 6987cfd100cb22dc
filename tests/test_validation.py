"""
Test argument validation.

Precondition violations fail fast with ValueError / TypeError and leave
the target vector untouched.
"""

import pytest
import numpy as np

from qrupdate import (
    DGKS,
    ClassicalGramSchmidt,
    ModifiedGramSchmidt,
    orthogonalize_and_normalize,
)


n, m = 8, 3


@pytest.fixture
def basis():
    Q, _ = np.linalg.qr(np.random.RandomState(42).randn(n, m))
    return np.ascontiguousarray(Q)


@pytest.fixture
def w():
    return np.random.RandomState(7).randn(n)


class TestShapes:

    def test_buffer_length_mismatch(self, basis, w):
        w_before = w.copy()
        with pytest.raises(ValueError, match="r has length 2 but basis has 3 columns"):
            orthogonalize_and_normalize(basis, w, ClassicalGramSchmidt(np.zeros(2)))
        np.testing.assert_array_equal(w, w_before)

    def test_correction_length_mismatch(self, basis, w):
        with pytest.raises(ValueError, match="correction has length 4"):
            orthogonalize_and_normalize(basis, w, DGKS(np.zeros(m), np.zeros(4)))

    def test_row_mismatch(self, basis):
        with pytest.raises(ValueError, match="basis has 8 rows but target_vector has length 5"):
            orthogonalize_and_normalize(basis, np.ones(5), ModifiedGramSchmidt(np.zeros(m)))

    def test_basis_must_be_2d(self, w):
        with pytest.raises(ValueError, match="2-dimensional"):
            orthogonalize_and_normalize(np.ones(n), w, ClassicalGramSchmidt(np.zeros(1)))

    def test_target_must_be_1d(self, basis):
        with pytest.raises(ValueError, match="1-dimensional"):
            orthogonalize_and_normalize(basis, np.ones((n, 1)), ClassicalGramSchmidt(np.zeros(m)))

    def test_ragged_sequence(self, w):
        vectors = [np.ones(n), np.ones(n - 1)]
        with pytest.raises(ValueError, match=r"basis\[1\] has length 7, expected 8"):
            orthogonalize_and_normalize(vectors, w, ModifiedGramSchmidt(np.zeros(2)))

    def test_sequence_row_mismatch(self):
        vectors = [np.ones(4), np.ones(4)]
        with pytest.raises(ValueError, match="rows"):
            orthogonalize_and_normalize(vectors, np.ones(5), ModifiedGramSchmidt(np.zeros(2)))


class TestDtypes:

    def test_mixed_precision(self, basis, w):
        with pytest.raises(ValueError, match="dtype"):
            orthogonalize_and_normalize(
                basis.astype(np.float32), w, ClassicalGramSchmidt(np.zeros(m))
            )

    def test_real_buffer_for_complex_vector(self, basis):
        w = np.ones(n, dtype=np.complex128)
        with pytest.raises(ValueError, match="r has dtype float64"):
            orthogonalize_and_normalize(
                basis.astype(np.complex128), w, ModifiedGramSchmidt(np.zeros(m))
            )

    def test_integer_vector(self, basis):
        with pytest.raises(ValueError, match="expected one of"):
            orthogonalize_and_normalize(
                basis, np.ones(n, dtype=np.int64), ClassicalGramSchmidt(np.zeros(m))
            )

    def test_half_precision(self):
        V = np.eye(4, 2, dtype=np.float16)
        with pytest.raises(ValueError, match="float16"):
            orthogonalize_and_normalize(
                V, np.ones(4, dtype=np.float16), ClassicalGramSchmidt(np.zeros(2, dtype=np.float16))
            )


class TestAliasing:

    def test_projection_aliases_target(self, basis):
        storage = np.ones(n)
        with pytest.raises(ValueError, match="r shares memory with target_vector"):
            orthogonalize_and_normalize(basis, storage, ClassicalGramSchmidt(storage[:m]))

    def test_projection_aliases_basis(self, basis, w):
        with pytest.raises(ValueError, match="r shares memory with basis"):
            orthogonalize_and_normalize(basis, w, ModifiedGramSchmidt(basis[0, :]))

    def test_projection_aliases_sequence_vector(self, basis, w):
        vectors = [basis[:, i].copy() for i in range(m)]
        r = vectors[2][:m]
        with pytest.raises(ValueError, match=r"r shares memory with basis\[2\]"):
            orthogonalize_and_normalize(vectors, w, ModifiedGramSchmidt(r))

    def test_correction_is_projection(self, basis, w):
        r = np.zeros(m)
        with pytest.raises(ValueError, match="r shares memory with correction"):
            orthogonalize_and_normalize(basis, w, DGKS(r, r))

    def test_correction_aliases_target(self, basis):
        storage = np.ones(n)
        with pytest.raises(ValueError, match="correction shares memory with target_vector"):
            orthogonalize_and_normalize(basis, storage, DGKS(np.zeros(m), storage[-m:]))

    def test_disjoint_views_are_accepted(self, basis, w):
        """Projection and correction may be views of one array."""
        storage = np.zeros(2 * m)
        rho = orthogonalize_and_normalize(basis, w, DGKS(storage[:m], storage[m:]))
        assert rho > 0


class TestArgumentKinds:

    def test_sequence_rejected_by_classical(self, basis, w):
        vectors = [basis[:, i] for i in range(m)]
        with pytest.raises(TypeError, match="only ModifiedGramSchmidt"):
            orthogonalize_and_normalize(vectors, w, ClassicalGramSchmidt(np.zeros(m)))

    def test_sequence_rejected_by_dgks(self, basis, w):
        vectors = [basis[:, i] for i in range(m)]
        with pytest.raises(TypeError, match="needs the basis as a matrix"):
            orthogonalize_and_normalize(vectors, w, DGKS(np.zeros(m), np.zeros(m)))

    def test_target_must_be_array(self, basis):
        with pytest.raises(TypeError, match="target_vector must be an array"):
            orthogonalize_and_normalize(basis, [1.0] * n, ClassicalGramSchmidt(np.zeros(m)))

    def test_buffer_must_be_array(self, basis, w):
        with pytest.raises(TypeError, match="r must be an array"):
            orthogonalize_and_normalize(basis, w, ClassicalGramSchmidt([0.0] * m))

    def test_unknown_method(self, basis, w):
        with pytest.raises(TypeError, match="OrthogonalizationMethod"):
            orthogonalize_and_normalize(basis, w, "dgks")

    def test_read_only_target(self, basis, w):
        w.setflags(write=False)
        with pytest.raises(ValueError, match="read-only"):
            orthogonalize_and_normalize(basis, w, ClassicalGramSchmidt(np.zeros(m)))

    def test_unknown_backend(self, basis, w):
        with pytest.raises(ValueError, match="Unknown backend"):
            orthogonalize_and_normalize(basis, w, ClassicalGramSchmidt(np.zeros(m)), backend='cuda')


class TestDGKSConfiguration:

    @pytest.mark.parametrize("steps", [0, -1])
    def test_steps_at_least_one(self, steps):
        with pytest.raises(ValueError, match="at least 1"):
            DGKS(np.zeros(m), np.zeros(m), steps=steps)

    @pytest.mark.parametrize("steps", [1.5, True, "2"])
    def test_steps_integer(self, steps):
        with pytest.raises(ValueError, match="integer"):
            DGKS(np.zeros(m), np.zeros(m), steps=steps)

    @pytest.mark.parametrize("eta", [0.0, -0.5, float('nan')])
    def test_eta_positive(self, eta):
        with pytest.raises(ValueError, match="eta must be positive"):
            DGKS(np.zeros(m), np.zeros(m), eta=eta)

    def test_numpy_integer_steps(self):
        method = DGKS(np.zeros(m), np.zeros(m), steps=np.int64(3))
        assert method.steps == 3

    def test_defaults(self):
        method = DGKS(np.zeros(m), np.zeros(m))
        assert method.steps == 2
        assert method.eta == pytest.approx(2 ** -0.5)
        assert method.sweeps == 0
