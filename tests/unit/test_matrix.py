import numpy as np
import pytest

from mictk.core.matrix import Matrix
from mictk.errors import ShapeMismatch


def test_default_matrix_is_empty():
    m = Matrix()
    assert m.shape == (0, 0)
    assert m.size == 0
    m.elementwise_function(lambda e: e + 1)
    assert m.shape == (0, 0)


def test_negative_dimensions_rejected():
    with pytest.raises(ValueError):
        Matrix(-1, 2)


def test_assign_resizes():
    m = Matrix(2, 2)
    m.assign(np.ones((3, 4)))
    assert m.shape == (3, 4)
    assert m.dtype == np.float32


def test_norm_rand_real_reproducible_with_seed():
    a = Matrix(50, 40, seed=3)
    b = Matrix(50, 40, seed=3)
    a.norm_rand_real(2.0, 0.5)
    b.norm_rand_real(2.0, 0.5)
    np.testing.assert_array_equal(a.values, b.values)
    assert a.shape == (50, 40)
    assert abs(float(a.values.mean()) - 2.0) < 0.05
    assert abs(float(a.values.std()) - 0.5) < 0.05


def test_consecutive_random_calls_differ():
    m = Matrix(4, 4, seed=0)
    m.uni_rand_real()
    first = m.values.copy()
    m.uni_rand_real()
    assert not np.array_equal(first, m.values)


def test_uni_rand_real_range():
    m = Matrix(100, 100)
    m.uni_rand_real(-2.0, 3.0, rng=np.random.default_rng(1))
    assert m.values.min() >= -2.0
    assert m.values.max() < 3.0


def test_elementwise_function_with_lambda_and_ufunc():
    m = Matrix.from_array([[1.0, -4.0], [9.0, 16.0]])
    m.elementwise_function(lambda e: e * 2)
    np.testing.assert_allclose(m.values, [[2.0, -8.0], [18.0, 32.0]])
    m.elementwise_function(np.abs)
    np.testing.assert_allclose(m.values, [[2.0, 8.0], [18.0, 32.0]])


def test_elementwise_function_scalar():
    m = Matrix.from_array([[1.0, 2.0], [3.0, 4.0]])
    m.elementwise_function_scalar(lambda e, s: e - s, 1.5)
    np.testing.assert_allclose(m.values, [[-0.5, 0.5], [1.5, 2.5]])


def test_elementwise_function_matrix():
    m = Matrix.from_array([[1.0, 2.0], [3.0, 4.0]])
    other = Matrix.from_array([[10.0, 20.0], [30.0, 40.0]])
    m.elementwise_function_matrix(lambda a, b: a * b, other)
    np.testing.assert_allclose(m.values, [[10.0, 40.0], [90.0, 160.0]])


def test_elementwise_function_matrix_shape_mismatch_leaves_data_untouched():
    m = Matrix.from_array(np.ones((2, 2)))
    other = Matrix.from_array(np.zeros((3, 3)))
    with pytest.raises(ShapeMismatch):
        m.elementwise_function_matrix(lambda a, b: a + b, other)
    np.testing.assert_array_equal(m.values, np.ones((2, 2)))


def test_column_vector_function_indexes_by_row():
    m = Matrix(3, 2)
    m.matrix_column_vector_function(lambda e, v: e + v, [1.0, 2.0, 3.0])
    np.testing.assert_allclose(m.values, [[1.0, 1.0], [2.0, 2.0], [3.0, 3.0]])


def test_row_vector_function_indexes_by_column():
    m = Matrix(2, 3)
    m.matrix_row_vector_function(np.add, np.array([1.0, 2.0, 3.0]))
    np.testing.assert_allclose(m.values, [[1.0, 2.0, 3.0], [1.0, 2.0, 3.0]])


def test_vector_functions_reject_wrong_length():
    m = Matrix(2, 3)
    with pytest.raises(ShapeMismatch):
        m.matrix_column_vector_function(np.add, [1.0, 2.0, 3.0])
    with pytest.raises(ShapeMismatch):
        m.matrix_row_vector_function(np.add, [1.0, 2.0])


def test_repeat_vector_sets_every_column():
    m = Matrix(3, 5)
    v = np.array([0.25, -1.0, 7.0], dtype=np.float32)
    m.repeat_vector(v)
    for col in range(m.cols):
        np.testing.assert_array_equal(m.values[:, col], v)


def test_repeat_vector_accepts_column_matrix():
    m = Matrix(2, 2)
    m.repeat_vector(Matrix.from_array([[1.0], [2.0]]))
    np.testing.assert_array_equal(m.values, [[1.0, 1.0], [2.0, 2.0]])
    with pytest.raises(ShapeMismatch):
        m.repeat_vector([1.0, 2.0, 3.0])


def test_integer_matrix_keeps_dtype():
    m = Matrix(2, 2, dtype=np.int64)
    m.elementwise_function_scalar(lambda e, s: e + s, 3)
    assert m.dtype == np.int64
    np.testing.assert_array_equal(m.values, np.full((2, 2), 3))


def test_copy_from_checks_shape():
    m = Matrix(2, 1)
    m.copy_from(np.array([[1.0], [2.0]]))
    assert m[1, 0] == 2.0
    with pytest.raises(ShapeMismatch):
        m.copy_from(np.zeros((1, 2)))


def test_array_copy_does_not_alias_backing_store():
    m = Matrix(2, 2)
    copied = np.array(m)
    copied[0, 0] = 5.0
    assert m[0, 0] == 0.0
    converted = np.array(m, dtype=np.float64)
    converted[1, 1] = 3.0
    assert m[1, 1] == 0.0
    # asarray still shares memory with the matrix.
    np.asarray(m)[0, 1] = 2.0
    assert m[0, 1] == 2.0
