"""
Matrix Ops Tests
================
Shape checks, in-place semantics and the activation strategy
"""

import numpy as np
import pytest

from adaptive_predictor import matrix_ops as mx
from adaptive_predictor.errors import ShapeMismatchError
from adaptive_predictor.matrix_ops import Activation, Matrix


def test_create_with_fill():
    m = mx.create(2, 3, fill=0.0)
    assert m.shape == (2, 3)
    assert np.all(m.data == 0.0)


def test_create_random_range_and_seed():
    a = mx.create(20, 30, rng=np.random.default_rng(1))
    b = mx.create(20, 30, rng=np.random.default_rng(1))
    assert a == b, "Same seed must give same initial weights"
    assert np.all(a.data >= -0.5) and np.all(a.data <= 0.5)
    assert np.std(a.data) > 0.1, "Entries should be drawn independently"


def test_create_rejects_empty_shape():
    with pytest.raises(ShapeMismatchError):
        mx.create(0, 3)


def test_multiply():
    a = Matrix(np.array([[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]]))
    b = Matrix(np.array([[1.0], [1.0]]))
    product = mx.multiply(a, b)
    assert product.shape == (3, 1)
    assert mx.to_list(product) == [3.0, 7.0, 11.0]


def test_multiply_shape_mismatch():
    a = mx.create(2, 3, fill=1.0)
    b = mx.create(2, 3, fill=1.0)
    with pytest.raises(ShapeMismatchError):
        mx.multiply(a, b)


def test_add_in_place():
    a = mx.create(2, 2, fill=1.0)
    b = mx.create(2, 2, fill=2.0)
    result = mx.add(a, b)
    assert result is a
    assert np.all(a.data == 3.0)
    assert np.all(b.data == 2.0)


def test_add_mismatch_leaves_operand_untouched():
    a = mx.create(2, 2, fill=1.0)
    with pytest.raises(ShapeMismatchError):
        mx.add(a, mx.create(2, 1, fill=5.0))
    assert np.all(a.data == 1.0)


def test_subtract_returns_new():
    a = mx.create(3, 1, fill=5.0)
    b = mx.create(3, 1, fill=2.0)
    diff = mx.subtract(a, b)
    assert diff is not a
    assert np.all(diff.data == 3.0)
    assert np.all(a.data == 5.0)
    with pytest.raises(ShapeMismatchError):
        mx.subtract(a, mx.create(1, 3, fill=0.0))


def test_transpose():
    a = Matrix(np.arange(6, dtype=float).reshape(2, 3))
    t = mx.transpose(a)
    assert t.shape == (3, 2)
    assert t[2, 1] == a[1, 2]
    # Fresh storage
    t.data[0, 0] = 99.0
    assert a[0, 0] == 0.0


def test_multiply_elementwise_and_scale():
    a = Matrix(np.array([[1.0, 2.0], [3.0, 4.0]]))
    b = Matrix(np.array([[2.0, 2.0], [0.5, 0.5]]))
    mx.multiply_elementwise(a, b)
    assert np.array_equal(a.data, np.array([[2.0, 4.0], [1.5, 2.0]]))

    mx.scale(a, 2.0)
    assert np.array_equal(a.data, np.array([[4.0, 8.0], [3.0, 4.0]]))

    with pytest.raises(ShapeMismatchError):
        mx.multiply_elementwise(a, mx.create(2, 1, fill=1.0))


def test_map_in_place_and_into_new():
    a = mx.create(2, 2, fill=0.0)

    mapped = mx.map_matrix(a, Activation.SIGMOID, into_new=True)
    assert mapped is not a
    assert np.all(mapped.data == 0.5)
    assert np.all(a.data == 0.0), "into_new must not mutate the source"

    same = mx.map_matrix(a, Activation.SIGMOID)
    assert same is a
    assert np.all(a.data == 0.5)


def test_sigmoid_derivative_uses_activated_value():
    activated = mx.from_list([0.5, 0.9, 0.1])
    deriv = mx.map_matrix(activated, Activation.SIGMOID_DERIVATIVE, into_new=True)
    assert np.allclose(mx.to_list(deriv), [0.25, 0.09, 0.09])


def test_list_conversions():
    col = mx.from_list([1, 2, 3])
    assert col.shape == (3, 1)
    assert mx.to_list(col) == [1.0, 2.0, 3.0]

    with pytest.raises(ShapeMismatchError):
        mx.to_list(mx.create(2, 2, fill=0.0))
    with pytest.raises(ShapeMismatchError):
        mx.from_list([])
