import numpy as np
import pytest

from dualnum.autodiff import Derivative, Dual, derivative_generic, unwrap_generic


def test_none():
    a = Derivative([[1.0], [2.0]])
    none = Derivative.none()
    assert none.is_none
    assert none.shape is None
    assert a.is_some
    assert a.shape == (2, 1)
    assert none + a == a
    assert a + none == a
    assert none - a == -a
    assert a - none == a
    assert (none * 3.0).is_none
    assert (a * none).is_none
    assert (none * Derivative([[1.0, 2.0]])).is_none
    assert none.tr_mul(a).is_none
    assert repr(none) == "Derivative(None)"


def test_some():
    with pytest.raises(ValueError):
        Derivative.some(None)

    with pytest.raises(ValueError):
        Derivative([1.0, 2.0])

    a = Derivative.some([[1.0, 2.0]])
    assert repr(a) == "Derivative([[1.0, 2.0]])"
    assert a == Derivative([[1.0, 2.0]])
    assert a != Derivative([[1.0], [2.0]])
    assert a != Derivative.none()


def test_arithmetic():
    a = Derivative([[1.0], [2.0]])
    b = Derivative([[3.0], [5.0]])
    assert (a + b).value.tolist() == [[4.0], [7.0]]
    assert (a - b).value.tolist() == [[-2.0], [-3.0]]
    assert (-a).value.tolist() == [[-1.0], [-2.0]]
    assert (a * 2.0).value.tolist() == [[2.0], [4.0]]
    assert (2.0 * a).value.tolist() == [[2.0], [4.0]]
    assert (a / 2.0).value.tolist() == [[0.5], [1.0]]

    with pytest.raises(ValueError):
        a + Derivative([[1.0, 2.0]])


def test_matrix_product():
    a = Derivative([[1.0], [2.0]])
    b = Derivative([[3.0, 4.0, 5.0]])
    c = a * b
    assert c.shape == (2, 3)
    assert c.value.tolist() == [[3.0, 4.0, 5.0], [6.0, 8.0, 10.0]]

    with pytest.raises(ValueError):
        a * a

    d = Derivative([[1.0, 2.0]]).tr_mul(Derivative([[3.0, 4.0]]))
    assert d.value.tolist() == [[3.0, 4.0], [6.0, 8.0]]


def test_dual_entries():
    a = Derivative([[Dual(1.0, 1.0)], [Dual(2.0, 0.0)]])
    b = a * Dual(3.0, 1.0)
    assert (b.value[0, 0].re, b.value[0, 0].eps) == (3.0, 4.0)
    assert (b.value[1, 0].re, b.value[1, 0].eps) == (6.0, 2.0)

    c = Dual(3.0, 1.0) * a
    assert (c.value[1, 0].re, c.value[1, 0].eps) == (6.0, 2.0)


def test_map_zip():
    a = Derivative([[1.0, 2.0]])
    assert a.map(lambda x: x * x).value.tolist() == [[1.0, 4.0]]
    assert Derivative.none().map(lambda x: x * x).is_none

    c = Derivative.none().zip(a, lambda x, y: x + 2 * y)
    assert c.value.tolist() == [[2.0, 4.0]]
    assert Derivative.none().zip(Derivative.none(), max).is_none


def test_unwrap():
    a = Derivative([[1.0, 2.0]])
    assert a.unwrap(1, 2).tolist() == [[1.0, 2.0]]
    assert Derivative.none().unwrap(2, 2).tolist() == [[0.0, 0.0], [0.0, 0.0]]
    assert unwrap_generic(Derivative.none(), 1, 2, 0).tolist() == [[0, 0]]

    with pytest.raises(ValueError):
        a.unwrap(2, 1)


def test_derivative_generic():
    assert derivative_generic(1, 3, 1).value.tolist() == [[0.0, 1.0, 0.0]]
    assert derivative_generic(3, 1, 2).value.tolist() == [[0.0], [0.0], [1.0]]

    # column-major enumeration
    a = derivative_generic(2, 2, 1).value
    np.testing.assert_array_equal(a.astype(float), [[0.0, 0.0], [1.0, 0.0]])
    a = derivative_generic(2, 2, 2).value
    np.testing.assert_array_equal(a.astype(float), [[0.0, 1.0], [0.0, 0.0]])

    zero = Dual(0.0, 0.0)
    d = derivative_generic(2, 1, 0, zero).value
    assert isinstance(d[0, 0], Dual)
    assert (d[0, 0].re, d[1, 0].re) == (1.0, 0.0)
