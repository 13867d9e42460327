import math

import pytest

from dualnum import function as fn
from dualnum.autodiff import (
    Dual,
    Dual2,
    Dual2Vec,
    Dual3,
    DualVec,
    HyperDual,
    HyperDualVec,
    HyperHyperDual,
)

FUNCTIONS = [
    (fn.recip, 1.3),
    (fn.sqrt, 1.3),
    (fn.cbrt, 1.3),
    (fn.exp, 0.7),
    (fn.exp2, 0.7),
    (fn.expm1, 0.7),
    (fn.log, 1.3),
    (fn.log2, 1.3),
    (fn.log10, 1.3),
    (fn.log1p, 0.3),
    (lambda x: fn.log_base(x, 3.0), 1.3),
    (fn.sin, 0.7),
    (fn.cos, 0.7),
    (fn.tan, 0.7),
    (fn.arcsin, 0.3),
    (fn.arccos, 0.3),
    (fn.arctan, 0.7),
    (fn.sinh, 0.7),
    (fn.cosh, 0.7),
    (fn.tanh, 0.7),
    (fn.arcsinh, 0.7),
    (fn.arccosh, 1.3),
    (fn.arctanh, 0.3),
    (fn.sph_j0, 0.7),
    (fn.sph_j1, 0.7),
    (fn.sph_j2, 0.7),
    (lambda x: fn.powi(x, 5), 1.3),
    (lambda x: fn.powi(x, -3), 1.3),
    (lambda x: fn.powf(x, 2.7), 1.3),
    (lambda x: fn.pow(x, 1.7), 1.3),
    (lambda x: x * fn.exp(-x * x) / (x + 2), 0.4),
]


def _central(f, x, h=1e-5):
    return (f(x + h) - f(x - h)) / (2 * h)


@pytest.mark.parametrize("f, x0", FUNCTIONS)
def test_first_derivative(f, x0):
    y = f(Dual(x0, 1.0))
    assert pytest.approx(y.re, 1e-14) == f(x0)
    assert pytest.approx(y.eps, 1e-6) == _central(f, x0)


@pytest.mark.parametrize("f, x0", FUNCTIONS)
def test_second_derivative(f, x0):
    y = f(Dual2(x0, 1.0, 0.0))
    assert pytest.approx(y.v1, 1e-12) == f(Dual(x0, 1.0)).eps
    assert pytest.approx(y.v2, 1e-6) == _central(lambda x: f(Dual(x, 1.0)).eps, x0)

    # nested first-order duals give the same second derivative
    z = f(Dual(Dual(x0, 1.0), Dual(1.0, 0.0)))
    assert pytest.approx(z.eps.eps, 1e-12) == y.v2


@pytest.mark.parametrize("f, x0", FUNCTIONS)
def test_third_derivative(f, x0):
    y = f(Dual3(x0, 1.0, 0.0, 0.0))
    assert pytest.approx(y.v2, 1e-12) == f(Dual2(x0, 1.0, 0.0)).v2

    z = f(HyperHyperDual(x0, 1.0, 1.0, 1.0, 0.0, 0.0, 0.0, 0.0))
    assert pytest.approx(z.eps1eps2eps3, 1e-12) == y.v3
    assert pytest.approx(z.eps1eps2, 1e-12) == y.v2


def test_mixed_partial_symmetry():
    def f(x, y):
        return fn.sin(x * y) + x**2 * y / fn.exp(y)

    xy = f(HyperDual(0.3, 1.0, 0.0, 0.0), HyperDual(0.8, 0.0, 1.0, 0.0))
    yx = f(HyperDual(0.3, 0.0, 1.0, 0.0), HyperDual(0.8, 1.0, 0.0, 0.0))
    assert pytest.approx(xy.eps1eps2, 1e-12) == yx.eps1eps2
    assert pytest.approx(xy.eps1, 1e-12) == yx.eps2
    assert pytest.approx(xy.eps1eps2, 1e-6) == _central(
        lambda x: f(x, Dual(0.8, 1.0)).eps, 0.3
    )


def test_division_inverts_multiplication():
    pairs = [
        (Dual(1.5, 0.3), Dual(2.5, -0.7)),
        (Dual2(1.5, 0.3, 0.2), Dual2(2.5, -0.7, 0.4)),
        (Dual3(1.5, 0.3, 0.2, -0.1), Dual3(2.5, -0.7, 0.4, 0.9)),
        (HyperDual(1.5, 0.3, 0.2, 0.1), HyperDual(2.5, -0.7, 0.4, 0.9)),
        (
            HyperHyperDual(1.5, 0.3, 0.2, 0.1, 0.4, 0.5, 0.6, 0.7),
            HyperHyperDual(2.5, -0.7, 0.4, 0.9, -0.2, 0.1, 0.3, -0.5),
        ),
    ]

    for a, b in pairs:
        c = (a * b) / b
        assert pytest.approx(c.re, 1e-14) == a.re
        assert pytest.approx(c.tangents, 1e-12) == a.tangents


def test_constant_operand():
    x = Dual(3.0, 1.0)
    c = Dual.from_re(2.0)

    y = c * x
    assert (y.re, y.eps) == (6.0, 2.0)

    y = fn.exp(c)
    assert pytest.approx((y.re, y.eps)) == (math.exp(2.0), 0.0)


@pytest.mark.parametrize("f, x0", FUNCTIONS)
@pytest.mark.parametrize("cls", [Dual, Dual2, Dual3, HyperDual, HyperHyperDual])
def test_constant_stays_constant(cls, f, x0):
    y = f(cls.from_re(x0))
    assert type(y) is cls
    assert pytest.approx(y.re, 1e-12) == f(x0)
    assert all(t == 0.0 for t in y.tangents)


@pytest.mark.parametrize("f, x0", FUNCTIONS)
@pytest.mark.parametrize("cls", [DualVec, Dual2Vec, HyperDualVec])
def test_absent_derivative_stays_absent(cls, f, x0):
    y = f(cls.from_re(x0))
    assert type(y) is cls
    assert pytest.approx(y.re, 1e-12) == f(x0)
    assert all(t.is_none for t in y.tangents)
