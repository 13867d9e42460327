import math

import mpmath
import numpy as np
import pytest

from dualnum import function as fn
from dualnum.autodiff import Dual
from dualnum.config import localcontext


def test_float():
    assert fn.recip(4.0) == 0.25
    assert fn.recip(0.0) == math.inf
    assert fn.powi(2.0, 10) == 1024.0
    assert pytest.approx(fn.powf(3.25, 1.25), 1e-6) == 4.363693
    assert pytest.approx(fn.pow(3.25, 1.25), 1e-6) == 4.363693
    assert pytest.approx(fn.sqrt(2.0)) == math.sqrt(2.0)
    assert pytest.approx(fn.cbrt(27.0)) == 3.0
    assert pytest.approx(fn.exp2(3.0)) == 8.0
    assert pytest.approx(fn.log_base(81.0, 3.0)) == 4.0
    assert pytest.approx(fn.log2(8.0)) == 3.0
    assert pytest.approx(fn.log10(1000.0)) == 3.0
    assert pytest.approx(fn.arctan2(1.0, -1.0)) == 3 * math.pi / 4
    assert fn.sin_cos(0.0) == (0.0, 1.0)
    assert isinstance(fn.exp(np.float32(1.0)), float)
    assert isinstance(fn.exp(1), float)


def test_ieee754():
    assert math.isnan(fn.sqrt(-1.0))
    assert fn.log(0.0) == -math.inf
    assert math.isnan(fn.arcsin(2.0))
    assert fn.arctanh(1.0) == math.inf


def test_mpmath():
    with mpmath.workdps(30):
        x = fn.exp(mpmath.mpf(1))
        assert isinstance(x, mpmath.mpf)
        assert mpmath.almosteq(x, mpmath.e, 1e-28)
        assert mpmath.almosteq(fn.sqrt(mpmath.mpf(2)) ** 2, 2, 1e-28)
        assert mpmath.almosteq(fn.pow(mpmath.mpf(2), 0.5), mpmath.sqrt(2), 1e-28)

    assert fn.signum(mpmath.mpf(-3)) == -1


def test_unsupported():
    with pytest.raises(TypeError):
        fn.exp("1.0")

    with pytest.raises(TypeError):
        fn.signum(None)


def test_signum():
    assert fn.signum(2.0) == 1.0
    assert fn.signum(-2.0) == -1.0
    assert fn.signum(0.0) == 1.0
    assert fn.signum(-0.0) == -1.0


def test_mpmath_dual():
    with mpmath.workdps(30):
        y = fn.sin(Dual(mpmath.mpf(1), mpmath.mpf(1)))
        assert mpmath.almosteq(y.re, mpmath.sin(1), 1e-28)
        assert mpmath.almosteq(y.eps, mpmath.cos(1), 1e-28)


def test_sph_j():
    x = 0.7
    s, c = math.sin(x), math.cos(x)
    assert pytest.approx(fn.sph_j0(x)) == s / x
    assert pytest.approx(fn.sph_j1(x)) == (s - x * c) / x**2
    assert pytest.approx(fn.sph_j2(x)) == ((3 - x**2) * s - 3 * x * c) / x**3

    assert fn.sph_j0(0.0) == 1.0
    assert fn.sph_j1(0.0) == 0.0
    assert fn.sph_j2(0.0) == 0.0


def test_sph_j_near_zero():
    y = fn.sph_j0(Dual(0.0, 1.0))
    assert (y.re, y.eps) == (1.0, 0.0)

    y = fn.sph_j1(Dual(0.0, 1.0))
    assert pytest.approx((y.re, y.eps)) == (0.0, 1 / 3)

    y = fn.sph_j0(Dual(-1e-17, 1.0))
    assert pytest.approx(y.re) == 1.0

    with localcontext(sph_epsilon=0.1):
        assert fn.sph_j2(0.05) == 0.05 * 0.05 / 15
