import math

import numpy as np
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
    NonDifferentiableError,
    nderiv,
    to_real,
)
from dualnum.typing import ComparableScalar, Scalar


def test_recip():
    x = Dual(1.2, 1.0).recip()
    assert pytest.approx((x.re, x.eps), 1e-12) == (0.8333333333333, -0.6944444444445)


def test_exp():
    x = Dual2.from_re(1.2).derivative().exp()
    expected = 3.3201169227365
    assert pytest.approx((x.re, x.v1, x.v2), 1e-12) == (expected,) * 3


def test_powi():
    x = Dual3.from_re(5.0).derivative().powi(3)
    assert (x.re, x.v1, x.v2, x.v3) == (125.0, 75.0, 30.0, 6.0)

    x = Dual(2.0, 1.0)
    y = x**0
    assert (y.re, y.eps) == (1.0, 0.0)
    y = x**-2
    assert pytest.approx((y.re, y.eps)) == (0.25, -0.25)


def test_powf():
    y = Dual(4.0, 1.0) ** 2.5
    assert pytest.approx((y.re, y.eps)) == (32.0, 20.0)

    y = Dual(4.0, 1.0) ** 2.0
    assert (y.re, y.eps) == (16.0, 8.0)


def test_powf_at_zero():
    assert fn.powf(0.0, 0.5) == 0.0

    # the real part is formed through x ** (n - 3)
    y = Dual(0.0, 1.0) ** 0.5
    assert math.isnan(y.re)

    y = Dual(0.0, 1.0).sqrt()
    assert y.re == 0.0

    y = Dual(0.0, 1.0) ** 3.5
    assert y.re == 0.0


def test_powd():
    y = Dual(2.0, 1.0) ** Dual(3.0, 0.0)
    assert pytest.approx((y.re, y.eps)) == (8.0, 12.0)

    y = 2.0 ** Dual(3.0, 1.0)
    assert pytest.approx((y.re, y.eps)) == (8.0, 8.0 * math.log(2.0))

    y = fn.pow(Dual(2.0, 1.0), Dual(3.0, 1.0))
    assert pytest.approx((y.re, y.eps)) == (8.0, 12.0 + 8.0 * math.log(2.0))


def test_hyperdual():
    x = HyperDual.from_re(4.0).derivative1()
    y = HyperDual.from_re(3.0).derivative2()
    z = (x * x + y * y).sqrt()
    expected = (5.0, 0.8, 0.6, -0.096)
    assert pytest.approx((z.re, z.eps1, z.eps2, z.eps1eps2)) == expected


def test_hyperhyperdual():
    x = HyperHyperDual.from_re(1.0).derivative1()
    y = HyperHyperDual.from_re(2.0).derivative2()
    z = HyperHyperDual.from_re(3.0).derivative3()
    f = x * x * y * z * z
    assert f.re == 18.0
    assert f.tangents == (36.0, 9.0, 12.0, 18.0, 24.0, 6.0, 12.0)


def test_nested():
    x = Dual(Dual(2.0, 1.0), Dual(1.0, 0.0))
    y = x * x * x
    assert (y.re.re, y.re.eps, y.eps.re, y.eps.eps) == (8.0, 12.0, 12.0, 12.0)
    assert y.priority == 1
    assert nderiv(y) == 2
    assert to_real(y) == 8.0


def test_lower_priority_operand():
    x = Dual(Dual(2.0, 1.0), Dual(1.0, 0.0))
    c = Dual(3.0, 1.0)

    for y in (x + c, c + x):
        assert (y.re.re, y.re.eps, y.eps.re, y.eps.eps) == (5.0, 2.0, 1.0, 0.0)

    y = x - c
    assert (y.re.re, y.re.eps, y.eps.re, y.eps.eps) == (-1.0, 0.0, 1.0, 0.0)

    y = c - x
    assert (y.re.re, y.re.eps, y.eps.re, y.eps.eps) == (1.0, 0.0, -1.0, 0.0)

    for y in (x * c, c * x):
        assert (y.re.re, y.re.eps, y.eps.re, y.eps.eps) == (6.0, 5.0, 3.0, 1.0)

    y = c / x
    assert pytest.approx((y.re.re, y.re.eps, y.eps.re, y.eps.eps)) == (
        1.5,
        -0.25,
        -0.75,
        0.5,
    )

    y = c**x
    expected = fn.exp(x * fn.log(c))
    assert pytest.approx((y.re.re, y.re.eps, y.eps.re, y.eps.eps)) == (
        expected.re.re,
        expected.re.eps,
        expected.eps.re,
        expected.eps.eps,
    )
    assert pytest.approx(y.re.re) == 9.0


def test_lower_priority_operand_hyperdual():
    x = HyperDual(Dual(2.0, 1.0), Dual(1.0, 0.0), Dual(0.0, 0.0), Dual(0.0, 0.0))
    c = Dual(3.0, 1.0)

    y = c * x - c
    assert (y.re.re, y.re.eps) == (3.0, 4.0)
    assert (y.eps1.re, y.eps1.eps) == (3.0, 1.0)


def test_incompatible_operand():
    with pytest.raises(TypeError):
        Dual(1.0, 1.0) + HyperDual(1.0, 0.0, 0.0, 0.0)

    with pytest.raises(TypeError):
        Dual2(1.0, 1.0, 0.0) * Dual(1.0, 1.0)


def test_tangent_count():
    with pytest.raises(TypeError):
        Dual(1.0)

    with pytest.raises(TypeError):
        Dual2(1.0, 2.0, 3.0, 4.0)


def test_subclassing():
    with pytest.raises(RuntimeError):

        class MyDual(Dual):
            pass


def test_arithmetic():
    x = Dual(3.0, 1.0)
    y = Dual(2.0, 5.0)
    assert ((x + y).re, (x + y).eps) == (5.0, 6.0)
    assert ((x - y).re, (x - y).eps) == (1.0, -4.0)
    assert ((x * y).re, (x * y).eps) == (6.0, 17.0)
    assert pytest.approx(((x / y).re, (x / y).eps)) == (1.5, -3.25)
    assert ((1 - x).re, (1 - x).eps) == (-2.0, -1.0)
    assert pytest.approx(((6 / x).re, (6 / x).eps)) == (2.0, -2.0 / 3.0)
    assert ((-x).re, (-x).eps) == (-3.0, -1.0)
    assert (abs(-x).re, abs(-x).eps) == (3.0, 1.0)

    z = x.mul_add(y, 1.0)
    assert (z.re, z.eps) == (7.0, 17.0)


def test_comparison():
    assert Dual(1.0, 5.0) == Dual(1.0, 0.0)
    assert Dual(1.0, 5.0) != Dual(2.0, 5.0)
    assert Dual(1.0, 0.0) == 1.0
    assert Dual(1.0, 3.0) < 2.0
    assert Dual(1.0, 3.0) <= Dual(1.0, -3.0)
    assert Dual(Dual(3.0, 1.0), Dual(0.0, 0.0)) > 2
    assert hash(Dual(1.5, 3.0)) == hash(1.5)
    assert not Dual(0.0, 1.0)
    assert Dual(0.0, 0.0).is_zero()
    assert Dual(1.0, 2.0).is_one()
    assert max(Dual(1.0, 1.0), Dual(2.0, 2.0)).eps == 2.0


def test_scalar_protocol():
    for cls in (
        Dual,
        Dual2,
        Dual3,
        HyperDual,
        HyperHyperDual,
        DualVec,
        Dual2Vec,
        HyperDualVec,
    ):
        assert ComparableScalar in cls.__mro__
        assert Scalar in cls.__mro__

    assert Dual(1.0, 5.0) < Dual(2.0, -5.0)

    y = abs(Dual(-2.0, 1.0))
    assert (y.re, y.eps) == (2.0, -1.0)


def test_non_differentiable():
    x = Dual(1.5, 1.0)

    with pytest.raises(NonDifferentiableError):
        math.floor(x)

    with pytest.raises(NonDifferentiableError):
        math.ceil(x)

    with pytest.raises(NonDifferentiableError):
        round(x)

    with pytest.raises(NonDifferentiableError):
        x % 2

    with pytest.raises(NonDifferentiableError):
        x // 2

    with pytest.raises(NonDifferentiableError):
        divmod(x, 2)

    with pytest.raises(ArithmeticError):
        x.fract()


def test_sin_cos():
    s, c = Dual(0.5, 2.0).sin_cos()
    assert pytest.approx((s.re, s.eps)) == (math.sin(0.5), 2.0 * math.cos(0.5))
    assert pytest.approx((c.re, c.eps)) == (math.cos(0.5), -2.0 * math.sin(0.5))

    s, c = fn.sin_cos(Dual3.from_re(0.5).derivative())
    assert pytest.approx(s.v3) == -math.cos(0.5)
    assert pytest.approx(c.v3) == math.sin(0.5)


def test_arctan2():
    y = fn.arctan2(Dual(1.0, 1.0), 2.0)
    assert pytest.approx((y.re, y.eps)) == (math.atan2(1.0, 2.0), 0.4)

    y = fn.arctan2(-1.0, Dual(-2.0, 1.0))
    assert pytest.approx((y.re, y.eps)) == (math.atan2(-1.0, -2.0), 0.2)


def test_signum():
    y = Dual(-2.0, 3.0).signum()
    assert (y.re, y.eps) == (-1.0, 0.0)
    y = fn.signum(Dual(-0.0, 3.0))
    assert (y.re, y.eps) == (-1.0, 0.0)


def test_repr():
    assert repr(Dual(2.0, 1.0)) == "Dual(re=2.0, eps=1.0)"
    assert str(Dual2(1.0, 2.0, 3.0)) == "Dual2(re=1.0, v1=2.0, v2=3.0)"


def test_numpy():
    a = np.empty(2, dtype=object)
    a[0] = Dual(1.0, 1.0)
    a[1] = Dual(2.0, 1.0)
    b = np.exp(a)
    assert pytest.approx((b[0].re, b[0].eps)) == (math.e, math.e)
    assert pytest.approx((b[1].re, b[1].eps)) == (math.exp(2.0), math.exp(2.0))

    c = (a * 2.0).sum()
    assert (c.re, c.eps) == (6.0, 4.0)
