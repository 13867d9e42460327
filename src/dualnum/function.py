"""
################################################
Mathematical functions (:mod:`dualnum.function`)
################################################

.. currentmodule:: dualnum.function

This module provides mathematical functions that accept plain numbers, mpmath numbers
and dual numbers alike. A function written only in terms of these functions and the
arithmetic operators can be evaluated with any of them, and evaluating it with a dual
number yields its derivatives.

Plain floating-point arguments follow IEEE 754: domain errors produce ``nan`` or
``inf`` instead of raising.

Power, exponents, and logarithmic functions
===========================================

.. autosummary::
    :toctree: generated/

    recip
    pow
    powi
    powf
    sqrt
    cbrt
    exp
    exp2
    expm1
    log
    log_base
    log2
    log10
    log1p

Trigonometric and hyperbolic functions
======================================

.. autosummary::
    :toctree: generated/

    sin
    cos
    sin_cos
    tan
    arcsin
    arccos
    arctan
    arctan2
    sinh
    cosh
    tanh
    arcsinh
    arccosh
    arctanh

Spherical Bessel functions
==========================

.. autosummary::
    :toctree: generated/

    sph_j0
    sph_j1
    sph_j2

Miscellaneous
=============

.. autosummary::
    :toctree: generated/

    signum

"""

import math
from collections.abc import Callable
from typing import Any

import mpmath
import mpmath.ctx_mp_python
import numpy as np

from dualnum.config import getcontext


def _overload(fun: Callable, x: Any, *args: Any) -> Any:
    if method := getattr(type(x), "_dualnum_overload_", None):
        if (res := method(x, fun, x, *args)) is not NotImplemented:
            return res

        raise TypeError(f"{fun.__name__}() is not supported for {type(x).__name__!r}")

    return NotImplemented


def _evaluate(x: Any, mpfun: Callable, npfun: Callable) -> Any:
    match x:
        case mpmath.ctx_mp_python.mpnumeric():
            return mpfun(x)

        case float() | int() | np.floating() | np.integer():
            with np.errstate(all="ignore"):
                return float(npfun(np.float64(x)))

        case _:
            raise TypeError(f"unsupported argument type: {type(x).__name__!r}")


def recip(x, /):
    """Reciprocal.

    Unlike ``1 / x``, the reciprocal of a plain zero is ``inf``.

    Examples
    --------
    >>> recip(4.0)
    0.25
    >>> recip(0.0)
    inf
    """
    if (res := _overload(recip, x)) is not NotImplemented:
        return res

    return _evaluate(x, lambda v: 1 / v, np.reciprocal)


def powi(x, n: int, /):
    """`x` raised to the integer power `n`.

    Examples
    --------
    >>> powi(2.0, 10)
    1024.0
    """
    if (res := _overload(powi, x, n)) is not NotImplemented:
        return res

    return _evaluate(x, lambda v: mpmath.power(v, n), lambda v: np.power(v, n))


def powf(x, n, /):
    """`x` raised to the real power `n`.

    Examples
    --------
    >>> print(format(powf(3.25, 1.25), ".6f"))
    4.363693
    """
    if (res := _overload(powf, x, n)) is not NotImplemented:
        return res

    return _evaluate(x, lambda v: mpmath.power(v, n), lambda v: np.power(v, n))


def pow(x, y, /):
    """`x` raised to the power `y`.

    Either argument may be a dual number.

    Examples
    --------
    >>> print(format(pow(3.25, 1.25), ".6f"))
    4.363693
    """
    linearized = (x, y)

    if type(x) is not type(y) and issubclass(type(y), type(x)):
        linearized = (y, x)

    for z in linearized:
        if method := getattr(type(z), "_dualnum_overload_", None):
            if (res := method(z, pow, x, y)) is not NotImplemented:
                return res

    mpnumeric = mpmath.ctx_mp_python.mpnumeric

    match x, y:
        case (mpnumeric(), _) | (_, mpnumeric()):
            return mpmath.power(x, y)

        case _:
            return _evaluate(x, mpmath.power, lambda v: np.power(v, float(y)))


def sqrt(x, /):
    """Square root.

    Examples
    --------
    >>> print(format(sqrt(2.0), ".6f"))
    1.414214
    >>> sqrt(-1.0)
    nan
    """
    if (res := _overload(sqrt, x)) is not NotImplemented:
        return res

    return _evaluate(x, mpmath.sqrt, np.sqrt)


def cbrt(x, /):
    """Cube root."""
    if (res := _overload(cbrt, x)) is not NotImplemented:
        return res

    return _evaluate(x, mpmath.cbrt, np.cbrt)


def exp(x, /):
    """Exponential.

    Examples
    --------
    >>> print(format(exp(2), ".6f"))
    7.389056
    >>> from dualnum.autodiff import Dual
    >>> exp(Dual(0.0, 1.0))
    Dual(re=1.0, eps=1.0)
    """
    if (res := _overload(exp, x)) is not NotImplemented:
        return res

    return _evaluate(x, mpmath.exp, np.exp)


def exp2(x, /):
    """Base-2 exponential."""
    if (res := _overload(exp2, x)) is not NotImplemented:
        return res

    return _evaluate(x, lambda v: mpmath.power(2, v), np.exp2)


def expm1(x, /):
    """``exp(x) - 1``, accurate for small `x`."""
    if (res := _overload(expm1, x)) is not NotImplemented:
        return res

    return _evaluate(x, mpmath.expm1, np.expm1)


def log(x, /):
    """Natural logarithm.

    Examples
    --------
    >>> print(format(log(5), ".6f"))
    1.609438
    >>> log(0.0)
    -inf
    """
    if (res := _overload(log, x)) is not NotImplemented:
        return res

    return _evaluate(x, mpmath.log, np.log)


def log_base(x, base, /):
    """Logarithm of `x` to the given `base`."""
    if (res := _overload(log_base, x, base)) is not NotImplemented:
        return res

    return _evaluate(
        x, lambda v: mpmath.log(v, base), lambda v: np.log(v) / np.log(float(base))
    )


def log2(x, /):
    """Base-2 logarithm."""
    if (res := _overload(log2, x)) is not NotImplemented:
        return res

    return _evaluate(x, lambda v: mpmath.log(v, 2), np.log2)


def log10(x, /):
    """Base-10 logarithm."""
    if (res := _overload(log10, x)) is not NotImplemented:
        return res

    return _evaluate(x, mpmath.log10, np.log10)


def log1p(x, /):
    """``log(1 + x)``, accurate for small `x`."""
    if (res := _overload(log1p, x)) is not NotImplemented:
        return res

    return _evaluate(x, mpmath.log1p, np.log1p)


def sin(x, /):
    """Sine."""
    if (res := _overload(sin, x)) is not NotImplemented:
        return res

    return _evaluate(x, mpmath.sin, np.sin)


def cos(x, /):
    """Cosine."""
    if (res := _overload(cos, x)) is not NotImplemented:
        return res

    return _evaluate(x, mpmath.cos, np.cos)


def sin_cos(x, /) -> tuple[Any, Any]:
    """Sine and cosine, computed together.

    Examples
    --------
    >>> s, c = sin_cos(0.0)
    >>> s, c
    (0.0, 1.0)
    """
    if (res := _overload(sin_cos, x)) is not NotImplemented:
        return res

    return (_evaluate(x, mpmath.sin, np.sin), _evaluate(x, mpmath.cos, np.cos))


def tan(x, /):
    """Tangent."""
    if (res := _overload(tan, x)) is not NotImplemented:
        return res

    return _evaluate(x, mpmath.tan, np.tan)


def arcsin(x, /):
    """Inverse sine."""
    if (res := _overload(arcsin, x)) is not NotImplemented:
        return res

    return _evaluate(x, mpmath.asin, np.arcsin)


def arccos(x, /):
    """Inverse cosine."""
    if (res := _overload(arccos, x)) is not NotImplemented:
        return res

    return _evaluate(x, mpmath.acos, np.arccos)


def arctan(x, /):
    """Inverse tangent."""
    if (res := _overload(arctan, x)) is not NotImplemented:
        return res

    return _evaluate(x, mpmath.atan, np.arctan)


def arctan2(y, x, /):
    """Four-quadrant inverse tangent of ``y / x``.

    Examples
    --------
    >>> print(format(arctan2(1.0, -1.0), ".6f"))
    2.356194
    """
    linearized = (y, x)

    if type(y) is not type(x) and issubclass(type(x), type(y)):
        linearized = (x, y)

    for z in linearized:
        if method := getattr(type(z), "_dualnum_overload_", None):
            if (res := method(z, arctan2, y, x)) is not NotImplemented:
                return res

    mpnumeric = mpmath.ctx_mp_python.mpnumeric

    match y, x:
        case (mpnumeric(), _) | (_, mpnumeric()):
            return mpmath.atan2(y, x)

        case _:
            return _evaluate(y, mpmath.atan2, lambda v: np.arctan2(v, float(x)))


def sinh(x, /):
    """Hyperbolic sine."""
    if (res := _overload(sinh, x)) is not NotImplemented:
        return res

    return _evaluate(x, mpmath.sinh, np.sinh)


def cosh(x, /):
    """Hyperbolic cosine."""
    if (res := _overload(cosh, x)) is not NotImplemented:
        return res

    return _evaluate(x, mpmath.cosh, np.cosh)


def tanh(x, /):
    """Hyperbolic tangent."""
    if (res := _overload(tanh, x)) is not NotImplemented:
        return res

    return _evaluate(x, mpmath.tanh, np.tanh)


def arcsinh(x, /):
    """Inverse hyperbolic sine."""
    if (res := _overload(arcsinh, x)) is not NotImplemented:
        return res

    return _evaluate(x, mpmath.asinh, np.arcsinh)


def arccosh(x, /):
    """Inverse hyperbolic cosine."""
    if (res := _overload(arccosh, x)) is not NotImplemented:
        return res

    return _evaluate(x, mpmath.acosh, np.arccosh)


def arctanh(x, /):
    """Inverse hyperbolic tangent."""
    if (res := _overload(arctanh, x)) is not NotImplemented:
        return res

    return _evaluate(x, mpmath.atanh, np.arctanh)


def signum(x, /):
    """Sign of `x` as ``1.0`` or ``-1.0``, following the sign bit of zero.

    The sign of a dual number has vanishing derivatives.
    """
    if (res := _overload(signum, x)) is not NotImplemented:
        return res

    match x:
        case mpmath.ctx_mp_python.mpnumeric():
            return mpmath.mpf(1) if x >= 0 else mpmath.mpf(-1)

        case float() | int() | np.floating() | np.integer():
            return math.copysign(1.0, x)

        case _:
            raise TypeError(f"unsupported argument type: {type(x).__name__!r}")


def _is_small(x) -> bool:
    while (re := getattr(x, "re", None)) is not None:
        x = re

    return abs(x) < getcontext().sph_epsilon


def sph_j0(x, /):
    """Spherical Bessel function of the first kind of order 0, ``sin(x) / x``.

    Near the origin the Taylor expansion ``1 - x**2 / 6`` is used.

    Examples
    --------
    >>> sph_j0(0.0)
    1.0
    """
    if _is_small(x):
        return 1 - x * x / 6

    return sin(x) / x


def sph_j1(x, /):
    """Spherical Bessel function of the first kind of order 1.

    Near the origin the Taylor expansion ``x / 3`` is used.
    """
    if _is_small(x):
        return x / 3

    s, c = sin_cos(x)
    return (s - x * c) / (x * x)


def sph_j2(x, /):
    """Spherical Bessel function of the first kind of order 2.

    Near the origin the Taylor expansion ``x**2 / 15`` is used.
    """
    if _is_small(x):
        return x * x / 15

    s, c = sin_cos(x)
    s2 = x * x
    return ((s - x * c) * 3 - s2 * s) / (s2 * x)
