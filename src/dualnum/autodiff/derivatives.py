"""Derivative tables of elementary functions.

Every function in this module receives the real part `x` of a dual number and the
highest derivative order needed, and returns the list ``[f(x), f'(x), ...]`` of that
length plus one. The entries are computed with :mod:`dualnum.function`, so `x` may
itself be a dual number.
"""

import math

from dualnum import function as fn


def recip(x, order: int) -> list:
    rec = fn.recip(x)
    f0 = rec
    f1 = -f0 * rec
    f2 = f1 * rec * -2
    f3 = f2 * rec * -3
    return [f0, f1, f2, f3][: order + 1]


def powi(x, order: int, n: int) -> list:
    pow3 = fn.powi(x, n - 3)
    f0 = pow3 * x * x * x
    f1 = pow3 * x * x * n
    f2 = pow3 * x * (n * (n - 1))
    f3 = pow3 * (n * (n - 1) * (n - 2))
    return [f0, f1, f2, f3][: order + 1]


def powf(x, order: int, n) -> list:
    # f0 is nan at x == 0 for 0 < n < 3, where x ** (n - 3) is infinite.
    n1 = n - 1
    n2 = n1 - 1
    n3 = n2 - 1
    pow3 = fn.powf(x, n3)
    f0 = pow3 * x * x * x
    f1 = pow3 * x * x * n
    f2 = pow3 * x * n * n1
    f3 = pow3 * n * n1 * n2
    return [f0, f1, f2, f3][: order + 1]


def sqrt(x, order: int) -> list:
    rec = fn.recip(x)
    f0 = fn.sqrt(x)
    f1 = f0 * rec * 0.5
    f2 = -f1 * rec * 0.5
    f3 = f2 * rec * -1.5
    return [f0, f1, f2, f3][: order + 1]


def cbrt(x, order: int) -> list:
    rec = fn.recip(x)
    third = 1.0 / 3.0
    f0 = fn.cbrt(x)
    f1 = f0 * rec * third
    f2 = f1 * rec * (third - 1.0)
    f3 = f2 * rec * (third - 2.0)
    return [f0, f1, f2, f3][: order + 1]


def exp(x, order: int) -> list:
    f = fn.exp(x)
    return [f] * (order + 1)


def exp2(x, order: int) -> list:
    ln2 = math.log(2.0)
    f0 = fn.exp2(x)
    f1 = f0 * ln2
    f2 = f1 * ln2
    f3 = f2 * ln2
    return [f0, f1, f2, f3][: order + 1]


def expm1(x, order: int) -> list:
    f1 = fn.exp(x)
    return [fn.expm1(x), f1, f1, f1][: order + 1]


def _log_like(f0, f1, rec, order: int) -> list:
    f2 = -f1 * rec
    f3 = f2 * rec * -2
    return [f0, f1, f2, f3][: order + 1]


def log(x, order: int) -> list:
    rec = fn.recip(x)
    return _log_like(fn.log(x), rec, rec, order)


def log_base(x, order: int, base) -> list:
    rec = fn.recip(x)
    return _log_like(fn.log_base(x, base), rec / math.log(base), rec, order)


def log2(x, order: int) -> list:
    rec = fn.recip(x)
    return _log_like(fn.log2(x), rec / math.log(2.0), rec, order)


def log10(x, order: int) -> list:
    rec = fn.recip(x)
    return _log_like(fn.log10(x), rec / math.log(10.0), rec, order)


def log1p(x, order: int) -> list:
    rec = fn.recip(x + 1)
    return _log_like(fn.log1p(x), rec, rec, order)


def sin(x, order: int) -> list:
    s, c = fn.sin_cos(x)
    return [s, c, -s, -c][: order + 1]


def cos(x, order: int) -> list:
    s, c = fn.sin_cos(x)
    return [c, -s, -c, s][: order + 1]


def arcsin(x, order: int) -> list:
    rec = fn.recip(1 - x * x)
    f0 = fn.arcsin(x)
    f1 = fn.sqrt(rec)
    f2 = x * f1 * rec
    f3 = (x * x * 2 + 1) * f1 * rec * rec
    return [f0, f1, f2, f3][: order + 1]


def arccos(x, order: int) -> list:
    rec = fn.recip(1 - x * x)
    f0 = fn.arccos(x)
    f1 = -fn.sqrt(rec)
    f2 = x * f1 * rec
    f3 = (x * x * 2 + 1) * f1 * rec * rec
    return [f0, f1, f2, f3][: order + 1]


def arctan(x, order: int) -> list:
    rec = fn.recip(1 + x * x)
    f0 = fn.arctan(x)
    f1 = rec
    f2 = -x * f1 * rec * 2
    f3 = (x * x * 6 - 2) * f1 * rec * rec
    return [f0, f1, f2, f3][: order + 1]


def sinh(x, order: int) -> list:
    s = fn.sinh(x)
    c = fn.cosh(x)
    return [s, c, s, c][: order + 1]


def cosh(x, order: int) -> list:
    s = fn.sinh(x)
    c = fn.cosh(x)
    return [c, s, c, s][: order + 1]


def arcsinh(x, order: int) -> list:
    rec = fn.recip(1 + x * x)
    f0 = fn.arcsinh(x)
    f1 = fn.sqrt(rec)
    f2 = -x * f1 * rec
    f3 = (x * x * 2 - 1) * f1 * rec * rec
    return [f0, f1, f2, f3][: order + 1]


def arccosh(x, order: int) -> list:
    rec = fn.recip(x * x - 1)
    f0 = fn.arccosh(x)
    f1 = fn.sqrt(rec)
    f2 = -x * f1 * rec
    f3 = (x * x * 2 + 1) * f1 * rec * rec
    return [f0, f1, f2, f3][: order + 1]


def arctanh(x, order: int) -> list:
    rec = fn.recip(1 - x * x)
    f0 = fn.arctanh(x)
    f1 = rec
    f2 = x * f1 * rec * 2
    f3 = (x * x * 6 + 2) * f1 * rec * rec
    return [f0, f1, f2, f3][: order + 1]
