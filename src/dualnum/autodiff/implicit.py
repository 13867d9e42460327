from collections.abc import Callable, Mapping, Sequence
from typing import Any

import numpy as np

from dualnum.autodiff.dual import DualNumber, nderiv
from dualnum.autodiff.explicit import first_derivative, hessian, jacobian
from dualnum.linalg.lu import LU
from dualnum.logger import dualnum_logger


def _find_dual(args: Any) -> DualNumber | None:
    if isinstance(args, DualNumber):
        return args

    if isinstance(args, Mapping):
        args = list(args.values())

    if isinstance(args, Sequence | np.ndarray) and not isinstance(args, str):
        for arg in args:
            if (res := _find_dual(arg)) is not None:
                return res

    return None


def _lift(ref: DualNumber | None, x: Any) -> Any:
    return x if ref is None else ref * 0 + x


def implicit_derivative(g: Callable[[Any, Any], Any], x: Any, args: Any) -> Any:
    r"""Return the derivatives of a root of a univariate function with respect to its
    parameters.

    Given a converged root `x` of :math:`g(x, \mathrm{args}) = 0` computed with the real
    parts of `args`, each Newton step in the dual type of `args` adds one exact order
    of derivatives.

    Parameters
    ----------
    g : Callable
        Residual, called as ``g(x, args)``.
    x : Any
        Root for the real parts of `args`.
    args : Any
        Parameters, containing dual numbers.

    Returns
    -------
    Any
        Root as a dual number of the type found in `args`.

    Examples
    --------
    >>> from dualnum.autodiff import Dual2
    >>> y = Dual2.from_re(25.0).derivative()
    >>> x = implicit_derivative(lambda x, y: x * x - y, 5.0, y)
    >>> x.re
    5.0
    >>> print(format(x.v1, ".6f"), format(x.v2, ".6f"))
    0.100000 -0.002000
    """
    ref = _find_dual(args)
    x = _lift(ref, x)
    steps = nderiv(ref)

    for k in range(steps):
        f, df = first_derivative(lambda x: g(x, args), x)
        x = x - f / df
        dualnum_logger.debug("implicit_derivative: Newton step %d of %d", k + 1, steps)

    return x


def implicit_derivative_binary(
    g: Callable[[Any, Any, Any], Sequence], x: Any, y: Any, args: Any
) -> tuple[Any, Any]:
    """Return the derivatives of a root of a system of two equations with respect to
    its parameters.

    The Newton steps solve the linear systems by Cramer's rule.

    Parameters
    ----------
    g : Callable
        Residual, called as ``g(x, y, args)`` and returning two values.
    x, y : Any
        Root for the real parts of `args`.
    args : Any
        Parameters, containing dual numbers.

    Returns
    -------
    tuple
        ``(x, y)``.
    """
    ref = _find_dual(args)
    x = _lift(ref, x)
    y = _lift(ref, y)
    steps = nderiv(ref)

    for k in range(steps):
        f, jac = jacobian(lambda v: g(v[0], v[1], args), [x, y])
        f0, f1 = f
        j00, j01 = jac[0]
        j10, j11 = jac[1]
        det = 1 / (j00 * j11 - j01 * j10)
        x = x - (j11 * f0 - j01 * f1) * det
        y = y - (j00 * f1 - j10 * f0) * det
        dualnum_logger.debug(
            "implicit_derivative_binary: Newton step %d of %d", k + 1, steps
        )

    return (x, y)


def implicit_derivative_vec(
    g: Callable[[np.ndarray, Any], Sequence], x: Sequence, args: Any
) -> np.ndarray:
    """Return the derivatives of a root of a system of equations with respect to its
    parameters.

    The Newton steps solve the linear systems by :class:`dualnum.linalg.LU`.

    Parameters
    ----------
    g : Callable
        Residual, called as ``g(x, args)`` with a one-dimensional object array `x`.
    x : Sequence
        Root for the real parts of `args`.
    args : Any
        Parameters, containing dual numbers.

    Returns
    -------
    ndarray
        Root as a one-dimensional object array.
    """
    ref = _find_dual(args)
    xs = np.empty(len(x), dtype=object)

    for i, xi in enumerate(x):
        xs[i] = _lift(ref, xi)

    steps = nderiv(ref)

    for k in range(steps):
        f, jac = jacobian(lambda v: g(v, args), xs)
        xs = xs - LU(jac).solve(f)
        dualnum_logger.debug(
            "implicit_derivative_vec: Newton step %d of %d", k + 1, steps
        )

    return xs


def implicit_derivative_sp(
    g: Callable[[np.ndarray, Any], Any], x: Sequence, args: Any
) -> np.ndarray:
    """Return the derivatives of a stationary point of a scalar potential with respect
    to its parameters.

    Parameters
    ----------
    g : Callable
        Potential, called as ``g(x, args)`` with a one-dimensional object array `x`.
    x : Sequence
        Stationary point for the real parts of `args`.
    args : Any
        Parameters, containing dual numbers.

    Returns
    -------
    ndarray
        Stationary point as a one-dimensional object array.
    """
    ref = _find_dual(args)
    xs = np.empty(len(x), dtype=object)

    for i, xi in enumerate(x):
        xs[i] = _lift(ref, xi)

    steps = nderiv(ref)

    for k in range(steps):
        _, grad, hess = hessian(lambda v: g(v, args), xs)
        xs = xs - LU(hess).solve(grad)
        dualnum_logger.debug(
            "implicit_derivative_sp: Newton step %d of %d", k + 1, steps
        )

    return xs
