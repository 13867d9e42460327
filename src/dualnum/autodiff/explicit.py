from collections.abc import Callable, Sequence
from typing import Any

import numpy as np

from dualnum.autodiff.dual import Dual, Dual2, Dual3, DualNumber, HyperDual, HyperHyperDual
from dualnum.autodiff.dualvec import Dual2Vec, DualVec, HyperDualVec


def _map_dual(res: Any, fun: Callable[[Any], Any]) -> Any:
    if isinstance(res, DualNumber):
        return fun(res)

    if isinstance(res, Sequence | np.ndarray):
        return tuple(_map_dual(x, fun) for x in res)

    raise TypeError(
        f"g must return a dual number or a sequence of them, not {type(res).__name__!r}"
    )


def _to_array(a: np.ndarray) -> np.ndarray:
    return np.array(a.tolist())


def first_derivative(g: Callable[[Dual], Any], x: Any) -> Any:
    """Return the value and the first derivative of a univariate function.

    Parameters
    ----------
    g : Callable[[Dual], Dual]
        Differentiated function. It may also return a sequence of dual numbers, in
        which case a tuple of results is returned.
    x : Any
        Point of evaluation. Passing a dual number yields higher derivatives.

    Returns
    -------
    tuple
        ``(f, df)``.

    Raises
    ------
    TypeError
        If `g` does not return dual numbers.

    Examples
    --------
    >>> from dualnum import function as fn
    >>> f, df = first_derivative(lambda x: x**2 + fn.sqrt(x + 3), 1.0)
    >>> f, df
    (3.0, 2.25)
    """
    res = g(Dual.from_re(x).derivative())
    return _map_dual(res, lambda r: (r.re, r.eps))


def second_derivative(g: Callable[[Dual2], Any], x: Any) -> Any:
    """Return the value and the first and second derivatives of a univariate function.

    Returns
    -------
    tuple
        ``(f, df, d2f)``.

    See Also
    --------
    first_derivative
    """
    res = g(Dual2.from_re(x).derivative())
    return _map_dual(res, lambda r: (r.re, r.v1, r.v2))


def third_derivative(g: Callable[[Dual3], Any], x: Any) -> Any:
    """Return the value and the derivatives up to third order of a univariate function.

    Returns
    -------
    tuple
        ``(f, df, d2f, d3f)``.

    See Also
    --------
    first_derivative
    """
    res = g(Dual3.from_re(x).derivative())
    return _map_dual(res, lambda r: (r.re, r.v1, r.v2, r.v3))


def gradient(g: Callable[[np.ndarray], Any], x: Sequence) -> Any:
    """Return the value and the gradient of a multivariate scalar-valued function.

    Parameters
    ----------
    g : Callable[[ndarray], DualVec]
        Differentiated function. It receives a one-dimensional object array of
        :class:`DualVec`.
    x : Sequence
        Point of evaluation.

    Returns
    -------
    tuple
        ``(f, grad)``, where `grad` is a one-dimensional array.

    Examples
    --------
    >>> from dualnum import function as fn
    >>> f, grad = gradient(lambda v: fn.sqrt(v[0] ** 2 + v[1] ** 2), [4.0, 3.0])
    >>> f
    5.0
    >>> [round(v, 12) for v in grad]
    [0.8, 0.6]
    """
    n = len(x)
    xs = np.empty(n, dtype=object)

    for i, xi in enumerate(x):
        xs[i] = DualVec.from_re(xi).derivative(i, n)

    def fun(r):
        return (r.re, _to_array(r.eps.unwrap(n, 1, r.re * 0).ravel()))

    return _map_dual(g(xs), fun)


def jacobian(g: Callable[[np.ndarray], Sequence], x: Sequence) -> tuple:
    """Return the values and the Jacobian matrix of a vector-valued function.

    Parameters
    ----------
    g : Callable[[ndarray], Sequence[DualVec]]
        Differentiated function. It receives a one-dimensional object array of
        :class:`DualVec` and returns a sequence of them.
    x : Sequence
        Point of evaluation.

    Returns
    -------
    tuple
        ``(f, jac)``, where `f` has length `m` and `jac` has shape ``(m, n)``.

    Examples
    --------
    >>> f, jac = jacobian(lambda v: [v[0] * v[1], v[0] + v[1]], [2.0, 3.0])
    >>> f.tolist()
    [6.0, 5.0]
    >>> jac.tolist()
    [[3.0, 2.0], [1.0, 1.0]]
    """
    n = len(x)
    xs = np.empty(n, dtype=object)

    for i, xi in enumerate(x):
        xs[i] = DualVec.from_re(xi).derivative(i, n)

    res = g(xs)

    if not all(isinstance(r, DualNumber) for r in res):
        raise TypeError("g must return a sequence of dual numbers")

    f = np.array([r.re for r in res])
    rows = [r.eps.unwrap(n, 1, r.re * 0).ravel().tolist() for r in res]
    return (f, np.array(rows))


def hessian(g: Callable[[np.ndarray], Any], x: Sequence) -> Any:
    """Return the value, the gradient and the Hessian matrix of a multivariate
    scalar-valued function.

    Parameters
    ----------
    g : Callable[[ndarray], Dual2Vec]
        Differentiated function. It receives a one-dimensional object array of
        :class:`Dual2Vec`.
    x : Sequence
        Point of evaluation.

    Returns
    -------
    tuple
        ``(f, grad, hess)``.
    """
    n = len(x)
    xs = np.empty(n, dtype=object)

    for i, xi in enumerate(x):
        xs[i] = Dual2Vec.from_re(xi).derivative(i, n)

    def fun(r):
        zero = r.re * 0
        grad = _to_array(r.v1.unwrap(1, n, zero).ravel())
        hess = _to_array(r.v2.unwrap(n, n, zero))
        return (r.re, grad, hess)

    return _map_dual(g(xs), fun)


def second_partial_derivative(
    g: Callable[[HyperDual, HyperDual], Any], x: Any, y: Any
) -> Any:
    """Return the value, the partial derivatives and the mixed second partial derivative
    of a bivariate function.

    Returns
    -------
    tuple
        ``(f, fx, fy, fxy)``.

    Examples
    --------
    >>> second_partial_derivative(lambda x, y: x * x * y - y**3, 3.0, 4.0)
    (-28.0, 24.0, -39.0, 6.0)
    """
    x = HyperDual.from_re(x).derivative1()
    y = HyperDual.from_re(y).derivative2()
    return _map_dual(g(x, y), lambda r: (r.re, r.eps1, r.eps2, r.eps1eps2))


def partial_hessian(
    g: Callable[[np.ndarray, np.ndarray], Any], x: Sequence, y: Sequence
) -> Any:
    """Return the value, the partial gradients and the mixed block of the Hessian
    matrix of a function of two groups of variables.

    Parameters
    ----------
    g : Callable[[ndarray, ndarray], HyperDualVec]
        Differentiated function. It receives two one-dimensional object arrays of
        :class:`HyperDualVec`.
    x, y : Sequence
        Point of evaluation, split into two groups.

    Returns
    -------
    tuple
        ``(f, fx, fy, fxy)``, where `fxy` has shape ``(len(x), len(y))``.
    """
    m = len(x)
    n = len(y)
    xs = np.empty(m, dtype=object)
    ys = np.empty(n, dtype=object)

    for i, xi in enumerate(x):
        xs[i] = HyperDualVec.from_re(xi).derivative1(i, m)

    for j, yj in enumerate(y):
        ys[j] = HyperDualVec.from_re(yj).derivative2(j, n)

    def fun(r):
        zero = r.re * 0
        fx = _to_array(r.eps1.unwrap(m, 1, zero).ravel())
        fy = _to_array(r.eps2.unwrap(1, n, zero).ravel())
        fxy = _to_array(r.eps1eps2.unwrap(m, n, zero))
        return (r.re, fx, fy, fxy)

    return _map_dual(g(xs, ys), fun)


def _third_partials(r: HyperHyperDual) -> tuple:
    return (r.re, *r.tangents)


def third_partial_derivative(
    g: Callable[[HyperHyperDual, HyperHyperDual, HyperHyperDual], Any],
    x: Any,
    y: Any,
    z: Any,
) -> Any:
    """Return the value and all partial derivatives up to the mixed third partial
    derivative of a trivariate function.

    Returns
    -------
    tuple
        ``(f, fx, fy, fz, fxy, fxz, fyz, fxyz)``.
    """
    x = HyperHyperDual.from_re(x).derivative1()
    y = HyperHyperDual.from_re(y).derivative2()
    z = HyperHyperDual.from_re(z).derivative3()
    return _map_dual(g(x, y, z), _third_partials)


def third_partial_derivative_vec(
    g: Callable[[list[HyperHyperDual]], Any], x: Sequence, i: int, j: int, k: int
) -> Any:
    """Return the value and the partial derivatives with respect to the `i`-th, `j`-th
    and `k`-th variables of a multivariate function.

    The indices may coincide, which yields derivatives such as
    :math:`\\partial^3 f / \\partial x_0^2 \\partial x_1`.

    Returns
    -------
    tuple
        ``(f, fi, fj, fk, fij, fik, fjk, fijk)``.
    """
    xs = [HyperHyperDual.from_re(v) for v in x]
    xs[i] = xs[i].derivative1()
    xs[j] = xs[j].derivative2()
    xs[k] = xs[k].derivative3()
    return _map_dual(g(xs), _third_partials)
