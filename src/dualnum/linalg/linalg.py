import itertools
from typing import Any

import numpy as np
import numpy.typing as npt

from dualnum import function as fn
from dualnum.autodiff.derivative import Derivative
from dualnum.autodiff.dual import Dual, DualNumber, to_priority, to_real
from dualnum.autodiff.dualvec import DualVec
from dualnum.config import getcontext
from dualnum.linalg.lu import LU, LinAlgError, _infer
from dualnum.logger import dualnum_logger


def _map(fun, x: npt.NDArray) -> npt.NDArray[np.object_]:
    return np.frompyfunc(fun, 1, 1)(x).astype(object)


def _vector(values: list) -> npt.NDArray[np.object_]:
    result = np.empty(len(values), dtype=object)

    for i, x in enumerate(values):
        result[i] = x

    return result


def solve(a: Any, b: Any) -> npt.NDArray:
    """Solve a linear equation ``a @ x = b`` whose entries may be dual numbers.

    Only the matrix of innermost real parts is factorized. The real part of the solution
    and then each tangent part are obtained by substitution, one nesting level at a
    time.

    Parameters
    ----------
    a : array_like
        Square coefficient matrix.
    b : array_like
        Right-hand side.

    Returns
    -------
    ndarray
        Solution. It is an object array if any entry is a dual number.

    Raises
    ------
    LinAlgError
        If `a` is numerically singular or not square, or if the length of `b` does not
        match `a`.

    Examples
    --------
    >>> solve([[1.0, 3.0], [5.0, 7.0]], [10.0, 26.0]).tolist()
    [1.0, 3.0]
    """
    a = np.array(a, dtype=object)
    b = np.array(b, dtype=object)

    if a.ndim != 2 or a.shape[0] != a.shape[1]:
        raise LinAlgError("non-square matrix")

    if b.shape != (a.shape[0],):
        raise LinAlgError("dimension mismatch")

    lu = LU(_map(to_real, a))
    return _infer(_solve_recursive(lu, a, b))


def _solve_recursive(
    lu: LU, a: npt.NDArray[np.object_], b: npt.NDArray[np.object_]
) -> npt.NDArray[np.object_]:
    n = len(b)
    ref = max(itertools.chain(a.flat, b.flat), key=to_priority, default=None)

    if not isinstance(ref, DualNumber):
        return np.array(lu.solve(b), dtype=object)

    cls = type(ref)
    ZERO = ref * 0
    a = _map(lambda v: ZERO + v, a)
    b = _map(lambda v: ZERO + v, b)
    x_re = _solve_recursive(lu, _map(lambda v: v.re, a), _map(lambda v: v.re, b))
    a_re = _map(lambda v: v.re, a)
    tangents = [list(cls._zero_tangents(x_re[i])) for i in range(n)]

    for k in range(len(cls._FIELDS)):
        x = [cls(x_re[i], *tangents[i]) for i in range(n)]
        r = [b[i] - sum(a[i, j] * x[j] for j in range(n)) for i in range(n)]
        rk = [ri.tangents[k] for ri in r]

        if isinstance(rk[0], Derivative):
            xk = _solve_derivative(lu, a_re, rk, x_re[0] * 0)
        else:
            xk = _solve_recursive(lu, a_re, _vector(rk))

        for i in range(n):
            tangents[i][k] = xk[i]

    result = np.empty(n, dtype=object)

    for i in range(n):
        result[i] = cls(x_re[i], *tangents[i])

    return result


def _solve_derivative(
    lu: LU, a: npt.NDArray[np.object_], rk: list[Derivative], zero: Any
) -> list[Derivative]:
    n = len(rk)
    shape = next((d.shape for d in rk if d.is_some), None)

    if shape is None:
        return [Derivative.none()] * n

    rows, cols = shape
    values = [d.unwrap(rows, cols, zero) for d in rk]
    result = [np.empty(shape, dtype=object) for _ in range(n)]

    for p, q in itertools.product(range(rows), range(cols)):
        column = np.empty(n, dtype=object)

        for i in range(n):
            column[i] = values[i][p, q]

        xpq = _solve_recursive(lu, a, column)

        for i in range(n):
            result[i][p, q] = xpq[i]

    return [Derivative.some(x) for x in result]


def det(a: Any) -> Any:
    """Return the determinant of a square matrix.

    Raises
    ------
    LinAlgError
        If `a` is numerically singular or not square.
    """
    return LU(a).determinant()


def inv(a: Any) -> npt.NDArray:
    """Return the inverse of a square matrix.

    Raises
    ------
    LinAlgError
        If `a` is numerically singular or not square.
    """
    return LU(a).inverse()


def norm(x: Any) -> Any:
    """Return the Euclidean norm of a vector.

    Examples
    --------
    >>> norm([Dual(3.0, 1.0), Dual(4.0, 3.0)])
    Dual(re=5.0, eps=3.0)
    """
    return fn.sqrt(sum(v * v for v in x))


def eigh(a: Any) -> tuple[npt.NDArray, npt.NDArray]:
    """Return the eigenvalues and eigenvectors of a symmetric matrix.

    The matrix may contain real numbers, or :class:`dualnum.autodiff.Dual` or
    :class:`dualnum.autodiff.DualVec` numbers with real parts. For the latter, the
    derivatives of the eigenvalues and eigenvectors follow from first-order perturbation
    theory, applied to every entry of the gradient of a :class:`DualVec`.

    Parameters
    ----------
    a : array_like
        Symmetric matrix.

    Returns
    -------
    w : ndarray
        Eigenvalues in ascending order.
    v : ndarray
        Normalized eigenvectors as columns.

    Raises
    ------
    TypeError
        If the entries are neither real numbers nor first-order dual numbers of a
        single type with real parts.

    Warnings
    --------
    The eigenvector derivatives are undefined for degenerate eigenvalues. A warning is
    logged in that case.

    Examples
    --------
    >>> w, v = eigh([[Dual(2.0, 1.0), 0.0], [0.0, Dual(1.0, 0.0)]])
    >>> w[0], w[1]
    (Dual(re=1.0, eps=0.0), Dual(re=2.0, eps=1.0))
    """
    a = np.array(a, dtype=object)

    if a.ndim != 2 or a.shape[0] != a.shape[1]:
        raise LinAlgError("non-square matrix")

    n = a.shape[0]
    duals = [x for x in a.flat if isinstance(x, DualNumber)]

    if not duals:
        dualnum_logger.debug("eigh: real %d x %d matrix", n, n)
        w, v = np.linalg.eigh(a.astype(float))
        return (w, v)

    cls = type(duals[0])

    for x in duals:
        if cls not in (Dual, DualVec) or type(x) is not cls or to_priority(x) != 0:
            raise TypeError(
                "eigh supports real matrices and matrices of Dual or DualVec with real "
                f"parts, not {type(x).__name__!r}"
            )

    if cls is Dual:
        p = 1
    else:
        p = max((x.eps.shape[0] for x in duals if x.eps.is_some), default=0)

    a0 = np.empty((n, n))
    a1 = np.zeros((p, n, n))

    for i, j in itertools.product(range(n), range(n)):
        match x := a[i, j]:
            case DualVec():
                a0[i, j] = x.re
                a1[:, i, j] = x.eps.unwrap(p, 1).ravel()

            case Dual():
                a0[i, j] = x.re
                a1[0, i, j] = x.eps

            case _:
                a0[i, j] = x

    dualnum_logger.debug(
        "eigh: first-order perturbation of a %d x %d matrix in %d directions", n, n, p
    )
    w0, v0 = np.linalg.eigh(a0)
    gap = w0[np.newaxis, :] - w0[:, np.newaxis]
    offdiag = ~np.eye(n, dtype=bool)

    if np.any(np.abs(gap[offdiag]) <= np.finfo(float).eps * max(1.0, np.abs(w0).max())):
        dualnum_logger.warning("eigh: degenerate eigenvalues in a %d x %d matrix", n, n)

    dw = []
    dv = []

    for a1k in a1:
        m = v0.T @ a1k @ v0

        with np.errstate(divide="ignore", invalid="ignore"):
            c = np.where(offdiag, m / np.where(offdiag, gap, 1.0), 0.0)

        dw.append(np.diag(m))
        dv.append(v0 @ c)

    def lift(re: float, tangents: list[float]) -> Dual:
        if cls is Dual:
            return Dual(re, *tangents)

        if not tangents:
            return DualVec(re, Derivative.none())

        return DualVec(re, Derivative([[t] for t in tangents]))

    w = np.empty(n, dtype=object)
    v = np.empty((n, n), dtype=object)

    for i in range(n):
        w[i] = lift(float(w0[i]), [float(x[i]) for x in dw])

    for i, j in itertools.product(range(n), range(n)):
        v[i, j] = lift(float(v0[i, j]), [float(x[i, j]) for x in dv])

    return (w, v)


def jacobi_eigenvalue(
    a: Any, max_iter: int | None = None
) -> tuple[npt.NDArray, npt.NDArray]:
    """Return the eigenvalues and eigenvectors of a symmetric matrix by the cyclic
    Jacobi method.

    The entries may be real numbers or dual numbers of any type.

    Parameters
    ----------
    a : array_like
        Symmetric matrix.
    max_iter : int, optional
        Maximum number of sweeps. Defaults to
        :attr:`dualnum.config.Context.jacobi_max_iter`.

    Returns
    -------
    d : ndarray
        Eigenvalues in ascending order of their real parts.
    v : ndarray
        Eigenvectors as columns.

    Warnings
    --------
    If the off-diagonal entries do not vanish within `max_iter` sweeps, a warning is
    logged and the current approximation is returned.
    """
    a = np.array(a, dtype=object)

    if a.ndim != 2 or a.shape[0] != a.shape[1]:
        raise LinAlgError("non-square matrix")

    if max_iter is None:
        max_iter = getcontext().jacobi_max_iter

    n = a.shape[0]
    ZERO = a[0, 0] * 0
    ONE = ZERO + 1
    v = np.empty((n, n), dtype=object)

    for i, j in itertools.product(range(n), range(n)):
        v[i, j] = ONE if i == j else ZERO

    d = [a[i, i] for i in range(n)]
    bw = list(d)
    zw = [ZERO] * n

    for it_num in range(max_iter):
        thresh = 0.0

        for j in range(n):
            for i in range(j):
                thresh += to_real(a[i, j]) ** 2

        thresh = fn.sqrt(thresh) / n

        if thresh == 0.0:
            dualnum_logger.debug("jacobi_eigenvalue: converged after %d sweeps", it_num)
            break

        for p in range(n):
            for q in range(p + 1, n):
                gapq = abs(a[p, q]) * 10
                termp = gapq + abs(d[p])
                termq = gapq + abs(d[q])

                if 4 < it_num and termp == abs(d[p]) and termq == abs(d[q]):
                    a[p, q] = ZERO
                    continue

                if not thresh <= abs(to_real(a[p, q])):
                    continue

                h = d[q] - d[p]

                if abs(h) + gapq == abs(h):
                    t = a[p, q] / h
                else:
                    theta = h * 0.5 / a[p, q]
                    t = 1 / (abs(theta) + fn.sqrt(theta * theta + 1))

                    if to_real(theta) < 0:
                        t = -t

                c = 1 / fn.sqrt(t * t + 1)
                s = t * c
                tau = s / (c + 1)
                h = t * a[p, q]
                zw[p] = zw[p] - h
                zw[q] = zw[q] + h
                d[p] = d[p] - h
                d[q] = d[q] + h
                a[p, q] = ZERO

                for j in range(p):
                    g, h = a[j, p], a[j, q]
                    a[j, p] = g - s * (h + g * tau)
                    a[j, q] = h + s * (g - h * tau)

                for j in range(p + 1, q):
                    g, h = a[p, j], a[j, q]
                    a[p, j] = g - s * (h + g * tau)
                    a[j, q] = h + s * (g - h * tau)

                for j in range(q + 1, n):
                    g, h = a[p, j], a[q, j]
                    a[p, j] = g - s * (h + g * tau)
                    a[q, j] = h + s * (g - h * tau)

                for j in range(n):
                    g, h = v[j, p], v[j, q]
                    v[j, p] = g - s * (h + g * tau)
                    v[j, q] = h + s * (g - h * tau)

        bw = [x + y for x, y in zip(bw, zw)]
        d = list(bw)
        zw = [ZERO] * n
    else:
        dualnum_logger.warning(
            "jacobi_eigenvalue: no convergence within %d sweeps", max_iter
        )

    for k in range(n - 1):
        m = k

        for j in range(k + 1, n):
            if to_real(d[j]) < to_real(d[m]):
                m = j

        if m != k:
            d[m], d[k] = d[k], d[m]
            v[:, [m, k]] = v[:, [k, m]]

    return (_infer(_vector(d)), _infer(v))


def smallest_ev(a: Any) -> tuple[Any, npt.NDArray]:
    """Return the smallest eigenvalue of a symmetric matrix and its eigenvector.

    Matrices of size one and two are handled in closed form, larger ones by
    :func:`jacobi_eigenvalue`.

    Examples
    --------
    >>> ev, u = smallest_ev([[2.0, 2.0], [2.0, 5.0]])
    >>> ev
    1.0
    """
    a = np.array(a, dtype=object)

    if a.ndim != 2 or a.shape[0] != a.shape[1]:
        raise LinAlgError("non-square matrix")

    match a.shape[0]:
        case 1:
            a00 = a[0, 0]
            u = np.empty(1, dtype=object)
            u[0] = a00 * 0 + 1
            return (a00, _infer(u))

        case 2:
            a00, b, c = a[0, 0], a[0, 1], a[1, 1]

            if to_real(b) == 0 and to_real(a00) == to_real(c):
                ZERO = (a00 + b + c) * 0
                return (a00, _infer(_vector([ZERO + 1, ZERO])))

            ev = (a00 + c - fn.sqrt((a00 - c) ** 2 + b * b * 4)) * 0.5

            if to_real(b) == 0 and to_real(a00) < to_real(c):
                # the first row of a - ev vanishes, so use the second one
                x, y = c - ev, -b
            else:
                x, y = b, ev - a00

            norm_u = fn.sqrt(x * x + y * y)
            return (ev, _infer(_vector([x / norm_u, y / norm_u])))

    d, v = jacobi_eigenvalue(a)
    return (d[0], v[:, 0])
