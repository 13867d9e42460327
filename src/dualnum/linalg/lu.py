from typing import Any

import numpy as np
import numpy.typing as npt

from dualnum.autodiff.dual import to_real
from dualnum.config import getcontext
from dualnum.logger import dualnum_logger


class LinAlgError(ValueError):
    """Error raised by :mod:`dualnum.linalg` functions."""


def _infer(x: npt.NDArray[np.object_]) -> npt.NDArray:
    # plain real entries give a float array, anything else stays an object array
    return np.array(x.tolist())


class LU:
    """LU factorization with partial pivoting.

    The entries may be real numbers or dual numbers of any type. Rows are pivoted by
    the magnitude of the innermost real part.

    Parameters
    ----------
    a : array_like
        Square matrix.

    Raises
    ------
    LinAlgError
        If `a` is not square, or if the largest pivot candidate of a column is smaller
        than :attr:`dualnum.config.Context.lu_tolerance`.

    Examples
    --------
    >>> lu = LU([[4.0, 3.0], [6.0, 3.0]])
    >>> lu.solve([10.0, 12.0]).tolist()
    [1.0, 2.0]
    >>> lu.determinant()
    -6.0
    """

    __slots__ = ("_a", "_p", "_p_count")
    _a: npt.NDArray[np.object_]
    _p: list[int]
    _p_count: int

    def __init__(self, a: Any):
        a = np.array(a, dtype=object)

        if a.ndim != 2 or a.shape[0] != a.shape[1]:
            raise LinAlgError("non-square matrix")

        n = a.shape[0]
        tol = getcontext().lu_tolerance
        p = list(range(n))
        p_count = n

        for i in range(n):
            max_a = 0.0
            imax = i

            for k in range(i, n):
                if (abs_a := abs(to_real(a[k, i]))) > max_a:
                    max_a = abs_a
                    imax = k

            if max_a < tol:
                raise LinAlgError("numerically singular matrix")

            if imax != i:
                p[i], p[imax] = p[imax], p[i]
                a[[i, imax]] = a[[imax, i]]
                p_count += 1

            for j in range(i + 1, n):
                a[j, i] = a[j, i] / a[i, i]

                for k in range(i + 1, n):
                    a[j, k] = a[j, k] - a[j, i] * a[i, k]

        self._a = a
        self._p = p
        self._p_count = p_count
        dualnum_logger.debug("LU: factorized a %d x %d matrix", n, n)

    @property
    def size(self) -> int:
        return len(self._p)

    def solve(self, b: Any) -> npt.NDArray:
        """Solve ``a @ x = b``.

        Raises
        ------
        LinAlgError
            If the length of `b` does not match the matrix.
        """
        a = self._a
        n = len(self._p)

        if len(b) != n:
            raise LinAlgError("dimension mismatch")

        x = np.empty(n, dtype=object)

        for i in range(n):
            x[i] = b[self._p[i]]

            for k in range(i):
                x[i] = x[i] - a[i, k] * x[k]

        for i in reversed(range(n)):
            for k in range(i + 1, n):
                x[i] = x[i] - a[i, k] * x[k]

            x[i] = x[i] / a[i, i]

        return _infer(x)

    def determinant(self) -> Any:
        """Return the determinant of the factorized matrix."""
        n = len(self._p)
        det = self._a[0, 0] if n != 0 else 1.0

        for i in range(1, n):
            det = det * self._a[i, i]

        return det if (self._p_count - n) % 2 == 0 else -det

    def inverse(self) -> npt.NDArray:
        """Return the inverse of the factorized matrix."""
        a = self._a
        n = len(self._p)
        ZERO = a[0, 0] * 0 if n != 0 else 0.0
        ONE = ZERO + 1
        ia = np.empty((n, n), dtype=object)

        for j in range(n):
            for i in range(n):
                ia[i, j] = ONE if self._p[i] == j else ZERO

                for k in range(i):
                    ia[i, j] = ia[i, j] - a[i, k] * ia[k, j]

            for i in reversed(range(n)):
                for k in range(i + 1, n):
                    ia[i, j] = ia[i, j] - a[i, k] * ia[k, j]

                ia[i, j] = ia[i, j] / a[i, i]

        return _infer(ia)
