"""
#####################################
Configuration (:mod:`dualnum.config`)
#####################################

.. currentmodule:: dualnum.config

This module provides the numerical settings shared by :mod:`dualnum`.

Context
=======

.. autosummary::
    :toctree: generated/

    Context
    getcontext
    localcontext
    setcontext

"""

import contextlib
import contextvars
import sys
from typing import Self


class Context:
    """Create a new context.

    A context collects the tolerances used by numerical routines. The active context
    is stored in a :class:`contextvars.ContextVar`, so every thread and every asyncio
    task can work with its own settings.

    Parameters
    ----------
    lu_tolerance : float, default=1e-10
        Smallest admissible pivot magnitude of an LU factorization. Smaller pivots raise
        :class:`dualnum.linalg.LinAlgError`.
    sph_epsilon : float, default=sys.float_info.epsilon
        Below this magnitude, the spherical Bessel functions are evaluated by their
        Taylor expansion around the origin.
    jacobi_max_iter : int, default=200
        Maximum number of sweeps of :func:`dualnum.linalg.jacobi_eigenvalue`.

    Raises
    ------
    ValueError
        If a tolerance is negative or `jacobi_max_iter` is not positive.
    """

    __slots__ = ("_lu_tolerance", "_sph_epsilon", "_jacobi_max_iter")
    _lu_tolerance: float
    _sph_epsilon: float
    _jacobi_max_iter: int

    def __init__(
        self,
        lu_tolerance: float = 1e-10,
        sph_epsilon: float = sys.float_info.epsilon,
        jacobi_max_iter: int = 200,
    ):
        if not lu_tolerance >= 0.0:
            raise ValueError("lu_tolerance must be non-negative")

        if not sph_epsilon >= 0.0:
            raise ValueError("sph_epsilon must be non-negative")

        if jacobi_max_iter < 1:
            raise ValueError("jacobi_max_iter must be positive")

        self._lu_tolerance = float(lu_tolerance)
        self._sph_epsilon = float(sph_epsilon)
        self._jacobi_max_iter = int(jacobi_max_iter)

    @property
    def lu_tolerance(self) -> float:
        return self._lu_tolerance

    @property
    def sph_epsilon(self) -> float:
        return self._sph_epsilon

    @property
    def jacobi_max_iter(self) -> int:
        return self._jacobi_max_iter

    def copy(self) -> Self:
        return self.__class__(
            self._lu_tolerance, self._sph_epsilon, self._jacobi_max_iter
        )

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(lu_tolerance={self._lu_tolerance!r}, "
            f"sph_epsilon={self._sph_epsilon!r}, "
            f"jacobi_max_iter={self._jacobi_max_iter!r})"
        )

    def __copy__(self) -> Self:
        return self.copy()


_var: contextvars.ContextVar[Context] = contextvars.ContextVar("dualnum")


def getcontext() -> Context:
    """Return the current context for the active thread."""
    if context := _var.get(None):
        return context

    context = Context()
    _var.set(context)
    return context


def setcontext(ctx: Context) -> None:
    """Set the current context for the active thread to `ctx`."""
    if not isinstance(ctx, Context):
        raise TypeError("ctx must be a Context")

    _var.set(ctx)


@contextlib.contextmanager
def localcontext(
    ctx: Context | None = None,
    *,
    lu_tolerance: float | None = None,
    sph_epsilon: float | None = None,
    jacobi_max_iter: int | None = None,
):
    """Return a context manager that will set the current context for the active thread
    to a copy of `ctx` on entry to the with-statement and restore the previous context
    when exiting the with-statement.

    Keyword arguments override the corresponding settings of the copy.

    Examples
    --------
    >>> with localcontext(lu_tolerance=1e-14) as ctx:
    ...     print(ctx.lu_tolerance)
    1e-14
    >>> print(getcontext().lu_tolerance)
    1e-10
    """
    if ctx is None:
        ctx = getcontext()

    if lu_tolerance is None:
        lu_tolerance = ctx.lu_tolerance

    if sph_epsilon is None:
        sph_epsilon = ctx.sph_epsilon

    if jacobi_max_iter is None:
        jacobi_max_iter = ctx.jacobi_max_iter

    ctx = Context(lu_tolerance, sph_epsilon, jacobi_max_iter)
    token = _var.set(ctx)

    try:
        yield ctx
    finally:
        _var.reset(token)
