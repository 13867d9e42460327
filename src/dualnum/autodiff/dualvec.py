from typing import Any, Self, final

from dualnum.autodiff.derivative import Derivative, derivative_generic
from dualnum.autodiff.dual import Dual, Dual2, DualNumber, HyperDual

DualNumber._DualNumber__IS_SEALED = False  # type: ignore


@final
class DualVec[T](Dual[T]):
    """Dual number carrying the gradient with respect to several variables.

    Parameters
    ----------
    re : T
    eps : Derivative
        Column of partial derivatives, of shape ``(n, 1)``.

    Examples
    --------
    >>> x, y = DualVec.variable(4.0, 3.0)
    >>> z = (x * x + y * y).sqrt()
    >>> z.re
    5.0
    >>> [round(v, 12) for v in z.eps.unwrap(2, 1).ravel()]
    [0.8, 0.6]
    """

    __slots__ = ()

    @classmethod
    def _zero_tangents(cls, re: T) -> tuple:
        return (Derivative.none(),)

    @classmethod
    def variable(cls, *args: T) -> tuple[Self, ...]:
        """Return one dual number per argument, seeded as independent variables."""
        n = len(args)
        return tuple(cls.from_re(x).derivative(i, n) for i, x in enumerate(args))

    def derivative(self, i: int, n: int) -> Self:  # type: ignore[override]
        """Return a copy seeded as the `i`-th of `n` variables."""
        return self._seed(0, derivative_generic(n, 1, i, self.re * 0))


@final
class Dual2Vec[T](Dual2[T]):
    """Dual number carrying the gradient and the Hessian with respect to several
    variables.

    Parameters
    ----------
    re : T
    v1 : Derivative
        Gradient as a row, of shape ``(1, n)``.
    v2 : Derivative
        Hessian, of shape ``(n, n)``.
    """

    __slots__ = ()

    @classmethod
    def _zero_tangents(cls, re: T) -> tuple:
        return (Derivative.none(), Derivative.none())

    @classmethod
    def _outer(cls, x: Any, y: Any) -> Any:
        return x.tr_mul(y)

    @classmethod
    def variable(cls, *args: T) -> tuple[Self, ...]:
        """Return one dual number per argument, seeded as independent variables."""
        n = len(args)
        return tuple(cls.from_re(x).derivative(i, n) for i, x in enumerate(args))

    def derivative(self, i: int, n: int) -> Self:  # type: ignore[override]
        """Return a copy seeded as the `i`-th of `n` variables."""
        return self._seed(0, derivative_generic(1, n, i, self.re * 0))


@final
class HyperDualVec[T](HyperDual[T]):
    """Hyper-dual number for mixed partial derivatives with respect to two groups of
    variables.

    Parameters
    ----------
    re : T
    eps1 : Derivative
        Derivatives with respect to the first group, of shape ``(m, 1)``.
    eps2 : Derivative
        Derivatives with respect to the second group, of shape ``(1, n)``.
    eps1eps2 : Derivative
        Mixed derivatives, of shape ``(m, n)``.
    """

    __slots__ = ()

    @classmethod
    def _zero_tangents(cls, re: T) -> tuple:
        return (Derivative.none(),) * 3

    def derivative1(self, i: int, m: int) -> Self:  # type: ignore[override]
        """Return a copy seeded as the `i`-th of the `m` variables of the first group."""
        return self._seed(0, derivative_generic(m, 1, i, self.re * 0))

    def derivative2(self, j: int, n: int) -> Self:  # type: ignore[override]
        """Return a copy seeded as the `j`-th of the `n` variables of the second
        group."""
        return self._seed(1, derivative_generic(1, n, j, self.re * 0))


DualNumber._DualNumber__IS_SEALED = True  # type: ignore
