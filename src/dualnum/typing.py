"""
##############################
Typing (:mod:`dualnum.typing`)
##############################

This module provides the protocols that bound the real part of a dual number.

A dual number is generic over the type of its real part. That type is either a plain
real value or another dual number, so the protocols below describe what every level of
a nested dual number must support.

.. autoclass:: Scalar
    :show-inheritance:
    :no-members:

.. autoclass:: ComparableScalar
    :show-inheritance:
    :no-members:

.. autodata:: RealScalar

"""

from abc import abstractmethod
from typing import Protocol, Self, SupportsAbs

import mpmath
import numpy as np

type RealScalar = float | int | np.floating | np.integer | mpmath.mpf
"""Plain values at the bottom of a dual-number tower."""


class Scalar(Protocol):
    """Protocol for values that can be the real part of a dual number.

    Arithmetic must accept a plain float or integer on either side, because the chain
    rule multiplies tangent parts by derivative values computed at a lower level.
    Every dual number satisfies this protocol. Its operators also accept a dual number
    of lower nesting level, which is treated as a constant, and they raise
    :exc:`TypeError` for two different dual types at the same level.

    Notes
    -----
    ``x ** n`` with an integer `n` must be supported. Dual numbers additionally accept
    a float or dual exponent and a plain base through :meth:`__rpow__`.
    """

    __slots__ = ()

    @abstractmethod
    def __add__(self, rhs: Self | float) -> Self: ...

    @abstractmethod
    def __sub__(self, rhs: Self | float) -> Self: ...

    @abstractmethod
    def __mul__(self, rhs: Self | float) -> Self: ...

    @abstractmethod
    def __truediv__(self, rhs: Self | float) -> Self: ...

    @abstractmethod
    def __pow__(self, rhs: int) -> Self: ...

    @abstractmethod
    def __radd__(self, lhs: Self | float) -> Self: ...

    @abstractmethod
    def __rsub__(self, lhs: Self | float) -> Self: ...

    @abstractmethod
    def __rmul__(self, lhs: Self | float) -> Self: ...

    @abstractmethod
    def __rtruediv__(self, lhs: Self | float) -> Self: ...

    @abstractmethod
    def __rpow__(self, lhs: float) -> Self: ...

    @abstractmethod
    def __neg__(self) -> Self: ...

    @abstractmethod
    def __pos__(self) -> Self: ...


class ComparableScalar(Scalar, SupportsAbs, Protocol):
    """Protocol for :class:`Scalar` values that are ordered like real numbers.

    A dual number is ordered by its innermost real part, so ``Dual(1.0, 5.0) <
    Dual(2.0, -5.0)`` holds and a dual number compares with plain floats directly. The
    tangent parts never take part in a comparison. :func:`abs` negates the whole dual
    number when the real part is negative, which keeps the derivative of ``abs(x)``
    equal to the sign of `x` away from zero.
    """

    __slots__ = ()

    @abstractmethod
    def __lt__(self, rhs: Self | float) -> bool: ...

    @abstractmethod
    def __le__(self, rhs: Self | float) -> bool: ...

    @abstractmethod
    def __gt__(self, rhs: Self | float) -> bool: ...

    @abstractmethod
    def __ge__(self, rhs: Self | float) -> bool: ...
