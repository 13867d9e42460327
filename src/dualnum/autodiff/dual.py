import sys
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Final, Self, final

import numpy as np

from dualnum import function as fn
from dualnum.autodiff import derivatives
from dualnum.autodiff.derivative import Derivative
from dualnum.typing import ComparableScalar


class NonDifferentiableError(ArithmeticError):
    """Raised by operations whose derivative is not defined, such as rounding."""


def _tangent(i: int, name: str) -> property:
    def fget(self):
        return self._tangents[i]

    return property(fget, doc=f"Tangent part ``{name}``.")


def _is_acceptable(value: object) -> bool:
    return not isinstance(value, np.ndarray | Derivative)


def to_real(x: Any) -> Any:
    """Return the innermost real part of `x`.

    Examples
    --------
    >>> to_real(Dual(Dual(2.0, 1.0), Dual(1.0, 0.0)))
    2.0
    >>> to_real(3.5)
    3.5
    """
    while isinstance(x, DualNumber):
        x = x.re

    return x


def nderiv(x: Any) -> int:
    """Return the number of derivative orders carried by `x`.

    Plain values carry none. The orders of nested dual numbers accumulate.

    Examples
    --------
    >>> nderiv(1.0)
    0
    >>> nderiv(Dual2(Dual(1.0, 1.0), Dual(1.0, 0.0), Dual(0.0, 0.0)))
    3
    """
    result = 0

    while isinstance(x, DualNumber):
        result += x._ORDER
        x = x.re

    return result


class DualNumber[T](ComparableScalar, ABC):
    r"""Abstract base class for dual numbers.

    A dual number stores the value of a function in `re` together with its derivatives
    in the tangent parts. The real part may itself be a dual number, which gives access
    to higher and mixed derivatives.

    Parameters
    ----------
    re : T
        Real part.
    *tangents : Any
        Tangent parts, in the order of :attr:`_FIELDS`.

    Attributes
    ----------
    re : T
        Real part.

    Raises
    ------
    TypeError
        If the number of tangent parts does not match the type.

    Warnings
    --------
    Users cannot define classes derived from this.

    See Also
    --------
    Dual, Dual2, Dual3, HyperDual, HyperHyperDual

    Notes
    -----
    An operand of lower :attr:`priority`, as well as a plain number, is treated as a
    constant. Two operands of equal priority must be of the same type.

    Equality, ordering, :func:`bool` and :func:`hash` only look at the innermost real
    part.
    """

    __slots__ = ("re", "_tangents", "_priority")
    __IS_SEALED: Final = True
    _FIELDS: ClassVar[tuple[str, ...]]
    _ORDER: ClassVar[int]
    re: T
    _tangents: tuple
    _priority: int

    def __init__(self, re: T, *tangents: Any):
        if len(tangents) != len(self._FIELDS):
            raise TypeError(
                f"{type(self).__name__}() takes {len(self._FIELDS)} tangent parts "
                f"but {len(tangents)} were given"
            )

        self.re = re
        self._tangents = tangents
        self._priority = (re._priority + 1) if isinstance(re, DualNumber) else 0

    @classmethod
    def _zero_tangents(cls, re: T) -> tuple:
        ZERO = re * 0
        return (ZERO,) * len(cls._FIELDS)

    @classmethod
    def from_re(cls, re: T) -> Self:
        """Return a dual number with real part `re` and vanishing tangent parts."""
        return cls(re, *cls._zero_tangents(re))

    @property
    def priority(self) -> int:
        """Nesting level of the dual number."""
        return self._priority

    @property
    def tangents(self) -> tuple:
        return self._tangents

    @property
    def nderiv(self) -> int:
        return nderiv(self)

    def is_zero(self) -> bool:
        return to_real(self) == 0

    def is_one(self) -> bool:
        return to_real(self) == 1

    def _one(self) -> Self:
        return self.from_re(self.re * 0 + 1)

    def _seed(self, i: int, value: Any) -> Self:
        tangents = list(self._tangents)
        tangents[i] = value
        return self.__class__(self.re, *tangents)

    @classmethod
    def _outer(cls, x: Any, y: Any) -> Any:
        return x * y

    @abstractmethod
    def _product(self, rhs: Self) -> tuple:
        raise NotImplementedError

    @abstractmethod
    def _chain(self, f1: Any, f2: Any, f3: Any) -> tuple:
        raise NotImplementedError

    def chain_rule(self, f0: Any, f1: Any, f2: Any = None, f3: Any = None) -> Self:
        """Apply a function to the dual number, given the derivatives of the function.

        Parameters
        ----------
        f0, f1, f2, f3 : Any
            Value and derivatives of the function at :attr:`re`. Orders beyond the
            order of the type may be omitted.
        """
        return self.__class__(f0, *self._chain(f1, f2, f3))

    def _apply(self, table, *args: Any) -> Self:
        return self.chain_rule(*table(self.re, self._ORDER, *args))

    def _operand(self, value: object) -> bool | None:
        # True for a dual of the same type, False for a constant, None otherwise.
        if not _is_acceptable(value):
            return None

        if not isinstance(value, DualNumber) or self._priority > value._priority:
            return False

        if self._priority < value._priority:
            return None

        if type(self) is not type(value):
            raise TypeError(
                f"cannot combine {type(self).__name__!r} and {type(value).__name__!r} "
                "of the same nesting level"
            )

        return True

    def _defer(self, rhs: Any, name: str) -> Any:
        # Python never tries the reflected method of an operand of the same class.
        if isinstance(rhs, DualNumber) and rhs._priority > self._priority:
            return getattr(rhs, name)(self)

        return NotImplemented

    def __repr__(self) -> str:
        fields = ", ".join(
            f"{name}={x!r}" for name, x in zip(self._FIELDS, self._tangents)
        )
        return f"{type(self).__name__}(re={self.re!r}, {fields})"

    def __str__(self) -> str:
        fields = ", ".join(
            f"{name}={x}" for name, x in zip(self._FIELDS, self._tangents)
        )
        return f"{type(self).__name__}(re={self.re}, {fields})"

    def __eq__(self, other: object) -> bool:
        if not _is_acceptable(other):
            return NotImplemented

        return to_real(self) == to_real(other)

    def __ne__(self, other: object) -> bool:
        if not _is_acceptable(other):
            return NotImplemented

        return to_real(self) != to_real(other)

    def __lt__(self, rhs: Any) -> bool:
        if not _is_acceptable(rhs):
            return NotImplemented

        return to_real(self) < to_real(rhs)

    def __le__(self, rhs: Any) -> bool:
        if not _is_acceptable(rhs):
            return NotImplemented

        return to_real(self) <= to_real(rhs)

    def __gt__(self, rhs: Any) -> bool:
        if not _is_acceptable(rhs):
            return NotImplemented

        return to_real(self) > to_real(rhs)

    def __ge__(self, rhs: Any) -> bool:
        if not _is_acceptable(rhs):
            return NotImplemented

        return to_real(self) >= to_real(rhs)

    def __hash__(self) -> int:
        return hash(to_real(self))

    def __bool__(self) -> bool:
        return bool(to_real(self))

    def __add__(self, rhs: Any) -> Self:
        match self._operand(rhs):
            case None:
                return self._defer(rhs, "__radd__")

            case False:
                return self.__class__(self.re + rhs, *self._tangents)

        tangents = (x + y for x, y in zip(self._tangents, rhs._tangents))
        return self.__class__(self.re + rhs.re, *tangents)

    def __sub__(self, rhs: Any) -> Self:
        match self._operand(rhs):
            case None:
                return self._defer(rhs, "__rsub__")

            case False:
                return self.__class__(self.re - rhs, *self._tangents)

        tangents = (x - y for x, y in zip(self._tangents, rhs._tangents))
        return self.__class__(self.re - rhs.re, *tangents)

    def __mul__(self, rhs: Any) -> Self:
        match self._operand(rhs):
            case None:
                return self._defer(rhs, "__rmul__")

            case False:
                tangents = (x * rhs for x in self._tangents)
                return self.__class__(self.re * rhs, *tangents)

        return self.__class__(self.re * rhs.re, *self._product(rhs))

    def __truediv__(self, rhs: Any) -> Self:
        match self._operand(rhs):
            case None:
                return self._defer(rhs, "__rtruediv__")

            case False:
                tangents = (x / rhs for x in self._tangents)
                return self.__class__(self.re / rhs, *tangents)

        return self * rhs.recip()

    def __pow__(self, rhs: Any) -> Self:
        if isinstance(rhs, int | np.integer):
            return self.powi(int(rhs))

        match self._operand(rhs):
            case None:
                return self._defer(rhs, "__rpow__")

            case True:
                return self.powd(rhs)

        if isinstance(rhs, DualNumber):
            return self.powd(rhs)

        return self.powf(rhs)

    def __neg__(self) -> Self:
        return self.__class__(-self.re, *(-x for x in self._tangents))

    def __pos__(self) -> Self:
        return self

    def __abs__(self) -> Self:
        return -self if to_real(self) < 0 else self

    def __radd__(self, lhs: Any) -> Self:
        if self._operand(lhs) is not False:
            return NotImplemented

        return self.__class__(lhs + self.re, *self._tangents)

    def __rsub__(self, lhs: Any) -> Self:
        if self._operand(lhs) is not False:
            return NotImplemented

        return self.__class__(lhs - self.re, *(-x for x in self._tangents))

    def __rmul__(self, lhs: Any) -> Self:
        if self._operand(lhs) is not False:
            return NotImplemented

        tangents = (x * lhs for x in self._tangents)
        return self.__class__(lhs * self.re, *tangents)

    def __rtruediv__(self, lhs: Any) -> Self:
        if self._operand(lhs) is not False:
            return NotImplemented

        return self.recip() * lhs

    def __rpow__(self, lhs: Any) -> Self:
        if self._operand(lhs) is not False:
            return NotImplemented

        return (self * fn.log(lhs)).exp()

    def _not_differentiable(self, *args: Any) -> Any:
        raise NonDifferentiableError(
            f"operation is not differentiable for {type(self).__name__!r}"
        )

    __floor__ = __ceil__ = __trunc__ = __round__ = _not_differentiable
    __mod__ = __rmod__ = __floordiv__ = __rfloordiv__ = _not_differentiable
    __divmod__ = __rdivmod__ = _not_differentiable
    floor = ceil = round = trunc = fract = _not_differentiable

    def _dualnum_overload_(self, fun, *args: Any) -> Any:
        match fun.__name__:
            case "pow":
                x, y = args
                return x**y

            case "arctan2":
                y, x = args
                ref = y if to_priority(y) >= to_priority(x) else x
                ZERO = ref * 0
                return (ZERO + y).arctan2(ZERO + x)

            case name:
                if (method := getattr(type(self), name, None)) is None:
                    return NotImplemented

                return method(*args)

    def recip(self) -> Self:
        """Reciprocal."""
        return self._apply(derivatives.recip)

    def powi(self, n: int) -> Self:
        """Power with an integer exponent."""
        match n:
            case 0:
                return self._one()

            case 1:
                return self

            case 2:
                return self * self

        return self._apply(derivatives.powi, n)

    def powf(self, n: Any) -> Self:
        """Power with a real exponent.

        Notes
        -----
        The value is formed as ``x ** (n - 3) * x ** 3``. At ``x == 0`` this gives
        ``nan`` for a non-integer `n` between 0 and 3, although the plain power is 0.
        Use :meth:`powi` or :meth:`sqrt` where the real part may vanish.
        """
        if n == 0:
            return self._one()

        if n == 1:
            return self

        if abs(n - 2) < sys.float_info.epsilon:
            return self * self

        return self._apply(derivatives.powf, n)

    def powd(self, e: Any) -> Self:
        """Power with an exponent that is itself a dual number."""
        return (self.log() * e).exp()

    def sqrt(self) -> Self:
        return self._apply(derivatives.sqrt)

    def cbrt(self) -> Self:
        return self._apply(derivatives.cbrt)

    def exp(self) -> Self:
        return self._apply(derivatives.exp)

    def exp2(self) -> Self:
        return self._apply(derivatives.exp2)

    def expm1(self) -> Self:
        return self._apply(derivatives.expm1)

    def log(self) -> Self:
        return self._apply(derivatives.log)

    def log_base(self, base: Any) -> Self:
        return self._apply(derivatives.log_base, base)

    def log2(self) -> Self:
        return self._apply(derivatives.log2)

    def log10(self) -> Self:
        return self._apply(derivatives.log10)

    def log1p(self) -> Self:
        return self._apply(derivatives.log1p)

    def sin(self) -> Self:
        return self._apply(derivatives.sin)

    def cos(self) -> Self:
        return self._apply(derivatives.cos)

    def sin_cos(self) -> tuple[Self, Self]:
        """Sine and cosine, sharing a single evaluation of the real part."""
        s, c = fn.sin_cos(self.re)
        n = self._ORDER + 1
        return (
            self.chain_rule(*[s, c, -s, -c][:n]),
            self.chain_rule(*[c, -s, -c, s][:n]),
        )

    def tan(self) -> Self:
        s, c = self.sin_cos()
        return s / c

    def arcsin(self) -> Self:
        return self._apply(derivatives.arcsin)

    def arccos(self) -> Self:
        return self._apply(derivatives.arccos)

    def arctan(self) -> Self:
        return self._apply(derivatives.arctan)

    def arctan2(self, other: Any) -> Self:
        """Four-quadrant inverse tangent of ``self / other``."""
        res = (self / other).arctan()
        other_re = other.re if self._operand(other) else other
        return self.__class__(fn.arctan2(self.re, other_re), *res._tangents)

    def sinh(self) -> Self:
        return self._apply(derivatives.sinh)

    def cosh(self) -> Self:
        return self._apply(derivatives.cosh)

    def tanh(self) -> Self:
        return self.sinh() / self.cosh()

    def arcsinh(self) -> Self:
        return self._apply(derivatives.arcsinh)

    def arccosh(self) -> Self:
        return self._apply(derivatives.arccosh)

    def arctanh(self) -> Self:
        return self._apply(derivatives.arctanh)

    def sph_j0(self) -> Self:
        return fn.sph_j0(self)

    def sph_j1(self) -> Self:
        return fn.sph_j1(self)

    def sph_j2(self) -> Self:
        return fn.sph_j2(self)

    def mul_add(self, a: Any, b: Any) -> Self:
        """Return ``self * a + b``."""
        return self * a + b

    def abs(self) -> Self:
        return abs(self)

    def signum(self) -> Self:
        """Sign of the real part, with vanishing tangent parts."""
        return self.from_re(fn.signum(self.re))

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)

        if cls.__IS_SEALED:
            raise RuntimeError("subclassing is forbidden")

        for i, name in enumerate(cls.__dict__.get("_FIELDS", ())):
            setattr(cls, name, _tangent(i, name))


def to_priority(x: Any) -> int:
    """Return the nesting level of `x`, or -1 for plain values."""
    return x._priority if isinstance(x, DualNumber) else -1


DualNumber._DualNumber__IS_SEALED = False  # type: ignore


class Dual[T](DualNumber[T]):
    r"""Dual number for first derivatives.

    Parameters
    ----------
    re : T
    eps : T

    Notes
    -----
    Instances behave like elements of :math:`T[\varepsilon]/(\varepsilon^2)`.

    Examples
    --------
    >>> x = Dual(2.0, 1.0)
    >>> y = x * x + 3 * x
    >>> y
    Dual(re=10.0, eps=7.0)
    >>> print(format(Dual.from_re(5.0).derivative().sqrt().eps, ".6f"))
    0.223607
    """

    __slots__ = ()
    _FIELDS = ("eps",)
    _ORDER = 1

    def derivative(self) -> Self:
        """Return a copy whose tangent part is seeded with one."""
        return self._seed(0, self.re * 0 + 1)

    def _product(self, rhs: Self) -> tuple:
        return (self.eps * rhs.re + rhs.eps * self.re,)

    def _chain(self, f1: Any, f2: Any, f3: Any) -> tuple:
        return (self.eps * f1,)


class Dual2[T](DualNumber[T]):
    """Dual number for first and second derivatives.

    Parameters
    ----------
    re : T
    v1 : T
        First derivative.
    v2 : T
        Second derivative.

    Examples
    --------
    >>> x = Dual2.from_re(5.0).derivative()
    >>> x**3
    Dual2(re=125.0, v1=75.0, v2=30.0)
    """

    __slots__ = ()
    _FIELDS = ("v1", "v2")
    _ORDER = 2

    def derivative(self) -> Self:
        return self._seed(0, self.re * 0 + 1)

    def _product(self, rhs: Self) -> tuple:
        outer = self._outer
        v1 = self.v1 * rhs.re + rhs.v1 * self.re
        v2 = (
            self.v2 * rhs.re
            + outer(self.v1, rhs.v1)
            + outer(rhs.v1, self.v1)
            + rhs.v2 * self.re
        )
        return (v1, v2)

    def _chain(self, f1: Any, f2: Any, f3: Any) -> tuple:
        return (self.v1 * f1, self.v2 * f1 + self._outer(self.v1, self.v1) * f2)


@final
class Dual3[T](DualNumber[T]):
    """Dual number for derivatives up to third order.

    Parameters
    ----------
    re : T
    v1 : T
        First derivative.
    v2 : T
        Second derivative.
    v3 : T
        Third derivative.
    """

    __slots__ = ()
    _FIELDS = ("v1", "v2", "v3")
    _ORDER = 3

    def derivative(self) -> Self:
        return self._seed(0, self.re * 0 + 1)

    def _product(self, rhs: Self) -> tuple:
        v1 = self.v1 * rhs.re + rhs.v1 * self.re
        v2 = self.v2 * rhs.re + self.v1 * rhs.v1 * 2 + rhs.v2 * self.re
        v3 = (
            self.v3 * rhs.re
            + self.v2 * rhs.v1 * 3
            + self.v1 * rhs.v2 * 3
            + rhs.v3 * self.re
        )
        return (v1, v2, v3)

    def _chain(self, f1: Any, f2: Any, f3: Any) -> tuple:
        v1, v2, v3 = self._tangents
        return (
            v1 * f1,
            v2 * f1 + v1 * v1 * f2,
            v3 * f1 + v1 * v2 * 3 * f2 + v1 * v1 * v1 * f3,
        )


class HyperDual[T](DualNumber[T]):
    r"""Hyper-dual number for mixed second partial derivatives.

    Parameters
    ----------
    re : T
    eps1 : T
    eps2 : T
    eps1eps2 : T

    Notes
    -----
    Instances behave like elements of
    :math:`T[\varepsilon_1,\varepsilon_2]/(\varepsilon_1^2,\varepsilon_2^2)`.
    """

    __slots__ = ()
    _FIELDS = ("eps1", "eps2", "eps1eps2")
    _ORDER = 2

    def derivative1(self) -> Self:
        return self._seed(0, self.re * 0 + 1)

    def derivative2(self) -> Self:
        return self._seed(1, self.re * 0 + 1)

    def _product(self, rhs: Self) -> tuple:
        outer = self._outer
        eps1 = self.eps1 * rhs.re + rhs.eps1 * self.re
        eps2 = self.eps2 * rhs.re + rhs.eps2 * self.re
        eps1eps2 = (
            self.eps1eps2 * rhs.re
            + outer(self.eps1, rhs.eps2)
            + outer(rhs.eps1, self.eps2)
            + rhs.eps1eps2 * self.re
        )
        return (eps1, eps2, eps1eps2)

    def _chain(self, f1: Any, f2: Any, f3: Any) -> tuple:
        return (
            self.eps1 * f1,
            self.eps2 * f1,
            self.eps1eps2 * f1 + self._outer(self.eps1, self.eps2) * f2,
        )


@final
class HyperHyperDual[T](DualNumber[T]):
    """Dual number for mixed third partial derivatives with respect to three variables.

    Parameters
    ----------
    re : T
    eps1, eps2, eps3 : T
    eps1eps2, eps1eps3, eps2eps3 : T
    eps1eps2eps3 : T
    """

    __slots__ = ()
    _FIELDS = (
        "eps1",
        "eps2",
        "eps3",
        "eps1eps2",
        "eps1eps3",
        "eps2eps3",
        "eps1eps2eps3",
    )
    _ORDER = 3

    def derivative1(self) -> Self:
        return self._seed(0, self.re * 0 + 1)

    def derivative2(self) -> Self:
        return self._seed(1, self.re * 0 + 1)

    def derivative3(self) -> Self:
        return self._seed(2, self.re * 0 + 1)

    def _product(self, rhs: Self) -> tuple:
        a1, a2, a3, a12, a13, a23, a123 = self._tangents
        b1, b2, b3, b12, b13, b23, b123 = rhs._tangents
        a0, b0 = self.re, rhs.re
        return (
            a1 * b0 + b1 * a0,
            a2 * b0 + b2 * a0,
            a3 * b0 + b3 * a0,
            a12 * b0 + a1 * b2 + a2 * b1 + b12 * a0,
            a13 * b0 + a1 * b3 + a3 * b1 + b13 * a0,
            a23 * b0 + a2 * b3 + a3 * b2 + b23 * a0,
            a123 * b0
            + a12 * b3
            + a13 * b2
            + a23 * b1
            + a1 * b23
            + a2 * b13
            + a3 * b12
            + b123 * a0,
        )

    def _chain(self, f1: Any, f2: Any, f3: Any) -> tuple:
        e1, e2, e3, e12, e13, e23, e123 = self._tangents
        return (
            e1 * f1,
            e2 * f1,
            e3 * f1,
            e12 * f1 + e1 * e2 * f2,
            e13 * f1 + e1 * e3 * f2,
            e23 * f1 + e2 * e3 * f2,
            e123 * f1 + (e1 * e23 + e2 * e13 + e3 * e12) * f2 + e1 * e2 * e3 * f3,
        )


DualNumber._DualNumber__IS_SEALED = True  # type: ignore
