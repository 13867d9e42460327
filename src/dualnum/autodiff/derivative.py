import itertools
from collections.abc import Callable
from typing import Any, Self

import numpy as np
import numpy.typing as npt


class Derivative:
    """Optional matrix of partial derivatives.

    The tangent parts of :class:`DualVec`, :class:`Dual2Vec` and :class:`HyperDualVec`
    are stored as instances of this class. A derivative is either absent, meaning that
    every entry vanishes, or a two-dimensional object array whose entries are real
    numbers or dual numbers.

    Parameters
    ----------
    value : array_like | None, default=None
        Two-dimensional array of entries, or None for an absent derivative.

    Raises
    ------
    ValueError
        If `value` is not two-dimensional.

    Notes
    -----
    Multiplying by a scalar scales every entry, while multiplying two derivatives
    computes the matrix product. An absent operand is absorbing for products and
    neutral for sums.

    Examples
    --------
    >>> a = Derivative([[1.0], [2.0]])
    >>> b = Derivative([[3.0, 4.0]])
    >>> (a * b).shape
    (2, 2)
    >>> (a + Derivative.none()) == a
    True
    >>> (a * Derivative.none()).is_none
    True
    """

    __slots__ = ("_value",)
    __array_ufunc__ = None
    _value: npt.NDArray[np.object_] | None

    def __init__(self, value: Any = None):
        if value is not None:
            value = np.array(value, dtype=object)

            if value.ndim != 2:
                raise ValueError("derivative must be two-dimensional")

        self._value = value

    @classmethod
    def none(cls) -> Self:
        """Return the absent derivative."""
        return cls()

    @classmethod
    def some(cls, value: Any) -> Self:
        """Return the derivative with the given entries."""
        if value is None:
            raise ValueError("value must not be None")

        return cls(value)

    @property
    def value(self) -> npt.NDArray[np.object_] | None:
        return self._value

    @property
    def is_none(self) -> bool:
        return self._value is None

    @property
    def is_some(self) -> bool:
        return self._value is not None

    @property
    def shape(self) -> tuple[int, int] | None:
        if self._value is None:
            return None

        return self._value.shape  # type: ignore

    def map(self, fun: Callable[[Any], Any]) -> Self:
        """Apply `fun` to every entry. An absent derivative stays absent."""
        if self._value is None:
            return self.__class__()

        rows, cols = self._value.shape
        result = np.empty((rows, cols), dtype=object)

        for i, j in itertools.product(range(rows), range(cols)):
            result[i, j] = fun(self._value[i, j])

        return self.__class__(result)

    def zip(self, other: "Derivative", fun: Callable[[Any, Any], Any]) -> Self:
        """Apply `fun` to pairs of corresponding entries.

        If exactly one of the derivatives is absent, it is treated as a matrix of zeros
        with the shape of the other.
        """
        a, b = self._value, other._value

        if a is None and b is None:
            return self.__class__()

        if a is None:
            a = _zeros_like(b)  # type: ignore
        elif b is None:
            b = _zeros_like(a)

        if a.shape != b.shape:
            raise ValueError("shape mismatch")

        rows, cols = a.shape
        result = np.empty((rows, cols), dtype=object)

        for i, j in itertools.product(range(rows), range(cols)):
            result[i, j] = fun(a[i, j], b[i, j])

        return self.__class__(result)

    def unwrap(self, rows: int, cols: int, zero: Any = 0.0) -> npt.NDArray:
        """Return the entries as an array of shape ``(rows, cols)``.

        An absent derivative is expanded to a matrix filled with `zero`.
        """
        if self._value is None:
            result = np.empty((rows, cols), dtype=object)
            result.fill(zero)
            return result

        if self._value.shape != (rows, cols):
            raise ValueError("shape mismatch")

        return self._value.copy()

    def tr_mul(self, rhs: "Derivative") -> Self:
        """Return the product of the transpose of `self` and `rhs`."""
        if self._value is None or rhs._value is None:
            return self.__class__()

        return self.__class__(self._value.T @ rhs._value)

    def __repr__(self) -> str:
        if self._value is None:
            return f"{type(self).__name__}(None)"

        return f"{type(self).__name__}({self._value.tolist()!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Derivative):
            return NotImplemented

        if self._value is None or other._value is None:
            return self._value is None and other._value is None

        if self._value.shape != other._value.shape:
            return False

        return all(x == y for x, y in zip(self._value.flat, other._value.flat))

    __hash__ = None  # type: ignore

    def __add__(self, rhs: "Derivative") -> Self:
        if not isinstance(rhs, Derivative):
            return NotImplemented

        if rhs._value is None:
            return self.__class__(self._value)

        if self._value is None:
            return self.__class__(rhs._value)

        return self.zip(rhs, lambda x, y: x + y)

    def __sub__(self, rhs: "Derivative") -> Self:
        if not isinstance(rhs, Derivative):
            return NotImplemented

        if rhs._value is None:
            return self.__class__(self._value)

        if self._value is None:
            return -rhs  # type: ignore

        return self.zip(rhs, lambda x, y: x - y)

    def __neg__(self) -> Self:
        return self.map(lambda x: -x)

    def __pos__(self) -> Self:
        return self.__class__(self._value)

    def __mul__(self, rhs: Any) -> Self:
        if isinstance(rhs, np.ndarray):
            return NotImplemented

        if not isinstance(rhs, Derivative):
            return self.map(lambda x: x * rhs)

        if self._value is None or rhs._value is None:
            return self.__class__()

        if self._value.shape[1] != rhs._value.shape[0]:
            raise ValueError("shape mismatch")

        return self.__class__(self._value @ rhs._value)

    def __rmul__(self, lhs: Any) -> Self:
        if isinstance(lhs, np.ndarray | Derivative):
            return NotImplemented

        return self.map(lambda x: lhs * x)

    def __truediv__(self, rhs: Any) -> Self:
        if isinstance(rhs, np.ndarray | Derivative):
            return NotImplemented

        return self.map(lambda x: x / rhs)


def _zeros_like(a: npt.NDArray[np.object_]) -> npt.NDArray[np.object_]:
    result = np.empty(a.shape, dtype=object)

    for i, j in itertools.product(*(range(n) for n in a.shape)):
        result[i, j] = a[i, j] * 0

    return result


def derivative_generic(rows: int, cols: int, i: int, zero: Any = 0.0) -> Derivative:
    """Return the `i`-th unit derivative of shape ``(rows, cols)``.

    Entries are enumerated in column-major order.

    Examples
    --------
    >>> derivative_generic(1, 3, 1)
    Derivative([[0.0, 1.0, 0.0]])
    """
    ONE = zero + 1
    value = np.empty((rows, cols), dtype=object)
    value.fill(zero)
    r, c = np.unravel_index(i, (rows, cols), order="F")
    value[r, c] = ONE
    return Derivative(value)


def unwrap_generic(
    derivative: Derivative, rows: int, cols: int, zero: Any = 0.0
) -> npt.NDArray:
    """Return the entries of `derivative`, expanding an absent one with `zero`."""
    return derivative.unwrap(rows, cols, zero)
