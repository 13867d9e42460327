from . import autodiff, linalg
from .autodiff import (
    Dual,
    Dual2,
    Dual3,
    Dual2Vec,
    DualVec,
    HyperDual,
    HyperDualVec,
    HyperHyperDual,
)
from .bessel import bessel_j0, bessel_j1, bessel_j2
from .config import Context, getcontext, localcontext, setcontext
from .function import exp, log, pow, sqrt

__all__ = [
    "autodiff",
    "linalg",
    "Dual",
    "Dual2",
    "Dual3",
    "Dual2Vec",
    "DualVec",
    "HyperDual",
    "HyperDualVec",
    "HyperHyperDual",
    "bessel_j0",
    "bessel_j1",
    "bessel_j2",
    "Context",
    "getcontext",
    "localcontext",
    "setcontext",
    "exp",
    "log",
    "pow",
    "sqrt",
]
