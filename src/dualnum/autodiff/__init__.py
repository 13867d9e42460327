"""
###################################################
Automatic differentiation (:mod:`dualnum.autodiff`)
###################################################

.. currentmodule:: dualnum.autodiff

This module provides forward-mode automatic differentiation with dual numbers.

Differential operators
----------------------

.. autosummary::
    :toctree: generated/

    first_derivative
    second_derivative
    third_derivative
    gradient
    jacobian
    hessian
    second_partial_derivative
    partial_hessian
    third_partial_derivative
    third_partial_derivative_vec

Implicit functions
------------------

.. autosummary::
    :toctree: generated/

    implicit_derivative
    implicit_derivative_binary
    implicit_derivative_vec
    implicit_derivative_sp

Number systems containing infinitesimals
----------------------------------------

.. autosummary::
    :toctree: generated/

    DualNumber
    Dual
    Dual2
    Dual3
    HyperDual
    HyperHyperDual
    DualVec
    Dual2Vec
    HyperDualVec
    Derivative

Miscellaneous
-------------

.. autosummary::
    :toctree: generated/

    NonDifferentiableError
    derivative_generic
    nderiv
    to_real
    unwrap_generic

"""

from .derivative import Derivative, derivative_generic, unwrap_generic
from .dual import (
    Dual,
    Dual2,
    Dual3,
    DualNumber,
    HyperDual,
    HyperHyperDual,
    NonDifferentiableError,
    nderiv,
    to_real,
)
from .dualvec import Dual2Vec, DualVec, HyperDualVec
from .explicit import (
    first_derivative,
    gradient,
    hessian,
    jacobian,
    partial_hessian,
    second_derivative,
    second_partial_derivative,
    third_derivative,
    third_partial_derivative,
    third_partial_derivative_vec,
)
from .implicit import (
    implicit_derivative,
    implicit_derivative_binary,
    implicit_derivative_sp,
    implicit_derivative_vec,
)

__all__ = [
    "Derivative",
    "derivative_generic",
    "unwrap_generic",
    "Dual",
    "Dual2",
    "Dual3",
    "DualNumber",
    "HyperDual",
    "HyperHyperDual",
    "NonDifferentiableError",
    "nderiv",
    "to_real",
    "Dual2Vec",
    "DualVec",
    "HyperDualVec",
    "first_derivative",
    "gradient",
    "hessian",
    "jacobian",
    "partial_hessian",
    "second_derivative",
    "second_partial_derivative",
    "third_derivative",
    "third_partial_derivative",
    "third_partial_derivative_vec",
    "implicit_derivative",
    "implicit_derivative_binary",
    "implicit_derivative_sp",
    "implicit_derivative_vec",
]
