"""
########################################################
Linear algebra with dual numbers (:mod:`dualnum.linalg`)
########################################################

.. currentmodule:: dualnum.linalg

This module provides linear solves and eigenvalue problems for matrices whose entries
are real numbers or dual numbers.

Factorization
=============

.. autosummary::
    :toctree: generated/

    LU

Operations
==========

.. autosummary::
    :toctree: generated/

    det
    inv
    norm
    solve

Eigenvalue problems
===================

.. autosummary::
    :toctree: generated/

    eigh
    jacobi_eigenvalue
    smallest_ev

Miscellaneous
=============

.. autosummary::
    :toctree: generated/

    LinAlgError

"""

from .linalg import det, eigh, inv, jacobi_eigenvalue, norm, smallest_ev, solve
from .lu import LU, LinAlgError

__all__ = [
    "LU",
    "LinAlgError",
    "det",
    "eigh",
    "inv",
    "jacobi_eigenvalue",
    "norm",
    "smallest_ev",
    "solve",
]
