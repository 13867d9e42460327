import copy
import sys

import pytest

from dualnum.config import Context, getcontext, localcontext, setcontext


def test_context():
    ctx = Context()
    assert ctx.lu_tolerance == 1e-10
    assert ctx.sph_epsilon == sys.float_info.epsilon
    assert ctx.jacobi_max_iter == 200

    other = copy.copy(ctx)
    assert other is not ctx
    assert repr(other) == repr(ctx)

    with pytest.raises(ValueError):
        Context(lu_tolerance=-1.0)

    with pytest.raises(ValueError):
        Context(jacobi_max_iter=0)


def test_localcontext():
    before = getcontext()

    with localcontext(lu_tolerance=1e-3) as ctx:
        assert getcontext() is ctx
        assert ctx.lu_tolerance == 1e-3
        assert ctx.jacobi_max_iter == before.jacobi_max_iter

        with localcontext(jacobi_max_iter=5):
            assert getcontext().lu_tolerance == 1e-3
            assert getcontext().jacobi_max_iter == 5

    assert getcontext() is before


def test_setcontext():
    before = getcontext()

    try:
        ctx = Context(sph_epsilon=1e-3)
        setcontext(ctx)
        assert getcontext() is ctx
    finally:
        setcontext(before)

    with pytest.raises(TypeError):
        setcontext(None)
