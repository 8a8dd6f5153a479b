"""Derivatives of functions by seeding dual numbers.

The seeded variable may itself be a dual number; the derivative parts then
carry the derivatives of the result with respect to the inner variables,
which is how Jacobians of derivative-based objectives are built.
"""

from typing import Callable, Tuple

import numpy as np

from .numbers import Dual, DualVec, is_dual, lift, shape


def _one(x):
    return lift(np.ones(shape(x)), x)


def _eye(x):
    n = shape(x)[0]
    return lift(np.eye(n), x)


def _re(x):
    return x.re if is_dual(x) else x


def _eps(x):
    # derivative part of a result that may not depend on the seeded variable
    return x.eps if is_dual(x) else 0.0 * x


def seed(x, order: int = 1):
    """
    Returns `x + s_1 + ... + s_order` with one derivative direction per level.

    Applied to a function, the derivative part taken at the `k` outermost
    levels gives the `k`-th derivative.
    """
    for _ in range(order):
        x = Dual(x, _one(x))
    return x


def taylor(result, order: int) -> list:
    "Value and derivatives up to `order` from a result of `seed(x, order)`."
    out = []
    for k in range(order + 1):
        r = result
        for _ in range(k):
            r = _eps(r)
        for _ in range(order - k):
            r = _re(r)
        out.append(r)
    return out


def first_derivative(f: Callable, x) -> Tuple:
    "`(f(x), f'(x))`"
    return tuple(taylor(f(seed(x, 1)), 1))


def second_derivative(f: Callable, x) -> Tuple:
    "`(f(x), f'(x), f''(x))`"
    return tuple(taylor(f(seed(x, 2)), 2))


def third_derivative(f: Callable, x) -> Tuple:
    "`(f(x), f'(x), f''(x), f'''(x))`"
    return tuple(taylor(f(seed(x, 3)), 3))


def nth_derivative(f: Callable, x, order: int) -> Tuple:
    "Value and all derivatives of `f` up to `order`."
    return tuple(taylor(f(seed(x, order)), order))


def gradient(f: Callable, x) -> Tuple:
    "`(f(x), ∇f(x))` for a vector `x`."
    r = f(DualVec(x, _eye(x)))
    return _re(r), _eps(r)


def hessian(f: Callable, x) -> Tuple:
    "`(f(x), ∇f(x), ∇²f(x))` for a vector `x`."
    inner = DualVec(x, _eye(x))
    r = f(DualVec(inner, _eye(inner)))
    return _re(_re(r)), _eps(_re(r)), _eps(_eps(r))


def second_partial_derivative(f: Callable, x, y) -> Tuple:
    "`(f, ∂f/∂x, ∂f/∂y, ∂²f/∂x∂y)` for scalars `x` and `y`."
    y1 = seed(y)
    x2 = seed(lift(x, y1))
    y2 = lift(y1, x2)
    r = f(x2, y2)
    return _re(_re(r)), _re(_eps(r)), _eps(_re(r)), _eps(_eps(r))


def partial_gradient(f: Callable, x, y) -> Tuple:
    "`(f, ∂f/∂x, ∇_y f, ∂(∇_y f)/∂x)` for a scalar `x` and a vector `y`."
    y1 = DualVec(y, _eye(y))
    x2 = seed(lift(x, y1))
    y2 = lift(y1, x2)
    r = f(x2, y2)
    return _re(_re(r)), _re(_eps(r)), _eps(_re(r)), _eps(_eps(r))


def partial_second_derivative(f: Callable, x, y) -> Tuple:
    "`(f, ∂f/∂y, ∂²f/∂y², ∂f/∂x, ∂²f/∂x∂y, ∂³f/∂x∂y²)` for scalars `x` and `y`."
    y2 = seed(y, 2)
    x3 = seed(lift(x, y2))
    y3 = lift(y2, x3)
    r = f(x3, y3)
    f_y = taylor(_re(r), 2)
    f_xy = taylor(_eps(r), 2)
    return tuple(f_y) + tuple(f_xy)


def third_partial_derivative(f: Callable, x, y, z) -> Tuple:
    "`(f, ∂f/∂x, ∂f/∂y, ∂f/∂z, ∂²f/∂x∂y, ∂²f/∂x∂z, ∂²f/∂y∂z, ∂³f/∂x∂y∂z)`"
    z1 = seed(z)
    y2 = seed(lift(y, z1))
    z2 = lift(z1, y2)
    x3 = seed(lift(x, y2))
    r = f(x3, lift(y2, x3), lift(z2, x3))
    return (
        _re(_re(_re(r))),
        _re(_re(_eps(r))),
        _re(_eps(_re(r))),
        _eps(_re(_re(r))),
        _re(_eps(_eps(r))),
        _eps(_re(_eps(r))),
        _eps(_eps(_re(r))),
        _eps(_eps(_eps(r))),
    )
