"""Dual numbers and derivative drivers."""

from .derivatives import (
    first_derivative,
    gradient,
    hessian,
    nth_derivative,
    partial_gradient,
    partial_second_derivative,
    second_derivative,
    second_partial_derivative,
    seed,
    taylor,
    third_derivative,
    third_partial_derivative,
)
from .numbers import (
    Dual,
    DualNumber,
    DualVec,
    Number,
    depth,
    exp,
    is_dual,
    lift,
    log,
    recip,
    shape,
    sqrt,
    value,
)
