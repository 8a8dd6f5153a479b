"""
Generalized dual numbers
---------------
A dual number carries a value `re` and a derivative part `eps`. Both parts
are numpy arrays or, for higher order derivatives, dual numbers themselves.

`Dual` has one derivative direction, `DualVec` has N directions stored on a
trailing axis of `eps`, i.e. `eps.shape == re.shape + (N,)`. Nesting e.g.
`Dual(Dual(...), Dual(...))` gives second derivatives, `DualVec(DualVec)` a
Hessian and `Dual(DualVec)` mixed partial derivatives.

All operations are element wise and broadcast like numpy arrays, so model
code is written with ordinary array expressions.
"""

# @author: Wildson Lima

from typing import Any, Tuple, Union

import numpy as np


def is_dual(x: Any) -> bool:
    "Is `x` a dual number."
    return isinstance(x, DualNumber)


def depth(x: Any) -> int:
    "Number of nested dual levels of `x`."
    return x.depth if is_dual(x) else 0


def shape(x: Any) -> Tuple[int, ...]:
    "Array shape of `x` without derivative directions."
    return x.shape if is_dual(x) else np.shape(x)


def value(x: Any) -> np.ndarray:
    "Innermost real part of `x`."
    while is_dual(x):
        x = x.re
    return x


def lift(x: Any, like: Any) -> Any:
    """
    Embeds `x` as a constant into the nesting structure of `like`.

    The result has the value of `x` and vanishing derivative parts at every
    level `x` does not already have.
    """
    if not is_dual(like) or depth(x) >= like.depth:
        return x
    return like.constant(lift(x, like.re))


def exp(x):
    "Exponential of a real or dual number."
    return x.exp() if is_dual(x) else np.exp(x)


def log(x):
    "Natural logarithm of a real or dual number."
    return x.log() if is_dual(x) else np.log(x)


def sqrt(x):
    "Square root of a real or dual number."
    return x.sqrt() if is_dual(x) else np.sqrt(x)


def recip(x):
    "Reciprocal, `inf` for a vanishing value."
    return x.recip() if is_dual(x) else np.divide(1.0, x)


def _sum(x, axis):
    return x.sum(axis) if is_dual(x) else np.sum(x, axis=axis)


def _normalize_axis(axis, ndim: int) -> Tuple[int, ...]:
    if axis is None:
        return tuple(range(ndim))
    if isinstance(axis, int):
        axis = (axis,)
    return tuple(a + ndim if a < 0 else a for a in axis)


def _as_leaf(x):
    return x if is_dual(x) else np.asarray(x, dtype=np.float64)


class DualNumber:
    """Common arithmetic of `Dual` and `DualVec`."""

    __slots__ = ("re", "eps", "depth")
    # numpy defers binary operations with dual numbers to the reflected methods
    __array_ufunc__ = None

    def __init__(self, re, eps) -> None:
        self.re = _as_leaf(re)
        self.eps = _as_leaf(eps)
        self.depth = depth(self.re) + 1

    # --- implemented by the subclasses ---------------------------------------
    def _scale(self, factor):
        "Derivative part times a factor of the shape of `re`."
        raise NotImplementedError

    def _zeros(self, shp):
        "Derivative part of a constant with array shape `shp`."
        raise NotImplementedError

    def constant(self, re):
        "Dual number of this type with value `re` and no derivative."
        raise NotImplementedError

    def __getitem__(self, idx):
        raise NotImplementedError

    # --- shape ------------------------------------------------------------------
    @property
    def shape(self) -> Tuple[int, ...]:
        "Array shape of the value."
        return shape(self.re)

    @property
    def ndim(self) -> int:
        "Number of array dimensions of the value."
        return len(self.shape)

    def _new(self, re, eps):
        return type(self)(re, eps)

    def _is_peer(self, other) -> bool:
        if not is_dual(other) or other.depth < self.depth:
            return False
        if other.depth == self.depth and type(other) is type(self):
            return True
        return NotImplemented

    def _broadcast_eps(self, other):
        shp = np.broadcast_shapes(self.shape, shape(other))
        if shp == self.shape:
            return self.eps
        return self.eps + self._zeros(shp)

    # --- arithmetic ---------------------------------------------------------------
    def __add__(self, other):
        peer = self._is_peer(other)
        if peer is NotImplemented:
            return NotImplemented
        if peer:
            return self._new(self.re + other.re, self.eps + other.eps)
        return self._new(self.re + other, self._broadcast_eps(other))

    __radd__ = __add__

    def __neg__(self):
        return self._new(-self.re, -self.eps)

    def __pos__(self):
        return self

    def __sub__(self, other):
        peer = self._is_peer(other)
        if peer is NotImplemented:
            return NotImplemented
        if peer:
            return self._new(self.re - other.re, self.eps - other.eps)
        return self._new(self.re - other, self._broadcast_eps(other))

    def __rsub__(self, other):
        if is_dual(other) and other.depth >= self.depth:
            return NotImplemented
        return self._new(other - self.re, -self._broadcast_eps(other))

    def __mul__(self, other):
        peer = self._is_peer(other)
        if peer is NotImplemented:
            return NotImplemented
        if peer:
            return self._new(
                self.re * other.re, self._scale(other.re) + other._scale(self.re)
            )
        return self._new(self.re * other, self._scale(other))

    __rmul__ = __mul__

    def __truediv__(self, other):
        peer = self._is_peer(other)
        if peer is NotImplemented:
            return NotImplemented
        return self * recip(other)

    def __rtruediv__(self, other):
        if is_dual(other) and other.depth >= self.depth:
            return NotImplemented
        return self.recip() * other

    def __pow__(self, n):
        if is_dual(n):
            if depth(n) > self.depth:
                return NotImplemented
            return exp(n * self.log())
        if np.ndim(n) == 0:
            if n == 0:
                return self.constant(lift(np.ones(self.shape), self.re))
            if n == 1:
                return self
            if n == 2:
                return self * self
        return self._new(self.re**n, self._scale(n * self.re ** (n - 1)))

    def __rpow__(self, base):
        return exp(self * log(base))

    # --- elementary functions ------------------------------------------------
    def exp(self):
        "Exponential."
        f = exp(self.re)
        return self._new(f, self._scale(f))

    def log(self):
        "Natural logarithm."
        return self._new(log(self.re), self._scale(recip(self.re)))

    def sqrt(self):
        "Square root."
        f = sqrt(self.re)
        return self._new(f, self._scale(0.5 * recip(f)))

    def recip(self):
        "Reciprocal."
        f = recip(self.re)
        return self._new(f, self._scale(-f * f))

    def powi(self, n: int):
        "Integer power."
        return self**n

    def sum(self, axis=None):
        "Sum over `axis` (all axes by default) like `numpy.sum`."
        axis = _normalize_axis(axis, self.ndim)
        return self._new(_sum(self.re, axis), _sum(self.eps, axis))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.re!r}, {self.eps!r})"


class Dual(DualNumber):
    """Dual number with a single derivative direction."""

    __slots__ = ()

    def _scale(self, factor):
        return factor * self.eps

    def _zeros(self, shp):
        return lift(np.zeros(shp), self.re)

    def constant(self, re):
        return Dual(re, lift(np.zeros(shape(re)), re))

    def __getitem__(self, idx):
        return Dual(self.re[idx], self.eps[idx])


def _expand(x):
    # appends the direction axis
    if is_dual(x):
        return x[..., np.newaxis]
    return np.asarray(x)[..., np.newaxis]


class DualVec(DualNumber):
    """Dual number with N derivative directions on the trailing axis of `eps`."""

    __slots__ = ()

    @property
    def directions(self) -> int:
        "Number of derivative directions."
        return shape(self.eps)[-1]

    def _scale(self, factor):
        return _expand(factor) * self.eps

    def _zeros(self, shp):
        return lift(np.zeros(tuple(shp) + (self.directions,)), self.re)

    def constant(self, re):
        return DualVec(
            re, lift(np.zeros(tuple(shape(re)) + (self.directions,)), re)
        )

    def __getitem__(self, idx):
        if not isinstance(idx, tuple):
            idx = (idx,)
        return DualVec(self.re[idx], self.eps[idx + (slice(None),)])


Number = Union[float, np.ndarray, DualNumber]
