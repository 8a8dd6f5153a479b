"""
Loss functions
---------------
Robust losses applied to the relative differences of a data set. The
returned residuals are scaled such that their squares sum to the loss,
`rho(z)` with `z = (r / scale)^2` as in least squares solvers:

- linear: `z`
- soft_l1: `2 (sqrt(1 + z) - 1)`
- huber: `z` for `z <= 1`, `2 sqrt(z) - 1` otherwise
- cauchy: `ln(1 + z)`
- arctan: `arctan(z)`
"""

# @author: Wildson Lima

import numpy as np

from ..errors import ValidationError

LOSSES = ("linear", "soft_l1", "huber", "cauchy", "arctan")


class Loss:
    """
    Loss function with scaling parameter.

    Parameters
    ----------
    kind : str
        One of `linear`, `soft_l1`, `huber`, `cauchy` and `arctan`.
    scale : float
        Residuals below `scale` are treated (nearly) quadratically.
    """

    def __init__(self, kind: str = "linear", scale: float = 1.0):
        if kind not in LOSSES:
            raise ValidationError(f"Unknown loss `{kind}`, use one of {LOSSES}.")
        if not scale > 0.0:
            raise ValidationError(f"Loss scale must be positive, got {scale}.")
        self.kind = kind
        self.scale = scale

    @classmethod
    def linear(cls) -> "Loss":
        "Plain least squares."
        return cls("linear")

    @classmethod
    def soft_l1(cls, scale: float = 1.0) -> "Loss":
        "Smooth approximation of the absolute value."
        return cls("soft_l1", scale)

    @classmethod
    def huber(cls, scale: float = 1.0) -> "Loss":
        "Quadratic below `scale`, linear above."
        return cls("huber", scale)

    @classmethod
    def cauchy(cls, scale: float = 1.0) -> "Loss":
        "Logarithmic growth for large residuals."
        return cls("cauchy", scale)

    @classmethod
    def arctan(cls, scale: float = 1.0) -> "Loss":
        "Bounded loss."
        return cls("arctan", scale)

    def rho(self, z: np.ndarray) -> np.ndarray:
        "Loss of the squared scaled residuals `z`."
        if self.kind == "soft_l1":
            return 2.0 * (np.sqrt(1.0 + z) - 1.0)
        if self.kind == "huber":
            return np.where(z <= 1.0, z, 2.0 * np.sqrt(z) - 1.0)
        if self.kind == "cauchy":
            return np.log1p(z)
        if self.kind == "arctan":
            return np.arctan(z)
        return z

    def apply(self, residuals: np.ndarray) -> np.ndarray:
        "Residuals whose squares sum to the loss."
        r = np.asarray(residuals, dtype=np.float64)
        if self.kind == "linear":
            return r
        z = (r / self.scale) ** 2
        return np.sign(r) * self.scale * np.sqrt(self.rho(z))

    def __repr__(self) -> str:
        if self.kind == "linear":
            return "Loss.linear()"
        return f"Loss.{self.kind}({self.scale})"
