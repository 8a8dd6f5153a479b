"Options shared by the iterative solvers."

# @author: Wildson Lima

import dataclasses
import enum
from typing import Optional, Tuple, Union

import ml_collections
from absl import logging

from ..errors import ValidationError


class Verbosity(enum.IntEnum):
    """Amount of output of an iteration."""

    SILENT = 0
    RESULT = 1
    ITER = 2

    @classmethod
    def parse(cls, verbosity) -> "Verbosity":
        "From a member or its name, e.g. `'iter'`."
        if isinstance(verbosity, cls):
            return verbosity
        if isinstance(verbosity, int):
            return cls(verbosity)
        return cls[str(verbosity).upper()]


@dataclasses.dataclass(frozen=True)
class SolverOptions:
    """
    Maximum number of iterations, tolerance and verbosity of a solver.

    Unset fields fall back to the solver defaults of `configs.default`.
    """

    max_iter: Optional[int] = None
    tol: Optional[float] = None
    verbosity: Optional[Union[Verbosity, str]] = None

    def unwrap_or(self, defaults: ml_collections.ConfigDict) -> Tuple[int, float, Verbosity]:
        "`(max_iter, tol, verbosity)` with unset fields taken from `defaults`."
        max_iter = defaults.max_iter if self.max_iter is None else self.max_iter
        tol = defaults.tol if self.tol is None else self.tol
        verbosity = defaults.verbosity if self.verbosity is None else self.verbosity
        return int(max_iter), float(tol), Verbosity.parse(verbosity)


def log_iter(verbosity: Verbosity, msg: str, *args) -> None:
    "Iteration table row, printed at `Verbosity.ITER`."
    if verbosity >= Verbosity.ITER:
        logging.info(msg, *args)


def log_result(verbosity: Verbosity, msg: str, *args) -> None:
    "Summary line, printed at `Verbosity.RESULT` and above."
    if verbosity >= Verbosity.RESULT:
        logging.info(msg, *args)


class DensityInitialization:
    """
    Initial guess of the density iteration.

    `None` tries both branches, `"vapor"` starts at low density, `"liquid"`
    at the maximum density and a number (mol/m³) starts there.
    """

    VAPOR = "vapor"
    LIQUID = "liquid"

    __slots__ = ("kind", "density")

    def __init__(self, kind: Optional[str] = None, density: Optional[float] = None):
        self.kind = kind
        self.density = density

    @classmethod
    def parse(cls, value) -> "DensityInitialization":
        "From `None`, `'vapor'`, `'liquid'`, a density or an instance."
        if isinstance(value, cls):
            return value
        if value is None:
            return cls()
        if isinstance(value, str):
            kind = value.lower()
            if kind not in (cls.VAPOR, cls.LIQUID):
                raise ValidationError(
                    f"`density_initialization` must be 'vapor', 'liquid', a density "
                    f"or None, got '{value}'."
                )
            return cls(kind)
        density = float(value)
        if not density > 0.0:
            raise ValidationError(f"Initial density must be positive, got {density}.")
        return cls("density", density)

    @classmethod
    def initial_density(cls, density: float) -> "DensityInitialization":
        "Start from `density` (mol/m³)."
        return cls("density", float(density))

    @property
    def is_none(self) -> bool:
        "No hint given."
        return self.kind is None

    def __repr__(self) -> str:
        if self.kind == "density":
            return f"DensityInitialization.initial_density({self.density})"
        return f"DensityInitialization({self.kind!r})"
