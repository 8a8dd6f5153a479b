"""
Data sets
---------------
Experimental data of one property together with the state inputs needed
to predict it from an equation of state. Points that cannot be predicted,
e.g. a vapor pressure above the critical temperature, become NaN.
"""

# @author: Wildson Lima

from typing import Dict, List

import numpy as np
from absl import logging

from ..errors import EosError, ValidationError
from ..state import DensityInitialization, PhaseEquilibrium, State
from .loss import Loss


class DataSet:
    """
    Base class of data sets.

    Subclasses implement `predict_point` for one set of inputs.
    """

    target_str = "target"
    input_str: List[str] = []

    def __init__(self, target, **inputs):
        self.target = np.asarray(target, dtype=np.float64)
        self.inputs: Dict[str, np.ndarray] = {}
        for name, val in inputs.items():
            val = np.asarray(val, dtype=np.float64)
            if val.shape != self.target.shape:
                raise ValidationError(
                    f"Input `{name}` has {val.size} points, target has {self.target.size}."
                )
            self.inputs[name] = val

    @property
    def datapoints(self) -> int:
        "Number of data points."
        return self.target.size

    def predict_point(self, eos, **inputs) -> float:
        "Prediction for one data point."
        raise NotImplementedError

    def predict(self, eos) -> np.ndarray:
        "Prediction for every data point, NaN where it fails."
        out = np.empty(self.datapoints)
        for i in range(self.datapoints):
            point = {name: float(val[i]) for name, val in self.inputs.items()}
            try:
                out[i] = self.predict_point(eos, **point)
            except EosError as e:
                logging.warning("%s at %s failed: %s", self.target_str, point, e)
                out[i] = np.nan
        return out

    def relative_difference(self, eos) -> np.ndarray:
        "`(prediction - target) / target`"
        return (self.predict(eos) - self.target) / self.target

    def mean_absolute_relative_difference(self, eos) -> float:
        "Mean of the absolute relative differences, failed points excluded."
        rel = np.abs(self.relative_difference(eos))
        if np.all(np.isnan(rel)):
            return np.nan
        return float(np.nanmean(rel))

    def cost(self, eos, loss: Loss) -> np.ndarray:
        "Loss residuals of the relative differences, normalized by the number of points."
        return loss.apply(self.relative_difference(eos)) / self.datapoints

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(target: {self.target_str}, "
            f"input: {', '.join(self.input_str)}, datapoints: {self.datapoints})"
        )


class LiquidDensity(DataSet):
    """
    Liquid densities (mol/m³) at temperature (K) and pressure (Pa).
    """

    target_str = "liquid density"
    input_str = ["temperature", "pressure"]

    def __init__(self, target, temperature, pressure):
        super().__init__(target, temperature=temperature, pressure=pressure)

    def predict_point(self, eos, temperature: float, pressure: float) -> float:
        state = State.new_npt(
            eos, temperature, pressure, density_initialization=DensityInitialization.LIQUID
        )
        return state.density


class VaporPressure(DataSet):
    """
    Vapor pressures (Pa) at temperature (K).

    With `extrapolate`, points above the critical temperature are predicted
    from `ln p = a + b / T` through the critical point and the vapor
    pressure at 90 % of the critical temperature.
    """

    target_str = "vapor pressure"
    input_str = ["temperature"]

    def __init__(self, target, temperature, extrapolate: bool = False):
        super().__init__(target, temperature=temperature)
        self.extrapolate = extrapolate

    def predict_point(self, eos, temperature: float) -> float:
        if self.extrapolate:
            critical_point = State.critical_point(eos)
            tc = critical_point.temperature
            if temperature >= tc:
                pc = critical_point.pressure()
                t0 = 0.9 * tc
                p0 = PhaseEquilibrium.pure(eos, t0).pressure()
                b = np.log(pc / p0) / (1.0 / tc - 1.0 / t0)
                a = np.log(pc) - b / tc
                return float(np.exp(a + b / temperature))
        return PhaseEquilibrium.pure(eos, temperature).pressure()
