"""Evaluation of an equation of state against experimental data."""

from .dataset import DataSet, LiquidDensity, VaporPressure
from .estimator import Estimator
from .loss import Loss
