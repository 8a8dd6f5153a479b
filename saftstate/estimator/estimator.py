"""
Estimator
---------------
Collection of data sets with weights and losses to evaluate an equation of
state against experimental data, e.g. as the objective of a parameter
optimization. Costs of the data sets can be evaluated in parallel worker
processes, each worker owns its copy of the data set and model.
"""

# @author: Wildson Lima

import multiprocessing as mp
from typing import List, Optional, Sequence

import numpy as np

from ..configs.default import get_config
from ..errors import ValidationError
from .dataset import DataSet
from .loss import Loss


def cost_single(args: tuple) -> np.ndarray:
    """Weighted cost of a single data set"""
    dataset, eos, loss, weight = args
    return dataset.cost(eos, loss) * weight


class Estimator:
    """
    Data sets, weights and losses.

    The weights are normalized and multiply the cost of their data set.

    Parameters
    ----------
    datasets : list of DataSet
    weights : list of float
    losses : list of Loss
    """

    def __init__(
        self,
        datasets: Sequence[DataSet],
        weights: Sequence[float],
        losses: Sequence[Loss],
    ):
        if not len(datasets) == len(weights) == len(losses):
            raise ValidationError("One weight and one loss per data set are needed.")
        self.datasets: List[DataSet] = list(datasets)
        self.weights: List[float] = list(weights)
        self.losses: List[Loss] = list(losses)

    def add_data(self, dataset: DataSet, weight: float, loss: Loss) -> None:
        "Adds a data set with its weight and loss."
        self.datasets.append(dataset)
        self.weights.append(weight)
        self.losses.append(loss)

    def _normalized_weights(self) -> np.ndarray:
        w = np.asarray(self.weights, dtype=np.float64)
        return w / w.sum()

    def cost(self, eos) -> np.ndarray:
        "Weighted cost of every data point of every data set, concatenated."
        w = self._normalized_weights()
        return np.concatenate(
            [
                cost_single((d, eos, loss, wi))
                for d, loss, wi in zip(self.datasets, self.losses, w)
            ]
        )

    def cost_parallel(self, eos, processes: Optional[int] = None) -> np.ndarray:
        """
        Same as `cost` with one data set per task in a pool of spawned
        worker processes.

        Args:
            eos: EquationOfState, pickled to every worker
            processes: Number of workers; `estimator.processes` of the
             configuration when not given, where 0 is half of the cpu count
        """
        if processes is None:
            processes = get_config().estimator.processes
        ctx = mp.get_context("spawn")
        if processes == 0:
            processes = max(ctx.cpu_count() // 2, 1)
        w = self._normalized_weights()
        args_list = [
            (d, eos, loss, wi) for d, loss, wi in zip(self.datasets, self.losses, w)
        ]
        with ctx.Pool(processes=processes) as pool:
            costs = pool.map(cost_single, args_list)
        return np.concatenate(costs)

    def predict(self, eos) -> List[np.ndarray]:
        "Predictions of every data set."
        return [d.predict(eos) for d in self.datasets]

    def relative_difference(self, eos) -> List[np.ndarray]:
        "Relative differences of every data set."
        return [d.relative_difference(eos) for d in self.datasets]

    def mean_absolute_relative_difference(self, eos) -> np.ndarray:
        "Mean absolute relative difference of every data set."
        return np.array(
            [d.mean_absolute_relative_difference(eos) for d in self.datasets]
        )

    def __repr__(self) -> str:
        return "\n".join(repr(d) for d in self.datasets)
