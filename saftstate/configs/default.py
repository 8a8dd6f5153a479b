"""Module to config solver and model defaults"""

import ml_collections


def _solver(max_iter: int, tol: float) -> ml_collections.ConfigDict:
    config = ml_collections.ConfigDict()
    config.max_iter = max_iter
    config.tol = tol
    config.verbosity = "silent"
    return config


def get_config():
    """Get the default solver configuration."""
    config = ml_collections.ConfigDict()

    # State construction.
    config.density_iteration = _solver(50, 1e-12)
    config.state = _solver(50, 1e-10)

    # Critical points and spinodals.
    config.critical_point = _solver(50, 1e-8)
    config.critical_point_binary = _solver(200, 1e-8)
    config.critical_point.trial_temperatures = (300.0, 700.0, 500.0)
    config.critical_point_binary.min_molefrac = 1e-8
    config.spinodal = _solver(50, 1e-8)
    config.spinodal.grid_points = 100
    config.spinodal.min_density_ratio = 1e-6

    # Phase stability and equilibrium.
    config.stability = _solver(50, 1e-10)
    config.stability.successive_substitution_steps = 4
    config.stability.zero_tpd = -1e-8
    config.phase_equilibrium = _solver(50, 1e-10)

    # Models.
    config.pcsaft = ml_collections.ConfigDict()
    config.pcsaft.max_eta = 0.5
    config.pcsaft.max_iter_association = 500
    config.pcsaft.tol_association = 1e-13
    config.pcsaft.newton_steps_association = 5

    # Estimator.
    config.estimator = ml_collections.ConfigDict()
    config.estimator.processes = 0  # 0: half of the cpu count

    return config
