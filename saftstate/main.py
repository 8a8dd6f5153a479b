"""Command line for PC-SAFT state calculations of a pure component.

Usage:
    python -m saftstate.main --mode=critical_point --m=2.0018 --sigma=3.6184
     --epsilon=208.11 --mw=44.0962
    python -m saftstate.main --mode=state --temperature=300 --pressure=1e5 ...

Solver settings are read from `--config`, e.g. `--config.critical_point.tol=1e-10`.
"""

# @author: Wildson Lima

import json

from absl import app, flags, logging
from ml_collections import config_flags

from .configs.default import get_config
from .errors import EosError
from .pcsaft.utils import pc_saft
from .state import DensityInitialization, PhaseEquilibrium, SolverOptions, State

MODES = ("critical_point", "spinodal", "state", "vapor_pressure")

FLAGS = flags.FLAGS

flags.DEFINE_enum("mode", "critical_point", MODES, "Calculation to run.")
flags.DEFINE_float("m", None, "Segment number.")
flags.DEFINE_float("sigma", None, "Segment diameter (Å).")
flags.DEFINE_float("epsilon", None, "Dispersion energy parameter (K).")
flags.DEFINE_float("kappa_ab", 0.0, "Association volume.")
flags.DEFINE_float("epsilon_ab", 0.0, "Association energy parameter (K).")
flags.DEFINE_float("mu", 0.0, "Dipole moment (D).")
flags.DEFINE_float("na", 0.0, "Number of association sites of type A.")
flags.DEFINE_float("nb", 0.0, "Number of association sites of type B.")
flags.DEFINE_float("mw", 0.0, "Molar weight (g/mol).")
flags.DEFINE_float("temperature", None, "Temperature (K).")
flags.DEFINE_float("pressure", None, "Pressure (Pa).")
flags.DEFINE_enum(
    "phase",
    None,
    [DensityInitialization.VAPOR, DensityInitialization.LIQUID],
    "Branch of a (T, p) state, both are tried when not given.",
)
config_flags.DEFINE_config_dict("config", get_config(), "Solver configuration.")


def _options(section) -> SolverOptions:
    return SolverOptions(section.max_iter, section.tol, section.verbosity)


def run(config, mode: str) -> dict:
    """
    Runs the calculation of `mode` for the component given in the flags.

    Args:
        config: solver configuration
        mode: one of `critical_point`, `spinodal`, `state` and `vapor_pressure`
    """
    parameters = [
        FLAGS.m,
        FLAGS.sigma,
        FLAGS.epsilon,
        FLAGS.kappa_ab,
        FLAGS.epsilon_ab,
        FLAGS.mu,
        FLAGS.na,
        FLAGS.nb,
    ]
    if FLAGS.mw > 0.0:
        parameters.append(FLAGS.mw)
    eos = pc_saft(parameters)
    logging.info("%s", eos)

    if mode == "critical_point":
        state = State.critical_point(eos, options=_options(config.critical_point))
        return state.to_dict()

    if FLAGS.temperature is None:
        raise app.UsageError(f"--temperature is needed for mode `{mode}`.")

    if mode == "spinodal":
        vapor, liquid = State.spinodal(
            eos, FLAGS.temperature, options=_options(config.spinodal)
        )
        return {"vapor": vapor.to_dict(), "liquid": liquid.to_dict()}

    if mode == "vapor_pressure":
        vle = PhaseEquilibrium.pure(
            eos, FLAGS.temperature, _options(config.phase_equilibrium)
        )
        return {
            "pressure": vle.pressure(),
            "vapor": vle.vapor.to_dict(),
            "liquid": vle.liquid.to_dict(),
        }

    if FLAGS.pressure is None:
        raise app.UsageError("--pressure is needed for mode `state`.")
    state = State.new_npt(
        eos,
        FLAGS.temperature,
        FLAGS.pressure,
        density_initialization=FLAGS.phase,
        options=_options(config.state),
    )
    return state.to_dict()


def main(argv):
    if len(argv) > 1:
        raise app.UsageError("Too many command-line arguments.")

    logging.info("Running %s", FLAGS.mode)
    try:
        result = run(FLAGS.config, FLAGS.mode)
    except EosError as e:
        logging.error("%s failed: %s", FLAGS.mode, e)
        raise SystemExit(1) from e
    print(json.dumps(result, indent=2, default=float))


if __name__ == "__main__":
    flags.mark_flags_as_required(["m", "sigma", "epsilon"])
    app.run(main)
