"""Command line entry point."""

# @author: Wildson Lima

import pytest
from absl import app, flags
from absl.testing import flagsaver

from saftstate import main
from saftstate.configs.default import get_config

from .conftest import PROPANE

FLAGS = flags.FLAGS


@pytest.fixture(autouse=True)
def parsed_flags():
    if not FLAGS.is_parsed():
        FLAGS.mark_as_parsed()


def _propane_flags(**kwargs):
    return flagsaver.flagsaver(
        m=PROPANE[0], sigma=PROPANE[1], epsilon=PROPANE[2], mw=PROPANE[8], **kwargs
    )


def test_critical_point_mode():
    with _propane_flags(mode="critical_point"):
        result = main.run(get_config(), "critical_point")
    assert 365.0 < result["temperature"] < 385.0
    assert "mass density" in result


def test_state_mode():
    with _propane_flags(mode="state", temperature=300.0, pressure=1e5, phase="vapor"):
        result = main.run(get_config(), "state")
    assert result["pressure"] == pytest.approx(1e5, rel=1e-8)


def test_vapor_pressure_and_spinodal_modes():
    with _propane_flags(temperature=300.0):
        vle = main.run(get_config(), "vapor_pressure")
        spinodal = main.run(get_config(), "spinodal")
    assert vle["vapor"]["pressure"] == pytest.approx(vle["liquid"]["pressure"], rel=1e-8)
    assert spinodal["vapor"]["density"] < spinodal["liquid"]["density"]


def test_missing_temperature():
    with _propane_flags(temperature=None):
        with pytest.raises(app.UsageError):
            main.run(get_config(), "spinodal")


def test_too_many_arguments():
    with pytest.raises(app.UsageError):
        main.main(["saftstate", "extra"])
