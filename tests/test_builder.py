"""State construction from (T, p), (p, h), (p, s), (T, h), (T, s), (V, u) and new_full."""

# @author: Wildson Lima

import numpy as np
import pytest

from saftstate import (
    DensityInitialization,
    IncompatibleComponentsError,
    NotConvergedError,
    SolverOptions,
    State,
    UndeterminedStateError,
    ValidationError,
)


@pytest.fixture(scope="module")
def vapor(propane):
    return State.new_npt(propane, 300.0, 1e5)


@pytest.fixture(scope="module")
def liquid(propane):
    return State.new_npt(propane, 280.0, 2e6, density_initialization="liquid")


def test_new_npt_pressure(vapor, liquid):
    assert vapor.pressure() == pytest.approx(1e5, rel=1e-8)
    assert liquid.pressure() == pytest.approx(2e6, rel=1e-8)
    assert vapor.density < 100.0
    assert liquid.density > 1e4


def test_new_npt_selects_stable_branch(propane):
    # below the vapor pressure the vapor is stable, above it the liquid
    low = State.new_npt(propane, 300.0, 5e5)
    high = State.new_npt(propane, 300.0, 2e6)
    assert low.density < 1e3
    assert high.density > 1e4


def test_new_npt_metastable_branch(propane):
    vapor = State.new_npt(propane, 300.0, 5e5, density_initialization="vapor")
    liquid = State.new_npt(propane, 300.0, 5e5, density_initialization="liquid")
    assert liquid.density > 10 * vapor.density
    assert liquid.pressure() == pytest.approx(5e5, rel=1e-8)
    assert liquid.molar_gibbs_energy() > vapor.molar_gibbs_energy()


def test_new_npt_initial_density(propane, liquid):
    init = DensityInitialization.initial_density(1.05 * liquid.density)
    state = State.new_npt(propane, 280.0, 2e6, density_initialization=init)
    assert state.density == pytest.approx(liquid.density, rel=1e-8)
    state = State.new_npt(propane, 280.0, 2e6, density_initialization=0.95 * liquid.density)
    assert state.density == pytest.approx(liquid.density, rel=1e-8)


def test_new_npt_mixture(propane_butane):
    state = State.new_npt(propane_butane, 300.0, 1e5, np.array([0.3, 0.7]))
    assert state.pressure() == pytest.approx(1e5, rel=1e-8)
    np.testing.assert_allclose(state.moles, [0.3, 0.7])
    with pytest.raises(IncompatibleComponentsError):
        State.new_npt(propane_butane, 300.0, 1e5, np.array([1.0]))


def test_invalid_density_initialization(propane):
    with pytest.raises(ValidationError):
        State.new_npt(propane, 300.0, 1e5, density_initialization="gas")


def test_new_npvx(propane_butane):
    state = State.new_npvx(propane_butane, 300.0, 1e5, 2e-3, [0.4, 0.6])
    assert state.pressure() == pytest.approx(1e5, rel=1e-8)
    assert state.volume == pytest.approx(2e-3)
    np.testing.assert_allclose(state.molefracs, [0.4, 0.6])


@pytest.mark.parametrize("name", ["vapor", "liquid"])
def test_new_nph(propane, name, request):
    ref = request.getfixturevalue(name)
    state = State.new_nph(
        propane, ref.pressure(), ref.molar_enthalpy(), density_initialization=name
    )
    assert state.temperature == pytest.approx(ref.temperature, rel=1e-6)
    assert state.density == pytest.approx(ref.density, rel=1e-6)


@pytest.mark.parametrize("name", ["vapor", "liquid"])
def test_new_nps(propane, name, request):
    ref = request.getfixturevalue(name)
    state = State.new_nps(
        propane, ref.pressure(), ref.molar_entropy(), density_initialization=name
    )
    assert state.temperature == pytest.approx(ref.temperature, rel=1e-6)
    assert state.density == pytest.approx(ref.density, rel=1e-6)


@pytest.mark.parametrize("name", ["vapor", "liquid"])
def test_new_nth(propane, name, request):
    ref = request.getfixturevalue(name)
    state = State.new_nth(
        propane, ref.temperature, ref.molar_enthalpy(), density_initialization=name
    )
    assert state.density == pytest.approx(ref.density, rel=1e-6)
    assert state.pressure() == pytest.approx(ref.pressure(), rel=1e-3)


@pytest.mark.parametrize("name", ["vapor", "liquid"])
def test_new_nts(propane, name, request):
    ref = request.getfixturevalue(name)
    state = State.new_nts(
        propane, ref.temperature, ref.molar_entropy(), density_initialization=name
    )
    assert state.density == pytest.approx(ref.density, rel=1e-6)


def test_new_nth_without_hint(propane, vapor):
    state = State.new_nth(propane, vapor.temperature, vapor.molar_enthalpy())
    assert state.density == pytest.approx(vapor.density, rel=1e-6)


@pytest.mark.parametrize("name", ["vapor", "liquid"])
def test_new_nvu(propane, name, request):
    ref = request.getfixturevalue(name)
    state = State.new_nvu(propane, ref.volume, ref.molar_internal_energy(), ref.moles)
    assert state.temperature == pytest.approx(ref.temperature, rel=1e-6)
    assert state.volume == pytest.approx(ref.volume)


def test_max_iter_exhausted(propane, liquid):
    options = SolverOptions(max_iter=1)
    with pytest.raises(NotConvergedError):
        State.new_nph(
            propane,
            liquid.pressure(),
            liquid.molar_enthalpy(),
            density_initialization="liquid",
            initial_temperature=300.0,
            options=options,
        )


def test_new_full(propane, propane_butane, vapor):
    state = State.new_full(propane, temperature=300.0, pressure=1e5)
    assert state.density == pytest.approx(vapor.density, rel=1e-8)

    state = State.new_full(propane, temperature=300.0, density=vapor.density)
    assert state.pressure() == pytest.approx(1e5, rel=1e-8)

    state = State.new_full(propane, pressure=1e5, molar_enthalpy=vapor.molar_enthalpy())
    assert state.temperature == pytest.approx(300.0, rel=1e-6)

    state = State.new_full(
        propane_butane, temperature=300.0, pressure=1e5, molefracs=[0.25, 0.75]
    )
    np.testing.assert_allclose(state.molefracs, [0.25, 0.75])
    assert state.total_moles == pytest.approx(1.0)

    state = State.new_full(
        propane_butane, temperature=300.0, volume=1e-3, moles=[0.01, 0.03]
    )
    assert state.density == pytest.approx(40.0)

    state = State.new_full(
        propane_butane, temperature=300.0, partial_density=[10.0, 30.0]
    )
    np.testing.assert_allclose(state.partial_density, [10.0, 30.0])

    state = State.new_full(
        propane_butane, temperature=300.0, pressure=1e5, volume=1e-2, molefracs=[0.5, 0.5]
    )
    assert state.volume == pytest.approx(1e-2)
    assert state.pressure() == pytest.approx(1e5, rel=1e-8)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"temperature": 300.0},
        {"pressure": 1e5},
        {"temperature": 300.0, "density": 10.0, "partial_density": [10.0]},
        {"temperature": 300.0, "volume": 1.0, "moles": [1.0], "total_moles": 1.0},
        {"temperature": 300.0, "volume": 1.0, "density": 1.0, "total_moles": 1.0},
        {"pressure": 1e5, "molar_enthalpy": 0.0, "molar_entropy": 0.0},
        {"temperature": 300.0, "density": 10.0, "molar_enthalpy": 12345.0},
        {"temperature": 300.0, "volume": 1.0, "molar_entropy": 0.0},
        {"temperature": 300.0, "pressure": 1e5, "molar_enthalpy": 0.0},
        {"volume": 1.0, "molar_internal_energy": 0.0, "temperature": 300.0},
        {"temperature": 300.0, "pressure": 1e5, "density": 10.0},
    ],
)
def test_new_full_undetermined(propane, kwargs):
    with pytest.raises(UndeterminedStateError):
        State.new_full(propane, **kwargs)


def test_new_full_mixture_needs_composition(propane_butane):
    with pytest.raises(UndeterminedStateError):
        State.new_full(propane_butane, temperature=300.0, pressure=1e5)
