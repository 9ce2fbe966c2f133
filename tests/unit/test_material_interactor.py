import math

import numpy as np
import pytest

from trackprop.actions import MaterialInteraction, MaterialInteractor, highland_theta0, MUON_MASS
from trackprop.material import Material, VACUUM
from trackprop.propagator import ActionList, Result
from trackprop.propagator.status import Status
from trackprop.steppers.base import StepperCache
from trackprop.units import GeV

SILICON = Material(x0=93.7, l0=465.2, a=28.0855, z=14.0, rho=2.329)


def _cache(last_step=1.0, charge=1.0, p=1.0 * GeV):
    return StepperCache(
        position=np.array([0.0, 0.0, 0.0]),
        direction=np.array([1.0, 0.0, 0.0]),
        qop=(charge if charge != 0.0 else 1.0) / p,
        charge=charge,
        step_size=last_step,
        last_step=last_step,
    )


def _result(*actions):
    return Result(Status.IN_PROGRESS, ActionList(*actions).result_types)


def test_highland_reference_value():
    # 1 GeV muon through 1% of a radiation length
    theta0 = highland_theta0(0.01, 1.0 * GeV, MUON_MASS)
    assert theta0 == pytest.approx(1.1288e-3, rel=1e-3)


def test_highland_zero_cases():
    assert highland_theta0(0.0, 1.0, MUON_MASS) == 0.0
    assert highland_theta0(0.01, 1.0, MUON_MASS, charge=0.0) == 0.0


def test_interactor_accumulates_thickness_and_variance():
    interactor = MaterialInteractor(SILICON)
    result = _result(interactor)
    cache = _cache(last_step=0.937)

    interactor(cache, result)
    interactor(cache, result)

    slot = result.get(MaterialInteraction)
    assert slot.thickness_in_x0 == pytest.approx(0.02)
    assert slot.thickness_in_l0 == pytest.approx(2 * 0.937 / 465.2)
    theta0 = highland_theta0(0.01, 1.0 * GeV, MUON_MASS)
    assert cache.scattering_variance == pytest.approx(theta0 ** 2)
    assert slot.sigma_theta_sq == pytest.approx(2 * theta0 ** 2)
    assert slot.sigma_theta == pytest.approx(math.sqrt(2) * theta0)
    assert len(slot.material_steps) == 2
    assert slot.material_steps[0].properties.thickness == pytest.approx(0.937)


def test_backward_steps_count_their_absolute_length():
    interactor = MaterialInteractor(SILICON, record_steps=False)
    result = _result(interactor)
    interactor(_cache(last_step=-0.937), result)
    slot = result.get(MaterialInteraction)
    assert slot.thickness_in_x0 == pytest.approx(0.01)
    assert slot.material_steps == []


@pytest.mark.parametrize("material", [None, VACUUM])
def test_no_material_leaves_slot_empty(material):
    interactor = MaterialInteractor(material)
    result = _result(interactor)
    cache = _cache()
    cache.scattering_variance = 5.0
    interactor(cache, result)
    slot = result.get(MaterialInteraction)
    assert slot.thickness_in_x0 == 0.0
    assert slot.sigma_theta_sq == 0.0
    assert cache.scattering_variance == 0.0


def test_neutral_particle_does_not_scatter():
    interactor = MaterialInteractor(SILICON)
    result = _result(interactor)
    cache = _cache(charge=0.0)
    interactor(cache, result)
    slot = result.get(MaterialInteraction)
    assert slot.thickness_in_x0 > 0.0
    assert slot.sigma_theta_sq == 0.0


def test_material_provider_is_called_with_position():
    seen = []

    def provider(position):
        seen.append(np.array(position))
        return SILICON if position[0] < 10.0 else None

    interactor = MaterialInteractor(provider)
    result = _result(interactor)
    cache = _cache()
    interactor(cache, result)
    cache.position = np.array([20.0, 0.0, 0.0])
    interactor(cache, result)

    assert len(seen) == 2
    assert len(result.get(MaterialInteraction).material_steps) == 1


class _VarianceReader:
    def __init__(self):
        self.values = []

    def __call__(self, cache, result):
        self.values.append(cache.scattering_variance)


def test_later_action_sees_scattering_variance():
    reader = _VarianceReader()
    actions = ActionList(MaterialInteractor(SILICON), reader)
    result = Result(Status.IN_PROGRESS, actions.result_types)
    actions(_cache(last_step=0.937), result)
    assert reader.values[0] == pytest.approx(highland_theta0(0.01, 1.0 * GeV, MUON_MASS) ** 2)
