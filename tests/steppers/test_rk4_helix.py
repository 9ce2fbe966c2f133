import math

import numpy as np
import pytest

from trackprop import (
    ConstantField, CurvilinearParameters, Direction, Options, Propagator, Status, StopReason, units,
)
from trackprop.steppers import RungeKuttaStepper, get_stepper

B_Z = 2.0 * units.T
# R = p / (|q| B) for p = 1 GeV
RADIUS = 1.0 * units.GeV / B_Z


class NanField:
    def get_field(self, position):
        return np.array([0.0, 0.0, math.nan])


def _start(charge=1.0):
    return CurvilinearParameters(position=[0.0, 0.0, 0.0], momentum=[1.0 * units.GeV, 0.0, 0.0], charge=charge)


def test_radius_in_two_tesla():
    assert RADIUS == pytest.approx(1667.82, rel=1e-5)


def test_quarter_circle():
    prop = Propagator(RungeKuttaStepper(ConstantField([0.0, 0.0, B_Z])))
    options = Options(max_step_size=10.0, max_path_length=0.5 * math.pi * RADIUS)
    result = prop.propagate(_start(), options)

    assert result.status == Status.SUCCESS
    assert result.stop_reason == StopReason.PATH_LIMIT
    end = result.end_parameters
    np.testing.assert_allclose(end.position, [RADIUS, -RADIUS, 0.0], atol=1e-3)
    np.testing.assert_allclose(end.direction, [0.0, -1.0, 0.0], atol=1e-6)
    assert end.absolute_momentum == pytest.approx(1.0 * units.GeV)


def test_negative_charge_curves_the_other_way():
    prop = Propagator(RungeKuttaStepper(ConstantField([0.0, 0.0, B_Z])))
    options = Options(max_step_size=10.0, max_path_length=0.5 * math.pi * RADIUS)
    end = prop.propagate(_start(charge=-1.0), options).end_parameters
    np.testing.assert_allclose(end.position, [RADIUS, RADIUS, 0.0], atol=1e-3)


def test_forward_then_backward_returns_to_start():
    prop = Propagator(get_stepper("rk4", field=ConstantField([0.0, 0.0, B_Z])))
    start = CurvilinearParameters(position=[1.0, 2.0, 3.0], momentum=[0.6, 0.3, 0.2], charge=1.0)
    forward = prop.propagate(start, Options(max_step_size=5.0, max_path_length=500.0))
    assert forward.ok

    back = prop.propagate(
        forward.end_parameters,
        Options(direction=Direction.BACKWARD, max_step_size=5.0, max_path_length=500.0),
    )
    assert back.ok
    assert back.path_length == pytest.approx(-500.0)
    np.testing.assert_allclose(back.end_parameters.position, start.position, atol=1e-4)
    np.testing.assert_allclose(back.end_parameters.momentum, start.momentum, atol=1e-6)


def test_neutral_particle_moves_straight():
    prop = Propagator(RungeKuttaStepper(ConstantField([0.0, 0.0, B_Z])))
    result = prop.propagate(_start(charge=0.0), Options(max_step_size=10.0, max_path_length=100.0))
    np.testing.assert_allclose(result.end_parameters.position, [100.0, 0.0, 0.0], atol=1e-9)


def test_default_field_is_empty():
    stepper = RungeKuttaStepper()
    assert not np.any(stepper.field.get_field(np.zeros(3)))


def test_non_finite_field_fails_the_step():
    stepper = RungeKuttaStepper(NanField())
    result = Propagator(stepper).propagate(_start(), Options(max_step_size=10.0, max_path_length=100.0))
    assert result.status == Status.FAILURE
    assert result.stop_reason == StopReason.STEPPER_FAILURE
    assert result.steps == 1
    assert result.path_length == 0.0
    assert result.end_parameters is None


def test_jit_kernel_matches_python():
    pytest.importorskip("numba")
    field = ConstantField([0.0, 0.5 * units.T, B_Z])
    options = Options(max_step_size=7.0, max_path_length=300.0)
    plain = Propagator(RungeKuttaStepper(field, jit=False)).propagate(_start(), options)
    fast = Propagator(RungeKuttaStepper(field, jit=True)).propagate(_start(), options)
    assert fast.steps == plain.steps
    np.testing.assert_allclose(fast.end_parameters.position, plain.end_parameters.position, rtol=1e-12, atol=1e-9)
