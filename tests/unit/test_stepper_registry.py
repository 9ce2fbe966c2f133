import pytest

from trackprop import make_propagator
from trackprop.fields import ConstantField
from trackprop.propagator.propagator import Propagator
from trackprop.steppers import RungeKuttaStepper, StraightLineStepper
from trackprop.steppers.registry import get_stepper, register, registry


def test_builtin_steppers_registered():
    names = registry()
    assert names["straight_line"] is StraightLineStepper
    assert names["line"] is StraightLineStepper
    assert names["rk4"] is RungeKuttaStepper
    assert names["runge_kutta"] is RungeKuttaStepper


def test_get_stepper_forwards_kwargs():
    field = ConstantField([0, 0, 1.0])
    stepper = get_stepper("rk4", field=field)
    assert isinstance(stepper, RungeKuttaStepper)
    assert stepper.field is field
    assert stepper.meta.caps.field_aware


def test_unknown_stepper():
    with pytest.raises(KeyError, match="Unknown stepper"):
        get_stepper("leapfrog")


def test_conflicting_registration_rejected():
    class Other(StraightLineStepper):
        pass

    with pytest.raises(ValueError, match="already registered"):
        register("straight_line", Other)
    with pytest.raises(ValueError, match="Alias"):
        register("other_line", Other, aliases=("line",))


def test_reregistering_same_factory_is_allowed():
    register("straight_line", StraightLineStepper, aliases=("straight",))
    assert registry()["straight"] is StraightLineStepper


def test_make_propagator():
    prop = make_propagator("straight")
    assert isinstance(prop, Propagator)
    assert isinstance(prop.stepper, StraightLineStepper)
    with pytest.raises(TypeError):
        make_propagator("straight_line", field=None)
