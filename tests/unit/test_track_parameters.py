import numpy as np
import pytest

from trackprop.surfaces import PlaneSurface
from trackprop.track import BoundParameters, CurvilinearParameters


def test_derived_quantities():
    pars = CurvilinearParameters(position=[1, 2, 3], momentum=[0, 3, 4], charge=-1)
    assert pars.absolute_momentum == pytest.approx(5.0)
    np.testing.assert_allclose(pars.direction, [0, 0.6, 0.8])
    assert pars.qop == pytest.approx(-0.2)


def test_neutral_qop_is_inverse_momentum():
    pars = CurvilinearParameters(position=[0, 0, 0], momentum=[2, 0, 0], charge=0)
    assert pars.qop == pytest.approx(0.5)


def test_arrays_are_copied_and_read_only():
    pos = np.array([1.0, 2.0, 3.0])
    pars = CurvilinearParameters(position=pos, momentum=[1, 0, 0])
    pos[0] = 99.0
    assert pars.position[0] == 1.0
    with pytest.raises(ValueError):
        pars.position[0] = 5.0


def test_copy_is_independent_but_equal():
    cov = np.eye(5)
    pars = CurvilinearParameters(position=[1, 0, 0], momentum=[1, 1, 0], covariance=cov)
    dup = pars.copy()
    assert dup is not pars
    assert dup.position is not pars.position
    np.testing.assert_array_equal(dup.position, pars.position)
    np.testing.assert_array_equal(dup.covariance, cov)


@pytest.mark.parametrize(
    "kwargs, match",
    [
        ({"position": [0, 0], "momentum": [1, 0, 0]}, "position"),
        ({"position": [0, 0, 0], "momentum": [0, 0, 0]}, "momentum"),
        ({"position": [0, 0, np.nan], "momentum": [1, 0, 0]}, "position"),
        ({"position": [0, 0, 0], "momentum": [1, 0, 0], "covariance": np.ones(5)}, "covariance"),
    ],
)
def test_invalid_parameters(kwargs, match):
    with pytest.raises(ValueError, match=match):
        CurvilinearParameters(**kwargs)


def test_bound_parameters_need_surface():
    with pytest.raises(ValueError, match="surface"):
        BoundParameters(position=[0, 0, 0], momentum=[1, 0, 0])


def test_bound_parameters_local_position():
    plane = PlaneSurface(center=(5, 0, 0), normal=(1, 0, 0))
    pars = BoundParameters(position=[5, 1, 2], momentum=[1, 0, 0], surface=plane)
    np.testing.assert_allclose(pars.local_position, [1.0, 2.0])
    assert pars.copy().surface is plane
